"""Page processor turning raw Logseq pages into publishable documents."""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple
from urllib.parse import unquote

import inflection

from logseq_export.core.models import ParsedContent, ParsedPage, RawPage
from logseq_export.core.parser import parse_content
from logseq_export.transforms.assets import rewrite_asset_references
from logseq_export.transforms.body import rewrite_body
from logseq_export.transforms.frontmatter import render as render_document
from logseq_export.transforms.links import PAGE_LINK_PATTERN, LinkTransform, absolute_link
from logseq_export.transforms.naming import ensure_slug, ensure_title, generate_file_name

logger = logging.getLogger(__name__)

ALIAS_BRACKETS_PATTERN = re.compile(r'\[\[|\]\]')


@dataclass
class LinkIndex:
    """Index mapping page titles (and aliases) to their slugs."""

    title_to_slug: Dict[str, str]

    @classmethod
    def from_pages(cls, pages: List[ParsedPage]) -> "LinkIndex":
        """Build a link index from parsed pages.

        Titles are registered as written and percent-decoded, since Logseq
        stores ``:`` as ``%3A`` in file names. Every comma-separated entry
        of a page's ``alias`` attribute (``Foo`` or ``[[Foo]]``) points at
        the page too.
        """
        title_to_slug = {}

        for page in pages:
            names = [page.title, unquote(page.title)]
            alias = page.content.attributes.get('alias', '')
            names.extend(ALIAS_BRACKETS_PATTERN.sub('', name).strip() for name in alias.split(','))
            for name in names:
                if name:
                    title_to_slug[name.lower()] = page.slug

        return cls(title_to_slug)

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "LinkIndex":
        """Build a link index from a title->slug dictionary."""
        return cls({k.lower(): v for k, v in data.items()})

    def get_slug(self, title: str) -> Optional[str]:
        """Get slug for a title, case-insensitive."""
        return self.title_to_slug.get(title.lower())


class PageProcessor:
    """Parses and renders Logseq pages.

    ``parse`` runs the attribute split, body rewrite, name derivation and
    asset rewrite. ``render`` resolves page links (when a link index is
    set) and writes the front matter.
    """

    def __init__(
        self,
        asset_url_prefix: str = "/logseq-assets",
        unquoted_properties: Iterable[str] = (),
        list_properties: Iterable[str] = (),
        decode_titles: bool = False,
        link_index: Optional[LinkIndex] = None,
        link_transform: Optional[LinkTransform] = None,
    ):
        """Initialize PageProcessor.

        Args:
            asset_url_prefix: URL prefix for rewritten asset references
            unquoted_properties: Attributes rendered without quotes
            list_properties: Attributes rendered as lists
            decode_titles: Percent-decode titles derived from file names
            link_index: Title->slug index used to resolve ``[[links]]``.
                        Links are left untouched when None.
            link_transform: Transform building Markdown links from slugs
        """
        self.asset_url_prefix = asset_url_prefix
        self.unquoted_properties = frozenset(unquoted_properties)
        self.list_properties = frozenset(list_properties)
        self.decode_titles = decode_titles
        self.link_index = link_index
        self.link_transform = link_transform or absolute_link()

    def parse(self, raw_page: RawPage) -> ParsedPage:
        """Parse a raw page into a ParsedPage.

        Raises:
            ExportError: If no export file name can be derived
        """
        content = parse_content(raw_page.content)
        attributes = content.attributes

        body = rewrite_body(content.body)

        export_filename = generate_file_name(raw_page.path, attributes)
        ensure_slug(attributes, export_filename)
        ensure_title(attributes, raw_page.path, decode=self.decode_titles)

        # Re-scans the body, so this list replaces content.assets and adds
        # a relative image attribute after the body references
        body, assets, attributes = rewrite_asset_references(
            body, attributes, self.asset_url_prefix
        )

        return ParsedPage(
            original_path=raw_page.path,
            export_filename=export_filename,
            content=ParsedContent(attributes=attributes, body=body, assets=assets),
        )

    def render(self, page: ParsedPage) -> str:
        """Build the final document text for a page."""
        body = page.content.body
        if self.link_index is not None:
            body, missing = self.resolve_links(body)
            for target in missing:
                logger.warning("%s: link to unpublished page [[%s]]", page.original_path, target)

        return render_document(
            page.content.attributes,
            body,
            unquoted=self.unquoted_properties,
            list_fields=self.list_properties,
        )

    def resolve_links(self, body: str) -> Tuple[str, List[str]]:
        """Replace ``[[Page]]`` references with Markdown links.

        Targets missing from the index get a parameterized slug.

        Returns:
            Tuple of (transformed body, list of missing link targets)
        """
        missing_links = []

        def replace_link(match: re.Match) -> str:
            target = match.group(1).strip()
            slug = self.link_index.get_slug(target)
            if slug is None:
                slug = inflection.parameterize(target)
                missing_links.append(target)
            return self.link_transform(target, slug)

        return PAGE_LINK_PATTERN.sub(replace_link, body), missing_links
