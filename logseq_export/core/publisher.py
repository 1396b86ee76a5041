"""Publisher orchestrating discovery, processing and writing of pages."""

import logging
import shutil
from pathlib import Path
from typing import List, Set, Tuple

from logseq_export.core.config import ExportConfig
from logseq_export.core.discovery import GraphDiscovery
from logseq_export.core.models import ExportError, PageError, ParsedPage, PublishResult
from logseq_export.core.processor import LinkIndex, PageProcessor
from logseq_export.transforms.links import absolute_link

logger = logging.getLogger(__name__)


class Publisher:
    """Exports every public page of a graph to the output folder.

    Runs in two passes: all pages are parsed first so the link index is
    complete before any page is rendered.
    """

    def __init__(self, config: ExportConfig):
        self.config = config
        self.discovery = GraphDiscovery(config.graph_folder, marker=config.publish_marker)
        self.processor = PageProcessor(
            asset_url_prefix=config.web_assets_path_prefix,
            unquoted_properties=config.unquoted_properties,
            list_properties=config.list_properties,
            decode_titles=config.decode_titles,
            link_transform=absolute_link(config.page_url_prefix),
        )

    def publish(self) -> PublishResult:
        """Run the export.

        Returns:
            PublishResult listing written pages, copied assets and failures

        Raises:
            FileNotFoundError: If the graph folder does not exist
        """
        result = PublishResult(dry_run=self.config.dry_run)

        pages = self._parse_all(result)
        self.processor.link_index = LinkIndex.from_pages(pages)

        copied: Set[Path] = set()
        for page in pages:
            try:
                self._publish_page(page, result, copied)
            except OSError as e:
                logger.error("Failed to export %s: %s", page.original_path, e)
                result.failures.append(PageError(page.original_path, str(e), page.title))

        logger.info(
            "Exported %d pages and %d assets (%d failures)",
            len(result.published_pages), len(result.copied_assets), len(result.failures),
        )
        return result

    def _parse_all(self, result: PublishResult) -> List[ParsedPage]:
        pages = []
        for raw_page in self.discovery.discover_all():
            try:
                pages.append(self.processor.parse(raw_page))
            except ExportError as e:
                logger.error("Skipping %s: %s", raw_page.path, e)
                result.failures.append(PageError(raw_page.path, str(e)))
        return pages

    def _publish_page(self, page: ParsedPage, result: PublishResult, copied: Set[Path]) -> None:
        document = self.processor.render(page)
        dest = self.config.pages_folder / page.export_filename

        if self.config.dry_run:
            logger.info("Would write %s", dest)
        else:
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(document, encoding='utf-8')
            logger.debug("Wrote %s", dest)
        result.published_pages.append(str(dest))

        for source, target in self.resolve_assets(page):
            if source in copied:
                continue
            if not source.is_file():
                logger.warning("%s: asset %s not found", page.original_path, source)
                result.missing_assets.append(str(source))
                continue
            copied.add(source)
            if not self.config.dry_run:
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(source, target)
            result.copied_assets.append(str(target))

    def resolve_assets(self, page: ParsedPage) -> List[Tuple[Path, Path]]:
        """Pair each asset reference of a page with its copy destination.

        References are resolved against the page's directory. Duplicate
        references are returned once.
        """
        pairs = []
        seen = set()
        for reference in page.content.assets:
            source = (page.source_dir / reference).resolve()
            if source in seen:
                continue
            seen.add(source)
            pairs.append((source, self.config.assets_folder / source.name))
        return pairs

