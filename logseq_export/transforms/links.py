"""Link transform factories for Logseq Export.

A link transform turns a page reference's display text and target slug
into a Markdown link.
"""

import re
from typing import Callable, List

LinkTransform = Callable[[str, str], str]

# Page references: [[Page name]]
PAGE_LINK_PATTERN = re.compile(r'\[\[([^\[\]]+?)\]\]')


def detect_page_links(body: str) -> List[str]:
    """Return the target of every ``[[Page name]]`` reference, in order."""
    return [match.group(1) for match in PAGE_LINK_PATTERN.finditer(body)]


def relative_link() -> LinkTransform:
    """Create a transform producing ``[text](slug.md)`` links."""
    def transform(text: str, slug: str) -> str:
        return f"[{text}]({slug}.md)"
    return transform


def absolute_link(prefix: str = "") -> LinkTransform:
    """Create a transform producing ``[text](/prefix/slug)`` links.

    Args:
        prefix: URL path the published pages live under, e.g. ``/blog``
    """
    prefix = prefix.strip('/')

    def transform(text: str, slug: str) -> str:
        if prefix:
            return f"[{text}](/{prefix}/{slug})"
        return f"[{text}](/{slug})"
    return transform
