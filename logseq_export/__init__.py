"""
Logseq Export - Publish public Logseq pages as static blog posts

Converts pages of a Logseq graph marked with ``public:: true`` into
Markdown documents with front matter, including:
- Outliner bullet to paragraph conversion
- Export file names built from slug, date and folder attributes
- Asset reference rewriting and copying
- Page link resolution
"""

from logseq_export.core.models import ExportError, PageError, ParsedContent, ParsedPage, PublishResult, RawPage
from logseq_export.core.discovery import GraphDiscovery
from logseq_export.core.processor import LinkIndex, PageProcessor
from logseq_export.core.publisher import Publisher

__version__ = "0.1.0"

__all__ = [
    "ExportError",
    "PageError",
    "ParsedContent",
    "ParsedPage",
    "PublishResult",
    "RawPage",
    "GraphDiscovery",
    "LinkIndex",
    "PageProcessor",
    "Publisher",
]
