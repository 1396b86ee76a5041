"""Data models for Logseq Export."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional


class ExportError(Exception):
    """Raised when a page lacks the data needed to export it."""


@dataclass(frozen=True)
class RawPage:
    """A candidate page exactly as read from the graph.

    Carriage returns are already stripped from ``content``.
    """
    path: str
    content: str

    @classmethod
    def from_path(cls, path: Path) -> "RawPage":
        """Read a page from disk, normalizing line endings."""
        text = Path(path).read_text(encoding='utf-8')
        return cls(path=str(path), content=text.replace('\r', ''))


@dataclass
class ParsedContent:
    """Attributes, attribute-stripped body and asset references of a page."""
    attributes: Dict[str, str]
    body: str
    assets: List[str] = field(default_factory=list)


@dataclass
class ParsedPage:
    """A page ready to be rendered.

    ``export_filename`` is derived once by the processor. ``content.body``
    holds the rewritten Markdown body.
    """
    original_path: str
    export_filename: str
    content: ParsedContent

    @property
    def title(self) -> str:
        return self.content.attributes.get('title', '')

    @property
    def slug(self) -> str:
        return self.content.attributes.get('slug', '')

    @property
    def source_dir(self) -> Path:
        """Directory asset references are resolved against."""
        return Path(self.original_path).parent


@dataclass
class PageError:
    """An error that occurred while exporting a page."""
    path: str
    error: str
    title: Optional[str] = None


@dataclass
class PublishResult:
    """Result of an export run."""
    published_pages: List[str] = field(default_factory=list)
    copied_assets: List[str] = field(default_factory=list)
    missing_assets: List[str] = field(default_factory=list)
    failures: List[PageError] = field(default_factory=list)
    dry_run: bool = False
