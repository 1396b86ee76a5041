"""Graph discovery module for finding publishable pages."""

import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional

from logseq_export.core.models import RawPage

logger = logging.getLogger(__name__)

DEFAULT_PUBLISH_MARKER = "public::"


class GraphDiscovery:
    """Finds pages marked as publishable in a Logseq graph."""

    def __init__(self, graph_path: Path, marker: str = DEFAULT_PUBLISH_MARKER):
        """Initialize GraphDiscovery.

        Args:
            graph_path: Path to the root of the Logseq graph
            marker: Text a page must contain on some line to be published
        """
        self.graph_path = Path(graph_path)
        self.marker = marker

    def discover_all(self) -> List[RawPage]:
        """Find all publishable pages in the graph.

        Returns:
            RawPage for every markdown file containing the marker,
            ordered by path

        Raises:
            FileNotFoundError: If the graph folder does not exist
        """
        if not self.graph_path.is_dir():
            raise FileNotFoundError(f"Graph folder not found: {self.graph_path}")

        pages = []
        for page_path in self._iter_markdown_files():
            page = self.get_page(page_path)
            if page is not None:
                pages.append(page)

        logger.info("Found %d public pages in %s", len(pages), self.graph_path)
        return pages

    def get_page(self, page_path: Path) -> Optional[RawPage]:
        """Read a single page, returning None unless it is publishable."""
        try:
            page = RawPage.from_path(page_path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read %s: %s", page_path, e)
            return None

        if not self.is_publishable(page.content):
            logger.debug("Skipping %s: no %r marker", page_path, self.marker)
            return None
        return page

    def is_publishable(self, content: str) -> bool:
        """Check if any line of the content holds the publish marker."""
        return any(self.marker in line for line in content.splitlines())

    def _iter_markdown_files(self) -> Iterator[Path]:
        # Hidden folders and the logseq/ settings folder (with its bak/
        # backups) never hold pages
        for root, dirs, files in os.walk(self.graph_path):
            dirs[:] = sorted(
                d for d in dirs
                if not d.startswith('.') and not (Path(root) == self.graph_path and d == 'logseq')
            )
            for name in sorted(files):
                if name.endswith('.md'):
                    yield Path(root) / name
