"""Command line entry point for Logseq Export."""

import argparse
import logging
import sys
from typing import List, Optional

from logseq_export.core.config import ConfigError, load_config
from logseq_export.core.publisher import Publisher

logger = logging.getLogger(__name__)


def setup_logging(verbosity: int = 0) -> None:
    """Configure the root logger (0=WARNING, 1=INFO, 2+=DEBUG)."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )


def create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logseq-export",
        description="Export public Logseq pages as Markdown documents with front matter.",
    )
    parser.add_argument(
        "--graph-folder",
        required=True,
        help="Root of the Logseq graph containing the pages/ and journals/ folders",
    )
    parser.add_argument(
        "--output-folder",
        required=True,
        help="Folder receiving the exported pages and assets",
    )
    parser.add_argument(
        "--config",
        help="Settings file (default: export.yaml in the graph folder)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Render pages without writing anything",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for info, -vv for debug)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = create_argument_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = load_config(args.graph_folder, args.output_folder, args.config, args.dry_run)
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    try:
        result = Publisher(config).publish()
    except FileNotFoundError as e:
        logger.error("%s", e)
        return 1

    for failure in result.failures:
        print(f"Failed: {failure.path}: {failure.error}", file=sys.stderr)

    return 1 if result.failures else 0


if __name__ == "__main__":
    sys.exit(main())
