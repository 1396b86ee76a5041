"""Core components for Logseq Export."""

from logseq_export.core.models import ExportError, PageError, ParsedContent, ParsedPage, PublishResult, RawPage
from logseq_export.core.config import ConfigError, ExportConfig, load_config
from logseq_export.core.discovery import GraphDiscovery
from logseq_export.core.parser import parse_assets, parse_attributes, parse_content, strip_attributes
from logseq_export.core.processor import LinkIndex, PageProcessor
from logseq_export.core.publisher import Publisher

__all__ = [
    "ExportError",
    "PageError",
    "ParsedContent",
    "ParsedPage",
    "PublishResult",
    "RawPage",
    "ConfigError",
    "ExportConfig",
    "load_config",
    "GraphDiscovery",
    "parse_assets",
    "parse_attributes",
    "parse_content",
    "strip_attributes",
    "LinkIndex",
    "PageProcessor",
    "Publisher",
]
