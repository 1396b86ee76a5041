"""Export configuration loaded from ``export.yaml`` and command line values."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from logseq_export.core.discovery import DEFAULT_PUBLISH_MARKER

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "export.yaml"

LIST_KEYS = ("unquoted_properties", "list_properties")

STRING_KEYS = (
    "pages_relative_path",
    "assets_relative_path",
    "web_assets_path_prefix",
    "page_url_prefix",
    "publish_marker",
)

BOOL_KEYS = ("decode_titles",)


class ConfigError(ValueError):
    """Raised when the export configuration is invalid."""


@dataclass
class ExportConfig:
    """Settings for one export run."""
    graph_folder: Path
    output_folder: Path
    unquoted_properties: List[str] = field(default_factory=list)
    list_properties: List[str] = field(default_factory=list)
    pages_relative_path: str = "logseq-pages"
    assets_relative_path: str = "logseq-assets"
    web_assets_path_prefix: str = "/logseq-assets"
    page_url_prefix: str = ""
    publish_marker: str = DEFAULT_PUBLISH_MARKER
    decode_titles: bool = False
    dry_run: bool = False

    @property
    def pages_folder(self) -> Path:
        return self.output_folder / self.pages_relative_path

    @property
    def assets_folder(self) -> Path:
        return self.output_folder / self.assets_relative_path


def read_config_file(config_path: Path) -> Dict[str, Any]:
    """Read the YAML settings file.

    A missing file yields an empty dict so defaults apply.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping
    """
    if not config_path.exists():
        logger.info("Config file %s not found, using default config", config_path)
        return {}

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping")
    return data


def _validate(data: Dict[str, Any]) -> None:
    unknown = set(data) - set(LIST_KEYS) - set(STRING_KEYS) - set(BOOL_KEYS)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ', '.join(sorted(unknown)))

    for key in LIST_KEYS:
        value = data.get(key)
        if value is not None and not (
            isinstance(value, list) and all(isinstance(item, str) for item in value)
        ):
            raise ConfigError(f"{key} must be a list of strings")

    for key in STRING_KEYS:
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"{key} must be a string")

    for key in BOOL_KEYS:
        value = data.get(key)
        if value is not None and not isinstance(value, bool):
            raise ConfigError(f"{key} must be true or false")


def load_config(
    graph_folder: Optional[str],
    output_folder: Optional[str],
    config_path: Optional[str] = None,
    dry_run: bool = False,
) -> ExportConfig:
    """Build the export configuration.

    Settings come from ``export.yaml`` in the graph folder, or from
    ``config_path`` when given.

    Args:
        graph_folder: Root of the Logseq graph (mandatory)
        output_folder: Folder receiving the exported pages (mandatory)
        config_path: Explicit settings file
        dry_run: Render pages without writing anything

    Raises:
        ConfigError: If a mandatory value is missing or a setting is invalid
    """
    if not graph_folder:
        raise ConfigError("graph folder is mandatory")
    if not output_folder:
        raise ConfigError("output folder is mandatory")

    if config_path and not Path(config_path).exists():
        raise ConfigError(f"Config file not found: {config_path}")

    path = Path(config_path) if config_path else Path(graph_folder) / CONFIG_FILENAME
    data = read_config_file(path)
    _validate(data)

    settings = {
        key: data[key]
        for key in LIST_KEYS + STRING_KEYS + BOOL_KEYS
        if data.get(key) is not None
    }
    return ExportConfig(
        graph_folder=Path(graph_folder),
        output_folder=Path(output_folder),
        dry_run=dry_run,
        **settings,
    )
