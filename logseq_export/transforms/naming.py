"""Export file names, slugs and titles derived from page attributes."""

import posixpath
from pathlib import PurePath
from typing import Dict
from urllib.parse import unquote

from logseq_export.core.models import ExportError


def sanitize_name(name: str) -> str:
    """Replace spaces with dashes, leaving everything else untouched."""
    return name.replace(' ', '-')


def _check_name_part(name: str, value: str) -> None:
    if '/' in value or '\\' in value or value in ('.', '..'):
        raise ExportError(f"Invalid {name} {value!r}: path separators are not allowed")


def _strip_extension(name: str) -> str:
    return posixpath.splitext(name)[0]


def generate_file_name(original_path: str, attributes: Dict[str, str]) -> str:
    """Compute the file name a page is exported under.

    Priority:
    1. ``date`` and ``slug`` attributes -> ``<date>-<slug>.md``
    2. ``slug`` attribute -> ``<slug>.md``
    3. Otherwise the sanitized base name of the original file

    A ``folder`` attribute is prepended as a directory.

    Args:
        original_path: Path of the source page
        attributes: Page attributes

    Returns:
        Relative export path using ``/`` separators

    Raises:
        ExportError: If there is neither a slug nor a base name, or if
            ``slug``, ``date`` or ``folder`` would leave the pages folder
    """
    slug = attributes.get('slug')
    date = attributes.get('date')

    if slug:
        _check_name_part('slug', slug)
        if date:
            _check_name_part('date', date)
        filename = f"{date}-{slug}.md" if date else f"{slug}.md"
    else:
        base_name = PurePath(original_path).name if original_path else ''
        if not base_name:
            raise ExportError(f"Cannot derive a file name for page {original_path!r}")
        filename = sanitize_name(base_name)

    folder = attributes.get('folder', '').strip('/')
    if folder:
        if '\\' in folder or any(part in ('.', '..') for part in folder.split('/')):
            raise ExportError(f"Invalid folder {folder!r}: must stay inside the pages folder")
        return posixpath.join(folder, filename)
    return filename


def ensure_slug(attributes: Dict[str, str], export_filename: str) -> None:
    """Set ``slug`` from the export file name unless already present."""
    if attributes.get('slug'):
        return
    attributes['slug'] = _strip_extension(posixpath.basename(export_filename))


def ensure_title(attributes: Dict[str, str], original_path: str, decode: bool = False) -> None:
    """Set ``title`` from the original file name unless already present.

    Logseq percent-encodes some characters in file names (``:`` is
    stored as ``%3A``). They are kept as-is unless ``decode`` is set.
    """
    if attributes.get('title'):
        return
    title = _strip_extension(PurePath(original_path).name)
    attributes['title'] = unquote(title) if decode else title
