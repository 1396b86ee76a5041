"""Front matter rendering for exported pages.

Attributes are written in sorted key order between two ``---`` lines.
Values are double-quoted unless listed in ``unquoted``; keys listed in
``list_fields`` hold comma-separated values and are written as lists.
"""

from typing import AbstractSet, Dict, Iterable

FRONTMATTER_DELIMITER = '---'
LIST_SEPARATOR = ', '


def quote(value: str) -> str:
    """Double-quote a value, escaping backslashes and quotes."""
    escaped = value.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


def format_list(value: str) -> str:
    """Format ``a, b`` as ``["a", "b"]``. An empty value gives ``[]``."""
    if not value:
        return '[]'
    items = ', '.join(quote(item) for item in value.split(LIST_SEPARATOR))
    return f'[{items}]'


def format_value(
    key: str,
    value: str,
    unquoted: AbstractSet[str] = frozenset(),
    list_fields: AbstractSet[str] = frozenset(),
) -> str:
    if key in list_fields:
        return format_list(value)
    if key in unquoted:
        return value
    return quote(value)


def render(
    attributes: Dict[str, str],
    body: str,
    unquoted: Iterable[str] = (),
    list_fields: Iterable[str] = (),
) -> str:
    """Render attributes as front matter followed by the body.

    Args:
        attributes: Page attributes
        body: Markdown body, appended verbatim
        unquoted: Keys whose values are written without quotes
        list_fields: Keys whose values are written as lists

    Returns:
        The complete document text
    """
    unquoted = frozenset(unquoted)
    list_fields = frozenset(list_fields)

    lines = [FRONTMATTER_DELIMITER]
    for key in sorted(attributes):
        lines.append(f"{key}: {format_value(key, attributes[key], unquoted, list_fields)}")
    lines.append(FRONTMATTER_DELIMITER)

    return '\n'.join(lines) + '\n' + body
