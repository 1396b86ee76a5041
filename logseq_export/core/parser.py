"""Splitting raw Logseq pages into attributes, body and asset references.

A page starts with an optional block of ``key:: value`` lines:

    public:: true
    title:: Hello

    - first bullet

Everything after the block (and the single blank line that follows it)
is the body.
"""

import re
from typing import Dict, List, Tuple

from logseq_export.core.models import ParsedContent

# Leading run of lines containing "::"; the last one may lack a newline
ATTRIBUTE_BLOCK_PATTERN = re.compile(r'\A((?:[^\n]*?::[^\n]*(?:\n|\Z))*)')

ATTRIBUTE_LINE_PATTERN = re.compile(r'^(.*?)::\s*(.*)$')

# Relative markdown images: ![alt](./img.png) or ![alt](../assets/img.png)
RELATIVE_IMAGE_PATTERN = re.compile(r'(!\[.*?\]\()(\.\.?/.+?)(\))')


def _split_attribute_block(raw: str) -> Tuple[str, str]:
    block = ATTRIBUTE_BLOCK_PATTERN.match(raw).group(1)
    body = raw[len(block):]
    if block and body.startswith('\n'):
        body = body[1:]
    return block, body


def parse_attributes(raw: str) -> Dict[str, str]:
    """Parse the leading ``key:: value`` block of a page.

    Lines with an empty key are skipped. Repeated keys keep the last value.

    Args:
        raw: Full page text

    Returns:
        Mapping of attribute name to value
    """
    block, _ = _split_attribute_block(raw)
    attributes = {}
    for line in block.splitlines():
        match = ATTRIBUTE_LINE_PATTERN.match(line)
        if match is None or not match.group(1).strip():
            continue
        attributes[match.group(1)] = match.group(2)
    return attributes


def strip_attributes(raw: str) -> str:
    """Return the page body without the attribute block.

    The blank line separating attributes from the body is dropped too.
    A page without attributes is returned unchanged.
    """
    _, body = _split_attribute_block(raw)
    return body


def parse_assets(text: str) -> List[str]:
    """Find every relative image reference in text.

    ``![img](../assets/img.jpg)`` yields ``../assets/img.jpg``;
    ``![img](http://example.com/img.jpg)`` is ignored. Duplicates are kept.
    """
    return [match.group(2) for match in RELATIVE_IMAGE_PATTERN.finditer(text)]


def parse_content(raw: str) -> ParsedContent:
    """Read attributes, body and assets from the same raw text."""
    raw = raw.replace('\r', '')
    body = strip_attributes(raw)
    return ParsedContent(
        attributes=parse_attributes(raw),
        body=body,
        assets=parse_assets(body),
    )
