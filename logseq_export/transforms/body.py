"""Body transforms turning Logseq outliner bullets into flat Markdown.

Each step is a plain ``str -> str`` function. The steps are order
dependent and are applied through ``rewrite_body``.
"""

import re
from functools import reduce
from typing import Callable

BodyTransform = Callable[[str], str]

EMPTY_BULLET_PATTERN = re.compile(r'^[ \t]*-[ \t]*$', re.MULTILINE)

# A top-level bullet followed by lines indented with two spaces; empty
# lines are part of the block when an indented line follows them
MULTILINE_BLOCK_PATTERN = re.compile(
    r'^- ([^\n]*)((?:\n  [^\n]*|\n(?=\n+  ))+)', re.MULTILINE
)

CONTINUATION_INDENT_PATTERN = re.compile(r'\n  ')

TOP_LEVEL_BULLET_PATTERN = re.compile(r'^- ', re.MULTILINE)

SECOND_LEVEL_BULLET_PATTERN = re.compile(r'^\t-', re.MULTILINE)

DEEP_BULLET_PATTERN = re.compile(r'^\t(\t+-)', re.MULTILINE)


def drop_empty_bullets(body: str) -> str:
    """Remove bullets with no text, keeping their line breaks."""
    return EMPTY_BULLET_PATTERN.sub('', body)


def unindent_multiline_blocks(body: str) -> str:
    """Detach multi-line bullets (code fences, wrapped text) from the list.

    The bullet marker becomes a blank line and every continuation line
    loses its two-space indent.
    """
    def replace_block(match: re.Match) -> str:
        rest = CONTINUATION_INDENT_PATTERN.sub('\n', match.group(2))
        return '\n' + match.group(1) + rest

    return MULTILINE_BLOCK_PATTERN.sub(replace_block, body)


def promote_top_level_bullets(body: str) -> str:
    """Turn each top-level bullet into its own paragraph."""
    return TOP_LEVEL_BULLET_PATTERN.sub('\n', body)


def promote_second_level_bullets(body: str) -> str:
    """Make second level bullets a top-level list.

    This leaves an extra blank line before each promoted bullet.
    """
    return SECOND_LEVEL_BULLET_PATTERN.sub('\n-', body)


def deindent_deep_bullets(body: str) -> str:
    """Strip one tab from bullets nested two or more levels deep."""
    return DEEP_BULLET_PATTERN.sub(r'\1', body)


BODY_REWRITE_STEPS = (
    drop_empty_bullets,
    unindent_multiline_blocks,
    promote_top_level_bullets,
    promote_second_level_bullets,
    deindent_deep_bullets,
)


def compose(*transforms: BodyTransform) -> BodyTransform:
    """Chain body transforms left to right.

    Example:
        compose(drop_empty_bullets, promote_top_level_bullets)
    """
    def transform(body: str) -> str:
        return reduce(lambda text, step: step(text), transforms, body)
    return transform


rewrite_body = compose(*BODY_REWRITE_STEPS)
