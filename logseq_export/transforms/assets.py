"""Rewriting relative asset references to their published location."""

import posixpath
import re
from typing import Dict, List, Tuple

from logseq_export.core.parser import RELATIVE_IMAGE_PATTERN

RELATIVE_PATH_PATTERN = re.compile(r'^\.\.?/')


def published_asset_url(reference: str, asset_url_prefix: str) -> str:
    """Map ``../assets/img.png`` to ``<prefix>/img.png``."""
    return f"{asset_url_prefix.rstrip('/')}/{posixpath.basename(reference)}"


def rewrite_asset_references(
    body: str,
    attributes: Dict[str, str],
    asset_url_prefix: str,
) -> Tuple[str, List[str], Dict[str, str]]:
    """Point relative images in the body and the ``image`` attribute at the
    published asset folder.

    Absolute and external references are left untouched.

    Args:
        body: Page body
        attributes: Page attributes (not modified)
        asset_url_prefix: URL prefix of the published assets, e.g. ``/images``

    Returns:
        Tuple of (new body, original asset references in order, new attributes)
    """
    assets: List[str] = []

    def replace_image(match: re.Match) -> str:
        reference = match.group(2)
        assets.append(reference)
        return match.group(1) + published_asset_url(reference, asset_url_prefix) + match.group(3)

    new_body = RELATIVE_IMAGE_PATTERN.sub(replace_image, body)

    new_attributes = attributes.copy()
    image = attributes.get('image')
    if image and RELATIVE_PATH_PATTERN.match(image):
        assets.append(image)
        new_attributes['image'] = published_asset_url(image, asset_url_prefix)

    return new_body, assets, new_attributes
