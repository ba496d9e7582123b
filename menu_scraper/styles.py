"""
Small text parsers for inline style declarations and responsive source sets.
"""
import re
from typing import Optional

BACKGROUND_IMAGE_RE = re.compile(
    r"background(?:-image)?\s*:[^;]*?url\(\s*(['\"]?)(?P<url>[^'\")]+)\1\s*\)",
    re.IGNORECASE,
)


def background_image_url(style: Optional[str]) -> Optional[str]:
    """
    Pull the URL out of a background-image declaration.

    >>> background_image_url("width: 10px; background-image: url('//x/a.jpg')")
    '//x/a.jpg'
    """
    if not style:
        return None
    match = BACKGROUND_IMAGE_RE.search(style)
    if not match:
        return None
    url = match.group("url").strip()
    return url or None


def first_srcset_url(srcset: Optional[str]) -> Optional[str]:
    """
    First candidate URL of a srcset attribute, descriptor dropped.

    URLs may themselves contain commas, so the first whitespace-delimited
    token is taken and only trailing commas are removed.

    >>> first_srcset_url("https://x/w_320,h_240/a.jpg 320w, https://x/b.jpg 640w")
    'https://x/w_320,h_240/a.jpg'
    """
    if not srcset:
        return None
    for token in srcset.split():
        url = token.rstrip(",")
        if url:
            return url
    return None
