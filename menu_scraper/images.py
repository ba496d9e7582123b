"""
Image URL resolution and normalization for menu items.
"""
import re
import logging
from typing import Iterator, List, Optional
from urllib.parse import urlparse

from bs4 import Tag
from soupsieve import SelectorSyntaxError

from .config import CrawlerConfig
from .document import safe_attr
from .styles import background_image_url, first_srcset_url

logger = logging.getLogger(__name__)

SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


def site_origin(page_url: Optional[str], default: str) -> str:
    """scheme://host of the page URL, or the configured default"""
    if page_url:
        parsed = urlparse(page_url)
        if parsed.scheme and parsed.netloc:
            return f"{parsed.scheme}://{parsed.netloc}"
    return default.rstrip("/")


def is_placeholder(src: str, config: CrawlerConfig) -> bool:
    """Blank, loading and 'add item' images that never show the dish"""
    if src.rstrip(",") == config.empty_data_uri.rstrip(","):
        return True
    return any(pattern in src for pattern in config.placeholder_image_patterns)


def looks_like_image(url: str, config: CrawlerConfig) -> bool:
    """Extension, path token or data:image/ MIME check"""
    if url.startswith("data:"):
        return url.lower().startswith("data:image/")
    if re.search(config.image_extension_pattern, url, re.IGNORECASE):
        return True
    lowered = url.lower()
    return any(token in lowered for token in config.image_path_tokens)


def normalize_image_url(src: Optional[str], origin: str, config: CrawlerConfig) -> Optional[str]:
    """
    Make a discovered image reference absolute and validate it.

    Args:
        src: raw attribute/style value
        origin: absolute site origin used for relative references
        config: crawler configuration

    Returns:
        Absolute URL, or None if the reference is a placeholder or not an image
    """
    if not src:
        return None
    src = src.strip()
    if not src or is_placeholder(src, config):
        return None

    origin = origin.rstrip("/")
    if src.startswith("//"):
        url = "https:" + src
    elif src.startswith("/"):
        url = origin + src
    elif not SCHEME_RE.match(src) and not src.startswith("data:"):
        url = origin + "/" + src
    else:
        url = src

    if not looks_like_image(url, config):
        return None
    return url


class ImageResolver:
    """Finds the first usable image URL below a scope element"""

    def __init__(self, config: CrawlerConfig, origin: str):
        self.config = config
        self.origin = origin

    def candidate_sources(self, element: Tag) -> Iterator[str]:
        """Sources in priority order: src, lazy attributes, background style, srcset"""
        src = safe_attr(element, "src")
        if src:
            yield src

        for attr in self.config.lazy_image_attributes:
            value = safe_attr(element, attr)
            if value:
                yield value

        background = background_image_url(safe_attr(element, "style"))
        if background:
            yield background

        srcset_url = first_srcset_url(safe_attr(element, "srcset"))
        if srcset_url:
            yield srcset_url

    def resolve_element(self, element: Tag) -> Optional[str]:
        """First accepted, normalized source on a single element"""
        for src in self.candidate_sources(element):
            url = normalize_image_url(src, self.origin, self.config)
            if url:
                return url
            logger.debug(f"Rejected image source: {src[:100]}")
        return None

    def resolve(self, scope: Tag) -> Optional[str]:
        """Walk image selectors in priority order, stop at the first accepted URL"""
        for selector in self.config.image_selectors:
            for element in self._select(scope, selector):
                url = self.resolve_element(element)
                if url:
                    return url
        return None

    @staticmethod
    def _select(scope: Tag, selector: str) -> List[Tag]:
        try:
            return scope.select(selector)
        except SelectorSyntaxError:
            logger.warning(f"Invalid image selector skipped: {selector}")
            return []
