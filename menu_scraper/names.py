"""
Restaurant display-name resolution.
"""
import logging

from bs4 import BeautifulSoup

from .config import CrawlerConfig
from .document import text_of

logger = logging.getLogger(__name__)


def resolve_restaurant_name(soup: BeautifulSoup, config: CrawlerConfig) -> str:
    """
    Resolve the restaurant name via ordered fallbacks: first h1, name marker
    attribute, name-like class, then the <title> up to the first '|'.

    Returns:
        The name, or the configured sentinel if nothing matched
    """
    # Title heading
    name = text_of(soup.find('h1'))
    if name:
        return name

    # Marker attribute / class token
    for selector in config.restaurant_name_selectors:
        name = text_of(soup.select_one(selector))
        if name:
            return name

    # Document title, e.g. "Ngon Restaurant | Grab Food"
    title_el = soup.find('title')
    if title_el:
        name = title_el.get_text().split('|', 1)[0].strip()
        if name:
            return name

    logger.info(f"Restaurant name not found, using '{config.unknown_restaurant}'")
    return config.unknown_restaurant
