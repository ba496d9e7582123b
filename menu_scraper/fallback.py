"""
Aggressive whole-document scan, used only when the locator cascade retains nothing.
"""
import logging
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from .config import CrawlerConfig
from .document import text_of, own_text, contains_marker
from .images import ImageResolver
from .models import MenuItemDraft, build_draft

logger = logging.getLogger(__name__)


class AggressiveFallbackExtractor:
    """Pairs every currency-bearing element with a name found under its parent"""

    def __init__(self, config: CrawlerConfig, image_resolver: ImageResolver):
        self.config = config
        self.image_resolver = image_resolver
        self.markers = config.currency_markers

    def _name_near(self, parent: Tag, price_text: str) -> Optional[str]:
        for sibling in parent.find_all(True):
            text = text_of(sibling)
            if (
                text
                and text != price_text
                and len(text) >= self.config.min_name_length
                and not contains_marker(text, self.markers)
            ):
                return text
        return None

    def extract(self, soup: BeautifulSoup) -> List[MenuItemDraft]:
        items: List[MenuItemDraft] = []
        for element in soup.find_all(True):
            if not contains_marker(own_text(element), self.markers):
                continue

            parent = element.parent
            if parent is None:
                continue

            price_text = text_of(element)
            name = self._name_near(parent, price_text)
            if not name:
                continue

            draft = build_draft(name, price_text, self.image_resolver.resolve(parent))
            if draft is not None:
                items.append(draft)

        logger.info(f"Aggressive fallback found {len(items)} items")
        return items
