"""
Per-candidate field extraction: name, price and image via nested fallbacks.
"""
import re
import logging
from typing import List, Optional

from bs4 import Tag
from soupsieve import SelectorSyntaxError

from .config import CrawlerConfig
from .document import text_of, text_lines, contains_marker
from .images import ImageResolver
from .models import MenuItemDraft, build_draft

logger = logging.getLogger(__name__)

DIGIT_RE = re.compile(r"\d")


def _first(scope: Tag, selector: str) -> Optional[Tag]:
    try:
        return scope.select_one(selector)
    except SelectorSyntaxError:
        logger.warning(f"Invalid field selector skipped: {selector}")
        return None


class ItemFieldExtractor:
    """Resolves a MenuItemDraft from one candidate element"""

    def __init__(self, config: CrawlerConfig, image_resolver: ImageResolver):
        self.config = config
        self.image_resolver = image_resolver
        self.markers = config.currency_markers
        # Currency-bearing spans/divs come last
        self.price_selectors: List[str] = list(config.price_selectors) + [
            f'{tag}:-soup-contains("{marker}")'
            for marker in self.markers
            for tag in ("span", "div")
        ]

    def is_name_text(self, text: str) -> bool:
        return (
            bool(text)
            and len(text) >= self.config.min_name_length
            and not contains_marker(text, self.markers)
        )

    def is_price_text(self, text: str) -> bool:
        return bool(text) and (contains_marker(text, self.markers) or bool(DIGIT_RE.search(text)))

    def find_name(self, element: Tag) -> str:
        for selector in self.config.name_selectors:
            text = text_of(_first(element, selector))
            if self.is_name_text(text):
                return text
        return ""

    def find_price(self, element: Tag) -> str:
        for selector in self.price_selectors:
            text = text_of(_first(element, selector))
            if self.is_price_text(text):
                return text
        return ""

    def extract(self, element: Tag) -> Optional[MenuItemDraft]:
        """
        Returns:
            A draft when both name and price resolve, otherwise None
        """
        name = self.find_name(element)
        price = self.find_price(element)
        image_url = self.image_resolver.resolve(element)

        # Raw text lines as last resort
        if not name or not price:
            for line in text_lines(element):
                if not name and self.is_name_text(line):
                    name = line
                if not price and self.is_price_text(line):
                    price = line

        draft = build_draft(name, price, image_url)
        if draft is None:
            logger.debug(f"Dropped candidate <{element.name}> name={name!r} price={price!r}")
        return draft
