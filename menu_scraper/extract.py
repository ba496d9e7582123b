"""
Menu extraction engine.

Parser -> name resolver and item locator -> field extractor per candidate
-> aggressive fallback when nothing was retained -> dedup and assembly.
"""
import logging
from typing import List, Optional, Union

from .config import CrawlerConfig
from .document import parse_document
from .fallback import AggressiveFallbackExtractor
from .fields import ItemFieldExtractor
from .images import ImageResolver, site_origin
from .locator import ItemLocator, LocatorStrategy, default_strategies
from .models import ExtractionResult, MenuItemDraft
from .names import resolve_restaurant_name
from .normalize import assemble_result

logger = logging.getLogger(__name__)


class MenuExtractor:
    """Extracts restaurant name and menu items from one fetched page"""

    def __init__(self, config: Optional[CrawlerConfig] = None,
                 strategies: Optional[List[LocatorStrategy]] = None):
        self.config = config or CrawlerConfig()
        self.locator = ItemLocator(strategies or default_strategies(self.config))

    def _fallback(self, image_resolver: ImageResolver) -> AggressiveFallbackExtractor:
        return AggressiveFallbackExtractor(self.config, image_resolver)

    def extract(self, html: Union[str, bytes], url: Optional[str] = None) -> ExtractionResult:
        """
        Run the full pipeline over one document.

        Args:
            html: raw page markup
            url: page URL, used as origin for relative image references

        Returns:
            ExtractionResult (possibly with no items)

        Raises:
            ParseError: input is not markup
        """
        soup = parse_document(html)
        origin = site_origin(url, self.config.site_origin)
        image_resolver = ImageResolver(self.config, origin)

        restaurant_name = resolve_restaurant_name(soup, self.config)

        candidates, strategy = self.locator.locate(soup)
        field_extractor = ItemFieldExtractor(self.config, image_resolver)

        items: List[MenuItemDraft] = []
        for element in candidates:
            draft = field_extractor.extract(element)
            if draft is not None:
                items.append(draft)

        if strategy is not None:
            logger.info(f"Found {len(items)} items using selector: {strategy.name}")

        if not items:
            logger.info("No items found with structured selectors, trying aggressive approach...")
            items = self._fallback(image_resolver).extract(soup)

        result = assemble_result(restaurant_name, items)
        logger.info(f"Restaurant: {result.restaurant_name} | Items: {len(result.items)} | URL: {url or '-'}")
        return result


def extract_menu(html: Union[str, bytes], url: Optional[str] = None,
                 config: Optional[CrawlerConfig] = None) -> ExtractionResult:
    """Convenience wrapper around MenuExtractor.extract"""
    return MenuExtractor(config).extract(html, url)
