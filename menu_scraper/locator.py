"""
Item locator: an ordered cascade of strategies for finding menu-item elements.

The first strategy that matches anything is adopted; later strategies are
never consulted and results are never merged.
"""
import logging
from typing import List, Optional, Tuple

from bs4 import Tag
from soupsieve import SelectorSyntaxError

from .config import CrawlerConfig
from .document import own_text, contains_marker

logger = logging.getLogger(__name__)


class LocatorStrategy:
    """Base class: find candidate elements below a scope"""

    name = "strategy"

    def find(self, scope: Tag) -> List[Tag]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class SelectorStrategy(LocatorStrategy):
    """Elements matching a CSS selector"""

    def __init__(self, selector: str):
        self.selector = selector
        self.name = selector

    def find(self, scope: Tag) -> List[Tag]:
        try:
            return scope.select(self.selector)
        except SelectorSyntaxError:
            logger.warning(f"Invalid item selector skipped: {self.selector}")
            return []


class CurrencyTextStrategy(LocatorStrategy):
    """Elements whose own text carries a currency marker"""

    def __init__(self, markers: List[str]):
        self.markers = list(markers)
        self.name = "currency-text"

    def find(self, scope: Tag) -> List[Tag]:
        return [
            element for element in scope.find_all(True)
            if contains_marker(own_text(element), self.markers)
        ]


def default_strategies(config: CrawlerConfig) -> List[LocatorStrategy]:
    """Exact container markers, then class substrings, then currency text"""
    strategies: List[LocatorStrategy] = []
    strategies.extend(SelectorStrategy(s) for s in config.item_exact_selectors)
    strategies.extend(SelectorStrategy(s) for s in config.item_partial_selectors)
    strategies.append(CurrencyTextStrategy(config.currency_markers))
    return strategies


class ItemLocator:
    """Runs strategies in order and adopts the first non-empty result"""

    def __init__(self, strategies: List[LocatorStrategy]):
        self.strategies = list(strategies)

    def locate(self, scope: Tag) -> Tuple[List[Tag], Optional[LocatorStrategy]]:
        """
        Returns:
            (candidate elements, adopted strategy) - ([], None) if nothing matched
        """
        for strategy in self.strategies:
            elements = strategy.find(scope)
            if elements:
                logger.info(f"Adopted item strategy {strategy.name} ({len(elements)} candidates)")
                return elements, strategy
        logger.info("No item strategy matched")
        return [], None
