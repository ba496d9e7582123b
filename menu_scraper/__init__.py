"""Restaurant menu extraction for food-delivery pages."""
from .config import CrawlerConfig
from .document import ParseError
from .extract import MenuExtractor, extract_menu
from .fetch import Fetcher, FetchError
from .models import ExtractionResult, MenuItemDraft

__all__ = [
    "CrawlerConfig",
    "ExtractionResult",
    "Fetcher",
    "FetchError",
    "MenuExtractor",
    "MenuItemDraft",
    "ParseError",
    "extract_menu",
]
