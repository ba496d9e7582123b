"""
Configuration module for the menu crawler.
All settings can be overridden via CLI arguments, environment variables or a YAML file.
"""
import os
import random
from typing import List, Dict
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv


# Tokens that mark a text node as price-bearing
CURRENCY_MARKERS = ["₫", "VND"]

UNKNOWN_RESTAURANT = "Unknown Restaurant"

# Restaurant name lookups, tried in order after the first h1
RESTAURANT_NAME_SELECTORS = [
    '[data-testid="restaurant-name"]',
    '[class*="restaurant-name"], [class*="restaurantName"]',
]

# Item container strategies - most specific first, DO NOT merge results
ITEM_EXACT_SELECTORS = [
    ".menuItem",
    '[data-testid="menu-item"]',
    ".menu-item",
    ".food-item",
    ".item-card",
    ".product-item",
    ".dish-item",
]

ITEM_PARTIAL_SELECTORS = [
    # CSS modules patterns (hashed class names)
    '[class*="menuItem"]',
    '[class*="foodItem"]',
    '[class*="productItem"]',
    '[class*="itemCard"]',
    # Generic
    '[class*="item"]',
    '[class*="product"]',
    '[class*="dish"]',
    '[class*="food"]',
]

NAME_SELECTORS = [
    '[class*="itemNameDescription"]',
    '[class*="itemName"]',
    '[class*="foodName"]',
    '[class*="productName"]',
    '[class*="dishName"]',
    ".itemName", ".item-name", ".food-name", ".product-name", ".dish-name",
    "h3", "h4", "h5", "h6",
    '[class*="name"]', '[class*="title"]',
    "span", "div", "p",
]

PRICE_SELECTORS = [
    '[class*="itemPrice"]',
    '[class*="foodPrice"]',
    '[class*="productPrice"]',
    '[class*="price"]',
    '[class*="cost"]',
    '[class*="amount"]',
    ".itemPrice", ".item-price", ".food-price", ".product-price", ".price",
]

IMAGE_SELECTORS = [
    '[class*="placeholder"] img[class*="realImage"]',
    '[class*="menuItemPhoto"] img[class*="realImage"]',
    'img[class*="realImage"]',
    '[class*="placeholder"] img',
    '[class*="menuItemPhoto"] img',
    '[class*="menuItemPhoto"]',
    '[class*="placeholder"]',
    '[class*="itemPhoto"]',
    '[class*="foodPhoto"]',
    '[class*="productPhoto"]',
    '[class*="FoodImage"]',
    '[class*="foodImage"]',
    '[class*="ItemImage"]',
    '[class*="itemImage"]',
    'div[style*="background-image"]',
    "img",
    '[class*="image"]',
    '[class*="photo"]',
    '[class*="picture"]',
]

LAZY_IMAGE_ATTRIBUTES = ["data-src", "data-lazy", "data-original", "data-bg"]

PLACEHOLDER_IMAGE_PATTERNS = [
    "plus-white.svg",
    "placeholder.svg",
    "blank.svg",
    "loading.gif",
]

EMPTY_DATA_URI = "data:image/svg+xml;base64,"

IMAGE_EXTENSION_PATTERN = r"\.(jpg|jpeg|png|webp|gif)(\?|$)"

IMAGE_PATH_TOKENS = ["image", "photo", "compressed_webp", "food-cms"]

BROWSER_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "DNT": "1",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Cache-Control": "max-age=0",
}


@dataclass
class CrawlerConfig:
    """Main configuration class for the menu crawler"""

    # Site
    site_origin: str = "https://food.grab.com"
    allowed_hosts: List[str] = field(default_factory=lambda: ["grab.com"])

    # Extraction heuristics
    currency_markers: List[str] = field(default_factory=lambda: list(CURRENCY_MARKERS))
    unknown_restaurant: str = UNKNOWN_RESTAURANT
    restaurant_name_selectors: List[str] = field(default_factory=lambda: list(RESTAURANT_NAME_SELECTORS))
    item_exact_selectors: List[str] = field(default_factory=lambda: list(ITEM_EXACT_SELECTORS))
    item_partial_selectors: List[str] = field(default_factory=lambda: list(ITEM_PARTIAL_SELECTORS))
    name_selectors: List[str] = field(default_factory=lambda: list(NAME_SELECTORS))
    price_selectors: List[str] = field(default_factory=lambda: list(PRICE_SELECTORS))
    image_selectors: List[str] = field(default_factory=lambda: list(IMAGE_SELECTORS))
    lazy_image_attributes: List[str] = field(default_factory=lambda: list(LAZY_IMAGE_ATTRIBUTES))
    placeholder_image_patterns: List[str] = field(default_factory=lambda: list(PLACEHOLDER_IMAGE_PATTERNS))
    empty_data_uri: str = EMPTY_DATA_URI
    image_extension_pattern: str = IMAGE_EXTENSION_PATTERN
    image_path_tokens: List[str] = field(default_factory=lambda: list(IMAGE_PATH_TOKENS))
    min_name_length: int = 3

    # Fetching
    request_timeout: float = 30.0  # seconds
    max_retries: int = 2
    retry_backoff_factor: float = 2.0
    browser_headers: Dict[str, str] = field(default_factory=lambda: dict(BROWSER_HEADERS))
    user_agents: List[str] = field(default_factory=lambda: [
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    ])

    # Logging
    log_level: str = "INFO"
    log_file: str = ""
    debug_mode: bool = False

    # Output
    output_path: str = "menu.json"
    output_format: str = "json"  # json, csv

    def get_user_agent(self) -> str:
        """Get a random user agent"""
        return random.choice(self.user_agents)

    def get_headers(self) -> Dict[str, str]:
        """Browser-like request headers with a rotated User-Agent"""
        headers = {"User-Agent": self.get_user_agent()}
        headers.update(self.browser_headers)
        return headers

    def get_backoff(self, attempt: int) -> float:
        """Delay before retry number `attempt` (0-based)"""
        return self.retry_backoff_factor ** attempt


def _env_list(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def load_config_from_env() -> CrawlerConfig:
    """Load configuration from environment variables (and a local .env file)"""
    load_dotenv()
    config = CrawlerConfig()

    if os.getenv("MENU_CRAWLER_SITE_ORIGIN"):
        config.site_origin = os.getenv("MENU_CRAWLER_SITE_ORIGIN").rstrip("/")

    if os.getenv("MENU_CRAWLER_ALLOWED_HOSTS"):
        config.allowed_hosts = _env_list(os.getenv("MENU_CRAWLER_ALLOWED_HOSTS"))

    if os.getenv("MENU_CRAWLER_CURRENCY_MARKERS"):
        config.currency_markers = _env_list(os.getenv("MENU_CRAWLER_CURRENCY_MARKERS"))

    if os.getenv("MENU_CRAWLER_TIMEOUT"):
        config.request_timeout = float(os.getenv("MENU_CRAWLER_TIMEOUT"))

    if os.getenv("MENU_CRAWLER_MAX_RETRIES"):
        config.max_retries = int(os.getenv("MENU_CRAWLER_MAX_RETRIES"))

    if os.getenv("MENU_CRAWLER_LOG_LEVEL"):
        config.log_level = os.getenv("MENU_CRAWLER_LOG_LEVEL")

    if os.getenv("MENU_CRAWLER_OUTPUT"):
        config.output_path = os.getenv("MENU_CRAWLER_OUTPUT")

    return config


def load_config_from_file(config_path: str) -> CrawlerConfig:
    """Load configuration from YAML file"""
    import yaml

    config = CrawlerConfig()

    if not Path(config_path).exists():
        return config

    with open(config_path, 'r', encoding='utf-8') as f:
        yaml_config = yaml.safe_load(f)

    if yaml_config:
        for key, value in yaml_config.items():
            if hasattr(config, key):
                setattr(config, key, value)

    return config
