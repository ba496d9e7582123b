"""
Normalization layer: dedup keys, duplicate removal and result assembly.
"""
import re
import logging
from typing import List, Iterable, Set

from .models import MenuItemDraft, ExtractionResult

logger = logging.getLogger(__name__)

# "25.000", "1,250,000" - grouped thousands without a decimal part
GROUPED_THOUSANDS_RE = re.compile(r"^\d{1,3}(?:[.,]\d{3})+$")
NUMBER_RE = re.compile(r"\d[\d.,]*\d|\d")


def normalize_name(name: str) -> str:
    """Lowercase and trim"""
    return (name or "").strip().lower()


def price_digits(price: str) -> str:
    """Strip every non-numeric character"""
    return re.sub(r"\D", "", price or "")


def dedup_key(item: MenuItemDraft) -> str:
    """Normalized name plus digits-only price"""
    return f"{normalize_name(item.name)}|{price_digits(item.price)}"


def deduplicate(items: Iterable[MenuItemDraft]) -> List[MenuItemDraft]:
    """
    Drop repeated items, keeping the first occurrence of each key.

    Discovery order is preserved, so running this twice is a no-op.
    """
    seen: Set[str] = set()
    unique: List[MenuItemDraft] = []

    for item in items:
        key = dedup_key(item)
        if key in seen:
            logger.debug(f"Duplicate item removed: {item.name}")
            continue
        seen.add(key)
        unique.append(item)

    return unique


def assemble_result(restaurant_name: str, items: Iterable[MenuItemDraft]) -> ExtractionResult:
    """Deduplicate and package the final result"""
    unique = deduplicate(items)
    logger.info(f"Total unique items found: {len(unique)}")
    return ExtractionResult(restaurant_name=restaurant_name, items=unique)


def parse_price(price: str) -> float:
    """
    Numeric value of a raw price string, 0 when nothing parses.

    Dots and commas followed by three-digit groups are thousand separators
    ("25.000 ₫" -> 25000); a single separator with one or two trailing
    digits is a decimal point ("$12.50" -> 12.5).
    """
    if not price:
        return 0.0

    match = NUMBER_RE.search(price)
    if not match:
        return 0.0

    number = match.group(0).strip()
    if GROUPED_THOUSANDS_RE.match(number):
        return float(re.sub(r"\D", "", number))

    decimal = re.match(r"^(\d+)[.,](\d{1,2})$", number)
    if decimal:
        return float(f"{decimal.group(1)}.{decimal.group(2)}")

    digits = re.sub(r"\D", "", number)
    return float(digits) if digits else 0.0
