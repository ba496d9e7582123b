"""
Document layer: turns raw restaurant-page markup into a queryable tree.
"""
import logging
from typing import List, Optional, Union

from bs4 import BeautifulSoup, Comment, Tag, ParserRejectedMarkup

logger = logging.getLogger(__name__)

# Elements whose content is never visible menu text
NON_CONTENT_TAGS = ["script", "style", "noscript", "template"]


class ParseError(Exception):
    """Raised when input cannot be recovered as a document"""
    pass


def parse_document(html: Union[str, bytes]) -> BeautifulSoup:
    """
    Parse raw HTML leniently with lxml.

    Script, style, noscript and template elements are dropped so embedded
    JSON payloads never reach the text heuristics.

    Raises:
        ParseError: input is not textual markup
    """
    if not isinstance(html, (str, bytes)):
        raise ParseError(f"Expected markup text, got {type(html).__name__}")

    try:
        soup = BeautifulSoup(html, 'lxml')
    except (ParserRejectedMarkup, UnicodeDecodeError, ValueError) as e:
        raise ParseError(f"Markup could not be parsed: {e}") from e

    for element in soup(NON_CONTENT_TAGS):
        element.decompose()

    return soup


def text_of(element: Optional[Tag]) -> str:
    """Text of an element and its descendants, whitespace collapsed"""
    if element is None:
        return ""
    return " ".join(element.get_text().split())


def own_text(element: Tag) -> str:
    """Only the element's direct text nodes"""
    parts = [
        str(node) for node in element.find_all(string=True, recursive=False)
        if not isinstance(node, Comment)
    ]
    return " ".join("".join(parts).split())


def text_lines(element: Tag) -> List[str]:
    """Aggregated text split into trimmed, non-empty lines"""
    raw = element.get_text("\n")
    return [line.strip() for line in raw.split("\n") if line.strip()]


def safe_attr(element: Optional[Tag], attr: str, default: str = "") -> str:
    """Safely extract attribute from BeautifulSoup element"""
    if element is None:
        return default
    value = element.get(attr, default)
    # Multi-valued attributes (class, rel) come back as lists
    if isinstance(value, list):
        value = " ".join(value)
    return str(value).strip() if value else default


def contains_marker(text: str, markers: List[str]) -> bool:
    """True if any currency marker occurs in text"""
    return any(marker in text for marker in markers)
