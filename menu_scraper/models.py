import re
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import UNKNOWN_RESTAURANT


class MenuItemDraft(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(min_length=1)
    price: str = Field(min_length=1)  # raw, currency-formatted
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    @field_validator("name", "price")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("price")
    @classmethod
    def price_has_digit(cls, value: str) -> str:
        if not re.search(r"\d", value):
            raise ValueError("price must contain a digit")
        return value


class ExtractionResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    restaurant_name: str = Field(default=UNKNOWN_RESTAURANT, alias="restaurantName")
    items: List[MenuItemDraft] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """No items survived extraction - a valid outcome, not a failure"""
        return not self.items

    def to_dict(self) -> Dict[str, Any]:
        """Output contract shape: camelCase keys, imageUrl omitted when absent"""
        return self.model_dump(by_alias=True, exclude_none=True)


def build_draft(name: Optional[str], price: Optional[str], image_url: Optional[str] = None) -> Optional[MenuItemDraft]:
    """Draft for a fully resolved item, or None for partial matches"""
    name = (name or "").strip()
    price = (price or "").strip()
    if not name or not price or not re.search(r"\d", price):
        return None
    return MenuItemDraft(name=name, price=price, image_url=image_url or None)
