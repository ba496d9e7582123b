from pydantic import BaseModel, HttpUrl
from typing import Optional, List


class CrawlRequest(BaseModel):
    url: HttpUrl  # GrabFood restaurant page


class ParseHTMLRequest(BaseModel):
    html: str  # Raw HTML content
    source_url: Optional[str] = None  # Optional: where the HTML came from, used for relative images


class MenuItemResponse(BaseModel):
    name: str
    price: str
    imageUrl: Optional[str] = None


class CrawlResponse(BaseModel):
    restaurantName: str
    items: List[MenuItemResponse]
