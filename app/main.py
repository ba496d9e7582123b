from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from typing import AsyncIterator
import logging
from urllib.parse import urlparse

from menu_scraper.config import CrawlerConfig, load_config_from_env
from menu_scraper.document import ParseError
from menu_scraper.extract import MenuExtractor
from menu_scraper.fetch import Fetcher, FetchError

from .models import CrawlRequest, ParseHTMLRequest, CrawlResponse

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Menu Crawler",
    description="Extract restaurant menus from food-delivery pages",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Lazy initialization so environment overrides apply at first use
config = None


def get_config() -> CrawlerConfig:
    """Get config instance, initializing if needed"""
    global config
    if config is None:
        config = load_config_from_env()
    return config


def get_extractor(config: CrawlerConfig = Depends(get_config)) -> MenuExtractor:
    return MenuExtractor(config)


async def get_fetcher(config: CrawlerConfig = Depends(get_config)) -> AsyncIterator[Fetcher]:
    async with Fetcher(config) as fetcher:
        yield fetcher


def is_allowed_link(url: str, allowed_hosts) -> bool:
    """Host equals an allowed host or is a subdomain of one"""
    host = (urlparse(url).hostname or "").lower()
    return any(host == allowed or host.endswith("." + allowed) for allowed in allowed_hosts)


@app.exception_handler(FetchError)
async def fetch_error_handler(request: Request, exc: FetchError):
    """Upstream page could not be fetched"""
    logger.error(f"Fetch failed: {exc}")
    return JSONResponse(
        status_code=502,
        content={"detail": f"Failed to fetch page: {exc}"}
    )


@app.exception_handler(ParseError)
async def parse_error_handler(request: Request, exc: ParseError):
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc)}
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors and return JSON responses"""
    return JSONResponse(
        status_code=422,
        content={
            "detail": jsonable_encoder(exc.errors())
        }
    )


# Global exception handler to ensure all errors return JSON
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions and return JSON responses"""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "detail": f"Internal server error: {str(exc)}"
        }
    )


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/api/crawl", response_model=CrawlResponse, response_model_exclude_none=True)
async def crawl(
    request: CrawlRequest,
    config: CrawlerConfig = Depends(get_config),
    fetcher: Fetcher = Depends(get_fetcher),
    extractor: MenuExtractor = Depends(get_extractor),
):
    """
    Fetch a GrabFood restaurant page and extract its menu.

    An empty item list is a valid response, not an error.
    """
    url = str(request.url)
    if not is_allowed_link(url, config.allowed_hosts):
        raise HTTPException(status_code=400, detail="Invalid GrabFood link")

    logger.info(f"Starting crawl for URL: {url}")
    html, metadata = await fetcher.fetch(url)
    result = extractor.extract(html, metadata.get("final_url") or url)
    return result.to_dict()


@app.post("/parse-html", response_model=CrawlResponse, response_model_exclude_none=True)
async def parse_html(
    request: ParseHTMLRequest,
    extractor: MenuExtractor = Depends(get_extractor),
):
    """
    Extract a menu from raw HTML saved from the browser (View Page Source).
    """
    if not request.html or not request.html.strip():
        raise HTTPException(status_code=400, detail="HTML content is empty")

    logger.info(f"Parsing HTML content ({len(request.html)} chars)")
    result = extractor.extract(request.html, request.source_url)
    return result.to_dict()
