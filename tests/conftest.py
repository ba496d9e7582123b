"""Pytest configuration and fixtures."""

import os

import pytest

from menu_scraper.config import CrawlerConfig

# Reduce log noise during tests
os.environ["MENU_CRAWLER_LOG_LEVEL"] = "ERROR"

PAGE_URL = "https://food.grab.com/vn/en/restaurant/quan-ngon-nguyen-trai-delivery/5-C3XVCTNZ"

# Trimmed-down GrabFood restaurant page: hashed CSS-module class names,
# eager, lazy and background-style images, a duplicate and a sold-out item.
GRAB_PAGE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>Quán Ngon - Nguyễn Trãi | GrabFood VN</title>
  <script id="__NEXT_DATA__" type="application/json">{"menu": [{"name": "Hidden", "price": "99.000 ₫"}]}</script>
</head>
<body>
  <h1 class="name___1Ls94">Quán Ngon - Nguyễn Trãi</h1>
  <div class="category___3C8lX">
    <div class="menuItem___Dh7WE">
      <div class="menuItemPhoto___xyz">
        <div class="placeholder___a1">
          <img class="realImage___b2" src="https://food-cms.grab.com/compressed_webp/items/pho.webp" alt="">
        </div>
      </div>
      <div class="menuItemInfo___1">
        <p class="itemNameTitle___2">Phở Bò Tái</p>
        <p class="itemDescription___3">Bánh phở, bò tái, hành lá</p>
      </div>
      <div class="itemPrice___4"><p class="discountedPrice___5">45.000 ₫</p></div>
    </div>
    <div class="menuItem___Dh7WE">
      <div class="menuItemPhoto___xyz">
        <div class="placeholder___a1">
          <img src="/static/plus-white.svg" data-src="//food-cms.grab.com/items/bun-cha.jpg">
        </div>
      </div>
      <div class="menuItemInfo___1">
        <p class="itemNameTitle___2">Bún Chả Hà Nội</p>
      </div>
      <div class="itemPrice___4"><p class="discountedPrice___5">55.000 ₫</p></div>
    </div>
    <div class="menuItem___Dh7WE">
      <div class="menuItemPhoto___xyz" style="background-image: url('/images/com-tam.png')"></div>
      <div class="menuItemInfo___1">
        <p class="itemNameTitle___2">Cơm Tấm Sườn</p>
      </div>
      <div class="itemPrice___4"><p class="discountedPrice___5">40.000 ₫</p></div>
    </div>
    <div class="menuItem___Dh7WE">
      <div class="menuItemInfo___1">
        <p class="itemNameTitle___2">Phở Bò Tái</p>
      </div>
      <div class="itemPrice___4"><p class="discountedPrice___5">45,000₫</p></div>
    </div>
    <div class="menuItem___Dh7WE">
      <div class="menuItemInfo___1">
        <p class="itemNameTitle___2">Trà Đá</p>
        <p class="itemDescription___3">Hết hàng</p>
      </div>
    </div>
  </div>
</body>
</html>
"""

# No item classes anywhere - only the fallback scan can pair these up
UNSTRUCTURED_PAGE = """
<html><head><title>Bếp Mẹ | Grab Food</title></head>
<body>
  <section>
    <h4>Gỏi Cuốn Tôm</h4>
    <span>30.000 ₫</span>
    <img src="https://cdn.example.com/goi-cuon.jpg">
  </section>
  <section>
    <h4>Chả Giò</h4>
    <span>35.000 ₫</span>
  </section>
</body></html>
"""


@pytest.fixture
def config():
    """Default configuration"""
    return CrawlerConfig()


@pytest.fixture
def grab_page():
    return GRAB_PAGE


@pytest.fixture
def unstructured_page():
    return UNSTRUCTURED_PAGE


@pytest.fixture
def page_url():
    return PAGE_URL
