"""End-to-end tests for the extraction pipeline."""

import pytest

from menu_scraper import extract_menu
from menu_scraper.document import ParseError
from menu_scraper.extract import MenuExtractor
from menu_scraper.fallback import AggressiveFallbackExtractor
from menu_scraper.normalize import deduplicate


class CountingFallback(AggressiveFallbackExtractor):
    calls = 0

    def extract(self, soup):
        CountingFallback.calls += 1
        return super().extract(soup)


class CountingExtractor(MenuExtractor):
    def _fallback(self, image_resolver):
        return CountingFallback(self.config, image_resolver)


@pytest.fixture(autouse=True)
def reset_counter():
    CountingFallback.calls = 0


def test_grab_page(grab_page, page_url, config):
    result = extract_menu(grab_page, page_url, config)

    assert result.restaurant_name == "Quán Ngon - Nguyễn Trãi"
    assert result.to_dict()["items"] == [
        {
            "name": "Phở Bò Tái",
            "price": "45.000 ₫",
            "imageUrl": "https://food-cms.grab.com/compressed_webp/items/pho.webp",
        },
        {
            "name": "Bún Chả Hà Nội",
            "price": "55.000 ₫",
            "imageUrl": "https://food-cms.grab.com/items/bun-cha.jpg",
        },
        {
            "name": "Cơm Tấm Sườn",
            "price": "40.000 ₫",
            "imageUrl": "https://food.grab.com/images/com-tam.png",
        },
    ]


def test_embedded_script_prices_are_ignored(grab_page, page_url):
    result = extract_menu(grab_page, page_url)
    assert "Hidden" not in [item.name for item in result.items]


def test_single_recognized_container():
    html = (
        "<html><body><div class='menuItem'>"
        "<div>Bánh Mì Thịt Nướng</div><div>25.000 ₫</div>"
        "</div></body></html>"
    )
    result = extract_menu(html)
    assert [(i.name, i.price) for i in result.items] == [("Bánh Mì Thịt Nướng", "25.000 ₫")]


def test_same_item_in_two_containers():
    html = (
        "<div class='menuItem'><div>Bánh Mì Thịt Nướng</div><div>25.000 ₫</div></div>"
        "<div class='menuItem'><div>Bánh Mì Thịt Nướng</div><div>25.000 ₫</div></div>"
    )
    result = extract_menu(html)
    assert len(result.items) == 1


def test_name_from_title_without_heading():
    html = "<html><head><title>Ngon Restaurant | Grab Food</title></head><body></body></html>"
    assert extract_menu(html).restaurant_name == "Ngon Restaurant"


def test_no_currency_anywhere_gives_empty_result():
    html = (
        "<html><head><title>Quán Chay | Grab Food</title></head><body>"
        "<div class='item'>Đậu Hũ Sốt Cà</div><p>Mở cửa 7:00 - 21:00</p></body></html>"
    )
    result = extract_menu(html)
    assert result.items == []
    assert result.is_empty
    assert result.restaurant_name == "Quán Chay"


def test_empty_document():
    result = extract_menu("")
    assert result.restaurant_name == "Unknown Restaurant"
    assert result.is_empty


def test_parse_error_propagates():
    with pytest.raises(ParseError):
        extract_menu(None)


def test_extraction_is_deterministic(grab_page, page_url):
    extractor = MenuExtractor()
    first = extractor.extract(grab_page, page_url)
    second = extractor.extract(grab_page, page_url)
    assert first.to_dict() == second.to_dict()


def test_result_is_already_deduplicated(grab_page, page_url):
    result = extract_menu(grab_page, page_url)
    assert deduplicate(result.items) == result.items


def test_fallback_not_run_when_pipeline_retains_items(grab_page, page_url):
    CountingExtractor().extract(grab_page, page_url)
    assert CountingFallback.calls == 0


def test_fallback_runs_once_when_no_candidates(unstructured_page):
    result = CountingExtractor().extract(unstructured_page, "https://food.grab.com/vn/en/restaurant/bep-me")
    assert CountingFallback.calls == 1
    assert result.restaurant_name == "Bếp Mẹ"
    assert [(i.name, i.price) for i in result.items] == [
        ("Gỏi Cuốn Tôm", "30.000 ₫"),
        ("Chả Giò", "35.000 ₫"),
    ]


def test_fallback_runs_once_when_all_candidates_fail():
    html = (
        "<div class='menu-item'>Xem thêm</div>"
        "<div class='box'><h4>Bánh Cuốn</h4><span>35.000 ₫</span></div>"
    )
    result = CountingExtractor().extract(html)
    assert CountingFallback.calls == 1
    assert [(i.name, i.price) for i in result.items] == [("Bánh Cuốn", "35.000 ₫")]


def test_fallback_runs_once_with_nothing_to_find():
    result = CountingExtractor().extract("<p>Đóng cửa</p>")
    assert CountingFallback.calls == 1
    assert result.is_empty


def test_line_fallback_through_currency_strategy():
    result = extract_menu("<div><p>Phở bò<br>45.000 ₫</p></div>")
    assert [(i.name, i.price) for i in result.items] == [("Phở bò", "45.000 ₫")]


def test_relative_images_use_page_origin():
    html = "<div class='menuItem'><img src='/img/a.jpg'><h4>Bánh Flan</h4><span>15.000 ₫</span></div>"
    result = extract_menu(html, "https://food.example.com/vn/restaurant/x")
    assert result.items[0].image_url == "https://food.example.com/img/a.jpg"


def test_relative_images_default_origin():
    html = "<div class='menuItem'><img src='/img/a.jpg'><h4>Bánh Flan</h4><span>15.000 ₫</span></div>"
    result = extract_menu(html)
    assert result.items[0].image_url == "https://food.grab.com/img/a.jpg"


def test_srcset_data_uri_kept_whole():
    html = (
        '<div class="menuItem"><img srcset="data:image/gif;base64,R0lGODlhAQABAAAAACw= 1x">'
        "<p>Pho Bo Tai</p><span>45.000 ₫</span></div>"
    )
    result = extract_menu(html)
    assert [i.image_url for i in result.items] == ["data:image/gif;base64,R0lGODlhAQABAAAAACw="]


def test_empty_svg_data_uri_in_srcset_is_placeholder():
    html = (
        '<div class="menuItem"><img srcset="data:image/svg+xml;base64, 1x">'
        "<p>Pho Bo Tai</p><span>45.000 ₫</span></div>"
    )
    result = extract_menu(html)
    assert len(result.items) == 1
    assert result.items[0].image_url is None


def test_inline_name_fragments_join_without_spaces():
    html = (
        "<div class='menuItem'><p class='itemName'>Co<span>ca</span>-Cola</p>"
        "<span>15.000 ₫</span></div>"
        "<div class='menuItem'><p class='itemName'>Coca-Cola</p>"
        "<span>15.000 ₫</span></div>"
    )
    result = extract_menu(html)
    assert [(i.name, i.price) for i in result.items] == [("Coca-Cola", "15.000 ₫")]
