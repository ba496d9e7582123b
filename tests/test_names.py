"""Tests for restaurant name resolution."""

from menu_scraper.document import parse_document
from menu_scraper.names import resolve_restaurant_name


def _name(html, config):
    return resolve_restaurant_name(parse_document(html), config)


def test_first_h1_wins(config):
    html = (
        "<title>Title Name | Grab Food</title>"
        "<div data-testid='restaurant-name'>Marker Name</div>"
        "<h1> Cơm Gà  Hải Nam </h1><h1>Second</h1>"
    )
    assert _name(html, config) == "Cơm Gà Hải Nam"


def test_marker_attribute_when_no_heading(config):
    html = "<title>Title Name | Grab Food</title><div data-testid='restaurant-name'>Bún Bò Huế 3A3</div>"
    assert _name(html, config) == "Bún Bò Huế 3A3"


def test_class_token_when_no_heading_or_marker(config):
    html = "<title>Title Name | Grab Food</title><span class='restaurantName___2xK'>Bếp Nhà</span>"
    assert _name(html, config) == "Bếp Nhà"


def test_title_split_on_first_pipe(config):
    html = "<html><head><title>Ngon Restaurant | Grab Food</title></head><body><p>menu</p></body></html>"
    assert _name(html, config) == "Ngon Restaurant"


def test_title_with_several_pipes(config):
    assert _name("<title> Quán A | Quận 1 | Grab </title>", config) == "Quán A"


def test_empty_heading_falls_through(config):
    html = "<h1>   </h1><title>Phở Thìn | GrabFood</title>"
    assert _name(html, config) == "Phở Thìn"


def test_sentinel_when_nothing_matches(config):
    assert _name("<div>no names here</div>", config) == "Unknown Restaurant"
    assert _name("<title> | Grab Food</title>", config) == "Unknown Restaurant"


def test_configurable_sentinel(config):
    config.unknown_restaurant = "N/A"
    assert _name("", config) == "N/A"
