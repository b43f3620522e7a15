import pytest

from color_adapt.display import brightness_percent_from_raw, screen_context_from_raw
from color_adapt.processing.mapping import ScreenContext


@pytest.mark.parametrize("raw,expected", [(0, 0), (255, 100), (128, 50), (51, 20), (1, 0), (2, 1), (254, 100)])
def test_percent_from_raw(raw, expected):
    assert brightness_percent_from_raw(raw) == expected


@pytest.mark.parametrize("raw", [None, -1, 256, -40, float("nan"), "bright"])
def test_unavailable_or_out_of_range_uses_fallback(raw):
    assert brightness_percent_from_raw(raw) == 50


def test_custom_fallback():
    assert brightness_percent_from_raw(None, {"brightness_fallback_percent": 30}) == 30


def test_custom_raw_range():
    assert brightness_percent_from_raw(512, {"raw_brightness_max": 1024}) == 50


def test_numeric_string_is_accepted():
    assert brightness_percent_from_raw("255") == 100


def test_screen_context_from_raw():
    assert screen_context_from_raw(255) == ScreenContext(100, 120)


def test_screen_context_uses_configured_white_point():
    screen = screen_context_from_raw(None, {"screen_white_point": 95})
    assert screen == ScreenContext(50, 95)
