"""Tests for page numbers and subtitle styles."""

import dataclasses

import pytest

from newfor_inject.models.page import PageNumber
from newfor_inject.models.style import Color, Position, SubtitleStyle


def test_parse_page():
    page = PageNumber.parse("888")
    assert page.digits == (8, 8, 8)
    assert page.value == 888
    assert str(page) == "888"


def test_parse_short_page_is_zero_padded():
    assert str(PageNumber.parse("88")) == "088"
    assert str(PageNumber.parse(5)) == "005"


def test_parse_page_passthrough():
    page = PageNumber(1, 2, 3)
    assert PageNumber.parse(page) is page


def test_parse_page_rejects_bad_input():
    for bad in ("", "abc", "1234", "-12", "900", "999"):
        with pytest.raises(ValueError):
            PageNumber.parse(bad)


def test_illegal_page_constant():
    assert PageNumber.ILLEGAL.digits == (9, 9, 9)


def test_page_digit_bounds():
    with pytest.raises(ValueError):
        PageNumber(10, 0, 0)


def test_color_codes():
    assert Color.RED == 0x01
    assert Color.WHITE == 0x07
    assert len(Color) == 7


def test_color_from_name():
    assert Color.from_name("Yellow") is Color.YELLOW
    assert Color.from_name(" cyan ") is Color.CYAN
    with pytest.raises(ValueError):
        Color.from_name("black")


def test_position_from_name():
    assert Position.from_name("TOP") is Position.TOP
    with pytest.raises(ValueError):
        Position.from_name("bottom")


def test_style_defaults_and_immutability():
    style = SubtitleStyle()
    assert style.color is Color.WHITE
    assert style.boxed is True
    assert style.double_height is False
    assert style.position is Position.LOWER
    with pytest.raises(dataclasses.FrozenInstanceError):
        style.boxed = False


def test_style_to_dict():
    style = SubtitleStyle(color=Color.GREEN, boxed=False, position=Position.MIDDLE)
    assert style.to_dict() == {
        "color": "green",
        "boxed": False,
        "double_height": False,
        "position": "middle",
    }
