import pytest

from services.extraction import (
    model_prefix,
    normalize_battery,
    normalize_capacity,
    normalize_model_number,
    normalize_text,
)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("256 GB", "256GB"),
        ("1 TB", "1TB"),
        ("64gb", "64GB"),
        ("1.5 tb", "1.5TB"),
        ("１２８ＧＢ", "128GB"),
        ("２５６　ｇｂ", "256GB"),
        ("512", "512GB"),
        ("128 gigabytes", "128GB"),
        ("1TB SSD", "1TB"),
        ("256GB(Blue)", "256GB"),
    ],
)
def test_normalize_capacity(text, expected):
    assert normalize_capacity(text) == expected


def test_unrecognized_capacity_passes_through_trimmed():
    assert normalize_capacity("abc") == "abc"
    assert normalize_capacity("  Unknown size ") == "Unknown size"


def test_empty_capacity_is_absent():
    assert normalize_capacity(None) is None
    assert normalize_capacity("   ") is None


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Battery Life: 85%", "85%"),
        ("100 %", "100%"),
        ("最大容量 ８７％", "87%"),
        ("5%", "5%"),
        ("91", "91%"),
        ("85%", "85%"),
    ],
)
def test_normalize_battery(text, expected):
    assert normalize_battery(text) == expected


def test_battery_without_digits_is_absent():
    assert normalize_battery("no data") is None
    assert normalize_battery("") is None
    assert normalize_battery(None) is None


def test_percent_reading_beats_earlier_bare_number():
    assert normalize_battery("iOS 17, 85%") == "85%"
    assert normalize_battery("最大容量 12 ８７％") == "87%"


def test_model_number_fullwidth_to_halfwidth():
    assert normalize_model_number("ＭＬＪＨ３　Ｊ／Ａ") == "MLJH3 J/A"


def test_model_number_collapses_whitespace_to_single_space():
    assert normalize_model_number("  MWC62   J/A ") == "MWC62 J/A"
    assert normalize_model_number("MWC62\tJ/A") == "MWC62 J/A"


def test_model_number_empty_is_absent():
    assert normalize_model_number("") is None
    assert normalize_model_number("　") is None
    assert normalize_model_number(None) is None


def test_model_prefix():
    assert model_prefix("MLJH3 J/A") == "MLJH3"
    assert model_prefix("ＭＷＣ６２") == "MWC62"
    assert model_prefix(None) is None


def test_normalize_text():
    assert normalize_text("  iPhone 13 ") == "iPhone 13"
    assert normalize_text(" ") is None
    assert normalize_text(None) is None
