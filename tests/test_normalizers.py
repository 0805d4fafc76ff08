"""Tests for date, amount and weight normalizers."""

import pytest

from src.postprocessor.normalizers import AmountNormalizer, DateNormalizer, QuantityNormalizer


@pytest.fixture
def dates():
    return DateNormalizer()


@pytest.mark.parametrize("raw, expected", [
    ("2026-01-15", "2026-01-15"),
    ("15/01/2026", "2026-01-15"),
    ("05-02-2026", "2026-02-05"),
    ("15.01.2026", "2026-01-15"),
    ("January 15, 2026", "2026-01-15"),
    ("15th Jan 2026", "2026-01-15"),
    ("Date: 15/01/2026", "2026-01-15"),
])
def test_date_normalize(dates, raw, expected):
    assert dates.normalize(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "not a date", 20260115])
def test_date_normalize_rejects(dates, raw):
    assert dates.normalize(raw) is None


def test_extract_date_from_text(dates):
    text = "Sold 2g to Ravi Bullion on 05/02/2026 at 6400/g"
    assert dates.extract_date(text) == "2026-02-05"
    assert dates.extract_date("10.5g gold @ 6200/g") is None


@pytest.mark.parametrize("raw, expected", [
    ("Rs. 1,23,456.50", 123456.5),
    ("₹ 6,200", 6200.0),
    ("INR 6200.75", 6200.75),
    (6200, 6200.0),
    ("10.125", 10.125),
])
def test_amount_to_float(raw, expected):
    assert AmountNormalizer().to_float(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", [None, True, "", "abc", "12 grams"])
def test_amount_to_float_rejects(raw):
    assert AmountNormalizer().to_float(raw) is None


def test_amount_normalize_formats_two_decimals():
    assert AmountNormalizer().normalize("Rs 1,234.5") == "1234.50"


def test_quantity_units():
    quantities = QuantityNormalizer()
    assert quantities.to_grams("10.5", "g") == pytest.approx(10.5)
    assert quantities.to_grams("1.2", "KG") == pytest.approx(1200.0)
    assert quantities.to_grams("500", "mg") == pytest.approx(0.5)
    assert quantities.to_grams("5", "carat") is None


def test_quantity_find_all():
    found = QuantityNormalizer().find_all("1.2 kg bar and 250 mg, 10gms coin, 6200/g")
    assert found == pytest.approx([1200.0, 0.25, 10.0])


@pytest.mark.parametrize("raw", ["2026/01/05", "2026.01.05", "2026-1-5", "2026 01 05"])
def test_year_first_dates_keep_month_second(dates, raw):
    assert dates.normalize(raw) == "2026-01-05"


def test_extract_year_first_date(dates):
    assert dates.extract_date("Invoice dated 2026/01/05, 10g @ 6200/g") == "2026-01-05"
