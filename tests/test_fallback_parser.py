"""Tests for the rule-based fallback text parser."""

import pytest

from src.postprocessor.fallback_parser import FALLBACK_FAILURE_MESSAGE, FallbackTextParser
from src.transaction.models import TransactionType


@pytest.fixture
def parser():
    return FallbackTextParser()


def test_purchase_invoice_line(parser):
    result = parser.parse("Purchase invoice, ABC Traders, 10.5g gold @ 6200/g, GST 3%")

    assert result.success
    assert result.source == "fallback"
    assert result.transaction_type is TransactionType.PURCHASE
    assert result.party_name == "ABC Traders"
    assert result.quantity_grams == pytest.approx(10.5)
    assert result.rate_per_gram == pytest.approx(6200)
    assert result.gst_rate_percent == pytest.approx(3)
    assert result.date is None


def test_sale_sentence(parser):
    result = parser.parse("Sold 5g to XYZ Jewellers at Rs 6500 per gram")

    assert result.transaction_type is TransactionType.SALE
    assert result.party_name == "XYZ Jewellers"
    assert result.quantity_grams == pytest.approx(5)
    assert result.rate_per_gram == pytest.approx(6500)
    assert result.gst_rate_percent is None


def test_date_and_keyword_party(parser):
    result = parser.parse("Sold 2g to Ravi Bullion on 05/02/2026 at 6400/g")

    assert result.date == "2026-02-05"
    assert result.party_name == "Ravi Bullion"
    assert result.rate_per_gram == pytest.approx(6400)


def test_net_weight_label_wins(parser):
    result = parser.parse("Bill from Shree Bullion, Gross Wt 12.5 g Net Wt 12.345 g, Rate 6,200")

    assert result.party_name == "Shree Bullion"
    assert result.quantity_grams == pytest.approx(12.345)
    assert result.rate_per_gram == pytest.approx(6200)


def test_kilogram_quantity(parser):
    result = parser.parse("Purchased from Mehta Bullion 1 kg bar @ 6150/g")
    assert result.quantity_grams == pytest.approx(1000)
    assert result.party_name == "Mehta Bullion"


def test_rate_derived_from_taxable_value(parser):
    result = parser.parse("Purchased from ABC Traders 10 g Taxable Value: 62,000")

    assert result.rate_per_gram == pytest.approx(6200)
    assert "rate_per_gram derived from taxable value" in result.warnings


def test_split_gst_is_summed(parser):
    result = parser.parse("ABC Traders 10g @ 6200/g CGST 1.5% SGST 1.5%")
    assert result.gst_rate_percent == pytest.approx(3)


def test_gst_at_rate_is_not_a_price(parser):
    result = parser.parse("XYZ Jewellers 8 g, IGST @ 3%")
    assert result.rate_per_gram is None
    assert result.gst_rate_percent == pytest.approx(3)


@pytest.mark.parametrize("text", ["", "   ", "hello there, nothing useful here"])
def test_unrecognizable_text_fails(parser, text):
    result = parser.parse(text)

    assert not result.success
    assert result.failure_reason == FALLBACK_FAILURE_MESSAGE


def test_party_alone_is_enough(parser):
    result = parser.parse("Invoice for XYZ Jewellers")
    assert result.success
    assert result.party_name == "XYZ Jewellers"
    assert result.quantity_grams is None
