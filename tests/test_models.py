"""Tests for the transaction draft and type."""

import pytest

from src.computation import Invalid, UNSET, Valid
from src.model_inference.extraction_result import ExtractionResult
from src.transaction.models import TransactionDraft, TransactionType


@pytest.mark.parametrize("raw, expected", [
    ("PURCHASE", TransactionType.PURCHASE),
    ("sale", TransactionType.SALE),
    (" Sale ", TransactionType.SALE),
    ("refund", None),
    (None, None),
    (TransactionType.SALE, TransactionType.SALE),
])
def test_transaction_type_parse(raw, expected):
    assert TransactionType.parse(raw) is expected


def test_party_label():
    assert TransactionType.PURCHASE.party_label == "Supplier Name"
    assert TransactionType.SALE.party_label == "Customer Name"


def test_default_draft(today):
    draft = TransactionDraft.default(today)

    assert draft.date == "2026-01-15"
    assert draft.type is TransactionType.PURCHASE
    assert draft.party_name == ""
    assert draft.quantity_grams == UNSET
    assert draft.rate_per_gram == UNSET
    assert draft.gst_rate_percent == Valid(3.0)
    assert not draft.can_edit_total
    assert draft.taxable_total_view == ""


def test_editing_taxable_total_derives_rate(today):
    draft = TransactionDraft.default(today)
    draft.set_quantity("10")
    assert draft.can_edit_total

    draft.set_taxable_total("62000")

    assert draft.rate_per_gram == Valid(6200.0)
    assert draft.taxable_total_view == "62000.00"
    assert draft.totals.total_amount == pytest.approx(63860.0)


def test_taxable_total_ignored_without_quantity(today):
    draft = TransactionDraft.default(today)
    draft.set_rate("6100")
    draft.set_taxable_total("62000")
    assert draft.rate_per_gram == Valid(6100.0)


def test_invalid_entries_keep_their_text(today):
    draft = TransactionDraft.default(today)
    draft.set_quantity("ten")
    assert draft.quantity_grams == Invalid("ten")
    assert draft.to_dict()["quantity_grams"] == "ten"
    assert draft.totals.total_amount == 0.0


def test_apply_extraction(today):
    draft = TransactionDraft.default(today)
    draft.set_rate("6100")

    draft.apply_extraction(ExtractionResult(
        transaction_type=TransactionType.SALE,
        party_name="XYZ Jewellers",
        quantity_grams=5.0
    ))

    assert draft.type is TransactionType.SALE
    assert draft.date == "2026-01-15"
    assert draft.party_name == "XYZ Jewellers"
    assert draft.quantity_grams == Valid(5.0)
    assert draft.rate_per_gram == UNSET
    assert draft.gst_rate_percent == Valid(3.0)


@pytest.mark.parametrize("result, expected", [
    (ExtractionResult(party_name="ABC Traders"), True),
    (ExtractionResult(quantity_grams=0.5), True),
    (ExtractionResult(quantity_grams=0.0), False),
    (ExtractionResult(quantity_grams=-1.0), False),
    (ExtractionResult(party_name=""), False),
])
def test_extraction_minimum_signal(result, expected):
    assert result.has_minimum_signal is expected
