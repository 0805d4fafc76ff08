"""Tests for the transaction entry session."""

import asyncio
import json

import pytest

from src.computation import UNSET, Valid
from src.model_inference.extractor import ExtractionOrchestrator
from src.model_inference.service import DocumentPayload
from src.transaction.models import TransactionType
from src.transaction.session import TransactionEntrySession
from src.transaction.validators import ValidationGate
from src.utils.exceptions import ExtractionBusyError, ExtractionServiceError
from tests.conftest import TODAY, FakeService

PURCHASE_TEXT = "Purchase invoice, ABC Traders, 10.5g gold @ 6200/g, GST 3%"


def _session(service=None, added=None):
    orchestrator = ExtractionOrchestrator(service=service, use_configured_service=False)
    added = added if added is not None else []
    session = TransactionEntrySession(
        on_add=added.append,
        orchestrator=orchestrator,
        gate=ValidationGate(id_generator=lambda: "txn-1"),
        today=lambda: TODAY
    )
    return session, added


def test_process_input_fills_draft():
    session, _ = _session()

    result = asyncio.run(session.process_input(text=PURCHASE_TEXT))

    assert result.source == "fallback"
    assert session.error is None
    assert session.draft.party_name == "ABC Traders"
    assert session.draft.quantity_grams == Valid(10.5)
    assert session.draft.rate_per_gram == Valid(6200.0)
    assert session.draft.gst_rate_percent == Valid(3.0)


def test_failed_extraction_sets_error_and_keeps_draft():
    service = FakeService(error=ExtractionServiceError("quota exceeded"))
    session, _ = _session(service)
    session.draft.party_name = "Typed By Hand"

    document = DocumentPayload(data=b"%PDF-1.4", media_type="application/pdf")
    asyncio.run(session.process_input(document=document))

    assert session.error == "Processing failed: quota exceeded. Try manual entry."
    assert session.draft.party_name == "Typed By Hand"


def test_submit_calls_on_add_once_and_resets():
    session, added = _session()
    asyncio.run(session.process_input(text="Sold 5g to XYZ Jewellers at Rs 6500 per gram"))
    assert session.draft.type is TransactionType.SALE

    transaction = session.submit(current_stock=20.0)

    assert added == [transaction]
    assert transaction.quantity_grams == 5.0
    assert transaction.total_amount == pytest.approx(5 * 6500 * 1.03)

    draft = session.draft
    assert draft.date == TODAY.isoformat()
    assert draft.type is TransactionType.PURCHASE
    assert draft.party_name == ""
    assert draft.quantity_grams == UNSET
    assert draft.rate_per_gram == UNSET
    assert draft.gst_rate_percent == Valid(3.0)
    assert session.error is None


def test_rejected_submit_reports_reason():
    session, added = _session()
    asyncio.run(session.process_input(text="Sold 5g to XYZ Jewellers at Rs 6500 per gram"))

    assert session.submit(current_stock=4.0) is None

    assert added == []
    assert session.error == "Insufficient inventory: available 4.000g"
    assert session.draft.party_name == "XYZ Jewellers"


def test_locked_period_reported_on_submit():
    session, added = _session()
    session.draft.party_name = "ABC Traders"
    session.draft.set_quantity("1")
    session.draft.set_rate("6000")

    assert session.submit(current_stock=0.0, lock_date="2026-01-31") is None
    assert session.error == "Date locked: cannot add transactions on or before 2026-01-31."


def test_reset_discards_pending_result():
    response = json.dumps({"partyName": "ABC Traders", "quantityGrams": 10})
    service = FakeService(response, hold=True)
    session, _ = _session(service)

    async def scenario():
        pending = asyncio.create_task(session.process_input(text="anything"))
        await asyncio.sleep(0)
        assert session.busy

        session.reset()
        service.release()
        return await pending

    assert asyncio.run(scenario()) is None
    assert session.draft.party_name == ""
    assert not session.busy


def test_invalid_lock_date_is_reported_not_raised():
    session, added = _session()
    session.draft.party_name = "ABC Traders"
    session.draft.set_quantity("1")
    session.draft.set_rate("6000")

    assert session.submit(current_stock=0.0, lock_date="31/01/2026") is None

    assert added == []
    assert session.error == "Invalid lock date: '31/01/2026'"
    assert session.draft.party_name == "ABC Traders"


def test_busy_rejection_keeps_previous_error():
    service = FakeService(json.dumps({"partyName": "ABC Traders"}), hold=True)
    session, _ = _session(service)
    session.error = "Insufficient inventory: available 4.000g"

    async def scenario():
        pending = asyncio.create_task(session.process_input(text="first"))
        await asyncio.sleep(0)

        with pytest.raises(ExtractionBusyError):
            await session.process_input(text="second")
        assert session.error == "Insufficient inventory: available 4.000g"

        service.release()
        return await pending

    result = asyncio.run(scenario())

    assert result.success
    assert session.error is None
    assert session.draft.party_name == "ABC Traders"
