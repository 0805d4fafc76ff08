"""Tests for configuration, logging and helper utilities."""

import logging

import pytest

from config import ConfigurationManager, get_config
from src.postprocessor.fallback_parser import FallbackTextParser
from src.transaction.models import TransactionDraft, TransactionType
from src.utils.exceptions import GoldEntryError, MissingFieldsError
from src.utils.helpers import format_file_size, format_inr, generate_identifier, parse_iso_date
from src.utils.logger import LOGGER_NAMESPACE, get_logger, setup_logger


def test_default_settings_are_loaded():
    assert get_config("defaults.gst_rate_percent") == 3
    assert get_config("extraction.api_key_env") == "GEMINI_API_KEY"
    assert get_config("missing.key", "fallback") == "fallback"


def test_config_file_from_environment(tmp_path, monkeypatch, today):
    settings = tmp_path / "settings.yaml"
    settings.write_text(
        "defaults:\n"
        "  transaction_type: SALE\n"
        "  gst_rate_percent: 5\n"
        "fallback:\n"
        "  sale_keywords: [vendu]\n",
        encoding="utf-8"
    )
    monkeypatch.setenv("GOLD_ENTRY_CONFIG", str(settings))
    ConfigurationManager.reset()

    draft = TransactionDraft.default(today)
    assert draft.type is TransactionType.SALE
    assert draft.gst_rate_percent.as_float() == 5.0

    parser = FallbackTextParser()
    assert parser.detect_type("vendu 5g") is TransactionType.SALE
    assert parser.detect_type("sold 5g") is TransactionType.PURCHASE


def test_missing_config_file(tmp_path):
    ConfigurationManager.reset()
    with pytest.raises(FileNotFoundError):
        ConfigurationManager(str(tmp_path / "absent.yaml"))


def test_get_logger_namespace():
    assert get_logger("src.transaction").name == f"{LOGGER_NAMESPACE}.src.transaction"
    assert get_logger(f"{LOGGER_NAMESPACE}.x").name == f"{LOGGER_NAMESPACE}.x"


def test_setup_logger_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "entry.log"
    logger = setup_logger(level="DEBUG", log_file=str(log_file), colorize=False)

    get_logger("tests").debug("hello from tests")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert "hello from tests" in log_file.read_text(encoding="utf-8")

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_error_messages():
    error = MissingFieldsError(["party_name", "rate_per_gram"])
    assert str(error) == "Missing required fields: party_name, rate_per_gram."
    assert str(GoldEntryError("boom", {"code": 1})) == "boom | Details: {'code': 1}"


@pytest.mark.parametrize("amount, expected", [
    (0, "₹0.00"),
    (999.5, "₹999.50"),
    (63860, "₹63,860.00"),
    (1234567.5, "₹12,34,567.50"),
    (-1500, "-₹1,500.00"),
])
def test_format_inr(amount, expected):
    assert format_inr(amount) == expected


def test_helpers():
    assert format_file_size(1536) == "1.5 KB"
    assert len(generate_identifier()) == 32
    assert parse_iso_date("2026-01-15").isoformat() == "2026-01-15"
    assert parse_iso_date("15/01/2026") is None
    assert parse_iso_date(None) is None
