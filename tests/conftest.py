"""Shared fixtures for gold invoice entry tests."""

import asyncio
from datetime import date
from typing import List, Optional

import pytest

from config import ConfigurationManager
from src.model_inference.service import ExtractionRequest, ExtractionService

TODAY = date(2026, 1, 15)


class FakeService(ExtractionService):
    """In-memory extraction service returning a canned response."""

    name = "fake"
    model_name = "fake-model"

    def __init__(self, response: Optional[str] = None, error: Optional[Exception] = None,
                 hold: bool = False):
        self.response = response
        self.error = error
        self.hold = hold
        self.requests: List[ExtractionRequest] = []
        self._release: Optional[asyncio.Event] = None

    def release(self) -> None:
        self._release.set()

    async def generate(self, request: ExtractionRequest) -> str:
        self.requests.append(request)
        if self.hold:
            self._release = asyncio.Event()
            await self._release.wait()
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    monkeypatch.delenv("GOLD_ENTRY_CONFIG", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()


@pytest.fixture
def today():
    return TODAY
