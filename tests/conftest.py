"""Shared fixtures for the Sulfide tests."""

from __future__ import annotations

import pytest
import pytest_asyncio

from fakes import TEST_URL, FakeDriver, FakePage
from sulfide.config import configure
from sulfide.session import Session


@pytest.fixture
def driver(monkeypatch: pytest.MonkeyPatch) -> FakeDriver:
    """Fake Playwright driver patched into the session module."""
    fake = FakeDriver()
    monkeypatch.setattr("sulfide.session.async_playwright", fake)
    return fake


@pytest.fixture
def fast_config():
    return configure(implicit_wait_ms=100, poll_interval_ms=10)


@pytest_asyncio.fixture
async def session(driver: FakeDriver, fast_config) -> Session:
    """A session already opened on TEST_URL with short waits."""
    session = Session(fast_config)
    await session.open(TEST_URL)
    return session


@pytest.fixture
def page(session: Session) -> FakePage:
    return session.get_pages()[-1]
