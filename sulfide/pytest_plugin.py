"""
pytest integration.

``sulfide_session`` gives each test its own Session and closes its browser
afterwards. ``sulfide_soft`` does the same in soft-assertion mode and fails
the test at teardown with every failure it recorded.
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
import pytest_asyncio

from sulfide.config import config_from_env
from sulfide.reporting import SoftReporter
from sulfide.session import Session


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("sulfide")
    group.addoption(
        "--sulfide-headed",
        action="store_true",
        default=False,
        help="Run Sulfide browsers with a visible window.",
    )


def _session_for(request: pytest.FixtureRequest, soft_assertions: bool) -> Session:
    overrides = {"soft_assertions": soft_assertions}
    if request.config.getoption("--sulfide-headed"):
        overrides["headless"] = False
    return Session(config_from_env(**overrides))


def check_soft_failures(session: Session) -> None:
    """Fail the running test if the session recorded soft failures."""
    reporter = session.reporter
    if not isinstance(reporter, SoftReporter) or not reporter.failures:
        return
    try:
        reporter.assert_all()
    except AssertionError as e:
        pytest.fail(str(e), pytrace=False)


@pytest_asyncio.fixture
async def sulfide_session(request: pytest.FixtureRequest) -> AsyncGenerator[Session, None]:
    """A Session whose browser is closed after the test."""
    async with _session_for(request, soft_assertions=False) as session:
        yield session


@pytest_asyncio.fixture
async def sulfide_soft(request: pytest.FixtureRequest) -> AsyncGenerator[Session, None]:
    """A soft-assertion Session; recorded failures fail the test at teardown."""
    async with _session_for(request, soft_assertions=True) as session:
        yield session

    check_soft_failures(session)
