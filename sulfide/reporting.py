"""
Failure reporting strategies.

Strict reporting raises lookup and assertion failures straight away. Soft
reporting records them so a test keeps running and fails at the end, which
is how assertion failures are surfaced when Sulfide runs inside a test
framework.
"""

from __future__ import annotations

import logging

from sulfide.errors import SulfideError

logger = logging.getLogger("sulfide")


class FailureReporter:
    soft = False

    def fail(self, error: SulfideError) -> None:
        raise NotImplementedError


class StrictReporter(FailureReporter):
    def fail(self, error: SulfideError) -> None:
        raise error


class SoftReporter(FailureReporter):
    soft = True

    def __init__(self) -> None:
        self.failures: list[SulfideError] = []

    def fail(self, error: SulfideError) -> None:
        logger.error(f"[Sulfide] Soft failure: {error}")
        self.failures.append(error)

    def assert_all(self) -> None:
        """Raise one AssertionError summarising every recorded failure."""
        if not self.failures:
            return
        failures, self.failures = self.failures, []
        lines = "\n".join(f"  {index}. {failure}" for index, failure in enumerate(failures, start=1))
        raise AssertionError(f"{len(failures)} soft assertion(s) failed:\n{lines}")


def reporter_for(soft_assertions: bool) -> FailureReporter:
    return SoftReporter() if soft_assertions else StrictReporter()
