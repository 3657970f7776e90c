"""Exception types raised by Sulfide."""

from __future__ import annotations


class SulfideError(Exception):
    """Base class for every error raised by Sulfide."""


class ConfigurationError(SulfideError, ValueError):
    """An option passed to ``configure`` has an invalid value."""


class SessionNotOpenError(SulfideError, RuntimeError):
    """A session operation required a running browser."""


class WaitTimeoutError(SulfideError, TimeoutError):
    """The retry deadline elapsed before the predicate was satisfied."""


class ElementNotFound(SulfideError, AssertionError):
    """A single element lookup found nothing before the implicit wait elapsed."""

    def __init__(self, description: str, timeout_ms: int) -> None:
        super().__init__(f"Element not found {{{description}}} after {timeout_ms}ms")
        self.description = description
        self.timeout_ms = timeout_ms


class ConditionNotMet(SulfideError, AssertionError):
    """An assertion on an element or collection did not hold in time."""

    def __init__(self, description: str, condition: str, timeout_ms: int, actual: str = "") -> None:
        message = f"Element {{{description}}} should {condition} (waited {timeout_ms}ms)"
        if actual:
            message = f"{message}; actual: {actual}"
        super().__init__(message)
        self.description = description
        self.condition = condition
        self.timeout_ms = timeout_ms
        self.actual = actual
