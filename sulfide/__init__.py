"""Sulfide - concise browser tests on top of Playwright."""

from sulfide.collection import SulfideElementCollection
from sulfide.conditions import CollectionCondition, Condition
from sulfide.config import DEFAULT_CONFIG, SulfideConfig, config_from_env, configure, sanitize_chrome_args
from sulfide.element import SulfideElement
from sulfide.errors import (
    ConditionNotMet,
    ConfigurationError,
    ElementNotFound,
    SessionNotOpenError,
    SulfideError,
    WaitTimeoutError,
)
from sulfide.reporting import SoftReporter, StrictReporter
from sulfide.session import Session
from sulfide.waiting import sleep, wait_until

__all__ = [
    "CollectionCondition",
    "Condition",
    "ConditionNotMet",
    "ConfigurationError",
    "DEFAULT_CONFIG",
    "ElementNotFound",
    "Session",
    "SessionNotOpenError",
    "SoftReporter",
    "StrictReporter",
    "SulfideConfig",
    "SulfideElement",
    "SulfideElementCollection",
    "SulfideError",
    "WaitTimeoutError",
    "config_from_env",
    "configure",
    "sanitize_chrome_args",
    "sleep",
    "wait_until",
]
