"""
Short names for test scripts.

    from sulfide.shortcuts import S, SS, open, close, visible, by_text

    await open("https://example.test")
    await S(by_text("Sign in")).should(visible)

Everything here is bound to one module-level ``session``. Scripts that prefer
global names can call ``install()`` to copy ``S``, ``SS``, the conditions and
the selector helpers into ``builtins`` (or any namespace dict).
"""

from __future__ import annotations

import builtins
import logging
from typing import Any, Mapping, MutableMapping, Optional, Union

from playwright.async_api import Page

from sulfide import conditions as _conditions
from sulfide import selectors as _selectors
from sulfide.collection import SulfideElementCollection
from sulfide.conditions import CONDITIONS
from sulfide.conditions import *  # noqa: F401,F403
from sulfide.config import SulfideConfig
from sulfide.element import SulfideElement
from sulfide.selectors import SELECTOR_HELPERS
from sulfide.selectors import *  # noqa: F401,F403
from sulfide.session import Session

__all__ = [
    "S",
    "SS",
    "close",
    "configure",
    "install",
    "open",
    "session",
    "sleep",
    *_conditions.__all__,
    *_selectors.__all__,
]

logger = logging.getLogger("sulfide")

session = Session()


def S(selector: Union[str, SulfideElement]) -> SulfideElement:
    return session.element(selector)


def SS(selector: Union[str, SulfideElement]) -> SulfideElementCollection:
    return session.collection(selector)


def configure(options: Optional[Mapping[str, Any]] = None, **overrides: Any) -> SulfideConfig:
    return session.configure(options, **overrides)


async def open(url: str) -> Page:  # noqa: A001
    return await session.open(url)


async def close() -> None:
    await session.close()


async def sleep(ms: float) -> None:
    await session.sleep(ms)


def global_names() -> dict[str, Any]:
    names: dict[str, Any] = {"S": S, "SS": SS}
    names.update(SELECTOR_HELPERS)
    names.update(CONDITIONS)
    return names


def install(namespace: Optional[MutableMapping[str, Any]] = None) -> list[str]:
    """
    Copy the short names into ``namespace`` (``builtins`` by default).

    Does nothing when the session is configured with ``no_globals``. Existing
    builtins are never replaced.

    Returns:
        The names that were installed
    """
    if session.config.no_globals:
        logger.debug("[Sulfide] no_globals set, short names not installed")
        return []

    target = vars(builtins) if namespace is None else namespace
    installed = []
    for name, obj in global_names().items():
        if namespace is None and name in target and target[name] is not obj:
            logger.warning(f"[Sulfide] Not replacing builtin '{name}'")
            continue
        target[name] = obj
        installed.append(name)
    return installed
