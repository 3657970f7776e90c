"""
Condition library.

A condition is a named async predicate over a resolved Playwright element
handle. Handles that are missing (``None``) or detached from the DOM never
raise here; they simply make the condition "not yet met" so conditions can
serve as polling targets.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Sequence

from playwright.async_api import ElementHandle
from playwright.async_api import Error as PlaywrightError

__all__ = [
    "Condition",
    "CollectionCondition",
    "normalize_text",
    "not_",
    "visible",
    "appear",
    "hidden",
    "disappear",
    "exist",
    "enabled",
    "disabled",
    "checked",
    "selected",
    "focused",
    "empty",
    "text",
    "exact_text",
    "matches_text",
    "attribute",
    "value",
    "css_class",
    "size",
    "size_greater_than",
    "size_less_than",
    "empty_collection",
    "texts",
    "exact_texts",
]

ElementCheck = Callable[[Optional[ElementHandle]], Awaitable[bool]]
CollectionCheck = Callable[[Sequence[ElementHandle]], Awaitable[bool]]


def normalize_text(text: Optional[str]) -> str:
    return " ".join((text or "").split())


@dataclass(frozen=True)
class Condition:
    name: str
    check: ElementCheck
    expected: Any = None

    async def matches(self, handle: Optional[ElementHandle]) -> bool:
        try:
            return bool(await self.check(handle))
        except PlaywrightError:
            return False

    def negate(self) -> "Condition":
        inner = self

        async def check(handle: Optional[ElementHandle]) -> bool:
            return not await inner.matches(handle)

        return Condition(name=f"not {self.name}", check=check, expected=self.expected)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class CollectionCondition:
    name: str
    check: CollectionCheck
    expected: Any = None

    async def matches(self, handles: Sequence[ElementHandle]) -> bool:
        try:
            return bool(await self.check(handles))
        except PlaywrightError:
            return False

    def negate(self) -> "CollectionCondition":
        inner = self

        async def check(handles: Sequence[ElementHandle]) -> bool:
            return not await inner.matches(handles)

        return CollectionCondition(name=f"not {self.name}", check=check, expected=self.expected)

    def __str__(self) -> str:
        return self.name


def not_(condition: Condition) -> Condition:
    return condition.negate()


# Element conditions

async def _visible(handle: Optional[ElementHandle]) -> bool:
    return handle is not None and await handle.is_visible()


async def _hidden(handle: Optional[ElementHandle]) -> bool:
    if handle is None:
        return True
    try:
        return await handle.is_hidden()
    except PlaywrightError:
        # Detached from the DOM
        return True


async def _exist(handle: Optional[ElementHandle]) -> bool:
    return handle is not None


async def _enabled(handle: Optional[ElementHandle]) -> bool:
    return handle is not None and await handle.is_enabled()


async def _disabled(handle: Optional[ElementHandle]) -> bool:
    return handle is not None and await handle.is_disabled()


async def _checked(handle: Optional[ElementHandle]) -> bool:
    return handle is not None and await handle.is_checked()


async def _selected(handle: Optional[ElementHandle]) -> bool:
    return handle is not None and bool(await handle.evaluate("e => !!e.selected"))


async def _focused(handle: Optional[ElementHandle]) -> bool:
    return handle is not None and bool(await handle.evaluate("e => e === document.activeElement"))


async def _empty(handle: Optional[ElementHandle]) -> bool:
    if handle is None:
        return False
    script = (
        "e => ['INPUT', 'TEXTAREA'].includes(e.tagName)"
        " ? e.value === '' : e.textContent.trim() === ''"
    )
    return bool(await handle.evaluate(script))


visible = Condition("be visible", _visible)
appear = visible
hidden = Condition("be hidden", _hidden)
disappear = hidden
exist = Condition("exist", _exist)
enabled = Condition("be enabled", _enabled)
disabled = Condition("be disabled", _disabled)
checked = Condition("be checked", _checked)
selected = Condition("be selected", _selected)
focused = Condition("be focused", _focused)
empty = Condition("be empty", _empty)


def text(expected: str) -> Condition:
    """Visible text contains ``expected`` (whitespace-normalised)."""
    wanted = normalize_text(expected)

    async def check(handle: Optional[ElementHandle]) -> bool:
        return handle is not None and wanted in normalize_text(await handle.inner_text())

    return Condition(f"have text '{expected}'", check, expected)


def exact_text(expected: str) -> Condition:
    wanted = normalize_text(expected)

    async def check(handle: Optional[ElementHandle]) -> bool:
        return handle is not None and normalize_text(await handle.inner_text()) == wanted

    return Condition(f"have exact text '{expected}'", check, expected)


def matches_text(pattern: str) -> Condition:
    regex = re.compile(pattern)

    async def check(handle: Optional[ElementHandle]) -> bool:
        return handle is not None and regex.search(await handle.inner_text()) is not None

    return Condition(f"match text /{pattern}/", check, pattern)


def attribute(name: str, value: Optional[str] = None) -> Condition:
    """Attribute ``name`` is present, and equals ``value`` when one is given."""

    async def check(handle: Optional[ElementHandle]) -> bool:
        if handle is None:
            return False
        actual = await handle.get_attribute(name)
        if value is None:
            return actual is not None
        return actual == value

    label = f"have attribute {name}" if value is None else f"have attribute {name}='{value}'"
    return Condition(label, check, value)


def value(expected: str) -> Condition:
    async def check(handle: Optional[ElementHandle]) -> bool:
        return handle is not None and await handle.input_value() == expected

    return Condition(f"have value '{expected}'", check, expected)


def css_class(class_name: str) -> Condition:
    async def check(handle: Optional[ElementHandle]) -> bool:
        if handle is None:
            return False
        classes = (await handle.get_attribute("class") or "").split()
        return class_name in classes

    return Condition(f"have css class '{class_name}'", check, class_name)


# Collection conditions

def size(expected: int) -> CollectionCondition:
    async def check(handles: Sequence[ElementHandle]) -> bool:
        return len(handles) == expected

    return CollectionCondition(f"have size {expected}", check, expected)


def size_greater_than(expected: int) -> CollectionCondition:
    async def check(handles: Sequence[ElementHandle]) -> bool:
        return len(handles) > expected

    return CollectionCondition(f"have size greater than {expected}", check, expected)


def size_less_than(expected: int) -> CollectionCondition:
    async def check(handles: Sequence[ElementHandle]) -> bool:
        return len(handles) < expected

    return CollectionCondition(f"have size less than {expected}", check, expected)


empty_collection = size(0)


async def _texts_of(handles: Sequence[ElementHandle]) -> list[str]:
    return [normalize_text(await handle.inner_text()) for handle in handles]


def texts(*expected: str) -> CollectionCondition:
    """Each element's text contains the expected text at the same position."""
    wanted = [normalize_text(item) for item in expected]

    async def check(handles: Sequence[ElementHandle]) -> bool:
        if len(handles) != len(wanted):
            return False
        actual = await _texts_of(handles)
        return all(want in have for want, have in zip(wanted, actual))

    return CollectionCondition(f"have texts {list(expected)}", check, expected)


def exact_texts(*expected: str) -> CollectionCondition:
    wanted = [normalize_text(item) for item in expected]

    async def check(handles: Sequence[ElementHandle]) -> bool:
        if len(handles) != len(wanted):
            return False
        return await _texts_of(handles) == wanted

    return CollectionCondition(f"have exact texts {list(expected)}", check, expected)


CONDITIONS = {
    "visible": visible,
    "appear": appear,
    "hidden": hidden,
    "disappear": disappear,
    "exist": exist,
    "enabled": enabled,
    "disabled": disabled,
    "checked": checked,
    "selected": selected,
    "focused": focused,
    "empty": empty,
    "text": text,
    "exact_text": exact_text,
    "matches_text": matches_text,
    "attribute": attribute,
    "value": value,
    "css_class": css_class,
    "size": size,
    "size_greater_than": size_greater_than,
    "size_less_than": size_less_than,
    "empty_collection": empty_collection,
    "texts": texts,
    "exact_texts": exact_texts,
    "not_": not_,
}
