from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Sequence, Union

from playwright.async_api import ElementHandle, Page
from playwright.async_api import Error as PlaywrightError

from sulfide.conditions import Condition
from sulfide.errors import ConditionNotMet, ElementNotFound, WaitTimeoutError
from sulfide.selectors import to_engine_selector
from sulfide.waiting import wait_until as retry_until

if TYPE_CHECKING:
    from sulfide.collection import SulfideElementCollection
    from sulfide.session import Session

logger = logging.getLogger("sulfide")

# (selector, index of the match to descend into)
Step = tuple[str, int]


def make_steps(selectors: Union[str, Sequence[str]]) -> tuple[Step, ...]:
    if isinstance(selectors, str):
        selectors = (selectors,)
    steps = tuple((selector, 0) for selector in selectors)
    if not steps or any(not isinstance(s, str) or not s.strip() for s, _ in steps):
        raise ValueError(f"Invalid selector: {selectors!r}")
    return steps


def describe_steps(steps: Sequence[Step]) -> str:
    parts = []
    for selector, index in steps:
        parts.append(selector if index == 0 else f"{selector}[{index}]")
    return " ".join(parts)


async def query_all(page: Page, steps: Sequence[Step]) -> list[ElementHandle]:
    """All current matches of the last step, scoped by the earlier steps."""
    scope: Any = page
    try:
        for selector, index in steps[:-1]:
            matches = await scope.query_selector_all(to_engine_selector(selector))
            if not -len(matches) <= index < len(matches):
                return []
            scope = matches[index]
        return list(await scope.query_selector_all(to_engine_selector(steps[-1][0])))
    except PlaywrightError as e:
        # Navigation in flight or a detached scope; try again on the next poll
        logger.debug(f"[Sulfide] Query for {describe_steps(steps)} failed: {e}")
        return []


class SulfideElement:
    """
    Lazy reference to a single DOM element.

    Holds only selector text; every operation resolves it again against the
    session's current page, polling until the implicit wait elapses.
    """

    def __init__(
        self,
        session: "Session",
        selectors: Union[str, Sequence[str]],
        index: int = 0,
        steps: Optional[tuple[Step, ...]] = None,
    ) -> None:
        self._session = session
        base = steps if steps is not None else make_steps(selectors)
        self.steps: tuple[Step, ...] = base[:-1] + ((base[-1][0], index),)

    @property
    def selectors(self) -> list[str]:
        return [selector for selector, _ in self.steps]

    @property
    def index(self) -> int:
        return self.steps[-1][1]

    @property
    def session(self) -> "Session":
        return self._session

    @property
    def description(self) -> str:
        return describe_steps(self.steps)

    def __repr__(self) -> str:
        return f"SulfideElement({self.description!r})"

    def find(self, selector: str) -> "SulfideElement":
        """Child element matching ``selector`` within this one."""
        return SulfideElement(self._session, selector, steps=self.steps + make_steps(selector))

    def find_all(self, selector: str) -> "SulfideElementCollection":
        from sulfide.collection import SulfideElementCollection

        return SulfideElementCollection(self._session, selector, steps=self.steps + make_steps(selector))

    def _timeout(self, timeout_ms: Optional[int]) -> int:
        return self._session.config.implicit_wait_ms if timeout_ms is None else timeout_ms

    async def _query(self) -> Optional[ElementHandle]:
        page = await self._session.get_page()
        if page is None:
            return None
        handles = await query_all(page, self.steps)
        if -len(handles) <= self.index < len(handles):
            return handles[self.index]
        return None

    async def resolve(self, timeout_ms: Optional[int] = None) -> Optional[ElementHandle]:
        """
        Find the element, polling until it appears.

        Returns:
            The element handle, or None when the lookup failed in soft mode

        Raises:
            ElementNotFound: Nothing matched before the deadline (strict mode)
        """
        timeout = self._timeout(timeout_ms)
        try:
            return await retry_until(
                self._query,
                timeout_ms=timeout,
                poll_interval_ms=self._session.config.poll_interval_ms,
                description=self.description,
            )
        except WaitTimeoutError:
            self._session.reporter.fail(ElementNotFound(self.description, timeout))
            return None

    async def exists(self) -> bool:
        return await self._query() is not None

    async def is_displayed(self) -> bool:
        handle = await self._query()
        if handle is None:
            return False
        try:
            return await handle.is_visible()
        except PlaywrightError:
            return False

    async def _wait_for(self, conditions: Sequence[Condition], timeout_ms: Optional[int]) -> Optional[Condition]:
        """Poll until every condition holds. Returns the last failing one on timeout."""
        failing: list[Condition] = []

        async def all_met() -> bool:
            handle = await self._query()
            for condition in conditions:
                if not await condition.matches(handle):
                    failing[:] = [condition]
                    return False
            return True

        try:
            await retry_until(
                all_met,
                timeout_ms=self._timeout(timeout_ms),
                poll_interval_ms=self._session.config.poll_interval_ms,
                description=f"{self.description} to {' and '.join(map(str, conditions))}",
            )
        except WaitTimeoutError:
            return failing[0] if failing else conditions[0]
        return None

    async def should(self, *conditions: Condition, timeout_ms: Optional[int] = None) -> "SulfideElement":
        if not conditions:
            raise ValueError("should() needs at least one condition")
        failed = await self._wait_for(conditions, timeout_ms)
        if failed is not None:
            self._session.reporter.fail(ConditionNotMet(self.description, str(failed), self._timeout(timeout_ms)))
        return self

    should_be = should
    should_have = should

    async def should_not(self, *conditions: Condition, timeout_ms: Optional[int] = None) -> "SulfideElement":
        return await self.should(*(condition.negate() for condition in conditions), timeout_ms=timeout_ms)

    should_not_be = should_not
    should_not_have = should_not

    async def wait_until(self, condition: Condition, timeout_ms: Optional[int] = None) -> bool:
        return await self._wait_for((condition,), timeout_ms) is None

    async def wait_while(self, condition: Condition, timeout_ms: Optional[int] = None) -> bool:
        return await self._wait_for((condition.negate(),), timeout_ms) is None

    async def _require(self, action: str) -> Optional[ElementHandle]:
        handle = await self.resolve()
        if handle is None:
            logger.warning(f"[Sulfide] Skipping {action} on missing element {self.description}")
        return handle

    # Actions

    async def click(self, **kwargs: Any) -> "SulfideElement":
        handle = await self._require("click")
        if handle is not None:
            await handle.click(**kwargs)
        return self

    async def double_click(self) -> "SulfideElement":
        handle = await self._require("double_click")
        if handle is not None:
            await handle.dblclick()
        return self

    async def hover(self) -> "SulfideElement":
        handle = await self._require("hover")
        if handle is not None:
            await handle.hover()
        return self

    async def focus(self) -> "SulfideElement":
        handle = await self._require("focus")
        if handle is not None:
            await handle.focus()
        return self

    async def set_value(self, text: str) -> "SulfideElement":
        """Replace the field's value with ``text``."""
        handle = await self._require("set_value")
        if handle is not None:
            await handle.fill(text)
        return self

    val = set_value

    async def type(self, text: str, delay_ms: int = 0) -> "SulfideElement":
        """Type ``text`` key by key after the current value."""
        handle = await self._require("type")
        if handle is not None:
            await handle.type(text, delay=delay_ms)
        return self

    async def press(self, key: str) -> "SulfideElement":
        handle = await self._require("press")
        if handle is not None:
            await handle.press(key)
        return self

    async def clear(self) -> "SulfideElement":
        return await self.set_value("")

    async def select_option(self, option: Union[str, Sequence[str]]) -> list[str]:
        handle = await self._require("select_option")
        if handle is None:
            return []
        return await handle.select_option(option)

    async def check(self) -> "SulfideElement":
        handle = await self._require("check")
        if handle is not None:
            await handle.check()
        return self

    async def uncheck(self) -> "SulfideElement":
        handle = await self._require("uncheck")
        if handle is not None:
            await handle.uncheck()
        return self

    async def scroll_into_view(self) -> "SulfideElement":
        handle = await self._require("scroll_into_view")
        if handle is not None:
            await handle.scroll_into_view_if_needed()
        return self

    # Readers

    async def text(self) -> Optional[str]:
        handle = await self.resolve()
        return None if handle is None else await handle.inner_text()

    async def inner_html(self) -> Optional[str]:
        handle = await self.resolve()
        return None if handle is None else await handle.inner_html()

    async def attribute(self, name: str) -> Optional[str]:
        handle = await self.resolve()
        return None if handle is None else await handle.get_attribute(name)

    async def value(self) -> Optional[str]:
        handle = await self.resolve()
        return None if handle is None else await handle.input_value()

    async def css_value(self, prop: str) -> Optional[str]:
        handle = await self.resolve()
        if handle is None:
            return None
        return await handle.evaluate("(e, prop) => getComputedStyle(e).getPropertyValue(prop)", prop)
