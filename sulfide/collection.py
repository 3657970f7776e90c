from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Sequence, Union

from playwright.async_api import ElementHandle

from sulfide.conditions import CollectionCondition, Condition
from sulfide.element import SulfideElement, Step, describe_steps, make_steps, query_all
from sulfide.errors import ConditionNotMet, WaitTimeoutError
from sulfide.waiting import wait_until as retry_until

if TYPE_CHECKING:
    from sulfide.session import Session

logger = logging.getLogger("sulfide")


class SulfideElementCollection:
    """Lazy reference to every element matching a selector chain."""

    def __init__(
        self,
        session: "Session",
        selectors: Union[str, Sequence[str]],
        steps: Optional[tuple[Step, ...]] = None,
    ) -> None:
        self._session = session
        self.steps: tuple[Step, ...] = steps if steps is not None else make_steps(selectors)

    @property
    def selectors(self) -> list[str]:
        return [selector for selector, _ in self.steps]

    @property
    def description(self) -> str:
        return describe_steps(self.steps)

    def __repr__(self) -> str:
        return f"SulfideElementCollection({self.description!r})"

    def get(self, index: int) -> SulfideElement:
        return SulfideElement(self._session, self.selectors, index=index, steps=self.steps)

    __getitem__ = get

    @property
    def first(self) -> SulfideElement:
        return self.get(0)

    @property
    def last(self) -> SulfideElement:
        return self.get(-1)

    def _timeout(self, timeout_ms: Optional[int]) -> int:
        return self._session.config.implicit_wait_ms if timeout_ms is None else timeout_ms

    async def _query_all(self) -> list[ElementHandle]:
        page = await self._session.get_page()
        if page is None:
            return []
        return await query_all(page, self.steps)

    async def resolve(self, timeout_ms: Optional[int] = None) -> list[ElementHandle]:
        """
        Collect the current matches, polling until at least one appears.

        An empty list after the deadline is a valid result, not a failure.
        """
        try:
            return await retry_until(
                self._query_all,
                timeout_ms=self._timeout(timeout_ms),
                poll_interval_ms=self._session.config.poll_interval_ms,
                description=self.description,
            )
        except WaitTimeoutError:
            logger.debug(f"[Sulfide] No elements matched {self.description}")
            return []

    async def size(self) -> int:
        """Number of matches right now, without waiting."""
        return len(await self._query_all())

    async def texts(self) -> list[str]:
        return [await handle.inner_text() for handle in await self.resolve()]

    async def filter_by(self, condition: Condition) -> list[SulfideElement]:
        """Element handles for the matches that currently satisfy ``condition``."""
        matching = []
        for index, handle in enumerate(await self.resolve()):
            if await condition.matches(handle):
                matching.append(self.get(index))
        return matching

    async def should(
        self,
        *conditions: CollectionCondition,
        timeout_ms: Optional[int] = None,
    ) -> "SulfideElementCollection":
        if not conditions:
            raise ValueError("should() needs at least one condition")
        failing: list[CollectionCondition] = []

        async def all_met() -> bool:
            handles = await self._query_all()
            for condition in conditions:
                if not await condition.matches(handles):
                    failing[:] = [condition]
                    return False
            return True

        timeout = self._timeout(timeout_ms)
        try:
            await retry_until(
                all_met,
                timeout_ms=timeout,
                poll_interval_ms=self._session.config.poll_interval_ms,
                description=f"{self.description} to {' and '.join(map(str, conditions))}",
            )
        except WaitTimeoutError:
            failed = failing[0] if failing else conditions[0]
            actual = f"size {await self.size()}"
            self._session.reporter.fail(ConditionNotMet(self.description, str(failed), timeout, actual))
        return self

    should_be = should
    should_have = should

    async def should_not(
        self,
        *conditions: CollectionCondition,
        timeout_ms: Optional[int] = None,
    ) -> "SulfideElementCollection":
        return await self.should(*(condition.negate() for condition in conditions), timeout_ms=timeout_ms)
