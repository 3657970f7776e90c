"""
Browser session management.

A Session owns at most one Playwright-driven Chromium process, the browsing
context its pages live in, and the URL it was launched with. The browser is
launched lazily by the first ``open``; ``close`` tears it down so a later
``open`` launches a fresh one.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from playwright.async_api import (
    Browser,
    BrowserContext,
    Page,
    Playwright,
    async_playwright,
)

from sulfide.collection import SulfideElementCollection
from sulfide.config import SulfideConfig, configure
from sulfide.element import SulfideElement
from sulfide.errors import SessionNotOpenError
from sulfide.reporting import FailureReporter, SoftReporter, reporter_for
from sulfide.waiting import sleep

logger = logging.getLogger("sulfide")


class Session:
    """A single browser driven sequentially by one test script."""

    def __init__(self, config: Optional[SulfideConfig] = None) -> None:
        """
        Initialize the session. No browser is launched until ``open``.

        Args:
            config: Configuration to use, the defaults if not provided
        """
        self._config = config or SulfideConfig()
        self._reporter = reporter_for(self._config.soft_assertions)

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        # Captured on launch only, later navigations leave it alone
        self._launch_url: str = ""

    @property
    def config(self) -> SulfideConfig:
        return self._config

    @property
    def reporter(self) -> FailureReporter:
        return self._reporter

    @property
    def launch_url(self) -> str:
        return self._launch_url

    @property
    def is_open(self) -> bool:
        return self._browser is not None

    def configure(self, options: Optional[Mapping[str, Any]] = None, **overrides: Any) -> SulfideConfig:
        """
        Replace this session's configuration, starting from the defaults.

        Raises:
            AssertionError: Leaving soft mode with failures still recorded
        """
        config = configure(options, **overrides)
        if config.soft_assertions != self._config.soft_assertions:
            if isinstance(self._reporter, SoftReporter):
                self._reporter.assert_all()
            self._reporter = reporter_for(config.soft_assertions)
        self._config = config
        return config

    def launch_options(self) -> dict[str, Any]:
        return self._config.launch_options(self._launch_url)

    async def _launch(self, url: str) -> None:
        options = self._config.launch_options(url)
        logger.info(f"[Sulfide] Launching browser (headless={options['headless']})")

        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(**options)
            self._context = await self._browser.new_context(**self._config.context_options())
        except Exception as e:
            logger.error(f"[Sulfide] Browser launch failed: {e}")
            await self._teardown()
            raise
        self._launch_url = url

    async def _teardown(self) -> None:
        context, browser, driver = self._context, self._browser, self._playwright
        self._context = None
        self._browser = None
        self._playwright = None
        try:
            if context:
                await context.close()
        finally:
            try:
                if browser:
                    await browser.close()
            finally:
                if driver:
                    await driver.stop()

    async def open(self, url: str) -> Page:
        """
        Navigate to ``url``, launching the browser first if needed.

        Args:
            url: URL the current page navigates to

        Returns:
            The page that was navigated
        """
        if not self._browser:
            await self._launch(url)

        page = await self.get_page()
        logger.info(f"[Sulfide] Opening {url}")
        await page.goto(url, wait_until="load")
        return page

    async def close(self) -> None:
        """
        Close the browser.

        Raises:
            SessionNotOpenError: No browser has been launched
        """
        if not self._browser:
            raise SessionNotOpenError("close() called without an open browser")

        logger.info("[Sulfide] Closing browser...")
        await self._teardown()

    async def get_page(self) -> Optional[Page]:
        """The most recently opened page, created if the browser has none."""
        if not self._browser:
            return None

        pages = self.get_pages()
        if pages:
            return pages[-1]
        return await self.new_page()

    async def new_page(self) -> Optional[Page]:
        if not self._browser or not self._context:
            return None

        page = await self._context.new_page()
        await page.set_viewport_size({"width": self._config.width, "height": self._config.height})
        logger.debug(f"[Sulfide] New page {self._config.width}x{self._config.height}")
        return page

    def get_browser(self) -> Optional[Browser]:
        return self._browser

    def get_pages(self) -> list[Page]:
        if not self._browser or not self._context:
            return []
        return list(self._context.pages)

    async def sleep(self, ms: float) -> None:
        await sleep(ms)

    def element(self, selector: Union[str, SulfideElement]) -> SulfideElement:
        """Element handle for ``selector``; an existing handle is returned as is."""
        if isinstance(selector, SulfideElement):
            return selector
        return SulfideElement(self, selector)

    def collection(self, selector: Union[str, SulfideElement]) -> SulfideElementCollection:
        """Collection handle for ``selector``, or for the selectors of an element handle."""
        if isinstance(selector, SulfideElement):
            return SulfideElementCollection(self, selector.selectors, steps=selector.steps)
        return SulfideElementCollection(self, selector)

    S = element
    SS = collection

    async def __aenter__(self) -> "Session":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        if self.is_open:
            await self.close()
