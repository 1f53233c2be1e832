"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - One browser instance per session
    - Context isolation per test
    - Viewport, slow-motion and video recording from HarnessSettings

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from saucedemo_autotest.common.config_loader import HarnessSettings, get_settings


# Output directory for recorded videos
VIDEO_DIR = Path("test-results") / "videos"


class BrowserManager:
    """
    Manages the browser instance and contexts for UI testing.

    Usage:
        async with BrowserManager(settings) as manager:
            page = await manager.new_page()
            await page.goto("https://www.saucedemo.com/v1/index.html")
    """

    DEFAULT_LAUNCH_ARGS: List[str] = [
        "--ignore-certificate-errors",
    ]

    def __init__(self, settings: Optional[HarnessSettings] = None):
        """
        Initialize browser manager.

        Args:
            settings: Harness settings; resolved from configuration if omitted
        """
        self.settings = settings or get_settings()

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    async def __aenter__(self) -> "BrowserManager":
        """Async context manager entry - start browser."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - close browser."""
        await self.close()

    def launch_options(self) -> Dict[str, Any]:
        return {
            "headless": self.settings.headless,
            "slow_mo": self.settings.slow_mo_ms,
            "args": list(self.DEFAULT_LAUNCH_ARGS),
        }

    def context_options(self) -> Dict[str, Any]:
        """Options for every new context: viewport and, when enabled, video."""
        width, height = self.settings.viewport
        options: Dict[str, Any] = {
            "viewport": {"width": width, "height": height},
            "ignore_https_errors": True,
        }
        if self.settings.record_video:
            video_width, video_height = self.settings.video_size
            options["record_video_dir"] = str(VIDEO_DIR)
            options["record_video_size"] = {"width": video_width, "height": video_height}
        return options

    async def start(self) -> None:
        """Start Playwright and launch the configured browser."""
        self._playwright = await async_playwright().start()
        browser_launcher = getattr(self._playwright, self.settings.browser)

        self._browser = await browser_launcher.launch(**self.launch_options())
        logger.debug(
            f"Browser started: {self.settings.browser} "
            f"(headless={self.settings.headless}, slow_mo={self.settings.slow_mo_ms}ms)"
        )

    async def close(self) -> None:
        """Close all contexts, the browser and Playwright."""
        for context in list(self._contexts):
            await self.close_context(context)
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    async def new_context(self, **options: Any) -> BrowserContext:
        """
        Create new browser context.

        Each context is isolated - separate cookies, localStorage, etc.

        Args:
            **options: Overrides for the configured context options
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context = await self._browser.new_context(**{**self.context_options(), **options})
        context.set_default_timeout(self.settings.timeout_ms)
        self._contexts.append(context)
        return context

    async def close_context(self, context: BrowserContext) -> None:
        """Close one context. Recorded videos are finalized on close."""
        if context in self._contexts:
            self._contexts.remove(context)
        try:
            await context.close()
        except PlaywrightError as e:
            logger.warning(f"Failed to close browser context: {e}")

    async def new_page(self, context: Optional[BrowserContext] = None, **context_options: Any) -> Page:
        """
        Create new page in new or existing context.

        Args:
            context: Existing context to use (creates new if None)
            **context_options: Options for a new context
        """
        if context is None:
            context = await self.new_context(**context_options)
        return await context.new_page()

    @property
    def browser(self) -> Optional[Browser]:
        """Get browser instance."""
        return self._browser


__all__ = [
    "BrowserManager",
    "VIDEO_DIR",
]
