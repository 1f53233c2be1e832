"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Resilient interaction primitives (`self.actions`)
    - Hard/soft assertions (`self.verify`)
    - Navigation to the page's own URL
    - Screenshot and failure-capture utilities

Page objects never touch the Playwright page directly; every browser call
goes through `actions` or `verify` so it is logged and classified.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Mapping, Optional

import allure
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from saucedemo_autotest.common.config_loader import HarnessSettings, build_urls, get_settings

from .assertions import Assertions
from .element_actions import ElementActions, RetryPolicy
from .structured_logger import StructuredLogger


# Default output directory for screenshots
SCREENSHOT_DIR = Path("test-results") / "screenshots"


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class LoginPage(BasePage):
            URL_KEY = "LOGIN"

            async def login(self, username: str, password: str):
                await self.actions.type_text("#user", username, "Username")
                await self.actions.type_text("#pass", password, "Password")
                await self.actions.click("#login", "Login")
    """

    # Override in subclasses
    URL_KEY: str = "LOGIN"
    PAGE_NAME: str = "Page"

    def __init__(
        self,
        page: Page,
        log: StructuredLogger,
        test_name: str = "",
        settings: Optional[HarnessSettings] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            log: Shared structured logger
            test_name: Correlation id for every entry this page records
            settings: Harness settings; resolved from configuration if omitted
        """
        self.page = page
        self.log = log
        self.test_name = test_name
        self.settings = settings or get_settings()
        self.actions = ElementActions(
            page,
            log,
            test_name=test_name,
            retry_policy=RetryPolicy(
                max_attempts=self.settings.click_attempts,
                delay_ms=self.settings.retry_delay_ms,
            ),
        )
        self.verify = Assertions(self.actions)

    @property
    def urls(self) -> Mapping[str, str]:
        return build_urls(self.settings.base_url)

    @property
    def url(self) -> str:
        """Full URL of this page."""
        return self.urls[self.URL_KEY]

    async def open(self) -> "BasePage":
        """Navigate to this page and wait for it to settle."""
        with allure.step(f"Open {self.PAGE_NAME}"):
            await self.actions.navigate(self.url)
            await self.actions.wait_for_page_load()
        return self

    @property
    def current_url(self) -> str:
        return self.actions.current_url()

    async def title(self) -> str:
        return await self.actions.page_title()

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    async def take_screenshot(
        self,
        name: str,
        full_page: Optional[bool] = None,
        attach_to_allure: bool = True,
    ) -> Optional[Path]:
        """
        Take screenshot and optionally attach to Allure. Never raises.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page (defaults to settings)
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot, or None when capture failed
        """
        if full_page is None:
            full_page = self.settings.screenshot_full_page

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"
        self.log.info(f"Taking screenshot: {name}", {"name": name}, self.test_name, "Screenshot")

        try:
            SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)
            await self.page.screenshot(path=str(filepath), full_page=full_page)
            if attach_to_allure:
                allure.attach.file(
                    str(filepath),
                    name=name,
                    attachment_type=allure.attachment_type.PNG,
                )
        except (PlaywrightError, OSError) as e:
            self.log.error(
                f"❌ Failed to take screenshot: {name}",
                {"name": name, "error": str(e).splitlines()[0] if str(e) else type(e).__name__},
                self.test_name,
            )
            return None

        self.log.info(f"✅ Screenshot saved: {name}", {"name": name, "path": str(filepath)}, self.test_name)
        return filepath

    async def capture_failure(self, test_name: str) -> None:
        """
        Capture debugging information on test failure.

        Saves:
            - Screenshot
            - Current URL
            - Interaction limits in effect
        """
        with allure.step("Capture failure details"):
            await self.take_screenshot(f"failure_{test_name}")

            allure.attach(
                self.page.url,
                name="Current URL",
                attachment_type=allure.attachment_type.TEXT,
            )
            allure.attach(
                json.dumps(self.actions.context(), indent=2),
                name="Interaction Settings",
                attachment_type=allure.attachment_type.JSON,
            )


__all__ = [
    "BasePage",
    "SCREENSHOT_DIR",
]
