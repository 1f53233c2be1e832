# ================================================================================
# Element Actions Module
# ================================================================================
#
# This module provides the resilient interaction primitives used by every page
# object: bounded waits, a fixed-interval click retry, fail-fast typing and
# reading, and navigation helpers. Each primitive records its attempts and
# outcome in the injected StructuredLogger.
#
# Key Features:
#   - Explicit Outcome results (try_* methods) plus raising shortcuts
#   - Fixed-interval click retry (default 3 attempts, 1000ms apart)
#   - Driver errors classified into named failure conditions
#   - Quiet read-only queries for the assertion layer
#
# ================================================================================

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import allure
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

from .errors import (
    AttributeRetrievalFailed,
    ClickFailed,
    ElementNotVisible,
    NavigationFailed,
    PageLoadFailed,
    ReloadFailed,
    ScrollFailed,
    SelectionFailed,
    TextInputFailed,
    TextRetrievalFailed,
)
from .outcome import Outcome
from .structured_logger import StructuredLogger


DEFAULT_TIMEOUT_MS = 10000
VISIBILITY_PROBE_TIMEOUT_MS = 5000


@dataclass(frozen=True)
class RetryPolicy:
    """
    Fixed-interval retry policy for state-mutating actions.

    Attributes:
        max_attempts: Total attempts, including the first one
        delay_ms: Pause between consecutive attempts
    """

    max_attempts: int = 3
    delay_ms: int = 1000

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {self.delay_ms}")


def _describe(exc: BaseException) -> str:
    # Playwright messages carry a long call log after the first line
    text = str(exc).strip()
    return text.splitlines()[0] if text else type(exc).__name__


class ElementActions:
    """
    Resilient interaction primitives over a Playwright page.

    Every primitive has a `try_<name>` form returning an Outcome and a
    `<name>` form that raises the classified failure.

    Example:
        actions = ElementActions(page, log, test_name="test_login")
        await actions.type_text("[data-test='username']", "standard_user", "Username")
        await actions.click("#login-button", "Login")
        outcome = await actions.try_read_text("[data-test='error']", "Error Message")
        if not outcome.ok:
            ...
    """

    def __init__(
        self,
        page: Page,
        log: StructuredLogger,
        test_name: str = "",
        default_timeout: int = DEFAULT_TIMEOUT_MS,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        """
        Initialize ElementActions.

        Args:
            page: Playwright Page object
            log: Shared structured logger
            test_name: Correlation id stamped on every log entry
            default_timeout: Default visibility timeout in milliseconds
            retry_policy: Click retry policy
        """
        self.page = page
        self.log = log
        self.test_name = test_name
        self.default_timeout = default_timeout
        self.retry_policy = retry_policy or RetryPolicy()

    # =========================================================================
    # Visibility
    # =========================================================================

    @allure.step("Wait for visible: {name}")
    async def try_wait_for_visible(
        self,
        selector: str,
        name: str,
        timeout: Optional[int] = None,
    ) -> Outcome[Locator]:
        """
        Wait until the element is visible.

        Logs the start and the outcome of the wait. On timeout the outcome
        carries ElementNotVisible with selector, name and timeout.
        """
        timeout = self.default_timeout if timeout is None else timeout
        self.log.info(
            f"Waiting for {name} to be visible",
            {"selector": selector, "timeout": timeout},
            self.test_name,
            "Element Wait",
        )
        try:
            locator = await self._visible_locator(selector, timeout)
        except PlaywrightError as e:
            error = ElementNotVisible(selector, name, timeout, cause=_describe(e))
            self.log.error(
                f"❌ {name} did not become visible within {timeout}ms",
                {"selector": selector, "timeout": timeout, "error": error.cause},
                self.test_name,
            )
            return Outcome.failure(error)

        self.log.info(f"✅ {name} is now visible", {"selector": selector}, self.test_name)
        return Outcome.success(locator)

    async def wait_for_visible(self, selector: str, name: str, timeout: Optional[int] = None) -> Locator:
        return (await self.try_wait_for_visible(selector, name, timeout)).unwrap()

    async def is_visible(self, selector: str, name: str, timeout: int = VISIBILITY_PROBE_TIMEOUT_MS) -> bool:
        """Non-committal visibility check. Never raises."""
        self.log.debug(
            f"Checking if {name} is visible",
            {"selector": selector, "timeout": timeout},
            self.test_name,
            "Visibility Check",
        )
        try:
            await self._visible_locator(selector, timeout)
        except PlaywrightError as e:
            self.log.debug(f"{name} is not visible", {"selector": selector, "error": _describe(e)}, self.test_name)
            return False
        self.log.debug(f"{name} is visible", {"selector": selector}, self.test_name)
        return True

    async def is_hidden(self, selector: str, name: str, timeout: int = VISIBILITY_PROBE_TIMEOUT_MS) -> bool:
        """True once the element is hidden or detached. Never raises."""
        self.log.debug(
            f"Checking if {name} is hidden",
            {"selector": selector, "timeout": timeout},
            self.test_name,
            "Visibility Check",
        )
        try:
            await self.page.locator(selector).wait_for(state="hidden", timeout=timeout)
        except PlaywrightError as e:
            self.log.debug(f"{name} is still visible", {"selector": selector, "error": _describe(e)}, self.test_name)
            return False
        return True

    # =========================================================================
    # State-Mutating Actions
    # =========================================================================

    @allure.step("Click element: {name}")
    async def try_click(
        self,
        selector: str,
        name: str,
        max_attempts: Optional[int] = None,
        timeout: Optional[int] = None,
    ) -> Outcome[None]:
        """
        Click with a bounded, fixed-interval retry.

        Each attempt waits for visibility with a fresh timeout and then
        clicks. A failed attempt logs one WARN and, unless it was the last,
        pauses `retry_policy.delay_ms`. A successful attempt logs one INFO and
        returns at once. After the last failed attempt one ERROR is logged
        and the outcome carries ClickFailed with the last driver error.
        """
        attempts = max_attempts if max_attempts is not None else self.retry_policy.max_attempts
        if attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {attempts}")
        timeout = self.default_timeout if timeout is None else timeout
        last_error: Optional[str] = None

        for attempt in range(1, attempts + 1):
            try:
                locator = await self._visible_locator(selector, timeout)
                await locator.click(timeout=timeout)
            except PlaywrightError as e:
                last_error = _describe(e)
                self.log.warn(
                    f"⚠️ Click attempt {attempt}/{attempts} failed for {name}",
                    {"selector": selector, "attempt": attempt, "error": last_error},
                    self.test_name,
                    "Element Click",
                )
                if attempt < attempts:
                    await asyncio.sleep(self.retry_policy.delay_ms / 1000)
                continue

            self.log.info(
                f"✅ Clicked {name} (attempt {attempt}/{attempts})",
                {"selector": selector, "attempt": attempt},
                self.test_name,
                "Element Click",
            )
            return Outcome.success(attempts=attempt)

        self.log.error(
            f"❌ All click attempts failed for {name}",
            {"selector": selector, "attempts": attempts, "error": last_error},
            self.test_name,
            "Element Click",
        )
        return Outcome.failure(ClickFailed(selector, name, attempts, cause=last_error), attempts=attempts)

    async def click(
        self,
        selector: str,
        name: str,
        max_attempts: Optional[int] = None,
        timeout: Optional[int] = None,
    ) -> None:
        (await self.try_click(selector, name, max_attempts, timeout)).unwrap()

    @allure.step("Type text: {name}")
    async def try_type_text(
        self,
        selector: str,
        text: str,
        name: str,
        clear_first: bool = True,
        timeout: Optional[int] = None,
    ) -> Outcome[None]:
        """
        Type into a field in a single attempt.

        A partially typed field is not retried; any failure yields
        TextInputFailed. The typed text itself is never logged.
        """
        timeout = self.default_timeout if timeout is None else timeout
        self.log.info(
            f"Typing text into {name}",
            {"selector": selector, "text_length": len(text)},
            self.test_name,
            "Text Input",
        )
        try:
            locator = await self._visible_locator(selector, timeout)
            if clear_first:
                await locator.clear()
            await locator.fill(text)
        except PlaywrightError as e:
            error = TextInputFailed(selector, name, cause=_describe(e))
            self.log.error(
                f"❌ Failed to type text into {name}",
                {"selector": selector, "error": error.cause},
                self.test_name,
            )
            return Outcome.failure(error)

        self.log.info(f"✅ Typed text into {name}", {"selector": selector}, self.test_name)
        return Outcome.success()

    async def type_text(
        self,
        selector: str,
        text: str,
        name: str,
        clear_first: bool = True,
        timeout: Optional[int] = None,
    ) -> None:
        (await self.try_type_text(selector, text, name, clear_first, timeout)).unwrap()

    @allure.step("Scroll to: {name}")
    async def try_scroll_into_view(self, selector: str, name: str) -> Outcome[None]:
        self.log.info(f"Scrolling to {name}", {"selector": selector}, self.test_name, "Scroll Action")
        try:
            await self.page.locator(selector).scroll_into_view_if_needed(timeout=self.default_timeout)
        except PlaywrightError as e:
            error = ScrollFailed(selector, name, cause=_describe(e))
            self.log.error(f"❌ Failed to scroll to {name}", {"selector": selector, "error": error.cause}, self.test_name)
            return Outcome.failure(error)
        self.log.info(f"✅ Scrolled to {name}", {"selector": selector}, self.test_name)
        return Outcome.success()

    async def scroll_into_view(self, selector: str, name: str) -> None:
        (await self.try_scroll_into_view(selector, name)).unwrap()

    @allure.step("Select option: {name}")
    async def try_select_option(
        self,
        selector: str,
        value: str,
        name: str,
        timeout: Optional[int] = None,
    ) -> Outcome[None]:
        """Choose a dropdown option by value in a single attempt."""
        timeout = self.default_timeout if timeout is None else timeout
        self.log.info(
            f"Selecting '{value}' in {name}",
            {"selector": selector, "value": value},
            self.test_name,
            "Option Selection",
        )
        try:
            locator = await self._visible_locator(selector, timeout)
            await locator.select_option(value, timeout=timeout)
        except PlaywrightError as e:
            error = SelectionFailed(selector, name, value, cause=_describe(e))
            self.log.error(
                f"❌ Failed to select '{value}' in {name}",
                {"selector": selector, "value": value, "error": error.cause},
                self.test_name,
            )
            return Outcome.failure(error)

        self.log.info(f"✅ Selected '{value}' in {name}", {"selector": selector, "value": value}, self.test_name)
        return Outcome.success()

    async def select_option(self, selector: str, value: str, name: str, timeout: Optional[int] = None) -> None:
        (await self.try_select_option(selector, value, name, timeout)).unwrap()

    # =========================================================================
    # Readers
    # =========================================================================

    @allure.step("Get text: {name}")
    async def try_read_text(self, selector: str, name: str, timeout: Optional[int] = None) -> Outcome[str]:
        """Wait for visibility, then read text content ('' when there is none)."""
        timeout = self.default_timeout if timeout is None else timeout
        self.log.info(f"Getting text from {name}", {"selector": selector}, self.test_name, "Text Retrieval")
        try:
            locator = await self._visible_locator(selector, timeout)
            text = await locator.text_content() or ""
        except PlaywrightError as e:
            error = TextRetrievalFailed(selector, name, cause=_describe(e))
            self.log.error(
                f"❌ Failed to get text from {name}",
                {"selector": selector, "error": error.cause},
                self.test_name,
            )
            return Outcome.failure(error)

        self.log.info(f"✅ Retrieved text from {name}", {"selector": selector, "text": text}, self.test_name)
        return Outcome.success(text)

    async def read_text(self, selector: str, name: str, timeout: Optional[int] = None) -> str:
        return (await self.try_read_text(selector, name, timeout)).unwrap()

    @allure.step("Get all texts: {name}")
    async def try_read_all_texts(self, selector: str, name: str) -> Outcome[List[str]]:
        """Text of every element matching the selector, in document order. No match is []."""
        self.log.info(f"Getting all texts from {name}", {"selector": selector}, self.test_name, "Text Retrieval")
        try:
            texts = await self.page.locator(selector).all_text_contents()
        except PlaywrightError as e:
            error = TextRetrievalFailed(selector, name, cause=_describe(e))
            self.log.error(
                f"❌ Failed to get texts from {name}",
                {"selector": selector, "error": error.cause},
                self.test_name,
            )
            return Outcome.failure(error)

        self.log.info(
            f"✅ Retrieved {len(texts)} text(s) from {name}",
            {"selector": selector, "count": len(texts)},
            self.test_name,
        )
        return Outcome.success(texts)

    async def read_all_texts(self, selector: str, name: str) -> List[str]:
        return (await self.try_read_all_texts(selector, name)).unwrap()

    @allure.step("Get attribute: {name}")
    async def try_read_attribute(
        self,
        selector: str,
        attribute: str,
        name: str,
        timeout: Optional[int] = None,
    ) -> Outcome[Optional[str]]:
        """Read an attribute once the element is attached. A missing attribute is None."""
        timeout = self.default_timeout if timeout is None else timeout
        self.log.info(
            f"Getting attribute '{attribute}' from {name}",
            {"selector": selector, "attribute": attribute},
            self.test_name,
            "Attribute Retrieval",
        )
        try:
            locator = self.page.locator(selector)
            await locator.wait_for(state="attached", timeout=timeout)
            value = await locator.get_attribute(attribute)
        except PlaywrightError as e:
            error = AttributeRetrievalFailed(selector, name, attribute, cause=_describe(e))
            self.log.error(
                f"❌ Failed to get attribute '{attribute}' from {name}",
                {"selector": selector, "attribute": attribute, "error": error.cause},
                self.test_name,
            )
            return Outcome.failure(error)

        self.log.info(
            f"✅ Retrieved attribute '{attribute}' from {name}",
            {"selector": selector, "attribute": attribute, "value": value},
            self.test_name,
        )
        return Outcome.success(value)

    async def read_attribute(
        self,
        selector: str,
        attribute: str,
        name: str,
        timeout: Optional[int] = None,
    ) -> Optional[str]:
        return (await self.try_read_attribute(selector, attribute, name, timeout)).unwrap()

    # =========================================================================
    # Page-Level Operations
    # =========================================================================

    @allure.step("Navigate to: {url}")
    async def try_navigate(self, url: str, wait_until: str = "networkidle") -> Outcome[None]:
        self.log.info(f"Navigating to: {url}", {"url": url}, self.test_name, "Navigation")
        try:
            await self.page.goto(url, wait_until=wait_until)
        except PlaywrightError as e:
            error = NavigationFailed(url, cause=_describe(e))
            self.log.error(f"❌ Failed to navigate to: {url}", {"url": url, "error": error.cause}, self.test_name)
            return Outcome.failure(error)
        self.log.info(f"✅ Navigated to: {url}", {"url": url}, self.test_name)
        return Outcome.success()

    async def navigate(self, url: str, wait_until: str = "networkidle") -> None:
        (await self.try_navigate(url, wait_until)).unwrap()

    @allure.step("Reload page")
    async def try_reload(self, wait_until: str = "networkidle") -> Outcome[None]:
        self.log.info("Refreshing page", {}, self.test_name, "Page Refresh")
        try:
            await self.page.reload(wait_until=wait_until)
        except PlaywrightError as e:
            error = ReloadFailed(cause=_describe(e))
            self.log.error("❌ Failed to refresh page", {"error": error.cause}, self.test_name)
            return Outcome.failure(error)
        self.log.info("✅ Page refreshed", {}, self.test_name)
        return Outcome.success()

    async def reload(self, wait_until: str = "networkidle") -> None:
        (await self.try_reload(wait_until)).unwrap()

    @allure.step("Wait for page load")
    async def try_wait_for_page_load(self, state: str = "networkidle", timeout: Optional[int] = None) -> Outcome[None]:
        timeout = self.default_timeout if timeout is None else timeout
        self.log.info("Waiting for page to load completely", {"state": state}, self.test_name, "Page Load")
        try:
            await self.page.wait_for_load_state(state, timeout=timeout)
        except PlaywrightError as e:
            error = PageLoadFailed(state, cause=_describe(e))
            self.log.error("❌ Page load timeout", {"state": state, "error": error.cause}, self.test_name)
            return Outcome.failure(error)
        self.log.info("✅ Page loaded completely", {"state": state}, self.test_name)
        return Outcome.success()

    async def wait_for_page_load(self, state: str = "networkidle", timeout: Optional[int] = None) -> None:
        (await self.try_wait_for_page_load(state, timeout)).unwrap()

    async def sleep(self, milliseconds: int, reason: str = "General wait") -> None:
        """Suspend the calling flow. Cannot fail."""
        self.log.info(
            f"Waiting {milliseconds}ms - {reason}",
            {"milliseconds": milliseconds, "reason": reason},
            self.test_name,
            "Wait",
        )
        await asyncio.sleep(max(milliseconds, 0) / 1000)

    # =========================================================================
    # Quiet Queries (used by the assertion layer)
    # =========================================================================

    async def text_of(self, selector: str) -> Optional[str]:
        """Current text content, or None when the element cannot be read."""
        try:
            locator = self.page.locator(selector)
            if await locator.count() == 0:
                return None
            return await locator.first.text_content() or ""
        except PlaywrightError:
            return None

    async def count_of(self, selector: str) -> int:
        try:
            return await self.page.locator(selector).count()
        except PlaywrightError:
            return 0

    async def enabled_state(self, selector: str) -> Optional[bool]:
        """True/False for an attached element, None when it is missing."""
        try:
            locator = self.page.locator(selector)
            if await locator.count() == 0:
                return None
            return await locator.first.is_enabled()
        except PlaywrightError:
            return None

    def current_url(self) -> str:
        url = self.page.url
        self.log.debug("Retrieved current URL", {"url": url}, self.test_name)
        return url

    async def page_title(self) -> str:
        title = await self.page.title()
        self.log.debug("Retrieved page title", {"title": title}, self.test_name)
        return title

    # =========================================================================
    # Internals
    # =========================================================================

    async def _visible_locator(self, selector: str, timeout: int) -> Locator:
        """Silent visibility wait used inside composite primitives."""
        locator = self.page.locator(selector)
        await locator.wait_for(state="visible", timeout=timeout)
        return locator

    def context(self) -> Dict[str, Any]:
        """Summary of the configured limits, attached to failure reports."""
        return {
            "test_name": self.test_name,
            "default_timeout": self.default_timeout,
            "max_attempts": self.retry_policy.max_attempts,
            "retry_delay_ms": self.retry_policy.delay_ms,
        }


__all__ = [
    "ElementActions",
    "RetryPolicy",
    "DEFAULT_TIMEOUT_MS",
]
