"""
================================================================================
Assertion Layer
================================================================================

Hard and soft UI assertions built on Playwright's auto-retrying `expect`.

Hard assertions log the intent, log INFO on success or an ERROR carrying the
expected/actual diagnostic on failure, and raise a kind-specific
AssertionFailed whose `cause` is the driver's own failure message. Soft
assertions run the same checks, return a bool, log WARN on failure and
remember the failure so a page object can aggregate several checks into one
hard failure with `assert_soft_assertions()`.

When a check fails, the actual value is read again after the failure for
display only; it may differ from the value `expect` last compared.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, List, Optional

import allure
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, expect

from .element_actions import ElementActions
from .errors import ASSERTION_TYPES, AssertionFailed, SoftAssertionsFailed


DEFAULT_ASSERT_TIMEOUT_MS = 5000

# Shown in place of an actual value when the element does not exist
MISSING_ELEMENT = "element not found"


@dataclass
class CheckOutcome:
    """
    Outcome of a single check.

    Attributes:
        passed: Whether the condition held
        kind: visibility / text / count / enabled / title / url
        element_name: Human-readable element (or page) name
        selector: Selector checked, None for page-level checks
        expected: Expected value
        actual: Observed value (for display)
        message: Failure description
        cause: Failure message reported by Playwright
    """

    passed: bool
    kind: str
    element_name: str
    selector: Optional[str]
    expected: Any
    actual: Any
    message: str = ""
    cause: Optional[str] = None

    def to_error(self) -> AssertionFailed:
        error_type = ASSERTION_TYPES.get(self.kind, AssertionFailed)
        return error_type(
            self.message,
            element_name=self.element_name,
            selector=self.selector,
            expected=self.expected,
            actual=self.actual,
            cause=self.cause,
        )

    def diagnostic(self) -> dict:
        payload = {"expected": self.expected, "actual": self.actual}
        if self.selector is not None:
            payload["selector"] = self.selector
        if self.cause is not None:
            payload["error"] = self.cause
        return payload


def _failure_text(exc: BaseException) -> str:
    # Keep the expectation and actual value, drop the call log
    text = str(exc).split("Call log:")[0]
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    return " ".join(lines) if lines else type(exc).__name__


def _shown(value: Optional[str]) -> str:
    return MISSING_ELEMENT if value is None else f"\"{value}\""


class Assertions:
    """
    Hard and soft assertions over a page.

    Example:
        verify = Assertions(actions)
        await verify.assert_visible(".login_logo", "Login Logo")
        ok = await verify.soft_assert_text(".title", "Products", "Page Header")
        verify.assert_soft_assertions()
    """

    def __init__(self, actions: ElementActions, default_timeout: int = DEFAULT_ASSERT_TIMEOUT_MS):
        self.actions = actions
        self.default_timeout = default_timeout
        self._soft_failures: List[CheckOutcome] = []

    @property
    def log(self):
        return self.actions.log

    @property
    def page(self):
        return self.actions.page

    @property
    def test_name(self) -> str:
        return self.actions.test_name

    # =========================================================================
    # Checks
    # =========================================================================

    async def check_visible(self, selector: str, name: str, timeout: Optional[int] = None) -> CheckOutcome:
        cause = await self._holds(expect(self._locator(selector)).to_be_visible(timeout=self._timeout(timeout)))
        return CheckOutcome(
            passed=cause is None,
            kind="visibility",
            element_name=name,
            selector=selector,
            expected="visible",
            actual="visible" if cause is None else "not visible",
            message=f"Assertion failed: {name} with selector '{selector}' is not visible. {cause}",
            cause=cause,
        )

    async def check_hidden(self, selector: str, name: str, timeout: Optional[int] = None) -> CheckOutcome:
        cause = await self._holds(expect(self._locator(selector)).to_be_hidden(timeout=self._timeout(timeout)))
        return CheckOutcome(
            passed=cause is None,
            kind="visibility",
            element_name=name,
            selector=selector,
            expected="hidden",
            actual="hidden" if cause is None else "visible",
            message=f"Assertion failed: {name} with selector '{selector}' is still visible. {cause}",
            cause=cause,
        )

    async def check_text(
        self,
        selector: str,
        expected: str,
        name: str,
        timeout: Optional[int] = None,
        contains: bool = False,
    ) -> CheckOutcome:
        assertions = expect(self._locator(selector))
        if contains:
            cause = await self._holds(assertions.to_contain_text(expected, timeout=self._timeout(timeout)))
        else:
            cause = await self._holds(assertions.to_have_text(expected, timeout=self._timeout(timeout)))

        actual: Optional[str] = expected
        message = ""
        if cause is not None:
            actual = await self.actions.text_of(selector)
            if contains:
                message = f"Assertion failed: {name} does not contain \"{expected}\". Actual text: {_shown(actual)}"
            else:
                message = (
                    f"Assertion failed: {name} text mismatch. "
                    f"Expected: \"{expected}\", Actual: {_shown(actual)}"
                )
        return CheckOutcome(
            passed=cause is None,
            kind="text",
            element_name=name,
            selector=selector,
            expected=expected,
            actual=actual,
            message=message,
            cause=cause,
        )

    async def check_count(self, selector: str, expected: int, name: str, timeout: Optional[int] = None) -> CheckOutcome:
        cause = await self._holds(
            expect(self._locator(selector)).to_have_count(expected, timeout=self._timeout(timeout))
        )
        actual = expected if cause is None else await self.actions.count_of(selector)
        return CheckOutcome(
            passed=cause is None,
            kind="count",
            element_name=name,
            selector=selector,
            expected=expected,
            actual=actual,
            message=f"Assertion failed: {name} count mismatch. Expected: {expected}, Actual: {actual}",
            cause=cause,
        )

    async def check_enabled(
        self,
        selector: str,
        name: str,
        enabled: bool = True,
        timeout: Optional[int] = None,
    ) -> CheckOutcome:
        assertions = expect(self._locator(selector))
        if enabled:
            cause = await self._holds(assertions.to_be_enabled(timeout=self._timeout(timeout)))
        else:
            cause = await self._holds(assertions.to_be_disabled(timeout=self._timeout(timeout)))

        state = enabled if cause is None else await self.actions.enabled_state(selector)
        actual = {True: "enabled", False: "disabled", None: "missing"}[state]
        expected = "enabled" if enabled else "disabled"
        return CheckOutcome(
            passed=cause is None,
            kind="enabled",
            element_name=name,
            selector=selector,
            expected=expected,
            actual=actual,
            message=f"Assertion failed: {name} with selector '{selector}' is {actual}, expected {expected}",
            cause=cause,
        )

    async def check_title(self, expected: str, timeout: Optional[int] = None) -> CheckOutcome:
        cause = await self._holds(expect(self.page).to_have_title(expected, timeout=self._timeout(timeout)))
        actual = expected if cause is None else await self._title()
        return CheckOutcome(
            passed=cause is None,
            kind="title",
            element_name="Page Title",
            selector=None,
            expected=expected,
            actual=actual,
            message=f"Assertion failed: Page title mismatch. Expected: \"{expected}\", Actual: \"{actual}\"",
            cause=cause,
        )

    async def check_url(self, expected: str, timeout: Optional[int] = None) -> CheckOutcome:
        cause = await self._holds(expect(self.page).to_have_url(expected, timeout=self._timeout(timeout)))
        actual = expected if cause is None else self.page.url
        return CheckOutcome(
            passed=cause is None,
            kind="url",
            element_name="Page URL",
            selector=None,
            expected=expected,
            actual=actual,
            message=f"Assertion failed: Page URL mismatch. Expected: \"{expected}\", Actual: \"{actual}\"",
            cause=cause,
        )

    # =========================================================================
    # Hard Assertions
    # =========================================================================

    @allure.step("Assert visible: {name}")
    async def assert_visible(self, selector: str, name: str, timeout: int = 10000) -> None:
        self._intent(f"Asserting {name} is visible", {"selector": selector}, "Element Visibility Check")
        self._settle(await self.check_visible(selector, name, timeout), f"{name} is visible")

    @allure.step("Assert hidden: {name}")
    async def assert_hidden(self, selector: str, name: str, timeout: int = 5000) -> None:
        self._intent(f"Asserting {name} is hidden", {"selector": selector}, "Element Hidden Check")
        self._settle(await self.check_hidden(selector, name, timeout), f"{name} is hidden")

    @allure.step("Assert text: {name}")
    async def assert_text(self, selector: str, expected: str, name: str, timeout: Optional[int] = None) -> None:
        self._intent(f"Asserting {name} has text: \"{expected}\"", {"selector": selector}, "Text Assertion")
        self._settle(await self.check_text(selector, expected, name, timeout), f"{name} has correct text")

    @allure.step("Assert contains: {name}")
    async def assert_contains(self, selector: str, expected: str, name: str, timeout: Optional[int] = None) -> None:
        self._intent(
            f"Asserting {name} contains text: \"{expected}\"",
            {"selector": selector},
            "Text Contains Assertion",
        )
        outcome = await self.check_text(selector, expected, name, timeout, contains=True)
        self._settle(outcome, f"{name} contains expected text")

    @allure.step("Assert count: {name}")
    async def assert_count(self, selector: str, expected: int, name: str, timeout: Optional[int] = None) -> None:
        self._intent(f"Asserting {name} count: {expected}", {"selector": selector}, "Element Count Check")
        self._settle(await self.check_count(selector, expected, name, timeout), f"{name} has correct count")

    @allure.step("Assert enabled: {name}")
    async def assert_enabled(self, selector: str, name: str, timeout: Optional[int] = None) -> None:
        self._intent(f"Asserting {name} is enabled", {"selector": selector}, "Element Enabled Check")
        self._settle(await self.check_enabled(selector, name, True, timeout), f"{name} is enabled")

    @allure.step("Assert disabled: {name}")
    async def assert_disabled(self, selector: str, name: str, timeout: Optional[int] = None) -> None:
        self._intent(f"Asserting {name} is disabled", {"selector": selector}, "Element Disabled Check")
        self._settle(await self.check_enabled(selector, name, False, timeout), f"{name} is disabled")

    @allure.step("Assert page title: {expected}")
    async def assert_title(self, expected: str, timeout: Optional[int] = None) -> None:
        self._intent(f"Asserting page title: \"{expected}\"", {}, "Page Title Check")
        self._settle(await self.check_title(expected, timeout), "Page has correct title")

    @allure.step("Assert page URL: {expected}")
    async def assert_url(self, expected: str, timeout: Optional[int] = None) -> None:
        self._intent(f"Asserting page URL: \"{expected}\"", {}, "Page URL Check")
        self._settle(await self.check_url(expected, timeout), "Page has correct URL")

    # =========================================================================
    # Soft Assertions
    # =========================================================================

    async def soft_assert_visible(self, selector: str, name: str, timeout: int = 5000) -> bool:
        outcome = await self.check_visible(selector, name, timeout)
        return self._soft(outcome, f"{name} is visible", f"{name} is not visible")

    async def soft_assert_text(self, selector: str, expected: str, name: str, timeout: Optional[int] = None) -> bool:
        outcome = await self.check_text(selector, expected, name, timeout)
        return self._soft(outcome, f"{name} has correct text", f"{name} text mismatch")

    @property
    def soft_failures(self) -> List[CheckOutcome]:
        return list(self._soft_failures)

    def reset_soft_assertions(self) -> None:
        self._soft_failures = []

    def assert_soft_assertions(self) -> None:
        """Raise one failure summarizing every collected soft failure."""
        failures, self._soft_failures = self._soft_failures, []
        if not failures:
            return
        lines = [f"{len(failures)} soft assertion(s) failed:"]
        lines.extend(f"  - {failure.message}" for failure in failures)
        message = "\n".join(lines)
        self.log.error(
            f"❌ {len(failures)} soft assertion(s) failed",
            {"failures": [failure.diagnostic() | {"element_name": failure.element_name} for failure in failures]},
            self.test_name,
        )
        raise SoftAssertionsFailed(message, failures)

    # =========================================================================
    # Internals
    # =========================================================================

    def _locator(self, selector: str) -> Locator:
        return self.page.locator(selector)

    def _timeout(self, timeout: Optional[int]) -> int:
        return self.default_timeout if timeout is None else timeout

    async def _holds(self, expectation: Awaitable[None]) -> Optional[str]:
        """Await an `expect` call; None when it held, else Playwright's failure message."""
        try:
            await expectation
        except (AssertionError, PlaywrightError) as e:
            return _failure_text(e)
        return None

    async def _title(self) -> Optional[str]:
        try:
            return await self.page.title()
        except PlaywrightError:
            return None

    def _intent(self, message: str, data: dict, step: str) -> None:
        self.log.info(message, data, self.test_name, step)

    def _settle(self, outcome: CheckOutcome, success_message: str) -> None:
        if outcome.passed:
            self.log.info(f"✅ {success_message}", outcome.diagnostic(), self.test_name)
            return
        self.log.error(f"❌ {outcome.message}", outcome.diagnostic(), self.test_name)
        raise outcome.to_error()

    def _soft(self, outcome: CheckOutcome, success_message: str, failure_message: str) -> bool:
        if outcome.passed:
            self.log.info(f"✅ Soft assertion passed: {success_message}", outcome.diagnostic(), self.test_name)
            return True
        self.log.warn(f"⚠️ Soft assertion failed: {failure_message}", outcome.diagnostic(), self.test_name)
        self._soft_failures.append(outcome)
        return False


__all__ = [
    "Assertions",
    "CheckOutcome",
    "MISSING_ELEMENT",
]
