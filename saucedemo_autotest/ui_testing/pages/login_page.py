"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

This module provides the SauceDemo login page object.

Highlights:
  - Every browser call goes through `self.actions` / `self.verify`
  - Credentials come from the fixture tables, never from literals in tests
  - Error banner helpers for the locked-out / invalid / empty-field cases

================================================================================
"""

from __future__ import annotations

import re
from typing import List

import allure

from saucedemo_autotest.ui_testing.data.fixture_data import (
    EMPTY_CREDENTIALS,
    ERROR_MESSAGES,
    INVALID_CREDENTIALS,
    UserCredentials,
    get_user_by_type,
)
from saucedemo_autotest.ui_testing.framework.page_base import BasePage


USERNAME_PATTERN = re.compile(r"\b\w+_user\b")


class LoginPage(BasePage):
    """Login page object (async)."""

    URL_KEY = "LOGIN"
    PAGE_NAME = "Login Page"

    SELECTORS = {
        "username_input": '[data-test="username"]',
        "password_input": '[data-test="password"]',
        "login_button": "#login-button",
        "error_message": '[data-test="error"]',
        "error_button": ".error-button",
        "login_logo": ".login_logo",
        "login_container": "#login_button_container",
        "credentials_container": "#login_credentials",
    }

    # Pause after submitting so the store can route or render its banner
    SUBMIT_SETTLE_MS = 1000

    @allure.step("Open login page")
    async def open(self) -> "LoginPage":
        """Navigate to the login page and wait for the logo."""
        await super().open()
        await self.verify.assert_visible(self.SELECTORS["login_logo"], "Login Logo")
        return self

    async def enter_username(self, username: str) -> None:
        await self.actions.type_text(self.SELECTORS["username_input"], username, "Username Input")

    async def enter_password(self, password: str) -> None:
        await self.actions.type_text(self.SELECTORS["password_input"], password, "Password Input")

    async def click_login_button(self) -> None:
        await self.actions.click(self.SELECTORS["login_button"], "Login Button")

    @allure.step("Login with fixture credentials")
    async def login(self, credentials: UserCredentials) -> None:
        """Fill the form with `credentials` and submit it."""
        self.log.info(
            f"Attempting login with user: {credentials.username}",
            {"username": credentials.username, "user_type": credentials.user_type},
            self.test_name,
            "Login Process",
        )
        await self._submit(credentials, "Login processing")

    async def login_as(self, user_type: str) -> None:
        """Login with the fixture user of `user_type` ('standard', 'locked_out', ...)."""
        await self.login(get_user_by_type(user_type))

    @allure.step("Login with invalid credentials")
    async def login_with_invalid_credentials(self) -> None:
        self.log.info(
            "Attempting login with invalid credentials",
            {"username": INVALID_CREDENTIALS.username},
            self.test_name,
            "Invalid Login Test",
        )
        await self._submit(INVALID_CREDENTIALS, "Invalid login processing")

    @allure.step("Login with empty credentials")
    async def login_with_empty_credentials(self) -> None:
        self.log.info("Attempting login with empty credentials", {}, self.test_name, "Empty Credentials Test")
        await self._submit(EMPTY_CREDENTIALS, "Empty login processing")

    async def _submit(self, credentials: UserCredentials, reason: str) -> None:
        await self.enter_username(credentials.username)
        await self.enter_password(credentials.password)
        await self.click_login_button()
        await self.actions.sleep(self.SUBMIT_SETTLE_MS, reason)

    # =========================================================================
    # Error Banner
    # =========================================================================

    async def get_error_message(self) -> str:
        return await self.actions.read_text(self.SELECTORS["error_message"], "Error Message")

    async def is_error_message_displayed(self) -> bool:
        return await self.actions.is_visible(self.SELECTORS["error_message"], "Error Message")

    @allure.step("Verify error message: {expected}")
    async def assert_error_message(self, expected: str) -> None:
        await self.verify.assert_visible(self.SELECTORS["error_message"], "Error Message")
        await self.verify.assert_text(self.SELECTORS["error_message"], expected, "Error Message")

    async def assert_locked_out_user_error(self) -> None:
        await self.assert_error_message(ERROR_MESSAGES["LOCKED_OUT_USER"])

    async def assert_invalid_credentials_error(self) -> None:
        await self.assert_error_message(ERROR_MESSAGES["INVALID_CREDENTIALS"])

    async def assert_empty_username_error(self) -> None:
        await self.assert_error_message(ERROR_MESSAGES["EMPTY_USERNAME"])

    async def assert_empty_password_error(self) -> None:
        await self.assert_error_message(ERROR_MESSAGES["EMPTY_PASSWORD"])

    @allure.step("Dismiss error message")
    async def clear_error_message(self) -> None:
        if await self.is_error_message_displayed():
            await self.actions.click(self.SELECTORS["error_button"], "Error Close Button")

    # =========================================================================
    # Form State
    # =========================================================================

    async def is_login_form_displayed(self) -> bool:
        username_ok = await self.actions.is_visible(self.SELECTORS["username_input"], "Username Input")
        password_ok = await self.actions.is_visible(self.SELECTORS["password_input"], "Password Input")
        button_ok = await self.actions.is_visible(self.SELECTORS["login_button"], "Login Button")
        return username_ok and password_ok and button_ok

    @allure.step("Verify login form is displayed")
    async def assert_login_form_displayed(self) -> None:
        await self.verify.assert_visible(self.SELECTORS["username_input"], "Username Input")
        await self.verify.assert_visible(self.SELECTORS["password_input"], "Password Input")
        await self.verify.assert_visible(self.SELECTORS["login_button"], "Login Button")

    async def get_available_usernames(self) -> List[str]:
        """
        Usernames listed in the credentials hint box.

        Returns [] (with a WARN) when the box cannot be read.
        """
        outcome = await self.actions.try_read_text(self.SELECTORS["credentials_container"], "Credentials Container")
        if not outcome.ok:
            self.log.warn(
                "Could not retrieve available usernames from page",
                {"error": outcome.error.message},
                self.test_name,
            )
            return []
        return USERNAME_PATTERN.findall(outcome.value)

    async def clear_all_fields(self) -> None:
        await self.actions.type_text(self.SELECTORS["username_input"], "", "Username Input")
        await self.actions.type_text(self.SELECTORS["password_input"], "", "Password Input")

    # =========================================================================
    # Outcome Assertions
    # =========================================================================

    @allure.step("Verify successful login")
    async def assert_successful_login(self) -> None:
        """User lands on the inventory page."""
        await self.actions.wait_for_page_load()
        await self.verify.assert_url(self.urls["INVENTORY"])
        self.log.info(
            "✓ Login successful - redirected to inventory page",
            {"url": self.current_url},
            self.test_name,
        )

    @allure.step("Verify login failed")
    async def assert_login_failed(self) -> None:
        """User stays on the login page and sees the error banner."""
        await self.verify.assert_url(self.urls["LOGIN"])
        await self.verify.assert_visible(self.SELECTORS["error_message"], "Error Message")
        self.log.info(
            "✓ Login failed as expected - remained on login page",
            {"url": self.current_url},
            self.test_name,
        )
