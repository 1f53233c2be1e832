"""
================================================================================
Checkout Page Object (Async / Playwright)
================================================================================

Covers the three checkout screens: customer information, order overview
and order confirmation.

================================================================================
"""

from __future__ import annotations

import re
from typing import Dict

import allure

from saucedemo_autotest.ui_testing.data.fixture_data import ERROR_MESSAGES, CheckoutData
from saucedemo_autotest.ui_testing.framework.page_base import BasePage


COMPLETE_HEADER = "THANK YOU FOR YOUR ORDER"

_AMOUNT = re.compile(r"\$?(\d+(?:\.\d+)?)")


def parse_amount(label: str) -> float:
    """'Item total: $29.99' -> 29.99"""
    match = _AMOUNT.search(label)
    if match is None:
        raise ValueError(f"No amount in label: {label!r}")
    return float(match.group(1))


class CheckoutPage(BasePage):
    """Checkout flow page object (async)."""

    URL_KEY = "CHECKOUT_STEP_ONE"
    PAGE_NAME = "Checkout Page"

    SELECTORS = {
        "first_name": '[data-test="firstName"]',
        "last_name": '[data-test="lastName"]',
        "postal_code": '[data-test="postalCode"]',
        "continue_button": ".cart_button",
        "cancel_link": ".cart_cancel_link",
        "error_message": '[data-test="error"]',
        "subtotal": ".summary_subtotal_label",
        "tax": ".summary_tax_label",
        "total": ".summary_total_label",
        "finish_button": ".cart_button",
        "complete_header": ".complete-header",
    }

    # =========================================================================
    # Step One: Customer Information
    # =========================================================================

    @allure.step("Fill checkout information")
    async def fill_information(self, info: CheckoutData) -> None:
        self.log.info(
            "Filling checkout information",
            {"first_name": info.first_name, "last_name": info.last_name},
            self.test_name,
            "Checkout Information",
        )
        await self.actions.type_text(self.SELECTORS["first_name"], info.first_name, "First Name Input")
        await self.actions.type_text(self.SELECTORS["last_name"], info.last_name, "Last Name Input")
        await self.actions.type_text(self.SELECTORS["postal_code"], info.postal_code, "Postal Code Input")

    @allure.step("Continue to overview")
    async def continue_to_overview(self) -> None:
        await self.actions.click(self.SELECTORS["continue_button"], "Continue Button")

    async def assert_error_message(self, expected: str) -> None:
        await self.verify.assert_visible(self.SELECTORS["error_message"], "Error Message")
        await self.verify.assert_text(self.SELECTORS["error_message"], expected, "Error Message")

    async def assert_first_name_required(self) -> None:
        await self.assert_error_message(ERROR_MESSAGES["FIRST_NAME_REQUIRED"])

    async def assert_last_name_required(self) -> None:
        await self.assert_error_message(ERROR_MESSAGES["LAST_NAME_REQUIRED"])

    async def assert_postal_code_required(self) -> None:
        await self.assert_error_message(ERROR_MESSAGES["POSTAL_CODE_REQUIRED"])

    # =========================================================================
    # Step Two: Overview
    # =========================================================================

    async def get_totals(self) -> Dict[str, float]:
        """Subtotal, tax and total shown on the overview."""
        totals = {}
        for key, name in (("subtotal", "Item Total"), ("tax", "Tax"), ("total", "Total")):
            totals[key] = parse_amount(await self.actions.read_text(self.SELECTORS[key], name))
        return totals

    @allure.step("Verify order totals")
    async def assert_totals_consistent(self, expected_subtotal: float) -> None:
        """Item total matches the cart and total equals item total plus tax."""
        await self.verify.assert_url(self.urls["CHECKOUT_STEP_TWO"])
        await self.verify.assert_contains(self.SELECTORS["subtotal"], f"${expected_subtotal:.2f}", "Item Total")
        totals = await self.get_totals()
        await self.verify.assert_contains(
            self.SELECTORS["total"],
            f"${totals['subtotal'] + totals['tax']:.2f}",
            "Total",
        )

    @allure.step("Finish order")
    async def finish(self) -> None:
        await self.actions.click(self.SELECTORS["finish_button"], "Finish Button")

    @allure.step("Cancel checkout")
    async def cancel(self) -> None:
        await self.actions.click(self.SELECTORS["cancel_link"], "Cancel Link")

    # =========================================================================
    # Complete
    # =========================================================================

    @allure.step("Verify order completed")
    async def assert_order_complete(self) -> None:
        await self.verify.assert_url(self.urls["CHECKOUT_COMPLETE"])
        await self.verify.assert_contains(self.SELECTORS["complete_header"], COMPLETE_HEADER, "Complete Header")
