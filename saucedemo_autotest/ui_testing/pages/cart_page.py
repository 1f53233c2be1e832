"""
================================================================================
Cart Page Object (Async / Playwright)
================================================================================
"""

from __future__ import annotations

from typing import List

import allure

from saucedemo_autotest.ui_testing.framework.page_base import BasePage


class CartPage(BasePage):
    """Shopping cart page object (async)."""

    URL_KEY = "CART"
    PAGE_NAME = "Cart Page"

    SELECTORS = {
        "cart_list": ".cart_list",
        "cart_item": ".cart_item",
        "item_name": ".cart_item .inventory_item_name",
        "continue_shopping": ".cart_footer .btn_secondary",
        "checkout_button": ".checkout_button",
    }

    @allure.step("Verify cart page loaded")
    async def assert_loaded(self) -> None:
        await self.verify.assert_url(self.url)
        await self.verify.assert_visible(self.SELECTORS["cart_list"], "Cart List")

    async def get_item_names(self) -> List[str]:
        names = await self.actions.read_all_texts(self.SELECTORS["item_name"], "Cart Item Names")
        return [name.strip() for name in names]

    async def get_item_count(self) -> int:
        return len(await self.get_item_names())

    async def assert_item_count(self, expected: int) -> None:
        await self.verify.assert_count(self.SELECTORS["cart_item"], expected, "Cart Items")

    @allure.step("Remove product from cart: {product_name}")
    async def remove_item(self, product_name: str) -> None:
        selector = f'{self.SELECTORS["cart_item"]}:has-text("{product_name}") button'
        await self.actions.click(selector, f"Remove ({product_name})")

    @allure.step("Continue shopping")
    async def continue_shopping(self) -> None:
        await self.actions.click(self.SELECTORS["continue_shopping"], "Continue Shopping Button")
        await self.verify.assert_url(self.urls["INVENTORY"])

    @allure.step("Proceed to checkout")
    async def checkout(self) -> None:
        await self.actions.click(self.SELECTORS["checkout_button"], "Checkout Button")
        await self.verify.assert_url(self.urls["CHECKOUT_STEP_ONE"])
