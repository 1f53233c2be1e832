"""
================================================================================
Inventory Page Object (Async / Playwright)
================================================================================

Product listing shown after a successful login.

Highlights:
  - Product names / prices read in display order
  - Add / remove by product name
  - Cart badge, sorting and side-menu logout

================================================================================
"""

from __future__ import annotations

from typing import List

import allure

from saucedemo_autotest.ui_testing.framework.page_base import BasePage


# Values of the sort dropdown
SORT_OPTIONS = {
    "name_asc": "az",
    "name_desc": "za",
    "price_asc": "lohi",
    "price_desc": "hilo",
}


class InventoryPage(BasePage):
    """Inventory page object (async)."""

    URL_KEY = "INVENTORY"
    PAGE_NAME = "Inventory Page"

    SELECTORS = {
        "inventory_list": ".inventory_list",
        "inventory_item": ".inventory_item",
        "item_name": ".inventory_item_name",
        "item_price": ".inventory_item_price",
        "cart_badge": ".shopping_cart_badge",
        "cart_link": ".shopping_cart_link",
        "sort_dropdown": ".product_sort_container",
        "menu_button": ".bm-burger-button",
        "logout_link": "#logout_sidebar_link",
    }

    def _item_button(self, product_name: str) -> str:
        return f'{self.SELECTORS["inventory_item"]}:has-text("{product_name}") button'

    @allure.step("Verify inventory page loaded")
    async def assert_loaded(self) -> None:
        await self.verify.assert_url(self.url)
        await self.verify.assert_visible(self.SELECTORS["inventory_list"], "Inventory List")

    async def is_loaded(self) -> bool:
        return await self.actions.is_visible(self.SELECTORS["inventory_list"], "Inventory List")

    async def get_item_names(self) -> List[str]:
        names = await self.actions.read_all_texts(self.SELECTORS["item_name"], "Product Names")
        return [name.strip() for name in names]

    async def get_item_prices(self) -> List[float]:
        prices = await self.actions.read_all_texts(self.SELECTORS["item_price"], "Product Prices")
        return [float(price.strip().lstrip("$")) for price in prices]

    async def get_item_count(self) -> int:
        return len(await self.get_item_names())

    @allure.step("Add product to cart: {product_name}")
    async def add_to_cart(self, product_name: str) -> None:
        await self.actions.click(self._item_button(product_name), f"Add To Cart ({product_name})")

    @allure.step("Remove product from cart: {product_name}")
    async def remove_from_cart(self, product_name: str) -> None:
        await self.actions.click(self._item_button(product_name), f"Remove ({product_name})")

    async def get_cart_badge_count(self) -> int:
        """Number on the cart badge; 0 when the badge is not shown."""
        if not await self.actions.is_visible(self.SELECTORS["cart_badge"], "Cart Badge", timeout=1000):
            return 0
        return int((await self.actions.read_text(self.SELECTORS["cart_badge"], "Cart Badge")).strip())

    async def assert_cart_badge_count(self, expected: int) -> None:
        if expected == 0:
            await self.verify.assert_hidden(self.SELECTORS["cart_badge"], "Cart Badge")
        else:
            await self.verify.assert_text(self.SELECTORS["cart_badge"], str(expected), "Cart Badge")

    @allure.step("Open cart")
    async def open_cart(self) -> None:
        await self.actions.click(self.SELECTORS["cart_link"], "Cart Link")
        await self.actions.wait_for_page_load()

    @allure.step("Sort products: {order}")
    async def sort_by(self, order: str) -> None:
        """Sort the listing; `order` is one of SORT_OPTIONS."""
        if order not in SORT_OPTIONS:
            raise ValueError(f"Unknown sort order '{order}', expected one of {sorted(SORT_OPTIONS)}")
        await self.actions.select_option(self.SELECTORS["sort_dropdown"], SORT_OPTIONS[order], "Sort Dropdown")

    @allure.step("Logout")
    async def logout(self) -> None:
        """Logout through the side menu and land back on the login page."""
        await self.actions.click(self.SELECTORS["menu_button"], "Menu Button")
        await self.actions.click(self.SELECTORS["logout_link"], "Logout Link")
        await self.verify.assert_url(self.urls["LOGIN"])
