import pytest

from saucedemo_autotest.ui_testing.data.fixture_data import CHECKOUT_INFO, ERROR_MESSAGES, USERS
from saucedemo_autotest.ui_testing.framework import page_base
from saucedemo_autotest.ui_testing.framework.errors import ClickFailed, TextAssertionFailed
from saucedemo_autotest.ui_testing.framework.page_base import BasePage
from saucedemo_autotest.ui_testing.framework.structured_logger import LogLevel
from saucedemo_autotest.ui_testing.pages.cart_page import CartPage
from saucedemo_autotest.ui_testing.pages.checkout_page import CheckoutPage, parse_amount
from saucedemo_autotest.ui_testing.pages.inventory_page import InventoryPage
from saucedemo_autotest.ui_testing.pages.login_page import LoginPage
from saucedemo_autotest.unit.fakes import TEST_NAME

INVENTORY_URL = "https://www.saucedemo.com/v1/inventory.html"
S = LoginPage.SELECTORS


def make(page_cls, fake_page, log, settings):
    page = page_cls(fake_page, log, TEST_NAME, settings)
    page.actions.default_timeout = 50
    page.verify.default_timeout = 50
    return page


@pytest.fixture
def login(fake_page, log, settings):
    page = make(LoginPage, fake_page, log, settings)
    page.SUBMIT_SETTLE_MS = 0
    for key in ("username_input", "password_input", "login_button", "login_logo"):
        fake_page.add(S[key])
    return page


# =============================================================================
# LoginPage
# =============================================================================

async def test_open_navigates_to_configured_login_url(fake_page, login):
    fake_page.url = "about:blank"

    await login.open()

    assert fake_page.visited == [login.settings.base_url]


async def test_successful_login(fake_page, login, log):
    button = fake_page.elements[S["login_button"]][0]
    button.on_click = lambda: setattr(fake_page, "url", INVENTORY_URL)

    await login.login(USERS["STANDARD_USER"])
    await login.assert_successful_login()

    assert fake_page.elements[S["username_input"]][0].value == "standard_user"
    assert fake_page.elements[S["password_input"]][0].value == "secret_sauce"
    clicks = [e for e in log.query() if e.step_name == "Element Click"]
    assert [e.level for e in clicks] == [LogLevel.INFO]
    assert log.query()[0].step_name == "Login Process"


async def test_locked_out_login_shows_error(fake_page, login):
    button = fake_page.elements[S["login_button"]][0]
    button.on_click = lambda: fake_page.add(S["error_message"], text=ERROR_MESSAGES["LOCKED_OUT_USER"])

    await login.login_as("locked_out")

    await login.assert_login_failed()
    await login.assert_locked_out_user_error()
    assert await login.get_error_message() == ERROR_MESSAGES["LOCKED_OUT_USER"]
    with pytest.raises(TextAssertionFailed):
        await login.assert_invalid_credentials_error()


async def test_invalid_and_empty_credentials_submit_fixture_values(fake_page, login):
    await login.login_with_invalid_credentials()
    assert fake_page.elements[S["username_input"]][0].fills[-1] == "invalid_user"

    await login.login_with_empty_credentials()
    assert fake_page.elements[S["username_input"]][0].value == ""
    assert fake_page.elements[S["login_button"]][0].clicks == 2


async def test_unresponsive_login_button_fails_after_retries(fake_page, login, log):
    fake_page.elements[S["login_button"]][0].click_failures = 10

    with pytest.raises(ClickFailed):
        await login.click_login_button()

    assert len([e for e in log.query() if e.level is LogLevel.WARN]) == login.settings.click_attempts


async def test_clear_error_message(fake_page, login):
    fake_page.add(S["error_message"], text="Epic sadface: Username is required")
    close = fake_page.add(S["error_button"])
    close.on_click = lambda: fake_page.remove(S["error_message"])

    await login.clear_error_message()

    assert close.clicks == 1
    assert S["error_message"] not in fake_page.elements


async def test_login_form_displayed(fake_page, login):
    assert await login.is_login_form_displayed()
    await login.assert_login_form_displayed()


async def test_available_usernames(fake_page, login):
    fake_page.add(
        S["credentials_container"],
        text="Accepted usernames are:\nstandard_user\nlocked_out_user\nproblem_user\nperformance_glitch_user",
    )

    assert await login.get_available_usernames() == [
        "standard_user",
        "locked_out_user",
        "problem_user",
        "performance_glitch_user",
    ]


async def test_available_usernames_when_box_is_missing(login, log):
    assert await login.get_available_usernames() == []
    assert log.query()[-1].level is LogLevel.WARN


async def test_clear_all_fields(fake_page, login):
    fake_page.elements[S["username_input"]][0].value = "someone"

    await login.clear_all_fields()

    assert fake_page.elements[S["username_input"]][0].value == ""
    assert fake_page.elements[S["password_input"]][0].value == ""


# =============================================================================
# InventoryPage
# =============================================================================

@pytest.fixture
def inventory(fake_page, log, settings):
    fake_page.url = INVENTORY_URL
    page = make(InventoryPage, fake_page, log, settings)
    fake_page.add(page.SELECTORS["inventory_list"])
    for name, price in (("Sauce Labs Backpack", "$29.99"), ("Sauce Labs Onesie", "$7.99")):
        fake_page.add(page.SELECTORS["item_name"], text=name)
        fake_page.add(page.SELECTORS["item_price"], text=price)
    return page


async def test_inventory_listing(inventory):
    await inventory.assert_loaded()

    assert await inventory.get_item_names() == ["Sauce Labs Backpack", "Sauce Labs Onesie"]
    assert await inventory.get_item_prices() == [29.99, 7.99]
    assert await inventory.get_item_count() == 2


async def test_add_to_cart_updates_badge(fake_page, inventory):
    button = fake_page.add('.inventory_item:has-text("Sauce Labs Backpack") button')
    button.on_click = lambda: fake_page.add(".shopping_cart_badge", text="1")

    assert await inventory.get_cart_badge_count() == 0
    await inventory.add_to_cart("Sauce Labs Backpack")

    assert await inventory.get_cart_badge_count() == 1
    await inventory.assert_cart_badge_count(1)


async def test_sort_by(fake_page, inventory):
    dropdown = fake_page.add(".product_sort_container", options=["az", "za", "lohi", "hilo"])

    await inventory.sort_by("price_desc")

    assert dropdown.value == "hilo"
    with pytest.raises(ValueError):
        await inventory.sort_by("popularity")


async def test_logout(fake_page, inventory):
    fake_page.add(".bm-burger-button")
    link = fake_page.add("#logout_sidebar_link")
    link.on_click = lambda: setattr(fake_page, "url", inventory.urls["LOGIN"])

    await inventory.logout()

    assert link.clicks == 1


# =============================================================================
# CartPage / CheckoutPage
# =============================================================================

async def test_cart_checkout(fake_page, log, settings):
    cart = make(CartPage, fake_page, log, settings)
    fake_page.url = cart.url
    fake_page.add(".cart_list")
    fake_page.add(".cart_item")
    fake_page.add(".cart_item .inventory_item_name", text="Sauce Labs Onesie")
    checkout = fake_page.add(".checkout_button")
    checkout.on_click = lambda: setattr(fake_page, "url", cart.urls["CHECKOUT_STEP_ONE"])

    await cart.assert_loaded()
    await cart.assert_item_count(1)
    assert await cart.get_item_names() == ["Sauce Labs Onesie"]
    await cart.checkout()


async def test_checkout_information_and_totals(fake_page, log, settings):
    page = make(CheckoutPage, fake_page, log, settings)
    for key in ("first_name", "last_name", "postal_code"):
        fake_page.add(page.SELECTORS[key])

    await page.fill_information(CHECKOUT_INFO)

    assert fake_page.elements['[data-test="postalCode"]'][0].value == "12345"

    fake_page.url = page.urls["CHECKOUT_STEP_TWO"]
    fake_page.add(".summary_subtotal_label", text="Item total: $37.98")
    fake_page.add(".summary_tax_label", text="Tax: $3.04")
    fake_page.add(".summary_total_label", text="Total: $41.02")

    assert await page.get_totals() == {"subtotal": 37.98, "tax": 3.04, "total": 41.02}
    await page.assert_totals_consistent(37.98)


async def test_checkout_required_field_error(fake_page, log, settings):
    page = make(CheckoutPage, fake_page, log, settings)
    fake_page.add('[data-test="error"]', text=ERROR_MESSAGES["POSTAL_CODE_REQUIRED"])

    await page.assert_postal_code_required()


def test_parse_amount():
    assert parse_amount("Item total: $29.99") == 29.99
    assert parse_amount("Total: $7") == 7.0
    with pytest.raises(ValueError):
        parse_amount("Total:")


# =============================================================================
# BasePage Utilities
# =============================================================================

async def test_take_screenshot(fake_page, log, settings, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    page = BasePage(fake_page, log, TEST_NAME, settings)

    path = await page.take_screenshot("login")

    assert path is not None and (tmp_path / path).exists()
    assert path.name.startswith("login_")


async def test_take_screenshot_never_raises(fake_page, log, settings, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    fake_page.screenshot_error = "Target page, context or browser has been closed"
    page = BasePage(fake_page, log, TEST_NAME, settings)

    assert await page.take_screenshot("closed") is None
    assert log.query()[-1].level is LogLevel.ERROR

    await page.capture_failure("closed_case")


def test_page_uses_configured_retry_policy(fake_page, log, settings):
    page = BasePage(fake_page, log, TEST_NAME, settings)

    assert page.actions.retry_policy.max_attempts == settings.click_attempts
    assert page.actions.retry_policy.delay_ms == settings.retry_delay_ms
    assert page.url == settings.base_url
    assert page.current_url == fake_page.url


def test_pages_extend_base_page():
    for page_cls in (LoginPage, InventoryPage, CartPage, CheckoutPage):
        assert page_cls.__bases__ == (BasePage,)
    assert not hasattr(page_base, "PageBase")
