"""Static fixture data for the SauceDemo store."""

from .fixture_data import (
    CHECKOUT_INFO,
    EMPTY_CREDENTIALS,
    ERROR_MESSAGES,
    INVALID_CREDENTIALS,
    PRODUCTS,
    TIMEOUTS,
    URLS,
    USERS,
    CheckoutData,
    ProductData,
    UserCredentials,
    get_all_products,
    get_all_users,
    get_error_message,
    get_product_by_name,
    get_random_product,
    get_random_products,
    get_user_by_type,
)

__all__ = [
    "CHECKOUT_INFO",
    "EMPTY_CREDENTIALS",
    "ERROR_MESSAGES",
    "INVALID_CREDENTIALS",
    "PRODUCTS",
    "TIMEOUTS",
    "URLS",
    "USERS",
    "CheckoutData",
    "ProductData",
    "UserCredentials",
    "get_all_products",
    "get_all_users",
    "get_error_message",
    "get_product_by_name",
    "get_random_product",
    "get_random_products",
    "get_user_by_type",
]
