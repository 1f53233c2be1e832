"""
================================================================================
Fixture Data
================================================================================

Static, immutable test data for the demo store: user credentials, products,
checkout information, expected error messages, page URLs and timeouts.

Lookups by logical key raise FixtureNotFound for unknown keys; a missing
fixture is a configuration error, never something to retry.

================================================================================
"""

from __future__ import annotations

import os
import random
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional

from saucedemo_autotest.common.config_loader import build_urls, get_environment_url
from saucedemo_autotest.ui_testing.framework.errors import FixtureNotFound


# ================================================================================
# Data Models
# ================================================================================

USER_TYPES = ("standard", "locked_out", "problem", "performance", "visual")


@dataclass(frozen=True)
class UserCredentials:
    """Login credentials for one demo account."""
    username: str
    password: str
    user_type: str
    description: str = ""


@dataclass(frozen=True)
class ProductData:
    """Catalogue entry as displayed on the inventory page."""
    id: str
    name: str
    description: str
    price: str
    image_name: str

    @property
    def price_value(self) -> float:
        return float(self.price.lstrip("$"))


@dataclass(frozen=True)
class CheckoutData:
    """Customer information entered on checkout step one."""
    first_name: str
    last_name: str
    postal_code: str


# ================================================================================
# Tables
# ================================================================================

USERS: Mapping[str, UserCredentials] = MappingProxyType({
    "STANDARD_USER": UserCredentials(
        "standard_user", "secret_sauce", "standard", "Standard user with full access"
    ),
    "LOCKED_OUT_USER": UserCredentials(
        "locked_out_user", "secret_sauce", "locked_out", "User that has been locked out"
    ),
    "PROBLEM_USER": UserCredentials(
        "problem_user", "secret_sauce", "problem", "User with problems (images not loading correctly)"
    ),
    "PERFORMANCE_GLITCH_USER": UserCredentials(
        "performance_glitch_user", "secret_sauce", "performance", "User with performance issues"
    ),
    "VISUAL_USER": UserCredentials(
        "visual_user", "secret_sauce", "visual", "User for visual testing"
    ),
})

PRODUCTS: Mapping[str, ProductData] = MappingProxyType({
    "SAUCE_LABS_BACKPACK": ProductData(
        id="4",
        name="Sauce Labs Backpack",
        description=(
            "carry.allTheThings() with the sleek, streamlined Sly Pack that melds uncompromising "
            "style with unequaled laptop and tablet protection."
        ),
        price="$29.99",
        image_name="sauce-backpack-1200x1500.jpg",
    ),
    "SAUCE_LABS_BIKE_LIGHT": ProductData(
        id="0",
        name="Sauce Labs Bike Light",
        description=(
            "A red light isn't the desired state in testing but it sure helps when riding your "
            "bike at night. Water-resistant with 3 lighting modes, 1 AAA battery included."
        ),
        price="$9.99",
        image_name="bike-light-1200x1500.jpg",
    ),
    "SAUCE_LABS_BOLT_T_SHIRT": ProductData(
        id="1",
        name="Sauce Labs Bolt T-Shirt",
        description=(
            "Get your testing superhero on with the Sauce Labs bolt T-shirt. From American "
            "Apparel, 100% ringspun combed cotton, heather gray with red bolt."
        ),
        price="$15.99",
        image_name="bolt-shirt-1200x1500.jpg",
    ),
    "SAUCE_LABS_FLEECE_JACKET": ProductData(
        id="5",
        name="Sauce Labs Fleece Jacket",
        description=(
            "It's not every day that you come across a midweight quarter-zip fleece jacket "
            "capable of handling everything from a relaxing day outdoors to a busy day at the office."
        ),
        price="$49.99",
        image_name="sauce-pullover-1200x1500.jpg",
    ),
    "SAUCE_LABS_ONESIE": ProductData(
        id="2",
        name="Sauce Labs Onesie",
        description=(
            "Rib snap infant onesie for the junior automation engineer in development. "
            "Reinforced 3-snap bottom closure, two-needle hemmed sleeved and bottom won't unravel."
        ),
        price="$7.99",
        image_name="red-onesie-1200x1500.jpg",
    ),
    "TEST_ALL_THE_THINGS_T_SHIRT": ProductData(
        id="3",
        name="Test.allTheThings() T-Shirt (Red)",
        description=(
            "This classic Sauce Labs t-shirt is perfect to wear when cozying up to your keyboard "
            "to automate a few tests. Super-soft and comfy ringspun combed cotton blend slim fit "
            "you'll want to wear every day."
        ),
        price="$15.99",
        image_name="red-tatt-1200x1500.jpg",
    ),
})

CHECKOUT_INFO = CheckoutData(first_name="John", last_name="Doe", postal_code="12345")

INVALID_CREDENTIALS = UserCredentials("invalid_user", "invalid_password", "invalid", "Unknown account")

EMPTY_CREDENTIALS = UserCredentials("", "", "empty", "Blank form submission")

ERROR_MESSAGES: Mapping[str, str] = MappingProxyType({
    "LOCKED_OUT_USER": "Epic sadface: Sorry, this user has been locked out.",
    "INVALID_CREDENTIALS": "Epic sadface: Username and password do not match any user in this service",
    "EMPTY_USERNAME": "Epic sadface: Username is required",
    "EMPTY_PASSWORD": "Epic sadface: Password is required",
    "FIRST_NAME_REQUIRED": "Error: First Name is required",
    "LAST_NAME_REQUIRED": "Error: Last Name is required",
    "POSTAL_CODE_REQUIRED": "Error: Postal Code is required",
})

TIMEOUTS: Mapping[str, int] = MappingProxyType({
    "SHORT": 5000,
    "MEDIUM": 10000,
    "LONG": 30000,
})

# Page URLs for the environment selected by ENVIRONMENT (default dev)
URLS: Mapping[str, str] = build_urls(get_environment_url(os.getenv("ENVIRONMENT", "dev")))


# ================================================================================
# Lookups
# ================================================================================

def get_user_by_type(user_type: str) -> UserCredentials:
    """Credentials for a user type ('standard', 'locked_out', ...)."""
    for user in USERS.values():
        if user.user_type == user_type:
            return user
    raise FixtureNotFound(f"User type '{user_type}' not found")


def get_product_by_name(name: str) -> ProductData:
    for product in PRODUCTS.values():
        if product.name == name:
            return product
    raise FixtureNotFound(f"Product '{name}' not found")


def get_error_message(key: str) -> str:
    try:
        return ERROR_MESSAGES[key]
    except KeyError:
        raise FixtureNotFound(f"Error message '{key}' not found") from None


def get_random_product(rng: Optional[random.Random] = None) -> ProductData:
    return (rng or random).choice(list(PRODUCTS.values()))


def get_random_products(count: int, rng: Optional[random.Random] = None) -> List[ProductData]:
    """Up to `count` distinct products in random order."""
    products = list(PRODUCTS.values())
    return (rng or random).sample(products, max(0, min(count, len(products))))


def get_all_users() -> List[UserCredentials]:
    return list(USERS.values())


def get_all_products() -> List[ProductData]:
    return list(PRODUCTS.values())


__all__ = [
    "USER_TYPES",
    "UserCredentials",
    "ProductData",
    "CheckoutData",
    "USERS",
    "PRODUCTS",
    "CHECKOUT_INFO",
    "INVALID_CREDENTIALS",
    "EMPTY_CREDENTIALS",
    "ERROR_MESSAGES",
    "TIMEOUTS",
    "URLS",
    "get_user_by_type",
    "get_product_by_name",
    "get_error_message",
    "get_random_product",
    "get_random_products",
    "get_all_users",
    "get_all_products",
]
