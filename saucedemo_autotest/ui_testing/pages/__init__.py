"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the SauceDemo store.

Each page class encapsulates:
    - Element selectors
    - Page-specific actions
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .login_page import LoginPage
from .inventory_page import InventoryPage
from .cart_page import CartPage
from .checkout_page import CheckoutPage

__all__ = [
    "LoginPage",
    "InventoryPage",
    "CartPage",
    "CheckoutPage",
]
