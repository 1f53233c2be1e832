"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework.

Components:
    - structured_logger: correlated, queryable, exportable event log
    - element_actions: resilient interaction primitives with explicit outcomes
    - assertions: hard and soft assertions
    - page_base: base page object for common operations
    - browser_manager: browser lifecycle management

Author: Automation Team
License: MIT
================================================================================
"""

from .structured_logger import LogEntry, LogLevel, StructuredLogger
from .outcome import Outcome
from .errors import (
    AssertionFailed,
    AttributeRetrievalFailed,
    ClickFailed,
    ElementNotVisible,
    FixtureNotFound,
    InteractionError,
    NavigationFailed,
    PageLoadFailed,
    ReloadFailed,
    ScrollFailed,
    SelectionFailed,
    SoftAssertionsFailed,
    TextInputFailed,
    TextRetrievalFailed,
)
from .element_actions import ElementActions, RetryPolicy
from .assertions import Assertions, CheckOutcome
from .page_base import BasePage
from .browser_manager import BrowserManager

__all__ = [
    "LogEntry",
    "LogLevel",
    "StructuredLogger",
    "Outcome",
    "InteractionError",
    "ElementNotVisible",
    "ClickFailed",
    "TextInputFailed",
    "TextRetrievalFailed",
    "AttributeRetrievalFailed",
    "ScrollFailed",
    "SelectionFailed",
    "NavigationFailed",
    "ReloadFailed",
    "PageLoadFailed",
    "AssertionFailed",
    "SoftAssertionsFailed",
    "FixtureNotFound",
    "ElementActions",
    "RetryPolicy",
    "Assertions",
    "CheckOutcome",
    "BasePage",
    "BrowserManager",
]
