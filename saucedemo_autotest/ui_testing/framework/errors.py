"""
================================================================================
Failure Conditions
================================================================================

Classified failures raised by the interaction and assertion layers.

Every failure carries enough context (selector, element name, expected vs.
actual, underlying driver message) to diagnose it without re-running.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Type


# =============================================================================
# Interaction Failures
# =============================================================================

class InteractionError(Exception):
    """Base class for failed interaction primitives."""

    def __init__(
        self,
        message: str,
        selector: Optional[str] = None,
        element_name: Optional[str] = None,
        cause: Optional[str] = None,
        **details: Any,
    ):
        super().__init__(message)
        self.message = message
        self.selector = selector
        self.element_name = element_name
        self.cause = cause
        self.details: Dict[str, Any] = details

    def to_dict(self) -> Dict[str, Any]:
        """Diagnostic payload for logs and reports."""
        payload = {
            "type": type(self).__name__,
            "message": self.message,
            "selector": self.selector,
            "element_name": self.element_name,
            "cause": self.cause,
        }
        payload.update(self.details)
        return payload


class ElementNotVisible(InteractionError):
    """Element did not become visible within the timeout."""

    def __init__(self, selector: str, element_name: str, timeout_ms: int, cause: Optional[str] = None):
        super().__init__(
            f"Element wait failed: {element_name} with selector '{selector}' "
            f"did not become visible within {timeout_ms}ms",
            selector=selector,
            element_name=element_name,
            cause=cause,
            timeout_ms=timeout_ms,
        )
        self.timeout_ms = timeout_ms


class ClickFailed(InteractionError):
    """Every click attempt failed."""

    def __init__(self, selector: str, element_name: str, attempts: int, cause: Optional[str] = None):
        super().__init__(
            f"Click failed: Unable to click {element_name} after {attempts} attempts. {cause or ''}".rstrip(),
            selector=selector,
            element_name=element_name,
            cause=cause,
            attempts=attempts,
        )
        self.attempts = attempts


class TextInputFailed(InteractionError):
    """Typing into a field failed."""

    def __init__(self, selector: str, element_name: str, cause: Optional[str] = None):
        super().__init__(
            f"Text input failed: Unable to type into {element_name} with selector '{selector}'. {cause or ''}".rstrip(),
            selector=selector,
            element_name=element_name,
            cause=cause,
        )


class TextRetrievalFailed(InteractionError):
    """Reading an element's text failed."""

    def __init__(self, selector: str, element_name: str, cause: Optional[str] = None):
        super().__init__(
            f"Text retrieval failed: Unable to get text from {element_name} with selector '{selector}'. {cause or ''}".rstrip(),
            selector=selector,
            element_name=element_name,
            cause=cause,
        )


class AttributeRetrievalFailed(InteractionError):
    """Reading an element attribute failed."""

    def __init__(self, selector: str, element_name: str, attribute: str, cause: Optional[str] = None):
        super().__init__(
            f"Attribute retrieval failed: Unable to read '{attribute}' from {element_name} "
            f"with selector '{selector}'. {cause or ''}".rstrip(),
            selector=selector,
            element_name=element_name,
            cause=cause,
            attribute=attribute,
        )
        self.attribute = attribute


class ScrollFailed(InteractionError):
    """Scrolling an element into view failed."""

    def __init__(self, selector: str, element_name: str, cause: Optional[str] = None):
        super().__init__(
            f"Scroll failed: Unable to scroll to {element_name} with selector '{selector}'. {cause or ''}".rstrip(),
            selector=selector,
            element_name=element_name,
            cause=cause,
        )


class SelectionFailed(InteractionError):
    """Choosing an option in a dropdown failed."""

    def __init__(self, selector: str, element_name: str, value: str, cause: Optional[str] = None):
        super().__init__(
            f"Selection failed: Unable to select '{value}' in {element_name} "
            f"with selector '{selector}'. {cause or ''}".rstrip(),
            selector=selector,
            element_name=element_name,
            cause=cause,
            value=value,
        )
        self.value = value


class NavigationFailed(InteractionError):
    """Navigating to a URL failed."""

    def __init__(self, url: str, cause: Optional[str] = None):
        super().__init__(
            f"Navigation failed: Unable to navigate to {url}. {cause or ''}".rstrip(),
            cause=cause,
            url=url,
        )
        self.url = url


class ReloadFailed(InteractionError):
    """Reloading the page failed."""

    def __init__(self, cause: Optional[str] = None):
        super().__init__(f"Page refresh failed: {cause or 'unknown error'}", cause=cause)


class PageLoadFailed(InteractionError):
    """The page did not reach a stable load state."""

    def __init__(self, state: str, cause: Optional[str] = None):
        super().__init__(f"Page load failed ({state}): {cause or 'unknown error'}", cause=cause, state=state)
        self.state = state


# =============================================================================
# Assertion Failures
# =============================================================================

class AssertionFailed(AssertionError):
    """
    A hard assertion did not hold.

    Subclasses AssertionError so pytest reports it as a test failure.
    """

    kind: str = "generic"

    def __init__(
        self,
        message: str,
        element_name: Optional[str] = None,
        selector: Optional[str] = None,
        expected: Any = None,
        actual: Any = None,
        cause: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.element_name = element_name
        self.selector = selector
        self.expected = expected
        self.actual = actual
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": type(self).__name__,
            "kind": self.kind,
            "message": self.message,
            "element_name": self.element_name,
            "selector": self.selector,
            "expected": self.expected,
            "actual": self.actual,
            "cause": self.cause,
        }


class VisibilityAssertionFailed(AssertionFailed):
    kind = "visibility"


class TextAssertionFailed(AssertionFailed):
    kind = "text"


class CountAssertionFailed(AssertionFailed):
    kind = "count"


class EnabledAssertionFailed(AssertionFailed):
    kind = "enabled"


class TitleAssertionFailed(AssertionFailed):
    kind = "title"


class UrlAssertionFailed(AssertionFailed):
    kind = "url"


class SoftAssertionsFailed(AssertionFailed):
    """One or more collected soft assertions failed."""

    kind = "soft"

    def __init__(self, message: str, failures: list):
        super().__init__(message, expected=0, actual=len(failures))
        self.failures = failures


ASSERTION_TYPES: Dict[str, Type[AssertionFailed]] = {
    "visibility": VisibilityAssertionFailed,
    "text": TextAssertionFailed,
    "count": CountAssertionFailed,
    "enabled": EnabledAssertionFailed,
    "title": TitleAssertionFailed,
    "url": UrlAssertionFailed,
}


# =============================================================================
# Fixture Lookup
# =============================================================================

class FixtureNotFound(LookupError):
    """A fixture key does not exist. This is a configuration error."""
    pass


__all__ = [
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
    "VisibilityAssertionFailed",
    "TextAssertionFailed",
    "CountAssertionFailed",
    "EnabledAssertionFailed",
    "TitleAssertionFailed",
    "UrlAssertionFailed",
    "SoftAssertionsFailed",
    "ASSERTION_TYPES",
    "FixtureNotFound",
]
