"""
In-memory stand-ins for a Playwright page, its locators and `expect`.

Only the calls the harness makes are modelled. Failures are raised as the
real `playwright.async_api.Error` / `TimeoutError` types, and failed
expectations as `AssertionError` with Playwright's message layout, so the
classification code under test sees exactly what a browser would give it.
Waits use the running loop's clock, so a missing element costs its full
timeout. A timeout of 0 waits without limit, as in Playwright.
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError


POLL_S = 0.01
# Playwright defaults for locator waits and for expect
ACTION_TIMEOUT_MS = 30000
EXPECT_TIMEOUT_MS = 5000

TEST_NAME = "unit_case"
LOGIN_URL = "https://www.saucedemo.com/v1/index.html"

NOT_FOUND = "<element(s) not found>"


def normalize_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


async def _poll(
    condition: Callable[[], bool],
    timeout: float,
    timeout_error: Callable[[], BaseException],
) -> None:
    loop = asyncio.get_running_loop()
    deadline = None if timeout == 0 else loop.time() + timeout / 1000
    while not condition():
        if deadline is None:
            await asyncio.sleep(POLL_S)
            continue
        remaining = deadline - loop.time()
        if remaining <= 0:
            raise timeout_error()
        await asyncio.sleep(min(POLL_S, remaining))


@dataclass
class FakeElement:
    """One DOM element as the fake driver sees it."""

    text: str = ""
    visible: bool = True
    enabled: bool = True
    attributes: Dict[str, str] = field(default_factory=dict)
    options: List[str] = field(default_factory=list)
    value: str = ""
    # Loop time at which the element turns visible (None: use `visible`)
    visible_at: Optional[float] = None
    # Clicks that raise before the element starts accepting them
    click_failures: int = 0
    fill_error: Optional[str] = None
    on_click: Optional[Callable[[], None]] = None
    clicks: int = 0
    fills: List[str] = field(default_factory=list)

    def is_visible_now(self) -> bool:
        if self.visible_at is not None:
            return asyncio.get_running_loop().time() >= self.visible_at
        return self.visible


class FakePage:
    """Minimal async Page: locators, navigation, title, screenshot."""

    def __init__(self, url: str = "about:blank", title: str = ""):
        self.url = url
        self.title_text = title
        self.elements: Dict[str, List[FakeElement]] = {}
        self.navigation_error: Optional[str] = None
        self.reload_error: Optional[str] = None
        self.load_state_error: Optional[str] = None
        self.screenshot_error: Optional[str] = None
        self.visited: List[str] = []
        self.reloads = 0
        # Timeouts handed to locator waits and expectations, in call order
        self.wait_timeouts: List[Optional[float]] = []
        self.expect_timeouts: List[Optional[float]] = []

    def add(self, selector: str, **kwargs) -> FakeElement:
        element = FakeElement(**kwargs)
        self.elements.setdefault(selector, []).append(element)
        return element

    def remove(self, selector: str) -> None:
        self.elements.pop(selector, None)

    def locator(self, selector: str) -> "FakeLocator":
        return FakeLocator(self, selector)

    async def goto(self, url: str, wait_until: str = "load"):
        await asyncio.sleep(0)
        if self.navigation_error:
            raise PlaywrightError(self.navigation_error)
        self.url = url
        self.visited.append(url)

    async def reload(self, wait_until: str = "load"):
        await asyncio.sleep(0)
        if self.reload_error:
            raise PlaywrightError(self.reload_error)
        self.reloads += 1

    async def wait_for_load_state(self, state: str = "load", timeout: Optional[float] = None):
        await asyncio.sleep(0)
        if self.load_state_error:
            raise PlaywrightTimeoutError(self.load_state_error)

    async def title(self) -> str:
        return self.title_text

    async def screenshot(self, path: Optional[str] = None, full_page: bool = False) -> bytes:
        if self.screenshot_error:
            raise PlaywrightError(self.screenshot_error)
        data = b"\x89PNG fake"
        if path:
            Path(path).write_bytes(data)
        return data


class FakeLocator:
    """Lazy handle resolving `selector` against the page on every call."""

    def __init__(self, page: FakePage, selector: str, first_only: bool = False):
        self._page = page
        self._selector = selector
        self._first_only = first_only

    def _elements(self) -> List[FakeElement]:
        elements = self._page.elements.get(self._selector, [])
        return elements[:1] if self._first_only else list(elements)

    def _single(self) -> FakeElement:
        elements = self._elements()
        if not elements:
            raise PlaywrightError(f"No element matches selector '{self._selector}'")
        if len(elements) > 1:
            raise PlaywrightError(
                f"strict mode violation: locator('{self._selector}') resolved to {len(elements)} elements"
            )
        return elements[0]

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self._page, self._selector, first_only=True)

    async def wait_for(self, state: str = "visible", timeout: Optional[float] = None):
        conditions = {
            "visible": lambda: any(e.is_visible_now() for e in self._elements()),
            "hidden": lambda: not any(e.is_visible_now() for e in self._elements()),
            "attached": lambda: bool(self._elements()),
            "detached": lambda: not self._elements(),
        }
        self._page.wait_timeouts.append(timeout)
        await _poll(
            conditions[state],
            ACTION_TIMEOUT_MS if timeout is None else timeout,
            lambda: PlaywrightTimeoutError(
                f"Timeout {timeout}ms exceeded.\nwaiting for locator('{self._selector}') to be {state}"
            ),
        )

    async def click(self, timeout: Optional[float] = None):
        element = self._single()
        await asyncio.sleep(0)
        if element.click_failures > 0:
            element.click_failures -= 1
            raise PlaywrightError("Element is not attached to the DOM\nCall log: ...")
        element.clicks += 1
        if element.on_click is not None:
            element.on_click()

    async def clear(self):
        element = self._single()
        if element.fill_error:
            raise PlaywrightError(element.fill_error)
        element.value = ""

    async def fill(self, value: str):
        element = self._single()
        if element.fill_error:
            raise PlaywrightError(element.fill_error)
        element.value = value
        element.fills.append(value)

    async def select_option(self, value: str, timeout: Optional[float] = None):
        element = self._single()
        if value not in element.options:
            raise PlaywrightError(f"options not found: {value}")
        element.value = value
        return [value]

    async def scroll_into_view_if_needed(self, timeout: Optional[float] = None):
        await self.wait_for("attached", timeout)

    async def text_content(self) -> Optional[str]:
        return self._single().text

    async def all_text_contents(self) -> List[str]:
        return [e.text for e in self._elements()]

    async def count(self) -> int:
        return len(self._elements())

    async def is_enabled(self) -> bool:
        return self._single().enabled

    async def get_attribute(self, name: str) -> Optional[str]:
        return self._single().attributes.get(name)


class FakeLocatorAssertions:
    """The LocatorAssertions calls the assertion layer awaits."""

    def __init__(self, locator: FakeLocator):
        self._locator = locator

    def _element(self) -> Optional[FakeElement]:
        elements = self._locator._elements()
        if len(elements) > 1:
            raise PlaywrightError(
                f"strict mode violation: locator('{self._locator._selector}') resolved to {len(elements)} elements"
            )
        return elements[0] if elements else None

    def _visibility(self) -> str:
        element = self._element()
        if element is None:
            return NOT_FOUND
        return "visible" if element.is_visible_now() else "hidden"

    def _text(self) -> Optional[str]:
        element = self._element()
        return None if element is None else normalize_whitespace(element.text)

    def _enabled(self) -> str:
        element = self._element()
        if element is None:
            return NOT_FOUND
        return "enabled" if element.enabled else "disabled"

    async def _expect(
        self,
        description: str,
        condition: Callable[[], bool],
        actual: Callable[[], Any],
        timeout: Optional[float],
    ) -> None:
        self._locator._page.expect_timeouts.append(timeout)
        await _poll(
            condition,
            EXPECT_TIMEOUT_MS if timeout is None else timeout,
            lambda: AssertionError(
                f"Locator expected {description}\n"
                f"Actual value: {actual()} \n"
                f"Call log:\n"
                f"  - Expect with timeout {timeout}ms\n"
                f"  - waiting for locator('{self._locator._selector}')"
            ),
        )

    async def to_be_visible(self, timeout: Optional[float] = None) -> None:
        await self._expect("to be visible", lambda: self._visibility() == "visible", self._visibility, timeout)

    async def to_be_hidden(self, timeout: Optional[float] = None) -> None:
        await self._expect("to be hidden", lambda: self._visibility() != "visible", self._visibility, timeout)

    async def to_have_text(self, expected: str, timeout: Optional[float] = None) -> None:
        wanted = normalize_whitespace(expected)
        await self._expect(
            f"to have text '{expected}'",
            lambda: self._text() == wanted,
            lambda: NOT_FOUND if self._text() is None else self._text(),
            timeout,
        )

    async def to_contain_text(self, expected: str, timeout: Optional[float] = None) -> None:
        wanted = normalize_whitespace(expected)
        await self._expect(
            f"to contain text '{expected}'",
            lambda: self._text() is not None and wanted in self._text(),
            lambda: NOT_FOUND if self._text() is None else self._text(),
            timeout,
        )

    async def to_have_count(self, count: int, timeout: Optional[float] = None) -> None:
        elements = self._locator._elements
        await self._expect(f"to have count '{count}'", lambda: len(elements()) == count, lambda: len(elements()), timeout)

    async def to_be_enabled(self, timeout: Optional[float] = None) -> None:
        await self._expect("to be enabled", lambda: self._enabled() == "enabled", self._enabled, timeout)

    async def to_be_disabled(self, timeout: Optional[float] = None) -> None:
        await self._expect("to be disabled", lambda: self._enabled() == "disabled", self._enabled, timeout)


class FakePageAssertions:
    """The PageAssertions calls the assertion layer awaits."""

    def __init__(self, page: FakePage):
        self._page = page

    async def _expect(self, description: str, condition: Callable[[], bool], actual: str, timeout: Optional[float]):
        self._page.expect_timeouts.append(timeout)
        await _poll(
            condition,
            EXPECT_TIMEOUT_MS if timeout is None else timeout,
            lambda: AssertionError(
                f"Page {description}\n"
                f"Actual value: {getattr(self._page, actual)} \n"
                f"Call log:\n"
                f"  - Expect with timeout {timeout}ms"
            ),
        )

    async def to_have_title(self, title: str, timeout: Optional[float] = None) -> None:
        await self._expect(f"title expected to be '{title}'", lambda: self._page.title_text == title, "title_text", timeout)

    async def to_have_url(self, url: str, timeout: Optional[float] = None) -> None:
        await self._expect(f"URL expected to be '{url}'", lambda: self._page.url == url, "url", timeout)


def fake_expect(actual: Any):
    """Drop-in for `playwright.async_api.expect` over the fakes above."""
    if isinstance(actual, FakeLocator):
        return FakeLocatorAssertions(actual)
    if isinstance(actual, FakePage):
        return FakePageAssertions(actual)
    raise TypeError(f"Unsupported type for expect: {type(actual).__name__}")
