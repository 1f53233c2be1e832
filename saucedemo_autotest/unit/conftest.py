"""
Unit test fixtures: a fake page and `expect`, a fresh structured logger and fast
interaction helpers bound to both.
"""

import pytest
from loguru import logger

from saucedemo_autotest.common.config_loader import ConfigLoader, HarnessSettings, reset_settings
from saucedemo_autotest.ui_testing.framework import assertions as assertions_module
from saucedemo_autotest.ui_testing.framework.assertions import Assertions
from saucedemo_autotest.ui_testing.framework.element_actions import ElementActions, RetryPolicy
from saucedemo_autotest.ui_testing.framework.structured_logger import StructuredLogger
from saucedemo_autotest.unit.fakes import LOGIN_URL, TEST_NAME, FakePage, fake_expect


@pytest.fixture
def log() -> StructuredLogger:
    return StructuredLogger(level="INFO")


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage(url=LOGIN_URL, title="Swag Labs")


@pytest.fixture
def actions(fake_page: FakePage, log: StructuredLogger) -> ElementActions:
    """Short timeouts and a 10ms retry delay keep the suite fast."""
    return ElementActions(
        fake_page,
        log,
        test_name=TEST_NAME,
        default_timeout=200,
        retry_policy=RetryPolicy(max_attempts=3, delay_ms=10),
    )


@pytest.fixture
def verify(actions: ElementActions) -> Assertions:
    return Assertions(actions, default_timeout=200)


@pytest.fixture
def settings() -> HarnessSettings:
    return HarnessSettings(base_url=LOGIN_URL, retry_delay_ms=10, screenshot_mode="off", video_mode="off")


@pytest.fixture
def captured():
    """Messages mirrored to the loguru sink while the test runs."""
    messages = []
    handler_id = logger.add(messages.append, format="{level}|{message}", level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def _fake_expect(monkeypatch):
    """Point the assertion layer's `expect` at the in-memory page."""
    monkeypatch.setattr(assertions_module, "expect", fake_expect)


@pytest.fixture(autouse=True)
def _fresh_config():
    ConfigLoader.reset()
    reset_settings()
    yield
    ConfigLoader.reset()
    reset_settings()
