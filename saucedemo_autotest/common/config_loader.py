"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support.

Features:
    - Hierarchical YAML configuration loading
    - Environment variable override (UI_BASE_URL overrides ui.base_url)
    - Dot notation path access
    - Typed harness settings resolved once at startup
    - Multiple environment support (dev, staging, prod)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml
from loguru import logger


# Default configuration file path (repo root /config/config.yaml)
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

ENVIRONMENTS: Dict[str, str] = {
    "dev": "https://www.saucedemo.com/v1/index.html",
    "staging": "https://www.saucedemo.com/v1/index.html",
    "prod": "https://www.saucedemo.com/v1/index.html",
}

SCREENSHOT_MODES = ("off", "only-on-failure", "on")
VIDEO_MODES = ("off", "on", "retain-on-failure")
BROWSER_TYPES = ("chromium", "firefox", "webkit")


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


def get_environment_url(env: str = "dev") -> str:
    """Base URL for an environment name, falling back to dev."""
    return ENVIRONMENTS.get(env, ENVIRONMENTS["dev"])


PAGE_FILES: Dict[str, str] = {
    "INVENTORY": "inventory.html",
    "CART": "cart.html",
    "CHECKOUT_STEP_ONE": "checkout-step-one.html",
    "CHECKOUT_STEP_TWO": "checkout-step-two.html",
    "CHECKOUT_COMPLETE": "checkout-complete.html",
}


def build_urls(login_url: str) -> Mapping[str, str]:
    """
    Page URL table for a deployment whose login page is `login_url`.

    Example:
        >>> build_urls("https://www.saucedemo.com/v1/index.html")["CART"]
        'https://www.saucedemo.com/v1/cart.html'
    """
    root = login_url.rsplit("/", 1)[0] if login_url.endswith(".html") else login_url.rstrip("/")
    urls = {"LOGIN": login_url}
    urls.update({key: f"{root}/{page}" for key, page in PAGE_FILES.items()})
    return MappingProxyType(urls)


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (UI_BASE_URL)
        2. YAML configuration file
        3. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("ui.timeout", 30000)
        30000

    Environment Variable Mapping:
        - ui.base_url -> UI_BASE_URL
        - ui.headless -> UI_HEADLESS
        - logging.level -> LOGGING_LEVEL
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """Singleton pattern - configuration is loaded once per process."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file.
                        Uses DEFAULT_CONFIG_PATH if not specified.
        """
        if getattr(self, "_initialized", False):
            return

        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
            logger.debug(f"Loaded configuration from: {self._config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        First checks environment variables, then YAML config, then default.

        Args:
            key: Dot-notation path (e.g., "ui.base_url")
            default: Default value if key not found
        """
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return self._convert_type(env_value, default)

        value = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get entire configuration section, or an empty dict."""
        return self._config.get(section, {}) or {}

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    def _convert_type(self, value: str, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        """
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                raise ConfigurationError(f"Expected an integer, got {value!r}") from None
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                raise ConfigurationError(f"Expected a number, got {value!r}") from None

        return value

    @classmethod
    def reset(cls) -> None:
        """Reset singleton instance (tests)."""
        cls._instance = None
        cls._config = {}


# =============================================================================
# Harness Settings
# =============================================================================

@dataclass(frozen=True)
class HarnessSettings:
    """
    Startup configuration for the UI harness. Not re-read during execution.

    Screenshot and video settings are passed through to the browser layer.
    `retries` is the test-level retry count reported to the runner in the
    pytest header.
    """

    base_url: str = ENVIRONMENTS["dev"]
    environment: str = "dev"
    timeout_ms: int = 30000
    retries: int = 2
    headless: bool = True
    slow_mo_ms: int = 0
    viewport: Tuple[int, int] = (1280, 720)
    screenshot_mode: str = "only-on-failure"
    screenshot_full_page: bool = True
    video_mode: str = "retain-on-failure"
    video_size: Tuple[int, int] = (1280, 720)
    browser: str = "chromium"
    log_level: str = "INFO"
    click_attempts: int = 3
    retry_delay_ms: int = 1000

    def __post_init__(self):
        if self.screenshot_mode not in SCREENSHOT_MODES:
            raise ConfigurationError(
                f"ui.screenshot.mode must be one of {SCREENSHOT_MODES}, got {self.screenshot_mode!r}"
            )
        if self.video_mode not in VIDEO_MODES:
            raise ConfigurationError(f"ui.video.mode must be one of {VIDEO_MODES}, got {self.video_mode!r}")
        if self.browser not in BROWSER_TYPES:
            raise ConfigurationError(f"ui.browser must be one of {BROWSER_TYPES}, got {self.browser!r}")
        if self.click_attempts < 1:
            raise ConfigurationError(f"ui.click_attempts must be >= 1, got {self.click_attempts}")

    @property
    def record_video(self) -> bool:
        return self.video_mode != "off"

    def summary(self) -> List[str]:
        """Lines describing the run, shown in the pytest report header."""
        return [
            f"Environment: {self.environment} ({self.base_url})",
            f"Browser: {self.browser} (headless={self.headless}, slow_mo={self.slow_mo_ms}ms)",
            f"Timeout: {self.timeout_ms}ms, test retries: {self.retries}",
            f"Click attempts: {self.click_attempts} ({self.retry_delay_ms}ms apart)",
            f"Screenshots: {self.screenshot_mode}, video: {self.video_mode}",
        ]

    @classmethod
    def from_loader(cls, loader: ConfigLoader) -> "HarnessSettings":
        """Resolve every setting from YAML and environment overrides."""
        environment = os.getenv("ENVIRONMENT", loader.get("ui.environment", "dev"))
        base_url = loader.get("ui.base_url") or get_environment_url(environment)
        return cls(
            base_url=base_url,
            environment=environment,
            timeout_ms=loader.get("ui.timeout", 30000),
            retries=loader.get("ui.retries", 2),
            headless=loader.get("ui.headless", True),
            slow_mo_ms=loader.get("ui.slow_mo", 0),
            viewport=(
                loader.get("ui.viewport.width", 1280),
                loader.get("ui.viewport.height", 720),
            ),
            screenshot_mode=loader.get("ui.screenshot.mode", "only-on-failure"),
            screenshot_full_page=loader.get("ui.screenshot.full_page", True),
            video_mode=loader.get("ui.video.mode", "retain-on-failure"),
            video_size=(
                loader.get("ui.video.width", 1280),
                loader.get("ui.video.height", 720),
            ),
            browser=loader.get("ui.browser", "chromium"),
            log_level=str(loader.get("logging.level", "INFO")).upper(),
            click_attempts=loader.get("ui.click_attempts", 3),
            retry_delay_ms=loader.get("ui.retry_delay_ms", 1000),
        )


_settings: Optional[HarnessSettings] = None


def get_settings() -> HarnessSettings:
    """Settings resolved on first use and cached for the process."""
    global _settings
    if _settings is None:
        _settings = HarnessSettings.from_loader(ConfigLoader())
        logger.debug(f"Harness settings resolved: {_settings}")
    return _settings


def reset_settings() -> None:
    """Forget cached settings (tests)."""
    global _settings
    _settings = None


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "HarnessSettings",
    "ENVIRONMENTS",
    "get_environment_url",
    "build_urls",
    "PAGE_FILES",
    "get_settings",
    "reset_settings",
]
