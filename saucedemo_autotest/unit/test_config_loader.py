import pytest
import yaml

from saucedemo_autotest.common import init_logger
from saucedemo_autotest.common.config_loader import (
    ENVIRONMENTS,
    ConfigLoader,
    ConfigurationError,
    HarnessSettings,
    build_urls,
    get_environment_url,
    get_settings,
)

ENV_KEYS = (
    "ENVIRONMENT",
    "UI_ENVIRONMENT",
    "UI_BASE_URL",
    "UI_TIMEOUT",
    "UI_RETRIES",
    "UI_HEADLESS",
    "UI_SLOW_MO",
    "UI_BROWSER",
    "UI_CLICK_ATTEMPTS",
    "UI_RETRY_DELAY_MS",
    "LOGGING_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def write_config(tmp_path, data):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump(data), encoding="utf-8")
    return config_path


def test_env_override_and_defaults(clean_env, tmp_path):
    config_path = write_config(tmp_path, {"ui": {"base_url": "http://example.com/index.html", "timeout": 10}})

    loader = ConfigLoader(config_path=config_path)
    assert loader.get("ui.base_url") == "http://example.com/index.html"
    assert loader.get("ui.retries", 2) == 2

    ConfigLoader.reset()
    clean_env.setenv("UI_TIMEOUT", "45000")
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("ui.timeout", 30000) == 45000


def test_env_values_are_converted_to_the_default_type(clean_env, tmp_path):
    loader = ConfigLoader(config_path=write_config(tmp_path, {}))

    clean_env.setenv("UI_HEADLESS", "false")
    assert loader.get("ui.headless", True) is False

    clean_env.setenv("UI_SLOW_MO", "not-a-number")
    with pytest.raises(ConfigurationError):
        loader.get("ui.slow_mo", 0)


def test_invalid_yaml_is_a_configuration_error(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("ui: [unclosed", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigLoader(config_path=config_path)


def test_reload_updates_values(clean_env, tmp_path):
    config_path = write_config(tmp_path, {"ui": {"timeout": 5}})

    loader = ConfigLoader(config_path=config_path)
    assert loader.get("ui.timeout") == 5

    write_config(tmp_path, {"ui": {"timeout": 15}})
    loader.reload()
    assert loader.get("ui.timeout") == 15
    assert loader.get_section("ui") == {"timeout": 15}
    assert loader.get_section("missing") == {}


def test_settings_defaults_without_config_file(clean_env, tmp_path):
    settings = HarnessSettings.from_loader(ConfigLoader(config_path=tmp_path / "absent.yaml"))

    assert settings == HarnessSettings()
    assert settings.base_url == ENVIRONMENTS["dev"]
    assert settings.click_attempts == 3
    assert settings.retry_delay_ms == 1000
    assert settings.record_video is True


def test_settings_from_yaml_and_environment(clean_env, tmp_path):
    config_path = write_config(
        tmp_path,
        {
            "ui": {
                "environment": "staging",
                "timeout": 20000,
                "headless": False,
                "viewport": {"width": 1920, "height": 1080},
                "screenshot": {"mode": "on", "full_page": False},
                "video": {"mode": "off"},
                "browser": "firefox",
                "click_attempts": 5,
            },
            "logging": {"level": "debug"},
        },
    )
    clean_env.setenv("UI_BASE_URL", "http://localhost:8080/index.html")
    clean_env.setenv("UI_RETRY_DELAY_MS", "250")

    settings = HarnessSettings.from_loader(ConfigLoader(config_path=config_path))

    assert settings.environment == "staging"
    assert settings.base_url == "http://localhost:8080/index.html"
    assert settings.timeout_ms == 20000
    assert settings.headless is False
    assert settings.viewport == (1920, 1080)
    assert (settings.screenshot_mode, settings.screenshot_full_page) == ("on", False)
    assert settings.record_video is False
    assert settings.browser == "firefox"
    assert settings.log_level == "DEBUG"
    assert (settings.click_attempts, settings.retry_delay_ms) == (5, 250)


def test_settings_summary_reports_retries(clean_env, tmp_path):
    clean_env.setenv("UI_RETRIES", "4")

    settings = HarnessSettings.from_loader(ConfigLoader(config_path=tmp_path / "absent.yaml"))
    summary = settings.summary()

    assert settings.retries == 4
    assert "Timeout: 30000ms, test retries: 4" in summary
    assert summary[0] == f"Environment: dev ({ENVIRONMENTS['dev']})"


@pytest.mark.parametrize(
    "overrides",
    [
        {"screenshot_mode": "sometimes"},
        {"video_mode": "always"},
        {"browser": "opera"},
        {"click_attempts": 0},
    ],
)
def test_settings_validation(overrides):
    with pytest.raises(ConfigurationError):
        HarnessSettings(**overrides)


def test_settings_are_resolved_once(clean_env):
    first = get_settings()
    clean_env.setenv("UI_TIMEOUT", "1")

    assert get_settings() is first


def test_environment_urls():
    assert get_environment_url("prod") == ENVIRONMENTS["prod"]
    assert get_environment_url("unknown") == ENVIRONMENTS["dev"]


def test_build_urls_from_login_page():
    urls = build_urls("https://www.saucedemo.com/v1/index.html")

    assert urls["LOGIN"] == "https://www.saucedemo.com/v1/index.html"
    assert urls["INVENTORY"] == "https://www.saucedemo.com/v1/inventory.html"
    assert urls["CHECKOUT_COMPLETE"] == "https://www.saucedemo.com/v1/checkout-complete.html"
    with pytest.raises(TypeError):
        urls["LOGIN"] = "elsewhere"


def test_build_urls_from_site_root():
    urls = build_urls("http://localhost:3000/")

    assert urls["LOGIN"] == "http://localhost:3000/"
    assert urls["CART"] == "http://localhost:3000/cart.html"


def test_init_logger_writes_to_file(clean_env, tmp_path, monkeypatch):
    from saucedemo_autotest import common

    monkeypatch.setattr(common, "_logger_initialized", False)
    ConfigLoader(config_path=tmp_path / "absent.yaml")
    log_file = tmp_path / "logs" / "run.log"

    init_logger(level="WARN", log_file=str(log_file))
    common.logger.warning("written to file")
    common.logger.info("below threshold")
    common.logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "written to file" in content
    assert "below threshold" not in content
