"""
================================================================================
Settings
================================================================================

YAML-backed test settings with environment variable overrides.

Features:
    - Dot notation access over the YAML tree (ConfigLoader)
    - Environment variable override (UI_BASE_URL overrides ui.base_url)
    - Immutable Settings value built once per process
    - Explicit process-wide initialization (init_settings / get_settings)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

from .exceptions import ConfigurationError


# Default configuration file path
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

# Environment variable that points at an alternative configuration file
CONFIG_PATH_ENV = "UI_CONFIG_FILE"


class EngineVariant(str, Enum):
    """Browser engines Playwright can launch."""

    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"

    @classmethod
    def values(cls) -> tuple:
        return tuple(member.value for member in cls)


class ConfigLoader:
    """
    Reads the YAML settings file; environment variables win over file values.

    A dotted key maps onto an upper-cased variable name:
        ui.base_url    -> UI_BASE_URL
        logging.level  -> LOGGING_LEVEL

    Usage:
        >>> loader = ConfigLoader(Path("config/config.yaml"))
        >>> loader.get("ui.timeout_ms", 30000)
        30000
    """

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._config: Dict[str, Any] = {}
        self._load_config()

    @property
    def path(self) -> Path:
        return self._config_path

    def _load_config(self) -> None:
        if not self._config_path.exists():
            logger.warning(
                f"Settings file not found: {self._config_path}. "
                f"Only environment variables and defaults apply."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Settings file is not valid YAML ({self._config_path}): {e}"
            ) from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"Settings file root must be a mapping: {self._config_path}"
            )
        self._config = loaded
        logger.debug(f"Settings file loaded: {self._config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a dotted key.

        Environment values are strings; they are coerced to the type of
        `default` when one is given.
        """
        env_value = os.environ.get(key.upper().replace(".", "_"))
        if env_value is not None:
            return _coerce(env_value, default)

        node: Any = self._config
        for part in key.split("."):
            node = node.get(part) if isinstance(node, dict) else None
            if node is None:
                return default
        return node

    def reload(self) -> None:
        """Re-read the settings file."""
        self._load_config()
        logger.info(f"Settings file reloaded: {self._config_path}")


def _coerce(raw: str, like: Any) -> Any:
    # bool before int: bool is an int subclass
    if isinstance(like, bool):
        return raw.strip().lower() in ("true", "1", "yes", "on")
    if isinstance(like, int):
        try:
            return int(raw)
        except ValueError:
            return raw
    return raw


@dataclass(frozen=True)
class Settings:
    """
    Resolved, read-only test settings shared by every session.

    Attributes:
        browser: Configured engine name; validated when a driver is started
        headless: Run browser without a visible window
        base_url: Location every session navigates to during setup
        timeout_ms: Default timeout applied to every page operation
        log_level: Console log level (`logging.level`); LOG_LEVEL still wins
    """

    browser: str = EngineVariant.CHROMIUM.value
    headless: bool = True
    base_url: str = ""
    timeout_ms: int = 30000
    log_level: str = "INFO"

    @classmethod
    def from_loader(cls, loader: ConfigLoader) -> "Settings":
        """Build settings from the `ui` and `logging` sections of a loaded configuration."""
        base_url = loader.get("ui.base_url")
        if not base_url:
            raise ConfigurationError(
                f"Missing required setting 'ui.base_url' in {loader.path} "
                f"(or UI_BASE_URL environment variable)"
            )

        timeout_ms = loader.get("ui.timeout_ms", cls.timeout_ms)
        if isinstance(timeout_ms, bool) or not isinstance(timeout_ms, int) or timeout_ms <= 0:
            raise ConfigurationError(
                f"Setting 'ui.timeout_ms' must be a positive integer, got {timeout_ms!r}"
            )

        headless = loader.get("ui.headless", cls.headless)
        if not isinstance(headless, bool):
            raise ConfigurationError(
                f"Setting 'ui.headless' must be a boolean, got {headless!r}"
            )

        return cls(
            browser=str(loader.get("ui.browser", cls.browser)),
            headless=headless,
            base_url=str(base_url),
            timeout_ms=timeout_ms,
            log_level=str(loader.get("logging.level", cls.log_level)).upper(),
        )

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a copy with non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


# =============================================================================
# Process-wide settings
# =============================================================================

_settings: Optional[Settings] = None


def init_settings(
    config_path: Optional[Path] = None,
    **overrides: Any,
) -> Settings:
    """
    Load settings once at process start.

    Must run before any test setup; later calls return the already loaded
    value unchanged. Loading failures raise ConfigurationError.

    Args:
        config_path: Configuration file. Falls back to UI_CONFIG_FILE, then
                     DEFAULT_CONFIG_PATH.
        **overrides: Field overrides (e.g. from command line options).
                     None values are ignored.
    """
    global _settings

    if _settings is not None:
        return _settings

    if config_path is None and os.environ.get(CONFIG_PATH_ENV):
        config_path = Path(os.environ[CONFIG_PATH_ENV])

    loader = ConfigLoader(config_path)
    _settings = Settings.from_loader(loader).with_overrides(**overrides)
    logger.debug(
        f"Settings initialized: browser={_settings.browser} "
        f"headless={_settings.headless} base_url={_settings.base_url} "
        f"timeout_ms={_settings.timeout_ms}"
    )
    return _settings


def get_settings() -> Settings:
    """Return the process settings; init_settings() must have run."""
    if _settings is None:
        raise ConfigurationError(
            "Settings are not initialized. Call init_settings() at process start."
        )
    return _settings


def reset_settings() -> None:
    """Forget the process settings so the next init_settings() loads again."""
    global _settings
    _settings = None


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "EngineVariant",
    "ConfigLoader",
    "Settings",
    "init_settings",
    "get_settings",
    "reset_settings",
]
