"""
Environment Variable Configuration for the Invoice QA Suite

Provides a single, read-only configuration snapshot for the suite:
- Typed parsing (str, int, bool, float)
- Default values for optional settings
- Required-at-use enforcement through require_env()
- Masking of sensitive values when dumped

Usage:
    from config.env_config import settings, require_env

    # Read a setting (falls back to its default)
    base_url = settings.WEB_BASE_URL

    # Demand a setting (raises MissingConfigurationError if empty)
    token = require_env("API_AUTH")

A ``.env`` file in the working directory is loaded before the snapshot is
built. Variables already present in the process environment win.
"""

import logging
import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration parsing or lookup fails."""

    pass


class MissingConfigurationError(ConfigError):
    """Raised when a setting needed by an operation is empty."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Missing required environment variable {name}. Check .env configuration."
        )


@dataclass(frozen=True)
class EnvVar:
    """Environment variable definition."""

    name: str
    default: Any = None
    var_type: str = "str"  # str, int, bool, float
    description: str = ""
    sensitive: bool = False  # Masked in to_dict() and logs

    def parse(self, value: Optional[str]) -> Any:
        """Parse string value to target type."""
        if value is None or not value.strip():
            return self.default

        value = value.strip()
        if self.var_type == "str":
            return value
        elif self.var_type == "int":
            try:
                return int(value)
            except ValueError:
                raise ConfigError(f"{self.name}: '{value}' is not a valid integer")
        elif self.var_type == "float":
            try:
                return float(value)
            except ValueError:
                raise ConfigError(f"{self.name}: '{value}' is not a valid float")
        elif self.var_type == "bool":
            return value.lower() in ("true", "1", "yes", "on")
        else:
            return value


ENV_VARS: Dict[str, EnvVar] = {
    # Web application under test
    "WEB_BASE_URL": EnvVar(
        name="WEB_BASE_URL",
        default="https://candidates-qa.contalink.com/",
        description="Base URL of the invoicing web application",
    ),
    "WEB_ACCESS_CODE": EnvVar(
        name="WEB_ACCESS_CODE",
        default="",
        sensitive=True,
        description="Access code used on the login gate",
    ),
    # Invoicing REST API
    "API_BASE_URL": EnvVar(
        name="API_BASE_URL", default="", description="Base URL of the invoicing API"
    ),
    "API_AUTH": EnvVar(
        name="API_AUTH",
        default="",
        sensitive=True,
        description="Value sent as the Authorization header",
    ),
    "API_TIMEOUT": EnvVar(
        name="API_TIMEOUT",
        default=30.0,
        var_type="float",
        description="Per-request timeout for API calls in seconds",
    ),
    # Browser settings
    "E2E_HEADLESS": EnvVar(
        name="E2E_HEADLESS", default=True, var_type="bool", description="Run browser headless"
    ),
    "E2E_SLOW_MO": EnvVar(
        name="E2E_SLOW_MO", default=0, var_type="int", description="Slow down actions (ms)"
    ),
    "E2E_RECORD_VIDEO": EnvVar(
        name="E2E_RECORD_VIDEO",
        default=False,
        var_type="bool",
        description="Record a video for every browser context",
    ),
    # Timeouts (milliseconds)
    "E2E_ACTION_TIMEOUT": EnvVar(
        name="E2E_ACTION_TIMEOUT",
        default=10000,
        var_type="int",
        description="Default timeout for actions and element resolution",
    ),
    "E2E_NAVIGATION_TIMEOUT": EnvVar(
        name="E2E_NAVIGATION_TIMEOUT",
        default=60000,
        var_type="int",
        description="Default timeout for navigations",
    ),
    "E2E_EXPECT_TIMEOUT": EnvVar(
        name="E2E_EXPECT_TIMEOUT",
        default=10000,
        var_type="int",
        description="Default timeout for expect() assertions",
    ),
    "E2E_SETTLE_MS": EnvVar(
        name="E2E_SETTLE_MS",
        default=3000,
        var_type="int",
        description="Fixed wait after search / clear filters",
    ),
    # Artifacts
    "E2E_ARTIFACTS_DIR": EnvVar(
        name="E2E_ARTIFACTS_DIR",
        default="test-results",
        description="Directory for screenshots, traces and videos",
    ),
    "CI": EnvVar(name="CI", default=False, var_type="bool", description="Running under CI"),
}


class EnvironmentConfig:
    """
    Read-only snapshot of the suite configuration.

    Access values as attributes named after the environment variable:
        settings.WEB_BASE_URL  # str
        settings.E2E_HEADLESS  # bool
    """

    def __init__(self, values: Mapping[str, Any]):
        object.__setattr__(self, "_values", MappingProxyType(dict(values)))

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(f"Unknown config variable: {name}") from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("EnvironmentConfig is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("EnvironmentConfig is read-only")

    def __repr__(self) -> str:
        return f"EnvironmentConfig({self.to_dict()!r})"

    def get(self, name: str, default: Any = None) -> Any:
        """Get config value with optional default."""
        return self._values.get(name, default)

    def require(self, name: str) -> Any:
        """Return a non-empty setting or raise MissingConfigurationError."""
        if name not in ENV_VARS:
            raise ConfigError(f"Unknown config variable: {name}")

        value = self._values.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise MissingConfigurationError(name)
        return value

    def to_dict(self, include_sensitive: bool = False) -> Dict[str, Any]:
        """Get all config values as dictionary."""
        result = {}
        for name, value in self._values.items():
            env_var = ENV_VARS.get(name)
            if env_var and env_var.sensitive and not include_sensitive and value:
                result[name] = "***"
            else:
                result[name] = value
        return result


def load_config(environ: Optional[Mapping[str, str]] = None) -> EnvironmentConfig:
    """
    Build a configuration snapshot from the environment.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Raises:
        ConfigError: If a typed value cannot be parsed
    """
    if environ is None:
        environ = os.environ

    values = {name: env_var.parse(environ.get(name)) for name, env_var in ENV_VARS.items()}
    config = EnvironmentConfig(values)
    logger.debug("Loaded configuration: %s", config.to_dict())
    return config


def require_env(name: str, config: Optional[EnvironmentConfig] = None) -> Any:
    """Return a required setting from the process-wide snapshot (or config)."""
    return (config or settings).require(name)


load_dotenv(override=False)

# Process-wide snapshot, built once at import
settings = load_config()
