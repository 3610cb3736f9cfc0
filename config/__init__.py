# Configuration module
from .env_config import (
    ENV_VARS,
    ConfigError,
    EnvironmentConfig,
    EnvVar,
    MissingConfigurationError,
    load_config,
    require_env,
    settings,
)

__all__ = [
    "ConfigError",
    "EnvironmentConfig",
    "EnvVar",
    "ENV_VARS",
    "MissingConfigurationError",
    "load_config",
    "require_env",
    "settings",
]
