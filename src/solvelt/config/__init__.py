"""Configuration module."""

from solvelt.config.loader import (
    generate_config_template,
    get_default_config,
    load_config,
)
from solvelt.config.models import (
    ConfigError,
    ExplainConfig,
    ProviderConfig,
    SessionConfig,
    SolveltConfig,
)
from solvelt.config.paths import get_config_path, get_solvelt_home

__all__ = [
    "ConfigError",
    "ExplainConfig",
    "ProviderConfig",
    "SessionConfig",
    "SolveltConfig",
    "generate_config_template",
    "get_config_path",
    "get_default_config",
    "get_solvelt_home",
    "load_config",
]
