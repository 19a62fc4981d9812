"""Centralized path management for Solvelt.

All local state (currently just the config file) lives under a single base
directory, overridable with the SOLVELT_HOME environment variable.

Default locations:
- Linux/macOS: ~/.solvelt
- Windows: %USERPROFILE%\\.solvelt
"""

import os
from functools import lru_cache
from pathlib import Path

ENV_VAR = "SOLVELT_HOME"


@lru_cache(maxsize=1)
def get_solvelt_home() -> Path:
    """Get the base directory for Solvelt data.

    Resolution order:
    1. SOLVELT_HOME environment variable (if set)
    2. Platform default (~/.solvelt)
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()

    return Path.home() / ".solvelt"


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_solvelt_home() / "config.toml"
