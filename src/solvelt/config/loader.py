"""Configuration loading from TOML files.

The OPENAI_API_KEY fallback is applied by SolveltConfig.resolve_api_key,
not at load time.
"""

import tomllib
from pathlib import Path
from typing import Any

from solvelt.config.models import SolveltConfig
from solvelt.config.paths import get_config_path

CONFIG_TEMPLATE = """\
# Solvelt configuration

[openai]
# Leave unset to read OPENAI_API_KEY from the environment.
# api_key = "sk-..."

[explain]
# Seconds to wait for the explanation before giving up.
timeout_seconds = 60.0

[session]
# Ignore an explanation that arrives after a different image was picked.
drop_stale_responses = true
"""


def _get_default_config_paths() -> list[Path]:
    """Get ordered list of default config file locations."""
    return [
        Path("config.toml"),  # Current directory
        get_config_path(),  # ~/.solvelt/config.toml (or SOLVELT_HOME)
        Path("/etc/solvelt/config.toml"),  # System-wide
    ]


def load_config(path: Path | None = None) -> SolveltConfig:
    """Load configuration from a TOML file.

    Unlike most settings, the only required value (the API key) commonly
    comes from the environment, so a missing config file is not an error
    unless one was asked for explicitly.

    Args:
        path: Explicit path to config file. If None, searches default locations.

    Returns:
        Validated SolveltConfig instance.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
        pydantic.ValidationError: If the file does not match the schema.
    """
    config_path: Path | None = None

    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        for default_path in _get_default_config_paths():
            expanded = default_path.expanduser()
            if expanded.exists():
                config_path = expanded
                break

    raw_config: dict[str, Any] = {}
    if config_path is not None:
        with config_path.open("rb") as f:
            raw_config = tomllib.load(f)

    return SolveltConfig.model_validate(raw_config)


def get_default_config() -> SolveltConfig:
    """Get a default configuration for development/testing."""
    return SolveltConfig()


def generate_config_template() -> str:
    """Return the commented config.toml written by `solvelt init`."""
    return CONFIG_TEMPLATE
