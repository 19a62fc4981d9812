"""Configuration models using Pydantic.

Models are frozen: configuration is loaded once at start-up and handed to
the pipeline as an immutable value.
"""

import os

from pydantic import BaseModel, ConfigDict, Field, SecretStr

OPENAI_API_KEY_ENV = "OPENAI_API_KEY"


class ProviderConfig(BaseModel):
    """Provider-level configuration."""

    model_config = ConfigDict(frozen=True)

    api_key: SecretStr | None = None


class ExplainConfig(BaseModel):
    """Configuration for the explanation request.

    The prompt, model and token bound are fixed constants of the pipeline
    and deliberately not exposed here.
    """

    model_config = ConfigDict(frozen=True)

    timeout_seconds: float = Field(default=60.0, gt=0)


class SessionConfig(BaseModel):
    """Configuration for the interactive session state machine."""

    model_config = ConfigDict(frozen=True)

    # Drop a response whose image was replaced while it was in flight.
    # False restores last-response-wins.
    drop_stale_responses: bool = True


class ConfigError(Exception):
    """Configuration error."""

    pass


class SolveltConfig(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(frozen=True)

    openai: ProviderConfig = Field(default_factory=ProviderConfig)
    explain: ExplainConfig = Field(default_factory=ExplainConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)

    def resolve_api_key(self) -> SecretStr | None:
        """Resolve the OpenAI API key.

        Resolution order:
        1. [openai].api_key from the config file
        2. OPENAI_API_KEY environment variable

        Returns:
            The resolved API key, or None if not found.
        """
        if self.openai.api_key is not None and self.openai.api_key.get_secret_value():
            return self.openai.api_key

        env_value = os.environ.get(OPENAI_API_KEY_ENV)
        if env_value:
            return SecretStr(env_value)

        return None

    def require_api_key(self) -> SecretStr:
        """Resolve the API key, failing loudly when none is configured.

        Raises:
            ConfigError: If no key is available.
        """
        api_key = self.resolve_api_key()
        if api_key is None:
            raise ConfigError(
                f"OpenAI API key required. Set {OPENAI_API_KEY_ENV} "
                "or add api_key under [openai] in config.toml"
            )
        return api_key
