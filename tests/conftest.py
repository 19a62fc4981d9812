"""Shared test fixtures and factories."""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import httpx
import pytest
from PIL import Image
from pydantic import SecretStr

from solvelt.config.models import ProviderConfig, SolveltConfig
from solvelt.config.paths import ENV_VAR, get_solvelt_home

# =============================================================================
# Environment isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point SOLVELT_HOME at a temp dir and drop any real API key."""
    home = tmp_path / "solvelt-home"
    monkeypatch.setenv(ENV_VAR, str(home))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("SOLVELT_LOG_LEVEL", raising=False)
    # Keep ./config.toml lookups away from the repository checkout
    monkeypatch.chdir(tmp_path)
    get_solvelt_home.cache_clear()
    yield home
    get_solvelt_home.cache_clear()


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Undo configure_logging() calls made by the code under test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def config() -> SolveltConfig:
    """Configuration with an API key set."""
    return SolveltConfig(openai=ProviderConfig(api_key=SecretStr("sk-test-key")))


@pytest.fixture
def config_toml_content() -> str:
    """Valid TOML config content."""
    return """
[openai]
api_key = "sk-from-file"

[explain]
timeout_seconds = 30

[session]
drop_stale_responses = false
"""


@pytest.fixture
def config_file(tmp_path: Path, config_toml_content: str) -> Path:
    """Create a temporary config file."""
    config_path = tmp_path / "config.toml"
    config_path.write_text(config_toml_content)
    return config_path


# =============================================================================
# Image Fixtures
# =============================================================================


@pytest.fixture
def image() -> Image.Image:
    """A small solid-color RGB image."""
    return Image.new("RGB", (16, 12), color=(200, 30, 30))


@pytest.fixture
def png_bytes(image: Image.Image) -> bytes:
    """The image fixture serialized as PNG."""
    import io

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


# =============================================================================
# HTTP Mocks
# =============================================================================


class RecordingHandler:
    """httpx.MockTransport handler that records every request it serves."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self._respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)


@pytest.fixture
def mock_api() -> Callable[..., tuple[httpx.AsyncClient, RecordingHandler]]:
    """Factory for an AsyncClient backed by a recording mock transport.

    Pass either a full responder callable, or a status code and JSON/bytes body.
    """

    def factory(
        status_code: int = 200,
        *,
        json: object = None,
        content: bytes | None = None,
        respond: Callable[[httpx.Request], httpx.Response] | None = None,
    ) -> tuple[httpx.AsyncClient, RecordingHandler]:
        if respond is None:

            def respond(request: httpx.Request) -> httpx.Response:
                if content is not None:
                    return httpx.Response(status_code, content=content)
                return httpx.Response(status_code, json=json)

        handler = RecordingHandler(respond)
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return client, handler

    return factory


def completion(content: object) -> dict[str, object]:
    """A chat completions response body with one choice."""
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "model": "gpt-4o-mini",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    }


# =============================================================================
# CLI Test Helpers
# =============================================================================


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner with colors disabled."""
    from typer.testing import CliRunner

    return CliRunner(env={"NO_COLOR": "1"})
