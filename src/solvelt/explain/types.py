"""Types for the explanation pipeline."""

from __future__ import annotations

import base64
from dataclasses import dataclass


class ExplanationError(Exception):
    """A failure that is surfaced to the user as ``Error: <message>``."""


class EncodingError(ExplanationError):
    """The image could not be serialized to JPEG."""


class TransportError(ExplanationError):
    """The request never produced an HTTP response (DNS, connect, TLS, timeout)."""


class ResponseDecodeError(ExplanationError):
    """A 200 response whose body is not JSON."""


class HttpError(ExplanationError):
    """A non-200 HTTP response. The message is the raw response body."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(body or f"HTTP {status_code}")


@dataclass(slots=True, frozen=True)
class ExplanationRequest:
    """A single explanation request, built fresh for each invocation."""

    image_data: bytes
    prompt: str
    model: str
    max_tokens: int
    mime_type: str = "image/jpeg"

    @property
    def data_uri(self) -> str:
        encoded = base64.b64encode(self.image_data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


@dataclass(slots=True, frozen=True)
class TextResult:
    """Explanation text returned by the model (or the format sentinel)."""

    explanation: str

    @property
    def text(self) -> str:
        return self.explanation

    @property
    def is_error(self) -> bool:
        return False


@dataclass(slots=True, frozen=True)
class FailureResult:
    """A failed explanation attempt."""

    message: str

    @property
    def text(self) -> str:
        return f"Error: {self.message}"

    @property
    def is_error(self) -> bool:
        return True


ExplanationResult = TextResult | FailureResult
