"""Homework explanation subsystem."""

from solvelt.explain.pipeline import ExplanationPipeline
from solvelt.explain.schema import UNEXPECTED_FORMAT
from solvelt.explain.types import (
    EncodingError,
    ExplanationError,
    ExplanationRequest,
    ExplanationResult,
    FailureResult,
    HttpError,
    ResponseDecodeError,
    TextResult,
    TransportError,
)

__all__ = [
    "EncodingError",
    "ExplanationError",
    "ExplanationPipeline",
    "ExplanationRequest",
    "ExplanationResult",
    "FailureResult",
    "HttpError",
    "ResponseDecodeError",
    "TextResult",
    "TransportError",
    "UNEXPECTED_FORMAT",
]
