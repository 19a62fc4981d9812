"""Image-to-explanation pipeline.

One call to :meth:`ExplanationPipeline.run` encodes the image, sends a
single chat completion request and turns the outcome into an
:class:`~solvelt.explain.types.ExplanationResult`. There are no retries and
no caching; every failure is converted into a ``FailureResult`` at the
``run`` boundary.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

import httpx
from PIL import Image

from solvelt.config import SolveltConfig
from solvelt.explain.encoding import JPEG_QUALITY, encode_jpeg
from solvelt.explain.schema import ChatCompletionRequest, decode_explanation
from solvelt.explain.types import (
    ExplanationError,
    ExplanationRequest,
    ExplanationResult,
    FailureResult,
    HttpError,
    ResponseDecodeError,
    TextResult,
    TransportError,
)

logger = logging.getLogger(__name__)

API_URL = "https://api.openai.com/v1/chat/completions"
MODEL = "gpt-4o-mini"
MAX_TOKENS = 1000
TUTOR_PROMPT = (
    "You are a friendly tutor. Explain this homework problem step-by-step "
    "so a college student can understand."
)


def _body_text(response: httpx.Response) -> str:
    try:
        return response.content.decode("utf-8")
    except UnicodeDecodeError:
        return "Unknown error"


class ExplanationPipeline:
    """Turns a picked image into explanation text with one HTTP request.

    The pipeline does no mutual exclusion of its own; callers serialize
    invocations (see :class:`solvelt.session.ExplainSession`).
    """

    def __init__(
        self,
        config: SolveltConfig,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = config.require_api_key()
        self._timeout = config.explain.timeout_seconds
        self._client = client

    def build_request(self, image: Image.Image) -> ExplanationRequest:
        """Encode the image and pair it with the fixed prompt settings.

        Raises:
            EncodingError: If the image cannot be serialized to JPEG.
        """
        return ExplanationRequest(
            image_data=encode_jpeg(image, quality=JPEG_QUALITY),
            prompt=TUTOR_PROMPT,
            model=MODEL,
            max_tokens=MAX_TOKENS,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key.get_secret_value()}",
            "Content-Type": "application/json",
        }

    async def _post(self, body: dict[str, Any]) -> httpx.Response:
        try:
            if self._client is not None:
                return await self._client.post(
                    API_URL, headers=self._headers(), json=body, timeout=self._timeout
                )
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                return await client.post(API_URL, headers=self._headers(), json=body)
        except httpx.HTTPError as e:
            raise TransportError(str(e) or type(e).__name__) from e

    async def _explain(self, image: Image.Image) -> str:
        request = self.build_request(image)
        body = ChatCompletionRequest.from_request(request).to_json_dict()
        logger.debug(
            "Requesting explanation: model=%s jpeg_bytes=%d",
            request.model,
            len(request.image_data),
        )

        response = await self._post(body)
        if response.status_code != 200:
            raise HttpError(response.status_code, _body_text(response))

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ResponseDecodeError(f"Response was not valid JSON: {e}") from e
        return decode_explanation(payload)

    async def run(self, image: Image.Image) -> ExplanationResult:
        """Explain one image. Never raises except on cancellation."""
        started = time.monotonic()
        try:
            explanation = await self._explain(image)
        except ExplanationError as e:
            logger.warning(
                "Explanation failed (%s) after %dms: %s",
                type(e).__name__,
                int((time.monotonic() - started) * 1000),
                e,
            )
            return FailureResult(str(e))
        except Exception as e:
            logger.exception("Unexpected error while explaining image")
            return FailureResult(str(e) or type(e).__name__)

        logger.info(
            "Explanation received after %dms (%d chars)",
            int((time.monotonic() - started) * 1000),
            len(explanation),
        )
        return TextResult(explanation)
