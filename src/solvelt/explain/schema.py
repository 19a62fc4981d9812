"""Wire schema for the chat completions endpoint.

Request objects serialize to exactly the JSON body the endpoint expects.
The response side only models the fields the pipeline reads; anything else
in the payload is ignored.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import BaseModel, Field, StrictStr, ValidationError

from solvelt.explain.types import ExplanationRequest

logger = logging.getLogger(__name__)

UNEXPECTED_FORMAT = "AI returned an unexpected format"


class TextPart(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImageURL(BaseModel):
    url: str


class ImagePart(BaseModel):
    type: Literal["image_url"] = "image_url"
    image_url: ImageURL


class UserMessage(BaseModel):
    role: Literal["user"] = "user"
    content: list[TextPart | ImagePart]


class ChatCompletionRequest(BaseModel):
    """Body of a POST to /v1/chat/completions."""

    model: str
    messages: list[UserMessage]
    max_tokens: int

    @classmethod
    def from_request(cls, request: ExplanationRequest) -> ChatCompletionRequest:
        return cls(
            model=request.model,
            messages=[
                UserMessage(
                    content=[
                        TextPart(text=request.prompt),
                        ImagePart(image_url=ImageURL(url=request.data_uri)),
                    ]
                )
            ],
            max_tokens=request.max_tokens,
        )

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class ResponseMessage(BaseModel):
    content: StrictStr


class Choice(BaseModel):
    message: ResponseMessage


class ChatCompletionResponse(BaseModel):
    # Only the first choice is read; later entries are not validated.
    choices: list[Any] = Field(min_length=1)


def decode_explanation(payload: Any) -> str:
    """Extract ``choices[0].message.content`` from a decoded response body.

    Returns UNEXPECTED_FORMAT instead of raising when the payload does not
    have that shape.
    """
    try:
        envelope = ChatCompletionResponse.model_validate(payload)
        choice = Choice.model_validate(envelope.choices[0])
    except ValidationError as e:
        logger.warning(
            "Unexpected response format: %s",
            "; ".join(
                f"{'.'.join(str(x) for x in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            ),
        )
        return UNEXPECTED_FORMAT
    return choice.message.content
