"""Tests for the chat completions wire schema."""

from solvelt.explain.schema import (
    UNEXPECTED_FORMAT,
    ChatCompletionRequest,
    decode_explanation,
)
from solvelt.explain.types import ExplanationRequest
from tests.conftest import completion


def test_request_serializes_to_wire_body():
    request = ExplanationRequest(
        image_data=b"IMG", prompt="Explain", model="gpt-4o-mini", max_tokens=1000
    )

    body = ChatCompletionRequest.from_request(request).to_json_dict()

    assert list(body) == ["model", "messages", "max_tokens"]
    assert body["messages"][0]["role"] == "user"
    text_part, image_part = body["messages"][0]["content"]
    assert text_part == {"type": "text", "text": "Explain"}
    assert image_part == {
        "type": "image_url",
        "image_url": {"url": "data:image/jpeg;base64,SU1H"},
    }


def test_decode_reads_first_choice():
    payload = completion("first")
    payload["choices"].append({"message": {"content": "second"}})
    assert decode_explanation(payload) == "first"


def test_decode_ignores_later_malformed_choices():
    payload = completion("first")
    payload["choices"].append("garbage")
    assert decode_explanation(payload) == "first"


def test_decode_ignores_extra_fields():
    payload = {"choices": [{"message": {"content": "x", "refusal": None}}]}
    assert decode_explanation(payload) == "x"


def test_decode_missing_content_returns_sentinel(caplog):
    with caplog.at_level("WARNING", logger="solvelt.explain.schema"):
        result = decode_explanation({"choices": [{"message": {"role": "assistant"}}]})

    assert result == UNEXPECTED_FORMAT
    assert "Unexpected response format" in caplog.text


def test_decode_non_object_returns_sentinel():
    assert decode_explanation(None) == UNEXPECTED_FORMAT
    assert decode_explanation([completion("x")]) == UNEXPECTED_FORMAT
