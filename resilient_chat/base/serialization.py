"""JSON serialize/deserialize collaborator for chat-completion payloads.

Every function returns an :data:`Outcome` instead of raising: encoding and
decoding failures are permanent (retrying the same bytes cannot help). The
wire shapes are checked by the pydantic DTOs in ``base.dto.chat``.
"""
from __future__ import annotations

import json
from typing import Union

from pydantic import ValidationError

from .dto.chat import ChatChunkDTO, ChatRequestDTO, ChatResponseDTO
from .models import ChatChunk, ChatRequest, ChatResponse
from .outcome import Outcome, fail_with_trace, succeed


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    err = errors[0]
    loc = ".".join(str(p) for p in err.get("loc", ()))
    more = f" (+{len(errors) - 1} more)" if len(errors) > 1 else ""
    return f"{loc}: {err.get('msg')}{more}" if loc else f"{err.get('msg')}{more}"


def serialize_request(request: ChatRequest) -> Outcome[str]:
    """Encode ``request`` to a JSON document after validating its bounds."""
    try:
        payload = request.to_dict()
        ChatRequestDTO.model_validate(payload)
        return succeed(json.dumps(payload, ensure_ascii=False, allow_nan=False))
    except ValidationError as exc:
        return fail_with_trace(
            f"Failed because request body validation failed -> {_first_error(exc)}."
        )
    except (TypeError, ValueError) as exc:
        return fail_with_trace(
            f"Failed because JSON serialization of request body failed -> {exc}."
        )


def deserialize_request(text: str) -> Outcome[ChatRequest]:
    """Decode a request document (inverse of :func:`serialize_request`)."""
    try:
        return succeed(ChatRequestDTO.model_validate_json(text).to_domain())
    except ValidationError as exc:
        return fail_with_trace(
            f"Failed because JSON deserialization of request body failed -> {_first_error(exc)}."
        )


def deserialize_response(text: Union[str, bytes, None]) -> Outcome[ChatResponse]:
    """Decode a buffered response body."""
    if not text:
        return fail_with_trace("Failed because response string was empty.")
    try:
        return succeed(ChatResponseDTO.model_validate_json(text).to_domain())
    except ValidationError as exc:
        return fail_with_trace(
            f"Failed because JSON deserialization of response body failed -> {_first_error(exc)}."
        )
    except ValueError as exc:
        return fail_with_trace(
            f"Failed because response body held an invalid message -> {exc}."
        )


def deserialize_chunk(data: Union[str, bytes]) -> Outcome[ChatChunk]:
    """Decode the JSON payload of a single stream event."""
    if not data:
        return fail_with_trace("Failed because chunk payload was empty.")
    try:
        return succeed(ChatChunkDTO.model_validate_json(data).to_domain())
    except ValidationError as exc:
        return fail_with_trace(
            f"Failed because JSON deserialization of chunk failed -> {_first_error(exc)}."
        )


__all__ = [
    "serialize_request",
    "deserialize_request",
    "deserialize_response",
    "deserialize_chunk",
]
