"""
Pydantic DTOs for the chat-completion wire schema.

Purpose
-------
Validate outbound request payloads (parameter bounds) and decode inbound
response bodies and stream chunks before they become domain values. The
domain dataclasses in ``resilient_chat.base.models`` stay free of validation
concerns; these DTOs are the single place where wire shapes are checked.

External dependencies: Pydantic only (no network I/O).

Failure semantics: validation either succeeds or raises
``pydantic.ValidationError``. The serialization layer converts that error into
a permanent-failure outcome; nothing here is caught locally.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..models import (
    ChatChunk,
    ChatRequest,
    ChatResponse,
    Choice,
    ChunkChoice,
    Delta,
    FunctionCall,
    FunctionCallDelta,
    FunctionCallSpecifying,
    FunctionDeclaration,
    Message,
    Role,
    TuningParameters,
    Usage,
)


WireRole = Literal["system", "user", "assistant", "function"]


class FunctionCallDTO(BaseModel):
    name: str
    arguments: str = ""


class MessageDTO(BaseModel):
    """A chat message on the wire.

    Rules:
        - `role` must be one of the four wire roles.
        - Function messages must carry a `name`.
    """

    role: WireRole
    content: Optional[str] = None
    name: Optional[str] = None
    function_call: Optional[FunctionCallDTO] = None

    @model_validator(mode="after")
    def _validate_name(self) -> "MessageDTO":
        if self.role == "function" and not self.name:
            raise ValueError("function messages require a name")
        return self

    def to_domain(self) -> Message:
        fc = self.function_call
        return Message(
            role=Role(self.role),
            content=self.content,
            name=self.name,
            function_call=FunctionCall(fc.name, fc.arguments) if fc else None,
        )


class FunctionDeclarationDTO(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None


class FunctionCallSpecifyingDTO(BaseModel):
    name: str = Field(..., min_length=1)


class ChatRequestDTO(BaseModel):
    """Request payload with parameter bounds.

    Raises:
        ValidationError: on unknown roles, empty model, empty message list,
            out-of-range numeric parameters or more than four stop sequences.
    """

    model_config = ConfigDict(extra="forbid")

    model: str = Field(..., min_length=1)
    messages: List[MessageDTO] = Field(..., min_length=1)
    functions: Optional[List[FunctionDeclarationDTO]] = None
    function_call: Optional[Union[Literal["none", "auto"], FunctionCallSpecifyingDTO]] = None
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    n: Optional[int] = Field(default=None, ge=1)
    stream: Optional[bool] = None
    stop: Optional[List[str]] = Field(default=None, max_length=4)
    max_tokens: Optional[int] = Field(default=None, ge=1)
    presence_penalty: Optional[float] = Field(default=None, ge=-2.0, le=2.0)
    frequency_penalty: Optional[float] = Field(default=None, ge=-2.0, le=2.0)
    logit_bias: Optional[Dict[int, int]] = None
    user: Optional[str] = None

    @field_validator("logit_bias")
    @classmethod
    def _validate_bias(cls, value: Optional[Dict[int, int]]) -> Optional[Dict[int, int]]:
        if value is None:
            return value
        for token, bias in value.items():
            if not -100 <= bias <= 100:
                raise ValueError(f"logit bias for token {token} must be within [-100, 100]")
        return value

    def to_domain(self) -> ChatRequest:
        directive: Any = self.function_call
        if isinstance(directive, FunctionCallSpecifyingDTO):
            directive = FunctionCallSpecifying(directive.name)
        tuning = TuningParameters(
            temperature=self.temperature,
            top_p=self.top_p,
            n=self.n,
            stream=self.stream,
            stop=tuple(self.stop) if self.stop is not None else None,
            max_tokens=self.max_tokens,
            presence_penalty=self.presence_penalty,
            frequency_penalty=self.frequency_penalty,
            logit_bias=self.logit_bias,
            user=self.user,
            functions=(
                tuple(FunctionDeclaration(f.name, f.description, f.parameters) for f in self.functions)
                if self.functions is not None
                else None
            ),
            function_call=directive,
        )
        return ChatRequest(
            model=self.model,
            messages=tuple(m.to_domain() for m in self.messages),
            tuning=tuning,
        )


class UsageDTO(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChoiceDTO(BaseModel):
    index: int = 0
    message: MessageDTO
    finish_reason: Optional[str] = None


class ChatResponseDTO(BaseModel):
    """Buffered response body. `choices` is required; it may be empty."""

    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    choices: List[ChoiceDTO]
    usage: Optional[UsageDTO] = None

    def to_domain(self) -> ChatResponse:
        usage = self.usage
        return ChatResponse(
            id=self.id,
            object=self.object,
            created=self.created,
            model=self.model,
            choices=tuple(
                Choice(index=c.index, message=c.message.to_domain(), finish_reason=c.finish_reason)
                for c in self.choices
            ),
            usage=Usage(usage.prompt_tokens, usage.completion_tokens, usage.total_tokens) if usage else None,
        )


class FunctionCallDeltaDTO(BaseModel):
    name: Optional[str] = None
    arguments: Optional[str] = None


class DeltaDTO(BaseModel):
    role: Optional[WireRole] = None
    content: Optional[str] = None
    function_call: Optional[FunctionCallDeltaDTO] = None


class ChunkChoiceDTO(BaseModel):
    index: int = 0
    delta: DeltaDTO = Field(default_factory=DeltaDTO)
    finish_reason: Optional[str] = None


class ChatChunkDTO(BaseModel):
    """One streamed chunk; every field except `choices` is optional."""

    id: Optional[str] = None
    object: Optional[str] = None
    created: Optional[int] = None
    model: Optional[str] = None
    choices: List[ChunkChoiceDTO] = Field(default_factory=list)

    def to_domain(self) -> ChatChunk:
        choices = []
        for c in self.choices:
            fc = c.delta.function_call
            delta = Delta(
                role=Role(c.delta.role) if c.delta.role else None,
                content=c.delta.content,
                function_call=FunctionCallDelta(fc.name, fc.arguments) if fc else None,
            )
            choices.append(ChunkChoice(index=c.index, delta=delta, finish_reason=c.finish_reason))
        return ChatChunk(
            choices=tuple(choices),
            id=self.id,
            object=self.object,
            created=self.created,
            model=self.model,
        )


__all__ = [
    "WireRole",
    "FunctionCallDTO",
    "MessageDTO",
    "FunctionDeclarationDTO",
    "FunctionCallSpecifyingDTO",
    "ChatRequestDTO",
    "UsageDTO",
    "ChoiceDTO",
    "ChatResponseDTO",
    "FunctionCallDeltaDTO",
    "DeltaDTO",
    "ChunkChoiceDTO",
    "ChatChunkDTO",
]
