"""
Optional call-time tuning parameters for a chat completion.

Every field defaults to ``None`` meaning "unset": unset fields are omitted
from the wire payload so the API applies its own defaults. Range checks are
performed by ``ChatRequestDTO`` at serialization time.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from .function import FunctionCallDirective, FunctionDeclaration, directive_to_wire


@dataclass(frozen=True)
class TuningParameters:
    """Sampling and control parameters.

    Attributes:
        temperature: Sampling temperature in ``[0, 2]``.
        top_p: Nucleus sampling mass in ``[0, 1]``.
        n: Number of choices to generate (``>= 1``).
        stream: Whether the API should stream deltas. The connection sets
            this itself per mode.
        stop: Up to four stop sequences.
        max_tokens: Completion token cap (``>= 1``).
        presence_penalty: Penalty in ``[-2, 2]``.
        frequency_penalty: Penalty in ``[-2, 2]``.
        logit_bias: Token id to bias in ``[-100, 100]``.
        user: End-user tag for abuse monitoring.
        functions: Functions the model may call.
        function_call: ``"none"``, ``"auto"`` or a ``FunctionCallSpecifying``.
    """

    temperature: Optional[float] = None
    top_p: Optional[float] = None
    n: Optional[int] = None
    stream: Optional[bool] = None
    stop: Optional[Tuple[str, ...]] = None
    max_tokens: Optional[int] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    logit_bias: Optional[Mapping[int, int]] = None
    user: Optional[str] = None
    functions: Optional[Tuple[FunctionDeclaration, ...]] = None
    function_call: Optional[FunctionCallDirective] = None

    def __post_init__(self) -> None:
        # Freeze list arguments so a built request cannot be mutated later.
        if isinstance(self.stop, str):
            object.__setattr__(self, "stop", (self.stop,))
        elif self.stop is not None and not isinstance(self.stop, tuple):
            object.__setattr__(self, "stop", tuple(self.stop))
        if self.functions is not None and not isinstance(self.functions, tuple):
            object.__setattr__(self, "functions", tuple(self.functions))
        if self.logit_bias is not None:
            object.__setattr__(self, "logit_bias", dict(self.logit_bias))

    def to_wire(self) -> Dict[str, Any]:
        """Return only the fields that were set, in wire form."""
        data: Dict[str, Any] = {}
        if self.functions is not None:
            data["functions"] = [f.to_dict() for f in self.functions]
        if self.function_call is not None:
            data["function_call"] = directive_to_wire(self.function_call)
        for key in (
            "temperature",
            "top_p",
            "n",
            "stream",
            "max_tokens",
            "presence_penalty",
            "frequency_penalty",
            "user",
        ):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.stop is not None:
            data["stop"] = list(self.stop)
        if self.logit_bias is not None:
            # JSON object keys are strings on the wire.
            data["logit_bias"] = {str(k): v for k, v in self.logit_bias.items()}
        return data


__all__ = ["TuningParameters"]
