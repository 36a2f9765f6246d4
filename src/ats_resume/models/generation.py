"""Models exchanged with the text-generation backend."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel

Role = Literal["system", "assistant", "user"]


class Message(BaseModel):
    role: Role
    content: str


class FinishReason(str, Enum):
    NORMAL = "normal"
    LENGTH = "length"  # token budget exhausted, output is truncated
    OTHER = "other"


Payload = Union[str, list[Message], list[dict]]


@dataclass
class GenerationRequest:
    """One generation attempt's parameters. Built fresh per attempt."""

    payload: Payload
    model: str
    max_tokens: int
    retries: int
    timeout: float


@dataclass
class GenerationResult:
    """Response from the LLM including finish reason and usage metadata."""

    text: str
    finish_reason: FinishReason
    input_tokens: int
    output_tokens: int
    model: str = ""

    @property
    def truncated(self) -> bool:
        return self.finish_reason is FinishReason.LENGTH
