"""Completion models — the contract between the pipeline and the LLM gateway.

A ``CompletionRequest`` carries both the prompts for a live model and the
computed scores, so a deterministic backend can answer the same request
without a network round-trip.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel

from screening_core.models.report import InterpretationSet, ScoreSet


class CompletionKind(str, Enum):
    REPORT = "report"
    ANALYSIS = "analysis"


class CompletionRequest(BaseModel):
    kind: CompletionKind
    system_prompt: str
    user_prompt: str
    max_tokens: int
    temperature: float
    # Fallback input; live backends ignore these.
    scores: ScoreSet
    interpretations: InterpretationSet


class Completion(BaseModel):
    """Raw text returned by a backend."""

    text: str
    model: str


class GatewayResult(BaseModel):
    """A completion plus whether it came from the fallback, and why."""

    text: str
    model: str
    degraded: bool = False
    note: str | None = None


class StreamEvent(BaseModel):
    """One event of a streamed completion.

    ``chunk`` events carry incremental text; the stream always ends with
    exactly one ``done`` or ``error`` event.
    """

    type: Literal["chunk", "done", "error"]
    text: str | None = None
    degraded: bool = False
    note: str | None = None
    model: str | None = None
