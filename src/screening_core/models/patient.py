"""Patient and trial models — what the client submits for scoring.

A screening session produces one ordered list of trials per test type:

  - emotion: did the child pick the right emotion for the face?
  - reaction: how fast was the response, and was the trial valid
    (no anticipation, no missed stimulus)?
  - pattern: was the sequence reproduced correctly?

Trial records may carry additional client-side fields (item ids, chosen
answers, timestamps).  They are ignored; scoring only needs the fields
declared here.
"""

from __future__ import annotations

from pydantic import ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from screening_core.models.base import CamelModel


class PatientInfo(CamelModel):
    """Patient metadata embedded in the report.  Immutable once submitted."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    age: int | float = Field(ge=0)
    gender: str = "Not specified"


class EmotionTrial(CamelModel):
    is_correct: bool


class ReactionTrial(CamelModel):
    valid: bool
    # Invalid trials (anticipations, misses) may omit the time entirely.
    reaction_time: float | None = None

    @model_validator(mode="after")
    def _valid_trials_need_a_time(self) -> ReactionTrial:
        if not self.valid:
            return self
        if self.reaction_time is None:
            raise ValueError("valid reaction trials require reactionTime")
        if self.reaction_time < 0:
            raise ValueError("reactionTime must be non-negative for valid trials")
        return self


class PatternTrial(CamelModel):
    is_correct: bool


class TestResultSet(CamelModel):
    """Per-test-type ordered trial sequences.  Missing tests are empty."""

    # Not a pytest test class despite the name.
    __test__ = False

    emotion_test: list[EmotionTrial] = Field(default_factory=list)
    reaction_test: list[ReactionTrial] = Field(default_factory=list)
    pattern_test: list[PatternTrial] = Field(default_factory=list)
