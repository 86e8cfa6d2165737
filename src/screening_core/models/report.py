"""Score, interpretation and report models.

``ScoreSet`` and ``InterpretationSet`` are derived deterministically from a
``TestResultSet`` on every request and never persisted.  ``GeneratedReport``
is whatever the response parser could recover from the model's free text;
its arrays may be empty but are never null.

``Report`` is the final, flat record returned to the client.  Its groups are
patient info, scores, interpretations, generated content (observations,
recommendations, red flags) and the generation timestamp.
"""

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from screening_core.models.base import CamelModel
from screening_core.models.patient import PatientInfo


class ScoreSet(CamelModel):
    emotion_score: int = Field(ge=0, le=100)
    # None when no valid reaction trial was recorded (reporting gap)
    reaction_score: int | None = Field(default=None, ge=0)
    pattern_score: int = Field(ge=0, le=100)


class InterpretationSet(CamelModel):
    emotion_test: str
    reaction_test: str
    pattern_test: str


class Observation(CamelModel):
    category: str
    details: str


class GeneratedReport(CamelModel):
    observations: list[Observation] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    red_flags: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.observations or self.recommendations or self.red_flags)


class Report(CamelModel):
    """Assembled clinical screening report.  Never mutated after assembly."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True,
    )

    patient_info: PatientInfo
    scores: ScoreSet
    interpretations: InterpretationSet
    observations: list[Observation]
    recommendations: list[str]
    red_flags: list[str]
    # ISO-8601, UTC
    timestamp: str


class ReportEnvelope(CamelModel):
    """Response body for report generation.

    ``degraded`` is True when the report content came from the deterministic
    fallback instead of the LLM; ``note`` then says why.
    """

    report: Report
    degraded: bool = False
    note: str | None = None
    model: str
