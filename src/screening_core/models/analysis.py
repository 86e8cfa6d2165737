"""Open-ended analysis models.

The analysis endpoint asks the model for a JSON object rather than numbered
free text; ``AnalysisResult`` is the shape both the model and the heuristic
fallback produce.
"""

from pydantic import Field

from screening_core.models.base import CamelModel
from screening_core.models.report import InterpretationSet, ScoreSet


class AnalysisResult(CamelModel):
    summary: str = ""
    strengths: list[str] = Field(default_factory=list)
    concerns: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class AnalysisEnvelope(CamelModel):
    """Response body for the analysis endpoint."""

    scores: ScoreSet
    interpretations: InterpretationSet
    analysis: AnalysisResult
    degraded: bool = False
    note: str | None = None
    model: str
    timestamp: str
