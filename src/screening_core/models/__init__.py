"""Public model re-exports for screening_core.

Consumers should import from ``screening_core.models`` rather than
reaching into sub-modules directly.
"""

# --- Patient & trials ---
from screening_core.models.patient import (
    EmotionTrial,
    PatientInfo,
    PatternTrial,
    ReactionTrial,
    TestResultSet,
)

# --- Scores & reports ---
from screening_core.models.report import (
    GeneratedReport,
    InterpretationSet,
    Observation,
    Report,
    ReportEnvelope,
    ScoreSet,
)

# --- Analysis ---
from screening_core.models.analysis import AnalysisEnvelope, AnalysisResult

# --- Completion ---
from screening_core.models.completion import (
    Completion,
    CompletionKind,
    CompletionRequest,
    GatewayResult,
    StreamEvent,
)

# --- Static fixtures ---
from screening_core.models.fixtures import EmotionItem, PatternItem

__all__ = [
    # Patient & trials
    "EmotionTrial",
    "PatientInfo",
    "PatternTrial",
    "ReactionTrial",
    "TestResultSet",
    # Scores & reports
    "GeneratedReport",
    "InterpretationSet",
    "Observation",
    "Report",
    "ReportEnvelope",
    "ScoreSet",
    # Analysis
    "AnalysisEnvelope",
    "AnalysisResult",
    # Completion
    "Completion",
    "CompletionKind",
    "CompletionRequest",
    "GatewayResult",
    "StreamEvent",
    # Fixtures
    "EmotionItem",
    "PatternItem",
]
