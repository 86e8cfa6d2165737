"""screening_core — scoring and report-assembly SDK for the screening games.

Public API:
    ReportPipeline        — orchestrates scoring → prompt → LLM → parse → report
    LLMGateway            — picks the live backend or the deterministic fallback
    LiveCompletion        — OpenAI chat completions backend
    DeterministicFallback — local content computed from the scores
    CompletionBackend     — ABC both backends implement
    PromptManager         — Jinja2 prompt renderer
    FixtureStore          — static emotion items / pattern sequences from YAML
    LLMSettings           — immutable LLM configuration

Pure functions:
    compute_scores, emotion_score, reaction_score, pattern_score
    interpret_scores
    parse_report, parse_analysis
    assemble_report
    heuristic_analysis
"""

from screening_core.analysis import heuristic_analysis
from screening_core.config import LLMSettings, load_llm_settings
from screening_core.errors import (
    ReportValidationError,
    ScreeningError,
    UpstreamServiceError,
)
from screening_core.fixtures import FixtureStore
from screening_core.gateway import DeterministicFallback, LiveCompletion, LLMGateway
from screening_core.interfaces import CompletionBackend
from screening_core.interpretation import interpret_scores
from screening_core.parser import parse_analysis, parse_report
from screening_core.pipeline import ReportPipeline
from screening_core.prompt import PromptManager
from screening_core.report import assemble_report
from screening_core.scoring import (
    NO_VALID_TRIALS,
    NoValidTrials,
    compute_scores,
    emotion_score,
    pattern_score,
    reaction_score,
)

__all__ = [
    # Orchestration
    "ReportPipeline",
    "LLMGateway",
    "LiveCompletion",
    "DeterministicFallback",
    "CompletionBackend",
    "PromptManager",
    "FixtureStore",
    # Configuration
    "LLMSettings",
    "load_llm_settings",
    # Errors
    "ScreeningError",
    "ReportValidationError",
    "UpstreamServiceError",
    # Scoring & interpretation
    "NO_VALID_TRIALS",
    "NoValidTrials",
    "compute_scores",
    "emotion_score",
    "reaction_score",
    "pattern_score",
    "interpret_scores",
    # Parsing & assembly
    "parse_report",
    "parse_analysis",
    "assemble_report",
    "heuristic_analysis",
]
