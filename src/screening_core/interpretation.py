"""Interpretation functions — map a score to a narrative label.

Every mapping is a fixed three-tier ladder evaluated top-down; the first
matching tier wins and boundaries are inclusive at the named value:

    emotion / pattern (higher is better)   reaction (lower is better)
      >= 80  strong                           <= 300 ms  quick
      >= 60  moderate                         <= 500 ms  moderate
      else   difficulty                       else       delayed

Reaction scores can also be missing (no valid trials), which maps to the
``unavailable`` tier.

The ``*_tier`` helpers return the machine-readable tier; the
``interpret_*`` functions return the label shown in the report.
"""

from __future__ import annotations

from typing import Literal

from screening_core.constants import (
    ACCURACY_MODERATE_MIN,
    ACCURACY_STRONG_MIN,
    REACTION_MODERATE_MAX,
    REACTION_QUICK_MAX,
)
from screening_core.models.report import InterpretationSet, ScoreSet

AccuracyTier = Literal["strong", "moderate", "difficulty"]
ReactionTier = Literal["quick", "moderate", "delayed", "unavailable"]

_EMOTION_LABELS: dict[str, str] = {
    "strong": "Strong emotion recognition abilities",
    "moderate": "Moderate emotion recognition abilities",
    "difficulty": "Difficulty with emotion recognition, further assessment recommended",
}

_PATTERN_LABELS: dict[str, str] = {
    "strong": "Strong pattern recognition and memory abilities",
    "moderate": "Moderate pattern recognition abilities",
    "difficulty": "Difficulty with pattern recognition, further assessment recommended",
}

_REACTION_LABELS: dict[str, str] = {
    "quick": "Quick reaction time, within typical range",
    "moderate": "Moderate reaction time",
    "delayed": "Delayed reaction time, may indicate attention processing differences",
    "unavailable": "Reaction time could not be assessed (no valid trials)",
}


# ---------------------------------------------------------------------------
# Tiers
# ---------------------------------------------------------------------------

def accuracy_tier(score: int) -> AccuracyTier:
    if score >= ACCURACY_STRONG_MIN:
        return "strong"
    if score >= ACCURACY_MODERATE_MIN:
        return "moderate"
    return "difficulty"


def reaction_tier(score: int | None) -> ReactionTier:
    if score is None:
        return "unavailable"
    if score <= REACTION_QUICK_MAX:
        return "quick"
    if score <= REACTION_MODERATE_MAX:
        return "moderate"
    return "delayed"


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------

def interpret_emotion_score(score: int) -> str:
    return _EMOTION_LABELS[accuracy_tier(score)]


def interpret_pattern_score(score: int) -> str:
    return _PATTERN_LABELS[accuracy_tier(score)]


def interpret_reaction_score(score: int | None) -> str:
    return _REACTION_LABELS[reaction_tier(score)]


def interpret_scores(scores: ScoreSet) -> InterpretationSet:
    """Derive the full interpretation set from a score set."""
    return InterpretationSet(
        emotion_test=interpret_emotion_score(scores.emotion_score),
        reaction_test=interpret_reaction_score(scores.reaction_score),
        pattern_test=interpret_pattern_score(scores.pattern_score),
    )
