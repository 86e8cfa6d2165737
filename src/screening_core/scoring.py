"""Scoring functions — raw trial lists to normalized scores.

All functions are pure and order-independent: only counts and means matter.

``reaction_score`` is the one partial function.  When no trial is valid
there is no mean to report, and instead of dividing by zero it returns the
:data:`NO_VALID_TRIALS` marker.  :func:`compute_scores` decides what that
means for a report (a ``None`` reaction score, i.e. a reporting gap).
"""

from __future__ import annotations

import math
from typing import Iterable

from screening_core.models.patient import (
    EmotionTrial,
    PatternTrial,
    ReactionTrial,
    TestResultSet,
)
from screening_core.models.report import ScoreSet


class NoValidTrials:
    """Result marker: the reaction test had no valid trials to average."""

    _instance: NoValidTrials | None = None

    def __new__(cls) -> NoValidTrials:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_VALID_TRIALS"

    def __bool__(self) -> bool:
        return False


NO_VALID_TRIALS = NoValidTrials()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's ``round`` uses banker's rounding (``round(62.5) == 62``); the
    client computes the same scores with half-up rounding, so we match it.
    """
    return int(math.floor(value + 0.5))


def _percent_correct(trials: Iterable[EmotionTrial | PatternTrial]) -> int:
    trials = list(trials)
    if not trials:
        return 0
    correct = sum(1 for t in trials if t.is_correct)
    return round_half_up(correct / len(trials) * 100)


def emotion_score(trials: Iterable[EmotionTrial]) -> int:
    """Percent of emotion items answered correctly; 0 for no trials."""
    return _percent_correct(trials)


def pattern_score(trials: Iterable[PatternTrial]) -> int:
    """Percent of pattern sequences reproduced correctly; 0 for no trials."""
    return _percent_correct(trials)


def reaction_score(trials: Iterable[ReactionTrial]) -> int | NoValidTrials:
    """Rounded mean reaction time (ms) of the valid trials only."""
    times = [t.reaction_time for t in trials if t.valid]
    if not times:
        return NO_VALID_TRIALS
    return round_half_up(sum(times) / len(times))


def compute_scores(results: TestResultSet) -> ScoreSet:
    """Score every test in *results*.

    A reaction test without valid trials yields ``reaction_score=None``
    rather than a number, so downstream text never presents a missing
    measurement as a fast one.
    """
    reaction = reaction_score(results.reaction_test)
    return ScoreSet(
        emotion_score=emotion_score(results.emotion_test),
        reaction_score=None if reaction is NO_VALID_TRIALS else reaction,
        pattern_score=pattern_score(results.pattern_test),
    )
