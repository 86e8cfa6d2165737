"""Heuristic session analysis computed locally from scores.

Produces the same ``AnalysisResult`` shape the LLM is asked for.  Used as
the deterministic fallback for the analysis endpoint and for the live
analysis messages pushed over the real-time channel.
"""

from __future__ import annotations

from screening_core.constants import INCONSISTENCY_SPREAD
from screening_core.interpretation import accuracy_tier, reaction_tier
from screening_core.models.analysis import AnalysisResult
from screening_core.models.report import ScoreSet


def heuristic_analysis(scores: ScoreSet) -> AnalysisResult:
    """Summarise strengths and concerns from tier membership alone."""
    strengths: list[str] = []
    concerns: list[str] = []
    recommendations: list[str] = []

    emotion = accuracy_tier(scores.emotion_score)
    pattern = accuracy_tier(scores.pattern_score)
    reaction = reaction_tier(scores.reaction_score)

    if emotion == "strong":
        strengths.append(
            f"Emotion recognition is strong ({scores.emotion_score}% correct)."
        )
    elif emotion == "difficulty":
        concerns.append(
            f"Emotion recognition score below 60% ({scores.emotion_score}%)."
        )
        recommendations.append(
            "Consider a structured social-communication assessment."
        )

    if pattern == "strong":
        strengths.append(
            f"Pattern recognition and memory are strong ({scores.pattern_score}% correct)."
        )
    elif pattern == "difficulty":
        concerns.append(
            f"Pattern recognition score below 60% ({scores.pattern_score}%)."
        )
        recommendations.append(
            "Consider a cognitive assessment covering sequencing and working memory."
        )

    if reaction == "quick":
        strengths.append(
            f"Reaction time is within the typical range ({scores.reaction_score} ms)."
        )
    elif reaction == "delayed":
        concerns.append(
            f"Reaction time above 500ms ({scores.reaction_score} ms)."
        )
        recommendations.append(
            "Consider an attention and processing-speed evaluation."
        )
    elif reaction == "unavailable":
        concerns.append("No valid reaction trials were recorded.")
        recommendations.append("Repeat the reaction test in a quiet setting.")

    spread = abs(scores.emotion_score - scores.pattern_score)
    if spread >= INCONSISTENCY_SPREAD:
        concerns.append(
            f"Significant inconsistency across test performance ({spread} point spread)."
        )

    if concerns:
        recommendations.append(
            "Share these results with a qualified clinician for a comprehensive evaluation."
        )
        summary = (
            f"Screening shows {len(concerns)} area(s) of concern and "
            f"{len(strengths)} area(s) of strength."
        )
    else:
        recommendations.append("Continue routine developmental monitoring.")
        summary = "Screening results are within typical ranges across all tests."

    return AnalysisResult(
        summary=summary,
        strengths=strengths,
        concerns=concerns,
        recommendations=recommendations,
    )
