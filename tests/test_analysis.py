"""Heuristic analysis and report assembly tests."""

from datetime import datetime, timezone

from screening_core.analysis import heuristic_analysis
from screening_core.interpretation import interpret_scores
from screening_core.models.report import GeneratedReport, Observation, ScoreSet
from screening_core.report import assemble_report


def _scores(emotion: int, reaction: int | None, pattern: int) -> ScoreSet:
    return ScoreSet(emotion_score=emotion, reaction_score=reaction, pattern_score=pattern)


class TestHeuristicAnalysis:

    def test_typical_profile(self):
        result = heuristic_analysis(_scores(90, 250, 85))
        assert result.concerns == []
        assert len(result.strengths) == 3
        assert result.summary == "Screening results are within typical ranges across all tests."
        assert result.recommendations == ["Continue routine developmental monitoring."]

    def test_low_scores_flagged(self):
        result = heuristic_analysis(_scores(40, 650, 50))
        joined = " ".join(result.concerns)
        assert "Emotion recognition score below 60%" in joined
        assert "Pattern recognition score below 60%" in joined
        assert "Reaction time above 500ms" in joined
        assert result.summary.startswith("Screening shows 3 area(s) of concern")

    def test_inconsistency_flagged(self):
        result = heuristic_analysis(_scores(90, 250, 55))
        assert any("inconsistency" in c for c in result.concerns)

    def test_spread_below_threshold_not_flagged(self):
        result = heuristic_analysis(_scores(85, 250, 60))
        assert not any("inconsistency" in c for c in result.concerns)

    def test_missing_reaction(self):
        result = heuristic_analysis(_scores(85, None, 85))
        assert "No valid reaction trials were recorded." in result.concerns

    def test_concerns_add_clinician_referral(self):
        result = heuristic_analysis(_scores(40, 250, 85))
        assert any("qualified clinician" in r for r in result.recommendations)


class TestAssembleReport:

    def test_merges_all_groups(self, patient):
        scores = _scores(75, 383, 80)
        interpretations = interpret_scores(scores)
        generated = GeneratedReport(
            observations=[Observation(category="Clinical Observation", details="x")],
            recommendations=["y"],
            red_flags=[],
        )
        now = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)

        report = assemble_report(patient, scores, interpretations, generated, now=now)

        assert report.patient_info is patient
        assert report.scores == scores
        assert report.interpretations == interpretations
        assert report.recommendations == ["y"]
        assert report.red_flags == []
        assert report.timestamp == "2024-03-01T12:00:00+00:00"

    def test_empty_generated_content_is_arrays(self, patient):
        scores = _scores(75, 383, 80)
        report = assemble_report(patient, scores, interpret_scores(scores), GeneratedReport())
        dumped = report.model_dump(by_alias=True)
        assert dumped["observations"] == []
        assert dumped["recommendations"] == []
        assert dumped["redFlags"] == []
