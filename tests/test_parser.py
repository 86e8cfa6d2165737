"""Response parser tests — section splitting, classification precedence, JSON analysis.

Test scenarios:
  - Well-formed six-section text → observations, red flags, recommendations
  - No recognizable heading → three empty arrays, no exception
  - Keyword in the section body beats position; headings are not searched
  - Position applies only without a keyword; empty sections keep their slot
  - Preamble and unrouted sections land in the unclassified bucket
  - Markdown decoration and bullet markers are stripped
  - Case-insensitive headings
  - parse_analysis: bare JSON, fenced JSON, junk → None
"""

import pytest

from screening_core.constants import OBSERVATION_CATEGORY
from screening_core.parser import (
    SectionKind,
    classify_section,
    parse_analysis,
    parse_report,
    parse_sections,
)

from helpers.fakes import SAMPLE_ANALYSIS_JSON, SAMPLE_REPORT_TEXT


# =====================================================================
# parse_report
# =====================================================================


class TestParseReport:

    def test_well_formed_sample(self):
        """A six-section report populates all three arrays."""
        report = parse_report(SAMPLE_REPORT_TEXT)

        assert len(report.observations) == 3
        assert all(o.category == OBSERVATION_CATEGORY for o in report.observations)
        assert report.observations[0].details.startswith("Emotion recognition accuracy")
        assert report.red_flags == ["Reaction time variability across trials."]
        assert report.recommendations == [
            "Repeat the reaction test in six months.",
            "Share results with the child's pediatrician.",
        ]

    def test_disclaimer_and_summary_dropped(self):
        report = parse_report(SAMPLE_REPORT_TEXT)
        everything = (
            [o.details for o in report.observations]
            + report.recommendations
            + report.red_flags
        )
        assert not any("screening tool" in line for line in everything)
        assert not any("completed all three" in line for line in everything)

    @pytest.mark.parametrize("text", [
        "",
        None,
        "The child did well overall. Recommend follow-up.",
        "Observations: none. Red flags: none.",
    ])
    def test_no_heading_returns_empty_arrays(self, text):
        report = parse_report(text)
        assert report.observations == []
        assert report.recommendations == []
        assert report.red_flags == []
        assert report.is_empty

    def test_headings_case_insensitive(self):
        text = (
            "1. executive summary\nfine\n"
            "2. Detailed Observations\nlooks at faces\n"
            "3. cognitive and emotional assessment\nintact\n"
            "4. Red Flags and Risk Indicators\nslow starts\n"
            "5. recommendations\nrest\n"
        )
        report = parse_report(text)
        assert [o.details for o in report.observations] == ["looks at faces"]
        assert report.red_flags == ["slow starts"]
        assert report.recommendations == ["rest"]

    def test_markdown_heading_decoration(self):
        text = (
            "## 1. EXECUTIVE SUMMARY ##\n"
            "ok\n"
            "## 2. DETAILED OBSERVATIONS ##\n"
            "* first\n"
            "---\n"
            "• second\n"
            "## 5. RECOMMENDATIONS\n"
            "- We recommend a follow-up visit\n"
        )
        report = parse_report(text)
        assert [o.details for o in report.observations] == ["first", "second"]
        assert report.recommendations == ["We recommend a follow-up visit"]

    def test_numbered_content_lines_are_not_headings(self):
        text = (
            "1. EXECUTIVE SUMMARY\nok\n"
            "2. DETAILED OBSERVATIONS\n1. Tracks faces well\n2. Short attention span\n"
        )
        report = parse_report(text)
        assert [o.details for o in report.observations] == [
            "1. Tracks faces well",
            "2. Short attention span",
        ]


# =====================================================================
# Classification precedence
# =====================================================================


class TestClassification:
    """keyword → positional → unclassified."""

    def test_keyword_rule(self):
        assert classify_section("Key observation: slow starts", 4) == (SectionKind.OBSERVATIONS, "keyword")
        assert classify_section("We Recommend a hearing test", 0) == (SectionKind.RECOMMENDATIONS, "keyword")
        assert classify_section("No red flag for attention", 1) == (SectionKind.RED_FLAGS, "keyword")

    def test_keyword_order(self):
        """observation is checked before recommend."""
        assert classify_section("Observations suggest we recommend rest", 3) == (
            SectionKind.OBSERVATIONS, "keyword",
        )

    def test_positional_rule_without_keyword(self):
        assert classify_section("slow responses", 1) == (SectionKind.OBSERVATIONS, "positional")
        assert classify_section("slow responses", 3) == (SectionKind.RED_FLAGS, "positional")
        assert classify_section("slow responses", 4) == (SectionKind.RECOMMENDATIONS, "positional")

    def test_unclassified(self):
        assert classify_section("The child completed all tasks.", 0) == (SectionKind.UNCLASSIFIED, "none")
        assert classify_section("The child completed all tasks.", None) == (SectionKind.UNCLASSIFIED, "none")

    def test_body_keyword_beats_position(self):
        """A summary that recommends something routes to recommendations."""
        report = parse_report(
            "1. EXECUTIVE SUMMARY\nWe recommend a full developmental evaluation.\n"
            "2. DETAILED OBSERVATIONS\nslow responses\n"
        )
        assert report.recommendations == ["We recommend a full developmental evaluation."]
        assert [o.details for o in report.observations] == ["slow responses"]

    def test_heading_words_are_not_keywords(self):
        """The heading is cut away; only the body and slot count."""
        text = (
            "5. RECOMMENDATIONS\nsee a clinician\n"
            "4. RED FLAGS AND RISK INDICATORS\nlow emotion score\n"
        )
        parsed = parse_sections(text)
        assert [(s.heading, s.kind, s.rule) for s in parsed.sections] == [
            ("RECOMMENDATIONS", SectionKind.UNCLASSIFIED, "none"),
            ("RED FLAGS AND RISK INDICATORS", SectionKind.OBSERVATIONS, "positional"),
        ]

    def test_empty_red_flags_do_not_shift_recommendations(self):
        text = (
            "1. EXECUTIVE SUMMARY\nfine\n"
            "2. DETAILED OBSERVATIONS\nlooks at faces\n"
            "3. COGNITIVE AND EMOTIONAL ASSESSMENT\nintact\n"
            "4. RED FLAGS AND RISK INDICATORS\n\n"
            "5. RECOMMENDATIONS\nrest\n"
            "6. CLINICAL DISCLAIMER\nnot a diagnosis\n"
        )
        report = parse_report(text)
        assert report.red_flags == []
        assert report.recommendations == ["rest"]

    def test_position_counts_empty_sections(self):
        """An empty section keeps its slot for the positional rule."""
        text = (
            "1. EXECUTIVE SUMMARY\n\n"
            "6. CLINICAL DISCLAIMER\nnot a diagnosis\n"
        )
        sections = parse_sections(text).sections
        assert len(sections) == 1
        assert sections[0].position == 1
        assert sections[0].kind is SectionKind.OBSERVATIONS
        assert sections[0].rule == "positional"

    def test_preamble_is_unclassified(self):
        text = "Here is the report you asked for.\n\n" + SAMPLE_REPORT_TEXT
        parsed = parse_sections(text)
        first = parsed.sections[0]
        assert first.heading is None
        assert first.kind is SectionKind.UNCLASSIFIED
        assert first.lines == ["Here is the report you asked for."]
        assert len(parse_report(text).observations) == 3, "preamble must not shift positions"


# =====================================================================
# parse_analysis
# =====================================================================


class TestParseAnalysis:

    def test_bare_json(self):
        result = parse_analysis(SAMPLE_ANALYSIS_JSON)
        assert result is not None
        assert result.summary == "Mixed profile."
        assert result.concerns == ["Slow reactions"]

    def test_fenced_json(self):
        result = parse_analysis("```json\n" + SAMPLE_ANALYSIS_JSON + "\n```")
        assert result is not None
        assert result.strengths == ["Pattern memory"]

    def test_missing_keys_default_empty(self):
        result = parse_analysis('{"summary": "ok"}')
        assert result is not None
        assert result.recommendations == []

    @pytest.mark.parametrize("text", [
        None,
        "",
        "Sure! Here is my analysis: it went well.",
        "[1, 2, 3]",
        '{"strengths": "not a list"}',
    ])
    def test_unusable_returns_none(self, text):
        assert parse_analysis(text) is None
