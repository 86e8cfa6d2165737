"""PromptManager — Jinja2-based prompt renderer for the completion backends.

Loads templates from the ``template/`` directory:

  - ``report.jinja2``           six-section clinical report request
  - ``analysis.jinja2``         open-ended analysis with a JSON payload
  - ``fallback_report.jinja2``  deterministic six-section report text

The section headings come from ``REPORT_SECTIONS`` so the prompt and the
response parser always share one vocabulary.
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import jinja2

from screening_core.constants import REPORT_SECTIONS
from screening_core.models.patient import PatientInfo, TestResultSet
from screening_core.models.report import InterpretationSet, ScoreSet


class PromptManager:
    """Jinja2-based prompt renderer.

    Args:
        template_dir: optional override for the template directory.
            Defaults to ``template/`` sibling of this module.
    """

    def __init__(self, template_dir: Path | None = None) -> None:
        if template_dir is None:
            template_dir = Path(__file__).parent / "template"
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.StrictUndefined,
        )
        self._env.filters["tojson"] = lambda v: json.dumps(v, ensure_ascii=False, indent=2)

    def render(self, template_name: str, **context) -> str:
        """Render a named template with arbitrary context."""
        template = self._env.get_template(template_name)
        return template.render(sections=REPORT_SECTIONS, **context)

    def render_report(
        self,
        patient: PatientInfo,
        scores: ScoreSet,
        *,
        assessment_date: date | None = None,
    ) -> str:
        """Render the report request.

        Deterministic given its inputs; *assessment_date* defaults to today.
        """
        return self.render(
            "report.jinja2",
            patient=patient,
            scores=scores,
            assessment_date=(assessment_date or date.today()).isoformat(),
        )

    def render_analysis(
        self,
        results: TestResultSet,
        scores: ScoreSet,
        interpretations: InterpretationSet,
        *,
        patient: PatientInfo | None = None,
    ) -> str:
        """Render the analysis request around a structured JSON payload.

        Only age and gender are sent; name and id stay on the server.
        """
        payload: dict = {
            "scores": scores.model_dump(by_alias=True),
            "interpretations": interpretations.model_dump(by_alias=True),
            "trialCounts": {
                "emotionTest": len(results.emotion_test),
                "reactionTest": len(results.reaction_test),
                "validReactionTrials": sum(1 for t in results.reaction_test if t.valid),
                "patternTest": len(results.pattern_test),
            },
        }
        if patient is not None:
            payload["patient"] = {"age": patient.age, "gender": patient.gender}
        return self.render("analysis.jinja2", payload=payload)

    def render_fallback_report(
        self,
        scores: ScoreSet,
        interpretations: InterpretationSet,
        *,
        red_flags: list[str],
        recommendations: list[str],
    ) -> str:
        """Render deterministic report text in the same six-section layout."""
        return self.render(
            "fallback_report.jinja2",
            scores=scores,
            interpretations=interpretations,
            red_flags=red_flags,
            recommendations=recommendations,
        )
