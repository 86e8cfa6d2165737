"""ReportPipeline — orchestrates scoring, prompting, completion and parsing.

Report flow::

    TestResultSet ──► compute_scores ──► interpret_scores
                                   │
                                   ▼
                     PromptManager.render_report
                                   │
                                   ▼
                LLMGateway.complete (live or fallback)
                                   │
                                   ▼
                      parse_report ──► assemble_report ──► ReportEnvelope

If the live model answers but nothing usable can be parsed out of its text,
the pipeline asks the gateway for fallback content instead, so a report
never goes out with empty generated sections unless the fallback itself
produced none.

Usage::

    pipeline = ReportPipeline(gateway, prompts, llm_settings)
    envelope = await pipeline.generate_report(results, patient)
    envelope.report.scores.emotion_score
    envelope.degraded
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import AsyncIterator

from screening_core.config import LLMSettings
from screening_core.constants import ANALYSIS_SYSTEM_PROMPT, REPORT_SYSTEM_PROMPT
from screening_core.errors import ReportValidationError
from screening_core.gateway import NOTE_UNPARSEABLE, LLMGateway
from screening_core.interpretation import interpret_scores
from screening_core.models.analysis import AnalysisEnvelope
from screening_core.models.completion import (
    CompletionKind,
    CompletionRequest,
    StreamEvent,
)
from screening_core.models.patient import PatientInfo, TestResultSet
from screening_core.models.report import ReportEnvelope
from screening_core.parser import parse_analysis, parse_report
from screening_core.prompt import PromptManager
from screening_core.report import assemble_report
from screening_core.scoring import compute_scores

logger = logging.getLogger(__name__)


class ReportPipeline:
    """Stateless per-request orchestration over a shared gateway.

    Args:
        gateway: the LLM gateway (live backend plus fallback)
        prompts: prompt manager used to render report and analysis prompts
        settings: LLM settings supplying temperatures and token bounds
    """

    def __init__(
        self,
        gateway: LLMGateway,
        prompts: PromptManager,
        settings: LLMSettings,
    ) -> None:
        self._gateway = gateway
        self._prompts = prompts
        self._settings = settings

    # ==================================================================
    # Report
    # ==================================================================

    async def generate_report(
        self,
        results: TestResultSet,
        patient: PatientInfo,
        *,
        assessment_date: date | None = None,
    ) -> ReportEnvelope:
        """Score, prompt, complete, parse and assemble one report.

        Raises:
            ReportValidationError: if *patient* is missing
        """
        if patient is None:
            raise ReportValidationError("Invalid patient information")
        scores = compute_scores(results)
        interpretations = interpret_scores(scores)

        request = CompletionRequest(
            kind=CompletionKind.REPORT,
            system_prompt=REPORT_SYSTEM_PROMPT,
            user_prompt=self._prompts.render_report(
                patient, scores, assessment_date=assessment_date,
            ),
            max_tokens=self._settings.report_max_tokens,
            temperature=self._settings.report_temperature,
            scores=scores,
            interpretations=interpretations,
        )
        result = await self._gateway.complete(request)
        generated = parse_report(result.text)

        if generated.is_empty and not result.degraded:
            logger.warning("Report text had no usable sections; using fallback")
            result = await self._gateway.fallback(request, NOTE_UNPARSEABLE)
            generated = parse_report(result.text)

        report = assemble_report(patient, scores, interpretations, generated)
        return ReportEnvelope(
            report=report,
            degraded=result.degraded,
            note=result.note,
            model=result.model,
        )

    # ==================================================================
    # Analysis
    # ==================================================================

    def _analysis_request(
        self,
        results: TestResultSet,
        patient: PatientInfo | None,
    ) -> CompletionRequest:
        if not (results.emotion_test or results.reaction_test or results.pattern_test):
            raise ReportValidationError("No test results submitted")
        scores = compute_scores(results)
        interpretations = interpret_scores(scores)
        return CompletionRequest(
            kind=CompletionKind.ANALYSIS,
            system_prompt=ANALYSIS_SYSTEM_PROMPT,
            user_prompt=self._prompts.render_analysis(
                results, scores, interpretations, patient=patient,
            ),
            max_tokens=self._settings.analysis_max_tokens,
            temperature=self._settings.analysis_temperature,
            scores=scores,
            interpretations=interpretations,
        )

    async def analyze(
        self,
        results: TestResultSet,
        patient: PatientInfo | None = None,
    ) -> AnalysisEnvelope:
        """Open-ended analysis; the model is expected to answer in JSON."""
        request = self._analysis_request(results, patient)
        result = await self._gateway.complete(request)
        analysis = parse_analysis(result.text)

        if analysis is None:
            logger.warning("Analysis text was not usable JSON; using fallback")
            result = await self._gateway.fallback(request, NOTE_UNPARSEABLE)
            analysis = parse_analysis(result.text)

        return AnalysisEnvelope(
            scores=request.scores,
            interpretations=request.interpretations,
            analysis=analysis,
            degraded=result.degraded,
            note=result.note,
            model=result.model,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    def stream_analysis(
        self,
        results: TestResultSet,
        patient: PatientInfo | None = None,
    ) -> AsyncIterator[StreamEvent]:
        """Stream analysis text as it arrives (see ``LLMGateway.stream``)."""
        request = self._analysis_request(results, patient)
        return self._gateway.stream(request)
