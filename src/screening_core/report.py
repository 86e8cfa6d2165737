"""Report assembler — merge everything computed for one request."""

from __future__ import annotations

from datetime import datetime, timezone

from screening_core.models.patient import PatientInfo
from screening_core.models.report import (
    GeneratedReport,
    InterpretationSet,
    Report,
    ScoreSet,
)


def assemble_report(
    patient: PatientInfo,
    scores: ScoreSet,
    interpretations: InterpretationSet,
    generated: GeneratedReport,
    *,
    now: datetime | None = None,
) -> Report:
    """Build the final report record.

    Pure merge apart from the timestamp, which defaults to the current UTC
    time.  No validation happens here; inputs were validated at the API
    boundary.
    """
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    return Report(
        patient_info=patient,
        scores=scores,
        interpretations=interpretations,
        observations=list(generated.observations),
        recommendations=list(generated.recommendations),
        red_flags=list(generated.red_flags),
        timestamp=timestamp,
    )
