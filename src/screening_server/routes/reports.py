"""Report generation endpoint.

Requires the bearer token when one is configured.  The body is validated by
pydantic; failures are turned into 400s by the global handler.  LLM
failures are not errors here: the response is still 200 with
``degraded: true`` and fallback content.
"""

from fastapi import APIRouter, Depends

from screening_core.models.base import CamelModel
from screening_core.models.patient import PatientInfo, TestResultSet
from screening_core.models.report import ReportEnvelope
from screening_core.pipeline import ReportPipeline

from screening_server.dependencies import get_pipeline, require_token

router = APIRouter(tags=["reports"], dependencies=[Depends(require_token)])


# ------------------------------------------------------------------
# Request models
# ------------------------------------------------------------------

class GenerateReportRequest(CamelModel):
    """Body for POST /generate-report."""
    test_results: TestResultSet
    patient_info: PatientInfo


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.post("/generate-report")
async def generate_report(
    body: GenerateReportRequest,
    pipeline: ReportPipeline = Depends(get_pipeline),
) -> ReportEnvelope:
    """Score the submitted trials and return the assembled clinical report."""
    return await pipeline.generate_report(body.test_results, body.patient_info)
