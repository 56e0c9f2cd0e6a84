"""Routes for unpaid leave eligibility evaluation."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from .schemas import CallerPayload, EvaluationReply
from .service import EligibilityService

router = APIRouter(prefix="/evaluate", tags=["Eligibility"])

CALLER_FAULTS = {"malformed_input", "validation"}


def get_service(request: Request) -> EligibilityService:
    """The evaluation service the application was built with."""
    return request.app.state.eligibility_service


def status_for(reply: EvaluationReply) -> int:
    if not reply.is_error:
        return 200
    if reply.error_kind in CALLER_FAULTS:
        return 422
    return 500


@router.post("", response_model=EvaluationReply)
async def evaluate_eligibility(payload: CallerPayload, request: Request) -> JSONResponse:
    """Evaluate unpaid leave eligibility for one applicant.

    Returns the case, monthly amount and unmet requirements, or the
    validation problems that stopped the evaluation.
    """
    reply = await get_service(request).evaluate(payload)
    return JSONResponse(
        status_code=status_for(reply),
        content=reply.model_dump(mode="json", exclude_none=True),
    )
