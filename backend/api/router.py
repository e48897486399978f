from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings
from models.requests import JobFitRequest
from models.responses import JobFitResponse
from services.fingerprint import jobfit_fingerprint
from services.pipeline.orchestrator import JobFitInputError, evaluate_job_fit
from services.pipeline.s8_composer import JOBFIT_LOGIC_VERSION

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "logic_version": JOBFIT_LOGIC_VERSION,
    }


@router.post("/jobfit", response_model=JobFitResponse)
@limiter.limit(settings.rate_limit)
async def jobfit(request: Request, body: JobFitRequest):
    try:
        result = evaluate_job_fit(body.profile_text, body.job_text, body.profile_structured)
    except JobFitInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    fingerprint_hash, fingerprint_code = jobfit_fingerprint(
        body.profile_text,
        body.job_text,
        body.profile_structured,
        result.logic_version,
    )
    return JobFitResponse(
        **result.model_dump(),
        fingerprint_hash=fingerprint_hash,
        fingerprint_code=fingerprint_code,
    )
