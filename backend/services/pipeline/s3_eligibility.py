"""Stage 3: Eligibility - graduation window and explicit credentials.

Both checks are absolute: a failure here ends the evaluation with Pass
before alignment or depth are ever computed. A missing window or an
unparseable candidate date means no graduation check is performed.
"""

import logging
from typing import Any

from models.schemas.eligibility_result import EligibilityResult
from models.schemas.job_extracted import JobExtracted, MonthYear, RequirementHit
from models.schemas.profile_extracted import ProfileExtracted
from services import taxonomy
from services.pipeline.base import BaseStageService
from services.text_normalizer import normalize_text

logger = logging.getLogger(__name__)

_REQUIREMENT_PATTERNS = {key: pattern for key, _, pattern in taxonomy.HARD_REQUIREMENTS}


class EligibilityService(BaseStageService):
    stage_name = "s3_eligibility"

    def load(self) -> None:
        logger.info("S3 Eligibility ready")

    def predict(self, **kwargs: Any) -> EligibilityResult:
        self.ensure_loaded()
        job: JobExtracted = kwargs["job_extracted"]
        profile: ProfileExtracted = kwargs["profile_extracted"]
        profile_text: str = kwargs["profile_text"]

        window = job.grad_window
        candidate = profile.grad_date
        mismatch = False
        if window is not None and candidate is not None:
            mismatch = not (window.start.index <= candidate.index <= window.end.index)

        return EligibilityResult(
            grad_window=window,
            candidate_grad=candidate,
            grad_mismatch=mismatch,
            missing_requirements=missing_requirements(job.hard_requirements, profile_text),
        )


def profile_shows_requirement(profile_text: str, requirement: RequirementHit) -> bool:
    pattern = _REQUIREMENT_PATTERNS.get(requirement.key)
    if pattern is None:
        return False
    return bool(pattern.search(normalize_text(profile_text)))


def missing_requirements(requirements: list[RequirementHit], profile_text: str) -> list[RequirementHit]:
    return [r for r in requirements if not profile_shows_requirement(profile_text, r)]


def format_month_year(ym: MonthYear) -> str:
    """e.g. "May 2026"."""
    return f"{taxonomy.MONTH_NAMES[ym.month - 1]} {ym.year}"
