"""Stage 3 output: eligibility failures that end an evaluation outright."""

from pydantic import BaseModel

from models.schemas.job_extracted import GradWindow, MonthYear, RequirementHit


class EligibilityResult(BaseModel):
    grad_window: GradWindow | None = None
    candidate_grad: MonthYear | None = None
    grad_mismatch: bool = False
    missing_requirements: list[RequirementHit] = []
