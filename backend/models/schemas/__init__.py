"""Inter-stage Pydantic contracts for the JobFit pipeline."""

from models.schemas.job_extracted import JobExtracted
from models.schemas.profile_extracted import ProfileExtracted
from models.schemas.eligibility_result import EligibilityResult
from models.schemas.alignment_result import AlignmentResult
from models.schemas.gate_outcome import GateOutcome
from models.schemas.decision_outcome import DecisionOutcome
from models.schemas.risk_result import RiskResult

__all__ = [
    "JobExtracted",
    "ProfileExtracted",
    "EligibilityResult",
    "AlignmentResult",
    "GateOutcome",
    "DecisionOutcome",
    "RiskResult",
]
