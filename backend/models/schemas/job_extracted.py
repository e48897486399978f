"""Stage 1 output: structural facts and classifications read from the job text."""

from pydantic import BaseModel

from models.schemas.common import EmployerTier, JobFunction, JobSeniority


class JobFacts(BaseModel):
    """Employment-structure facts. Evidence strings keep the job's casing."""
    is_hourly: bool = False
    hourly_evidence: str | None = None
    is_contract: bool = False
    contract_evidence: str | None = None
    is_fully_remote: bool = False
    is_onsite_required: bool = False


class MonthYear(BaseModel):
    year: int
    month: int  # 1-12

    @property
    def index(self) -> int:
        """Comparable month index (year * 12 + month)."""
        return self.year * 12 + self.month


class GradWindow(BaseModel):
    start: MonthYear
    end: MonthYear


class RequirementHit(BaseModel):
    """An explicit credential the job demands."""
    key: str  # e.g. req_cpa
    label: str  # user-facing, e.g. "CPA required"


class JobExtracted(BaseModel):
    """Structured output of the Job Extractor (Stage 1)."""
    facts: JobFacts = JobFacts()
    employer_tier: EmployerTier = 3
    employer_tier_source: str = "inferred"  # inferred | hint
    primary_function: JobFunction = "unknown"
    seniority: JobSeniority = "unknown"
    signals: list[str] = []  # at most 3 labels, never quotes
    grad_window: GradWindow | None = None
    hard_requirements: list[RequirementHit] = []
