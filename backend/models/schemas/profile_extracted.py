"""Stage 2 output: constraints, pedigree and direction read from the profile."""

from pydantic import BaseModel

from models.schemas.common import GpaBand, JobFunction, SchoolTier
from models.schemas.job_extracted import MonthYear


class ProfileConstraints(BaseModel):
    """Hard exclusions and soft preferences stated by the candidate."""
    hard_no_hourly_pay: bool = False
    pref_full_time: bool = False
    hard_no_contract: bool = False
    hard_no_sales: bool = False
    hard_no_government: bool = False
    hard_no_fully_remote: bool = False  # preference only, never terminal


class ProfileExtracted(BaseModel):
    """Structured output of the Profile Extractor (Stage 2)."""
    constraints: ProfileConstraints = ProfileConstraints()
    school_tier: SchoolTier = "unknown"
    gpa_band: GpaBand = "unknown"
    gpa: float | None = None
    targets: list[str] = []  # raw target phrases
    target_functions: list[JobFunction] = []
    grad_date: MonthYear | None = None
    signals: list[str] = []  # at most 4 labels

    @property
    def pedigree_strong(self) -> bool:
        return self.school_tier in ("S", "A")

    @property
    def gpa_strong(self) -> bool:
        return self.gpa_band == "3.8_plus"

    @property
    def gpa_competitive(self) -> bool:
        return self.gpa_band in ("3.8_plus", "3.5_3.79")
