from pydantic import BaseModel

from models.schemas.common import (
    AlignmentLevel,
    Decision,
    EmployerTier,
    GpaBand,
    JobFunction,
    JobSeniority,
    LocationConstraint,
    SchoolTier,
    TargetAlignment,
)


class DebugPayload(BaseModel):
    """Diagnostics only. Everything a caller needs is also in the primary fields."""
    employer_tier: EmployerTier = 3
    school_tier: SchoolTier = "unknown"
    gpa_band: GpaBand = "unknown"
    gpa: float | None = None
    job_seniority: JobSeniority = "unknown"
    primary_function: JobFunction = "unknown"
    alignment_level: AlignmentLevel | None = None  # None when a gate ended the run first
    depth_score: int | None = None
    evidence_score: int | None = None
    direct_hits: int | None = None
    adjacent_hits: int | None = None
    target_alignment: TargetAlignment = "unclear"
    ceilings: list[str] = []
    risk_codes: list[str] = []
    terminal_gate: str | None = None


class DecisionResult(BaseModel):
    decision: Decision
    icon: str
    score: int
    bullets: list[str] = []
    risk_flags: list[str] = []
    next_step: str
    location_constraint: LocationConstraint = "unclear"
    logic_version: str
    debug: DebugPayload = DebugPayload()

    model_config = {"frozen": True}


class JobFitResponse(DecisionResult):
    fingerprint_hash: str
    fingerprint_code: str
