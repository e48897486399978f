"""Pipeline orchestrator: wires the eight JobFit stages together.

Flow:
    profile_text + job_text (+ profile_structured hints)
      ├─ S1.predict(job_text)                 → JobExtracted
      ├─ S2.predict(profile_text)             → ProfileExtracted
      ├─ S3.predict(job, profile)             → EligibilityResult
      ├─ S5.predict(..., compute_alignment)   → GateOutcome
      │       └─ S4.predict (lazily, only once gates 1-3 have passed) → AlignmentResult
      │
      ├─ terminal gate? ──────────────────────────────┐
      ├─ S6.predict(alignment, ceilings)      → DecisionOutcome
      ├─ S7.predict(alignment)                → RiskResult
      └─ S8.predict(everything) ◄─────────────────────┘ → DecisionResult

The whole run is synchronous and keeps no state between calls, so
identical inputs always produce an identical result.
"""

import logging
from typing import Any

from models.requests import ProfileHints
from models.responses import DecisionResult
from models.schemas.alignment_result import AlignmentResult
from models.schemas.decision_outcome import DecisionOutcome
from models.schemas.eligibility_result import EligibilityResult
from models.schemas.gate_outcome import GateOutcome
from models.schemas.job_extracted import JobExtracted
from models.schemas.profile_extracted import ProfileExtracted
from models.schemas.risk_result import RiskResult
from services.pipeline.stage_registry import get_stage

logger = logging.getLogger(__name__)


class JobFitInputError(ValueError):
    """Raised when the required texts are missing before any stage runs."""


def _require_text(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise JobFitInputError(f"{name} must be a string")
    if not value.strip():
        raise JobFitInputError(f"{name} is required")
    return value


def evaluate_job_fit(
    profile_text: str,
    job_text: str,
    profile_structured: Any = None,
) -> DecisionResult:
    """Run the deterministic JobFit pipeline and return one DecisionResult."""
    profile_text = _require_text("profile_text", profile_text)
    job_text = _require_text("job_text", job_text)
    hints = ProfileHints.from_raw(profile_structured)

    # --- Extraction ---
    job: JobExtracted = get_stage("s1_job_extractor").predict(job_text=job_text, hints=hints)
    profile: ProfileExtracted = get_stage("s2_profile_extractor").predict(
        profile_text=profile_text, hints=hints
    )
    logger.debug(
        "Extracted: function=%s seniority=%s tier=%s(%s) school=%s gpa_band=%s targets=%s",
        job.primary_function,
        job.seniority,
        job.employer_tier,
        job.employer_tier_source,
        profile.school_tier,
        profile.gpa_band,
        profile.target_functions,
    )

    # --- Eligibility ---
    eligibility: EligibilityResult = get_stage("s3_eligibility").predict(
        job_extracted=job,
        profile_extracted=profile,
        profile_text=profile_text,
    )

    # --- Gates (alignment computed on demand) ---
    def compute_alignment() -> AlignmentResult:
        return get_stage("s4_alignment").predict(
            profile_text=profile_text,
            job_extracted=job,
            profile_extracted=profile,
        )

    gates: GateOutcome = get_stage("s5_gates").predict(
        job_extracted=job,
        profile_extracted=profile,
        eligibility=eligibility,
        compute_alignment=compute_alignment,
    )

    decision: DecisionOutcome | None = None
    risk: RiskResult | None = None
    if not gates.terminal:
        # --- Decision + risks ---
        decision = get_stage("s6_decision").predict(
            job_extracted=job,
            profile_extracted=profile,
            alignment=gates.alignment,
            gate_outcome=gates,
        )
        risk = get_stage("s7_risk").predict(
            job_extracted=job,
            profile_extracted=profile,
            alignment=gates.alignment,
        )
        logger.debug(
            "Matrix: rule=%s raw=%s final=%s ceilings=%s",
            decision.matched_rule,
            decision.raw_decision,
            decision.decision,
            gates.ceilings,
        )

    # --- Output ---
    result: DecisionResult = get_stage("s8_composer").predict(
        job_text=job_text,
        job_extracted=job,
        profile_extracted=profile,
        gate_outcome=gates,
        decision=decision,
        risk=risk,
    )

    logger.info(
        "JobFit evaluated: decision=%s score=%d terminal_gate=%s",
        result.decision,
        result.score,
        gates.terminal_gate or "-",
    )
    return result
