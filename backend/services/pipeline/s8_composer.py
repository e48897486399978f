"""Stage 8: Output Composer - bullets, next step and the final DecisionResult.

Scored results carry bullets in a fixed narrative order:
    1. what the job centers on
    2. strongest job-signal / profile-signal pairing, or an alignment statement
    3. momentum (Apply / Priority Apply only)
    4. depth credibility
    5. visibility note (Review caused by weak proof)

Terminal Pass results carry the firing gate's reasons instead. Bullets and
risk flags are de-duplicated, capped at 6 and stripped of anything that
repeats the job text verbatim.
"""

import logging
from typing import Any

from models.responses import DebugPayload, DecisionResult
from models.schemas.alignment_result import AlignmentResult
from models.schemas.common import Decision, LocationConstraint
from models.schemas.decision_outcome import DecisionOutcome
from models.schemas.gate_outcome import GateOutcome
from models.schemas.job_extracted import JobExtracted
from models.schemas.profile_extracted import ProfileExtracted
from models.schemas.risk_result import RiskResult
from services.pipeline.base import BaseStageService
from services.pipeline.s4_alignment import infer_target_alignment
from services.pipeline.s6_decision import TERMINAL_PASS_SCORE, enforce_score_band
from services.text_normalizer import drop_job_quotes, uniq_top

logger = logging.getLogger(__name__)

JOBFIT_LOGIC_VERSION = "rules_v1_2026_02_19"

BULLET_LIMIT = 6

ICONS: dict[Decision, str] = {
    "Priority Apply": "🔥",
    "Apply": "✅",
    "Review": "⚠️",
    "Pass": "⛔",
}

NEXT_STEPS: dict[Decision, str] = {
    "Priority Apply": "Priority apply. Then move to networking.",
    "Apply": "Apply. Then move to networking.",
    "Review": "Only apply if you accept the risks.",
    "Pass": "Do not apply.",
}

VISIBILITY_NOTE = (
    "SIGNAL evaluates what is visible. If you have this experience but it is not "
    "clearly shown, the market will treat it as missing."
)

MOMENTUM: dict[Decision, str] = {
    "Priority Apply": "This is one you should prioritize and move quickly on.",
    "Apply": "This is worth applying to based on visible fit.",
}

DEPTH_STATEMENTS = {
    "strong": "Depth is strong. You have multiple credible signals backing the fit.",
    "moderate": "Depth is moderate. You have some fit signals, but this is not a lock.",
    "weak": "Depth is limited for what this job expects.",
}

ALIGNMENT_STATEMENTS = {
    "direct": "Your profile shows clear fit for what this job does.",
    "strong_adjacent": "Your profile is adjacent. You are plausible, but you are not the obvious pick.",
}
TRANSFERABLE_STATEMENT = "Your profile has transferable signals, but fit for this job is not clearly demonstrated."
BROAD_ROLE_STATEMENT = "This role is broad. Decision is based on visible function alignment and competitiveness signals."


def icon_for(decision: Decision) -> str:
    return ICONS[decision]


def next_step_for(decision: Decision) -> str:
    return NEXT_STEPS[decision]


def location_constraint_for(job: JobExtracted) -> LocationConstraint:
    if job.facts.is_fully_remote:
        return "not_constrained"
    if job.facts.is_onsite_required:
        return "constrained"
    return "unclear"


def shows_visibility_note(outcome: DecisionOutcome, alignment: AlignmentResult) -> bool:
    """Pass, or a Review where the proof itself is thin (weak depth or indirect alignment)."""
    if outcome.decision == "Pass":
        return True
    if outcome.decision != "Review":
        return False
    return alignment.depth_label == "weak" or alignment.level != "direct"


def build_bullets(
    job: JobExtracted,
    profile: ProfileExtracted,
    alignment: AlignmentResult,
    outcome: DecisionOutcome,
) -> list[str]:
    if job.signals:
        centers = f"This role centers on: {', '.join(job.signals)}."
    else:
        centers = BROAD_ROLE_STATEMENT

    if job.signals and profile.signals:
        match = f"Your strongest match: {job.signals[0]} backed by {profile.signals[0]}."
    else:
        match = ALIGNMENT_STATEMENTS.get(alignment.level, TRANSFERABLE_STATEMENT)

    bullets = [centers, match]
    if outcome.decision in MOMENTUM:
        bullets.append(MOMENTUM[outcome.decision])
    bullets.append(DEPTH_STATEMENTS[alignment.depth_label])
    if shows_visibility_note(outcome, alignment):
        bullets.append(VISIBILITY_NOTE)
    return bullets


def build_terminal_bullets(gates: GateOutcome) -> list[str]:
    bullets = list(gates.reasons)
    if gates.show_visibility_note:
        bullets.append(VISIBILITY_NOTE)
    return bullets


class ComposerService(BaseStageService):
    stage_name = "s8_composer"

    def load(self) -> None:
        logger.info("S8 Composer ready (logic version %s)", JOBFIT_LOGIC_VERSION)

    def predict(self, **kwargs: Any) -> DecisionResult:
        self.ensure_loaded()
        job_text: str = kwargs["job_text"]
        job: JobExtracted = kwargs["job_extracted"]
        profile: ProfileExtracted = kwargs["profile_extracted"]
        gates: GateOutcome = kwargs["gate_outcome"]
        outcome: DecisionOutcome | None = kwargs.get("decision")
        risk: RiskResult | None = kwargs.get("risk")

        if gates.terminal or outcome is None:
            decision: Decision = "Pass"
            score = enforce_score_band("Pass", TERMINAL_PASS_SCORE)
            bullets = build_terminal_bullets(gates)
            risk_flags: list[str] = []
            risk_codes: list[str] = []
        else:
            decision = outcome.decision
            score = outcome.score
            bullets = build_bullets(job, profile, gates.alignment, outcome)
            risk_flags = risk.flags if risk else []
            risk_codes = risk.codes if risk else []

        return DecisionResult(
            decision=decision,
            icon=icon_for(decision),
            score=score,
            bullets=uniq_top(drop_job_quotes(bullets, job_text), BULLET_LIMIT),
            risk_flags=uniq_top(drop_job_quotes(risk_flags, job_text), BULLET_LIMIT),
            next_step=next_step_for(decision),
            location_constraint=location_constraint_for(job),
            logic_version=JOBFIT_LOGIC_VERSION,
            debug=build_debug(job, profile, gates, risk_codes),
        )


def build_debug(
    job: JobExtracted,
    profile: ProfileExtracted,
    gates: GateOutcome,
    risk_codes: list[str],
) -> DebugPayload:
    alignment = gates.alignment
    if alignment is not None:
        target_alignment = alignment.target_alignment
    else:
        target_alignment = infer_target_alignment(job.primary_function, profile.target_functions)

    return DebugPayload(
        employer_tier=job.employer_tier,
        school_tier=profile.school_tier,
        gpa_band=profile.gpa_band,
        gpa=profile.gpa,
        job_seniority=job.seniority,
        primary_function=job.primary_function,
        alignment_level=alignment.level if alignment else None,
        depth_score=alignment.depth if alignment else None,
        evidence_score=alignment.evidence_score if alignment else None,
        direct_hits=alignment.direct_hits if alignment else None,
        adjacent_hits=alignment.adjacent_hits if alignment else None,
        target_alignment=target_alignment,
        ceilings=list(gates.ceilings),
        risk_codes=list(risk_codes),
        terminal_gate=gates.terminal_gate,
    )
