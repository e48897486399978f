"""Stage 5: Gate Evaluator.

Gates are an ordered list of (predicate, effect) pairs. The first
``force_pass`` gate that fires ends the walk; every ``cap_review`` gate that
fires before it is recorded as a ceiling for Stage 6.

    1 hard_exclusion       force_pass
    2 grad_window          force_pass
    3 hard_requirement     force_pass
    4 off_target           cap_review
    5 weak_depth           cap_review
    6 no_alignment         force_pass
    7 weak_alignment       cap_review
    8 remote_preference    cap_review
    9 contract_preference  cap_review

Alignment is computed lazily on first access, so the eligibility gates (1-3)
end an evaluation before Stage 4 ever runs.
"""

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Callable

from models.schemas.alignment_result import AlignmentResult
from models.schemas.eligibility_result import EligibilityResult
from models.schemas.gate_outcome import GateOutcome
from models.schemas.job_extracted import JobExtracted
from models.schemas.profile_extracted import ProfileExtracted
from services.pipeline.base import BaseStageService
from services.pipeline.s3_eligibility import format_month_year

logger = logging.getLogger(__name__)

FORCE_PASS = "force_pass"
CAP_REVIEW = "cap_review"

HARD_REQUIREMENT_INTRO = "This role has explicit hard requirements that are not visible in your profile."
NO_ALIGNMENT_REASON = "No role-relevant alignment is visible for this job's function."


@dataclass
class GateContext:
    job: JobExtracted
    profile: ProfileExtracted
    eligibility: EligibilityResult
    compute_alignment: Callable[[], AlignmentResult]

    @cached_property
    def alignment(self) -> AlignmentResult:
        return self.compute_alignment()

    @property
    def alignment_computed(self) -> bool:
        return "alignment" in self.__dict__


@dataclass(frozen=True)
class Gate:
    name: str
    effect: str
    applies: Callable[[GateContext], bool]
    reasons: Callable[[GateContext], list[str]] | None = None
    visibility_note: bool = True


# ---------------------------------------------------------------------------
# Reasons
# ---------------------------------------------------------------------------

def hard_exclusion_reason(ctx: GateContext) -> str | None:
    """First matching exclusion, checked hourly, contract, sales, government."""
    c, facts, primary = ctx.profile.constraints, ctx.job.facts, ctx.job.primary_function
    if c.hard_no_hourly_pay and facts.is_hourly:
        ev = f" ({facts.hourly_evidence})" if facts.hourly_evidence else ""
        return f"Hourly role{ev} conflicts with an explicit no-hourly exclusion."
    if c.hard_no_contract and facts.is_contract:
        ev = f" ({facts.contract_evidence})" if facts.contract_evidence else ""
        return f"Contract role{ev} conflicts with an explicit no-contract exclusion."
    if c.hard_no_sales and primary == "sales":
        return "Sales-focused role conflicts with an explicit no-sales exclusion."
    if c.hard_no_government and primary == "government_public":
        return "Government/public-sector role conflicts with an explicit no-government exclusion."
    return None


def _grad_window_reasons(ctx: GateContext) -> list[str]:
    window, candidate = ctx.eligibility.grad_window, ctx.eligibility.candidate_grad
    return [
        f"Graduation window mismatch. This role targets graduates between "
        f"{format_month_year(window.start)} and {format_month_year(window.end)}.",
        f"Your profile indicates graduation around {format_month_year(candidate)}.",
    ]


def _hard_requirement_reasons(ctx: GateContext) -> list[str]:
    return [HARD_REQUIREMENT_INTRO] + [r.label for r in ctx.eligibility.missing_requirements]


# ---------------------------------------------------------------------------
# Gate table (order is precedence)
# ---------------------------------------------------------------------------

GATES: list[Gate] = [
    Gate(
        "hard_exclusion", FORCE_PASS,
        lambda ctx: hard_exclusion_reason(ctx) is not None,
        lambda ctx: [hard_exclusion_reason(ctx)],
    ),
    Gate(
        "grad_window", FORCE_PASS,
        lambda ctx: ctx.eligibility.grad_mismatch,
        _grad_window_reasons,
        visibility_note=False,
    ),
    Gate(
        "hard_requirement", FORCE_PASS,
        lambda ctx: bool(ctx.eligibility.missing_requirements),
        _hard_requirement_reasons,
    ),
    Gate(
        "off_target", CAP_REVIEW,
        lambda ctx: ctx.alignment.target_alignment == "off_target",
    ),
    Gate(
        "weak_depth", CAP_REVIEW,
        lambda ctx: ctx.alignment.depth_label == "weak" and ctx.job.seniority != "internship",
    ),
    Gate(
        "no_alignment", FORCE_PASS,
        lambda ctx: ctx.alignment.level == "none",
        lambda ctx: [NO_ALIGNMENT_REASON],
    ),
    Gate(
        "weak_alignment", CAP_REVIEW,
        lambda ctx: ctx.alignment.level == "weak_adjacent",
    ),
    Gate(
        "remote_preference", CAP_REVIEW,
        lambda ctx: ctx.profile.constraints.hard_no_fully_remote and ctx.job.facts.is_fully_remote,
    ),
    Gate(
        "contract_preference", CAP_REVIEW,
        lambda ctx: (
            ctx.profile.constraints.pref_full_time
            and ctx.job.facts.is_contract
            and not ctx.profile.constraints.hard_no_contract
        ),
    ),
]


def evaluate_gates(ctx: GateContext, gates: list[Gate] | None = None) -> GateOutcome:
    ceilings: list[str] = []
    for gate in GATES if gates is None else gates:
        if not gate.applies(ctx):
            continue
        if gate.effect == FORCE_PASS:
            return GateOutcome(
                terminal=True,
                terminal_gate=gate.name,
                reasons=gate.reasons(ctx) if gate.reasons else [],
                show_visibility_note=gate.visibility_note,
                ceilings=ceilings,
                alignment=ctx.alignment if ctx.alignment_computed else None,
            )
        ceilings.append(gate.name)

    return GateOutcome(ceilings=ceilings, alignment=ctx.alignment)


class GateService(BaseStageService):
    stage_name = "s5_gates"

    def load(self) -> None:
        logger.info("S5 Gates ready (%d gates)", len(GATES))

    def predict(self, **kwargs: Any) -> GateOutcome:
        self.ensure_loaded()
        ctx = GateContext(
            job=kwargs["job_extracted"],
            profile=kwargs["profile_extracted"],
            eligibility=kwargs["eligibility"],
            compute_alignment=kwargs["compute_alignment"],
        )
        outcome = evaluate_gates(ctx)
        if outcome.terminal:
            logger.debug("Terminal gate fired: %s", outcome.terminal_gate)
        elif outcome.ceilings:
            logger.debug("Ceilings: %s", ", ".join(outcome.ceilings))
        return outcome
