"""Stage 6: Decision Resolver - rule table, ceilings, score band.

Runs only when no terminal gate fired. The matrix is an ordered rule list
keyed by (alignment level, employer tier, depth label) with an optional
guard; first match wins and anything unmatched is Review. Ceilings from
Stage 5 then clamp the raw decision to Review at most, and the score is
the decision's base plus small modifiers, clamped back into its band.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from models.schemas.alignment_result import AlignmentResult
from models.schemas.common import Decision, decision_rank
from models.schemas.decision_outcome import DecisionOutcome
from models.schemas.gate_outcome import GateOutcome
from models.schemas.job_extracted import JobExtracted
from models.schemas.profile_extracted import ProfileExtracted
from services.pipeline.base import BaseStageService
from services.text_normalizer import clamp

logger = logging.getLogger(__name__)

SCORE_BANDS: dict[Decision, tuple[int, int]] = {
    "Priority Apply": (85, 95),
    "Apply": (70, 84),
    "Review": (50, 69),
    "Pass": (40, 49),
}
BASE_SCORES: dict[Decision, int] = {"Priority Apply": 90, "Apply": 78, "Review": 60, "Pass": 45}
TERMINAL_PASS_SCORE = 45


def _always(profile: ProfileExtracted, job: JobExtracted) -> bool:
    return True


@dataclass(frozen=True)
class MatrixRule:
    name: str
    alignment: str
    tiers: frozenset
    depths: frozenset
    decision: Decision
    guard: Callable[[ProfileExtracted, JobExtracted], bool] = _always


_STRONG = frozenset({"strong"})
_MODERATE_UP = frozenset({"strong", "moderate"})
_TIER1 = frozenset({1})
_TIER2 = frozenset({2})
_TIER2_4 = frozenset({2, 3, 4})
_TIER3_4 = frozenset({3, 4})


def _pedigree_or_gpa(profile: ProfileExtracted, job: JobExtracted) -> bool:
    return profile.pedigree_strong or profile.gpa_strong


def _pedigree_and_gpa(profile: ProfileExtracted, job: JobExtracted) -> bool:
    return profile.pedigree_strong and profile.gpa_strong


def _gpa_competitive(profile: ProfileExtracted, job: JobExtracted) -> bool:
    return profile.gpa_competitive


def _internship(profile: ProfileExtracted, job: JobExtracted) -> bool:
    return job.seniority == "internship"


# Adjacent fits never reach Priority Apply; the internship carve-out never does either.
MATRIX_RULES: list[MatrixRule] = [
    MatrixRule("direct_tier1_strong", "direct", _TIER1, _STRONG, "Priority Apply", _pedigree_or_gpa),
    MatrixRule("direct_tier1_moderate", "direct", _TIER1, _MODERATE_UP, "Apply", _pedigree_or_gpa),
    MatrixRule("direct_tier1_internship", "direct", _TIER1, _MODERATE_UP, "Apply", _internship),
    MatrixRule("direct_strong", "direct", _TIER2_4, _STRONG, "Priority Apply"),
    MatrixRule("direct_moderate", "direct", _TIER2_4, _MODERATE_UP, "Apply"),
    MatrixRule("adjacent_tier1_strong", "strong_adjacent", _TIER1, _STRONG, "Apply", _pedigree_and_gpa),
    MatrixRule("adjacent_tier2_strong", "strong_adjacent", _TIER2, _STRONG, "Apply", _gpa_competitive),
    MatrixRule("adjacent_internship_strong", "strong_adjacent", _TIER3_4, _STRONG, "Apply", _internship),
]


def resolve_matrix(
    alignment: AlignmentResult,
    job: JobExtracted,
    profile: ProfileExtracted,
    rules: list[MatrixRule] | None = None,
) -> tuple[Decision, str]:
    """Returns (raw decision, matched rule name)."""
    for rule in MATRIX_RULES if rules is None else rules:
        if (
            alignment.level == rule.alignment
            and job.employer_tier in rule.tiers
            and alignment.depth_label in rule.depths
            and rule.guard(profile, job)
        ):
            return rule.decision, rule.name
    return "Review", "default"


def apply_ceilings(decision: Decision, ceilings: list[str]) -> Decision:
    """Any ceiling clamps to Review. Never raises a decision."""
    if ceilings and decision_rank(decision) < decision_rank("Review"):
        return "Review"
    return decision


def enforce_score_band(decision: Decision, score: int) -> int:
    lo, hi = SCORE_BANDS[decision]
    return clamp(score, lo, hi)


def score_modifier(alignment: AlignmentResult, job: JobExtracted, profile: ProfileExtracted) -> int:
    c, facts = profile.constraints, job.facts
    delta = 0
    if alignment.level == "direct":
        delta += 3
    elif alignment.level == "strong_adjacent":
        delta += 1
    if alignment.depth_label == "strong":
        delta += 3
    elif alignment.depth_label == "weak":
        delta -= 3
    if job.employer_tier == 1:
        delta -= 2
    if alignment.target_alignment == "off_target":
        delta -= 4
    if c.pref_full_time and facts.is_contract and not c.hard_no_contract:
        delta -= 2
    if c.hard_no_fully_remote and facts.is_fully_remote:
        delta -= 2
    if job.employer_tier in (1, 2) and not profile.pedigree_strong:
        delta -= 1
    return delta


class DecisionService(BaseStageService):
    stage_name = "s6_decision"

    def load(self) -> None:
        logger.info("S6 Decision resolver ready (%d matrix rules)", len(MATRIX_RULES))

    def predict(self, **kwargs: Any) -> DecisionOutcome:
        self.ensure_loaded()
        job: JobExtracted = kwargs["job_extracted"]
        profile: ProfileExtracted = kwargs["profile_extracted"]
        alignment: AlignmentResult = kwargs["alignment"]
        gates: GateOutcome = kwargs["gate_outcome"]

        raw, rule_name = resolve_matrix(alignment, job, profile)
        decision = apply_ceilings(raw, gates.ceilings)
        score = enforce_score_band(decision, BASE_SCORES[decision] + score_modifier(alignment, job, profile))

        return DecisionOutcome(raw_decision=raw, decision=decision, score=score, matched_rule=rule_name)
