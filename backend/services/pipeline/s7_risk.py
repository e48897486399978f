"""Stage 7: Risk Assembler.

Codes come from a fixed rule list over upstream signals, are de-duplicated
and capped, then mapped 1:1 to sentences in ``taxonomy.RISK_LABELS``. Codes
without a sentence and sentences about non-actionable topics (visa, driver's
license, "not stated" in the job) never reach the caller.
"""

import logging
from typing import Any, Callable

from models.schemas.alignment_result import AlignmentResult
from models.schemas.job_extracted import JobExtracted
from models.schemas.profile_extracted import ProfileExtracted
from models.schemas.risk_result import RiskResult
from services import taxonomy
from services.pipeline.base import BaseStageService
from services.text_normalizer import normalize_text, uniq_top

logger = logging.getLogger(__name__)

RiskPredicate = Callable[[JobExtracted, ProfileExtracted, AlignmentResult], bool]


def _depth_limited(job: JobExtracted, profile: ProfileExtracted, alignment: AlignmentResult) -> bool:
    if alignment.depth_label == "weak":
        return True
    # Tier 1 treats moderate depth as a concern unless the fit is direct
    return job.employer_tier == 1 and alignment.depth_label == "moderate" and alignment.level != "direct"


def _gpa_below_3_5(job: JobExtracted, profile: ProfileExtracted, alignment: AlignmentResult) -> bool:
    return job.employer_tier in (1, 2) and profile.gpa_band == "below_3.5"


def _gpa_below_3_8(job: JobExtracted, profile: ProfileExtracted, alignment: AlignmentResult) -> bool:
    return job.employer_tier == 1 and profile.gpa_band == "3.5_3.79"


RISK_RULES: list[tuple[str, RiskPredicate]] = [
    ("contract_role", lambda job, profile, alignment: job.facts.is_contract),
    ("hourly_role", lambda job, profile, alignment: job.facts.is_hourly),
    ("fully_remote_role", lambda job, profile, alignment: job.facts.is_fully_remote),
    ("off_target_role", lambda job, profile, alignment: alignment.target_alignment == "off_target"),
    ("targets_unclear", lambda job, profile, alignment: alignment.target_alignment == "unclear"),
    ("strong_adjacent_alignment", lambda job, profile, alignment: alignment.level == "strong_adjacent"),
    ("weak_alignment", lambda job, profile, alignment: alignment.level == "weak_adjacent"),
    ("tier1_competition", lambda job, profile, alignment: job.employer_tier == 1),
    ("tier2_competition", lambda job, profile, alignment: job.employer_tier == 2),
    ("depth_limited", _depth_limited),
    ("pedigree_gap", lambda job, profile, alignment: job.employer_tier in (1, 2) and not profile.pedigree_strong),
    ("gpa_risk_below_3_5", _gpa_below_3_5),
    ("gpa_risk_below_3_8", _gpa_below_3_8),
]


def build_risk_codes(job: JobExtracted, profile: ProfileExtracted, alignment: AlignmentResult) -> list[str]:
    codes = [code for code, applies in RISK_RULES if applies(job, profile, alignment)]
    return uniq_top(codes, taxonomy.RISK_CODE_LIMIT)


def risk_label(code: str) -> str | None:
    return taxonomy.RISK_LABELS.get(code)


def suppress_risk_text(text: str) -> bool:
    """True for risk text about topics the candidate cannot act on."""
    t = normalize_text(text)
    return any(all(marker in t for marker in markers) for markers in taxonomy.SUPPRESSED_RISK_MARKERS)


def to_user_risk_flags(codes: list[str]) -> list[str]:
    labels = (risk_label(code) for code in codes)
    return uniq_top((label for label in labels if label and not suppress_risk_text(label)), taxonomy.RISK_FLAG_LIMIT)


class RiskService(BaseStageService):
    stage_name = "s7_risk"

    def load(self) -> None:
        logger.info("S7 Risk assembler ready (%d rules, %d labels)", len(RISK_RULES), len(taxonomy.RISK_LABELS))

    def predict(self, **kwargs: Any) -> RiskResult:
        self.ensure_loaded()
        codes = build_risk_codes(kwargs["job_extracted"], kwargs["profile_extracted"], kwargs["alignment"])
        return RiskResult(codes=codes, flags=to_user_risk_flags(codes))
