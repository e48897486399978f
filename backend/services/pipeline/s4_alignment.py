"""Stage 4: Alignment & Depth.

Alignment: keyword hits of the profile against the job function's direct
set, then against the direct sets of its strongly adjacent functions, then
generic weak signals.

    >=1 direct hit        -> direct
    >=1 adjacent hit      -> strong_adjacent
    >=2 weak signals      -> weak_adjacent
    otherwise             -> none

Depth: summed indicator weights, shifted by job seniority, clamped to 0-10.
Target alignment compares the job function with the candidate's targets.
"""

import logging
import re
from typing import Any

from models.schemas.alignment_result import AlignmentResult
from models.schemas.common import AlignmentLevel, DepthLabel, JobFunction, JobSeniority, TargetAlignment
from models.schemas.job_extracted import JobExtracted
from models.schemas.profile_extracted import ProfileExtracted
from services import taxonomy
from services.pipeline.base import BaseStageService
from services.text_normalizer import clamp, normalize_text

logger = logging.getLogger(__name__)

WEAK_SIGNAL_MIN = 2


class AlignmentService(BaseStageService):
    stage_name = "s4_alignment"

    def load(self) -> None:
        logger.info("S4 Alignment ready (%d depth indicators)", len(taxonomy.DEPTH_INDICATORS))

    def predict(self, **kwargs: Any) -> AlignmentResult:
        self.ensure_loaded()
        profile_text: str = kwargs["profile_text"]
        job: JobExtracted = kwargs["job_extracted"]
        profile: ProfileExtracted = kwargs["profile_extracted"]

        level, evidence_score, direct_hits, adjacent_hits = infer_alignment_level(
            profile_text, job.primary_function
        )
        depth, depth_label = compute_depth_score(profile_text, job.seniority)

        return AlignmentResult(
            level=level,
            evidence_score=evidence_score,
            direct_hits=direct_hits,
            adjacent_hits=adjacent_hits,
            depth=depth,
            depth_label=depth_label,
            target_alignment=infer_target_alignment(job.primary_function, profile.target_functions),
        )


def count_keyword_hits(text: str, patterns: list[re.Pattern]) -> int:
    """Number of distinct keywords from ``patterns`` present in ``text``."""
    t = normalize_text(text)
    found: set[str] = set()
    for pattern in patterns:
        found.update(m.group(0) for m in pattern.finditer(t))
    return len(found)


def infer_alignment_level(profile_text: str, primary: JobFunction) -> tuple[AlignmentLevel, int, int, int]:
    """Returns (level, evidence_score, direct_hits, best_adjacent_hits)."""
    if primary == "unknown":
        # No function to align against; the most conservative non-terminal level
        return "weak_adjacent", 0, 0, 0

    direct_hits = count_keyword_hits(profile_text, taxonomy.DIRECT_KEYWORDS.get(primary, []))
    if direct_hits >= 1:
        return "direct", 2 + direct_hits, direct_hits, 0

    best_adjacent = 0
    for adjacent in taxonomy.STRONG_ADJACENCY.get(primary, []):
        hits = count_keyword_hits(profile_text, taxonomy.DIRECT_KEYWORDS.get(adjacent, []))
        best_adjacent = max(best_adjacent, hits)
    if best_adjacent >= 1:
        return "strong_adjacent", 1 + best_adjacent, 0, best_adjacent

    t = normalize_text(profile_text)
    weak_signals = sum(1 for pattern in taxonomy.WEAK_SIGNAL_PATTERNS if pattern.search(t))
    if weak_signals >= WEAK_SIGNAL_MIN:
        return "weak_adjacent", 1, 0, 0
    return "none", 0, 0, 0


def depth_label_for(depth: int) -> DepthLabel:
    if depth >= taxonomy.DEPTH_STRONG_MIN:
        return "strong"
    if depth >= taxonomy.DEPTH_MODERATE_MIN:
        return "moderate"
    return "weak"


def compute_depth_score(profile_text: str, seniority: JobSeniority) -> tuple[int, DepthLabel]:
    t = normalize_text(profile_text)
    depth = sum(weight for _, pattern, weight in taxonomy.DEPTH_INDICATORS if pattern.search(t))
    depth += taxonomy.SENIORITY_DEPTH_ADJUSTMENT.get(seniority, 0)
    depth = clamp(depth, 0, 10)
    return depth, depth_label_for(depth)


def infer_target_alignment(primary: JobFunction, targets: list[JobFunction]) -> TargetAlignment:
    if not targets:
        return "unclear"
    if primary in targets:
        return "on_target"
    return "off_target"
