"""Stage 4 output: how directly and how credibly the profile fits the job."""

from pydantic import BaseModel

from models.schemas.common import AlignmentLevel, DepthLabel, TargetAlignment


class AlignmentResult(BaseModel):
    level: AlignmentLevel = "none"
    evidence_score: int = 0
    direct_hits: int = 0
    adjacent_hits: int = 0
    depth: int = 0  # 0-10
    depth_label: DepthLabel = "weak"
    target_alignment: TargetAlignment = "unclear"
