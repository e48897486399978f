"""Stage 6 output: matrix decision, clamped decision and banded score."""

from pydantic import BaseModel

from models.schemas.common import Decision


class DecisionOutcome(BaseModel):
    raw_decision: Decision = "Review"  # matrix result before ceilings
    decision: Decision = "Review"
    score: int = 60
    matched_rule: str = "default"
