"""Stage 7 output: internal risk codes and the sentences shown for them."""

from pydantic import BaseModel


class RiskResult(BaseModel):
    codes: list[str] = []  # internal, surfaced only in debug
    flags: list[str] = []  # user-facing, at most 6
