"""Stage 5 output: terminal Pass or the set of ceilings to apply later."""

from pydantic import BaseModel

from models.schemas.alignment_result import AlignmentResult


class GateOutcome(BaseModel):
    terminal: bool = False
    terminal_gate: str | None = None
    reasons: list[str] = []  # bullets for a terminal Pass
    show_visibility_note: bool = False
    ceilings: list[str] = []  # names of cap-to-Review gates that fired, in gate order
    alignment: AlignmentResult | None = None  # None when an eligibility gate ended the run
