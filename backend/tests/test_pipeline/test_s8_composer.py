"""Tests for Stage 8: Output Composer."""

import pytest

from models.responses import DecisionResult
from models.schemas.alignment_result import AlignmentResult
from models.schemas.decision_outcome import DecisionOutcome
from models.schemas.gate_outcome import GateOutcome
from models.schemas.job_extracted import JobExtracted, JobFacts
from models.schemas.profile_extracted import ProfileExtracted
from models.schemas.risk_result import RiskResult
from services.pipeline.s8_composer import (
    BROAD_ROLE_STATEMENT,
    JOBFIT_LOGIC_VERSION,
    VISIBILITY_NOTE,
    ComposerService,
    location_constraint_for,
    shows_visibility_note,
)

JOB = JobExtracted(
    employer_tier=1,
    primary_function="investment_banking_pe_mna",
    signals=["Financial modeling and valuation", "Heavy Excel execution"],
)
PROFILE = ProfileExtracted(school_tier="S", gpa_band="3.8_plus", signals=["Financial modeling and valuation"])
STRONG = AlignmentResult(level="direct", depth=7, depth_label="strong", target_alignment="on_target")


class TestComposerService:
    def setup_method(self):
        self.svc = ComposerService()
        self.svc._loaded = True

    def _compose(self, gates, decision=None, risk=None, job=JOB, profile=PROFILE, job_text="Analyst role"):
        return self.svc.predict(
            job_text=job_text,
            job_extracted=job,
            profile_extracted=profile,
            gate_outcome=gates,
            decision=decision,
            risk=risk,
        )

    def test_priority_apply_narrative(self):
        result = self._compose(
            GateOutcome(alignment=STRONG),
            DecisionOutcome(raw_decision="Priority Apply", decision="Priority Apply", score=94),
            RiskResult(codes=["tier1_competition"], flags=["Tier 1 competition. Expect higher screening and a deeper candidate pool."]),
        )
        assert isinstance(result, DecisionResult)
        assert result.icon == "🔥"
        assert result.next_step == "Priority apply. Then move to networking."
        assert result.bullets == [
            "This role centers on: Financial modeling and valuation, Heavy Excel execution.",
            "Your strongest match: Financial modeling and valuation backed by Financial modeling and valuation.",
            "This is one you should prioritize and move quickly on.",
            "Depth is strong. You have multiple credible signals backing the fit.",
        ]
        assert result.risk_flags == ["Tier 1 competition. Expect higher screening and a deeper candidate pool."]
        assert result.logic_version == JOBFIT_LOGIC_VERSION
        assert result.debug.alignment_level == "direct"
        assert result.debug.depth_score == 7
        assert result.debug.risk_codes == ["tier1_competition"]
        assert result.debug.terminal_gate is None

    def test_debug_carries_alignment_evidence(self):
        alignment = AlignmentResult(
            level="strong_adjacent", evidence_score=3, direct_hits=0, adjacent_hits=2, depth=4, depth_label="moderate"
        )
        result = self._compose(
            GateOutcome(alignment=alignment),
            DecisionOutcome(raw_decision="Apply", decision="Apply", score=80),
            RiskResult(),
        )
        assert result.debug.evidence_score == 3
        assert result.debug.direct_hits == 0
        assert result.debug.adjacent_hits == 2

    def test_broad_role_and_alignment_statement(self):
        job = JobExtracted(primary_function="sales")
        adjacent = AlignmentResult(level="strong_adjacent", depth=4, depth_label="moderate")
        result = self._compose(
            GateOutcome(alignment=adjacent),
            DecisionOutcome(raw_decision="Review", decision="Review", score=61),
            RiskResult(),
            job=job,
            profile=ProfileExtracted(),
        )
        assert result.bullets[0] == BROAD_ROLE_STATEMENT
        assert result.bullets[1].startswith("Your profile is adjacent.")
        assert result.bullets[-1] == VISIBILITY_NOTE

    def test_terminal_pass(self):
        gates = GateOutcome(
            terminal=True,
            terminal_gate="hard_exclusion",
            reasons=["Sales-focused role conflicts with an explicit no-sales exclusion."],
            show_visibility_note=True,
        )
        result = self._compose(gates)
        assert result.decision == "Pass"
        assert result.icon == "⛔"
        assert result.score == 45
        assert result.risk_flags == []
        assert result.next_step == "Do not apply."
        assert result.bullets == [gates.reasons[0], VISIBILITY_NOTE]
        assert result.debug.alignment_level is None
        assert result.debug.depth_score is None
        assert result.debug.evidence_score is None
        assert result.debug.direct_hits is None
        assert result.debug.terminal_gate == "hard_exclusion"

    def test_terminal_pass_without_visibility_note(self):
        gates = GateOutcome(terminal=True, terminal_gate="grad_window", reasons=["a.", "b."])
        assert self._compose(gates).bullets == ["a.", "b."]

    def test_bullets_that_quote_the_job_are_dropped(self):
        job_text = "The role centers on stakeholder communication and presentations, heavy Excel execution, SQL-based analysis."
        job = JobExtracted(
            signals=["Stakeholder communication and presentations", "Heavy Excel execution", "SQL-based analysis"],
        )
        result = self._compose(
            GateOutcome(alignment=STRONG),
            DecisionOutcome(raw_decision="Apply", decision="Apply", score=80),
            RiskResult(),
            job=job,
            job_text=job_text,
        )
        assert not any(b.startswith("This role centers on") for b in result.bullets)


class TestVisibilityNote:
    @pytest.mark.parametrize(
        "final,level,depth_label,expected",
        [
            ("Pass", "direct", "strong", True),
            ("Review", "direct", "weak", True),
            ("Review", "strong_adjacent", "strong", True),
            ("Review", "weak_adjacent", "moderate", True),
            ("Review", "direct", "moderate", False),
            ("Review", "direct", "strong", False),
            ("Apply", "strong_adjacent", "weak", False),
        ],
    )
    def test_rule(self, final, level, depth_label, expected):
        outcome = DecisionOutcome(raw_decision=final, decision=final)
        alignment = AlignmentResult(level=level, depth_label=depth_label)
        assert shows_visibility_note(outcome, alignment) is expected

    def test_pedigree_gap_review_has_no_note(self):
        svc = ComposerService()
        svc._loaded = True
        moderate = AlignmentResult(level="direct", depth=5, depth_label="moderate", target_alignment="on_target")
        result = svc.predict(
            job_text="Analyst role",
            job_extracted=JOB,
            profile_extracted=ProfileExtracted(school_tier="unknown", gpa_band="3.5_3.79"),
            gate_outcome=GateOutcome(alignment=moderate),
            decision=DecisionOutcome(raw_decision="Review", decision="Review", score=60),
            risk=RiskResult(),
        )
        assert result.decision == "Review"
        assert VISIBILITY_NOTE not in result.bullets


@pytest.mark.parametrize(
    "facts,expected",
    [
        (JobFacts(is_fully_remote=True), "not_constrained"),
        (JobFacts(is_onsite_required=True), "constrained"),
        (JobFacts(), "unclear"),
    ],
)
def test_location_constraint(facts, expected):
    assert location_constraint_for(JobExtracted(facts=facts)) == expected
