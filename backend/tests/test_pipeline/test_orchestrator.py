"""Tests for the pipeline orchestrator (end-to-end through all stages)."""

import pytest

from models.responses import DecisionResult
from services.pipeline.orchestrator import JobFitInputError, evaluate_job_fit
from services.pipeline.s6_decision import SCORE_BANDS
from services.pipeline.s8_composer import JOBFIT_LOGIC_VERSION, VISIBILITY_NOTE


HOURLY_JOB = "Front Desk Associate. Pay: $18/hr. Greet guests and answer phones."
HOURLY_PROFILE = "I do not want hourly pay. Looking for full-time roles."

GRAD_JOB = (
    "Summer Analyst Program. Candidates with expected graduation between "
    "December 2025 and May 2026 are encouraged to apply."
)
GRAD_PROFILE = "Economics student, Class of 2027."

IB_JOB = (
    "Investment Banking Analyst, Goldman Sachs. Join our investment banking division to "
    "support M&A execution. Build financial modeling and valuation work, prepare client "
    "presentations in Excel and PowerPoint."
)
IB_PROFILE = (
    "Investment banking summer intern at a boutique bank: built financial modeling and DCF "
    "valuation work. Analyst in student investment fund. President of finance club. Case "
    "competition winner. Research assistant. Major in Finance, GPA 3.9."
)
IB_HINTS = {"school_tier": "S", "gpa_band": "3.8_plus"}

SALES_JOB = (
    "Business Development Representative. Drive new revenue through cold calls and outbound "
    "prospecting. Manage your pipeline in Salesforce and hit a monthly quota. Base salary plus commission."
)
SALES_PROFILE = "Communications major. I want a salaried role with no commission."

BRAND_JOB = (
    "Brand Marketing Coordinator. Support brand strategy and social media calendars for our "
    "consumer products."
)
WEAK_PROFILE = "Led a group project for my leadership seminar and completed a summer internship at a local bakery."

ALL_CASES = [
    (HOURLY_PROFILE, HOURLY_JOB, None),
    (GRAD_PROFILE, GRAD_JOB, None),
    (IB_PROFILE, IB_JOB, IB_HINTS),
    (SALES_PROFILE, SALES_JOB, None),
    (WEAK_PROFILE, BRAND_JOB, None),
    (IB_PROFILE, IB_JOB, None),
    (IB_PROFILE, BRAND_JOB, {"target_roles_list": ["investment banking"]}),
    ("Biology major", "Seeking an RN for the night shift.", None),
]


@pytest.fixture(autouse=True)
def _reset_registry(fresh_registry):
    """Clear stage registry before each test."""


@pytest.mark.scenario
class TestScenarios:
    def test_hourly_exclusion(self):
        result = evaluate_job_fit(HOURLY_PROFILE, HOURLY_JOB)
        assert result.decision == "Pass"
        assert result.score == 45
        assert any("$18/hr" in b for b in result.bullets)
        assert result.debug.terminal_gate == "hard_exclusion"
        assert result.risk_flags == []

    def test_graduation_window(self):
        result = evaluate_job_fit(GRAD_PROFILE, GRAD_JOB)
        assert result.decision == "Pass"
        text = " ".join(result.bullets)
        assert "December 2025" in text
        assert "May 2026" in text
        assert "May 2027" in text
        assert VISIBILITY_NOTE not in result.bullets
        assert result.debug.alignment_level is None

    def test_graduation_window_ignores_internship_dates(self):
        job = (
            "Analyst Program. Candidates with expected graduation between "
            "December 2024 and June 2025 are encouraged to apply."
        )
        result = evaluate_job_fit("Class of 2027. Summer intern, May 2025 - Aug 2025.", job)
        assert result.decision == "Pass"
        assert result.debug.terminal_gate == "grad_window"

    def test_bulleted_exclusions_end_in_pass(self):
        profile = "Hard exclusions:\n- Hourly pay\n- Commission-based sales\n- Government"
        result = evaluate_job_fit(profile, HOURLY_JOB)
        assert result.decision == "Pass"
        assert result.debug.terminal_gate == "hard_exclusion"

    def test_priority_apply(self):
        result = evaluate_job_fit(IB_PROFILE, IB_JOB, IB_HINTS)
        assert result.decision == "Priority Apply"
        assert 85 <= result.score <= 95
        assert result.score == 94
        assert result.icon == "🔥"
        assert result.debug.employer_tier == 1
        assert result.debug.primary_function == "investment_banking_pe_mna"
        assert result.debug.alignment_level == "direct"
        assert result.debug.ceilings == []
        assert result.debug.direct_hits >= 1
        assert result.debug.evidence_score == 2 + result.debug.direct_hits
        assert "tier1_competition" in result.debug.risk_codes

    def test_sales_exclusion(self):
        result = evaluate_job_fit(SALES_PROFILE, SALES_JOB)
        assert result.decision == "Pass"
        assert result.debug.primary_function == "sales"
        assert result.bullets[0] == "Sales-focused role conflicts with an explicit no-sales exclusion."

    def test_weak_adjacent_is_review(self):
        result = evaluate_job_fit(WEAK_PROFILE, BRAND_JOB)
        assert result.debug.alignment_level == "weak_adjacent"
        assert result.decision == "Review"
        assert 50 <= result.score <= 69
        assert "weak_alignment" in result.debug.ceilings
        assert result.bullets[-1] == VISIBILITY_NOTE

    def test_missing_credential(self):
        result = evaluate_job_fit("Biology major", "Seeking an RN for the night shift.")
        assert result.decision == "Pass"
        assert "RN license required" in result.bullets
        assert result.debug.terminal_gate == "hard_requirement"


class TestProperties:
    @pytest.mark.parametrize("profile,job,hints", ALL_CASES)
    def test_deterministic(self, profile, job, hints):
        first = evaluate_job_fit(profile, job, hints)
        second = evaluate_job_fit(profile, job, hints)
        assert first.model_dump_json() == second.model_dump_json()

    @pytest.mark.parametrize("profile,job,hints", ALL_CASES)
    def test_score_in_band(self, profile, job, hints):
        result = evaluate_job_fit(profile, job, hints)
        lo, hi = SCORE_BANDS[result.decision]
        assert lo <= result.score <= hi

    @pytest.mark.parametrize("profile,job,hints", ALL_CASES)
    def test_output_shape(self, profile, job, hints):
        result = evaluate_job_fit(profile, job, hints)
        assert isinstance(result, DecisionResult)
        assert result.logic_version == JOBFIT_LOGIC_VERSION
        assert len(result.bullets) <= 6
        assert len(result.risk_flags) <= 6
        assert len({b.lower() for b in result.bullets}) == len(result.bullets)
        for flag in result.risk_flags:
            lowered = flag.lower()
            assert "visa" not in lowered
            assert "driver" not in lowered
            assert "not stated" not in lowered

    def test_hard_exclusion_beats_weak_alignment(self):
        result = evaluate_job_fit(WEAK_PROFILE + " I do not want hourly pay.", HOURLY_JOB)
        assert result.decision == "Pass"
        assert result.debug.terminal_gate == "hard_exclusion"
        assert "no-hourly" in result.bullets[0]

    def test_off_target_ceiling_caps_decision(self):
        capped = evaluate_job_fit(IB_PROFILE, IB_JOB, {**IB_HINTS, "target_roles_list": ["brand marketing"]})
        assert capped.debug.target_alignment == "off_target"
        assert capped.decision == "Review"
        assert "off_target" in capped.debug.ceilings

    def test_malformed_hints_do_not_raise(self):
        result = evaluate_job_fit(IB_PROFILE, IB_JOB, {"gpa": "abc", "employer_tier": "x", "grad_month": 99})
        assert result.decision in SCORE_BANDS


class TestInputErrors:
    @pytest.mark.parametrize("profile,job", [("", "Analyst"), ("Finance major", "   "), (None, "Analyst")])
    def test_missing_text_raises(self, profile, job):
        with pytest.raises(JobFitInputError):
            evaluate_job_fit(profile, job)

    def test_input_error_is_value_error(self):
        assert issubclass(JobFitInputError, ValueError)
