"""Tests for Stage 3: Eligibility."""

from models.schemas.eligibility_result import EligibilityResult
from models.schemas.job_extracted import GradWindow, JobExtracted, MonthYear, RequirementHit
from models.schemas.profile_extracted import ProfileExtracted
from services.pipeline.s3_eligibility import EligibilityService, format_month_year, missing_requirements

WINDOW = GradWindow(start=MonthYear(year=2025, month=12), end=MonthYear(year=2026, month=5))
CPA = RequirementHit(key="req_cpa", label="CPA required")
RN = RequirementHit(key="req_rn", label="RN license required")


class TestEligibilityService:
    def setup_method(self):
        self.svc = EligibilityService()
        self.svc._loaded = True

    def _run(self, grad=None, window=WINDOW, reqs=None, profile_text="Finance major"):
        return self.svc.predict(
            job_extracted=JobExtracted(grad_window=window, hard_requirements=reqs or []),
            profile_extracted=ProfileExtracted(grad_date=grad),
            profile_text=profile_text,
        )

    def test_inside_window(self):
        result = self._run(grad=MonthYear(year=2026, month=5))
        assert isinstance(result, EligibilityResult)
        assert not result.grad_mismatch

    def test_window_edges_inclusive(self):
        assert not self._run(grad=MonthYear(year=2025, month=12)).grad_mismatch

    def test_after_window(self):
        assert self._run(grad=MonthYear(year=2027, month=5)).grad_mismatch

    def test_before_window(self):
        assert self._run(grad=MonthYear(year=2025, month=11)).grad_mismatch

    def test_no_candidate_date_means_no_check(self):
        result = self._run(grad=None)
        assert not result.grad_mismatch

    def test_no_window_means_no_check(self):
        assert not self._run(grad=MonthYear(year=2030, month=1), window=None).grad_mismatch

    def test_missing_credentials(self):
        result = self._run(reqs=[CPA, RN], profile_text="Licensed CPA since 2024")
        assert [r.key for r in result.missing_requirements] == ["req_rn"]


def test_missing_requirements_uses_same_token():
    assert missing_requirements([CPA], "Passed all four sections of the cpa exam") == []
    assert missing_requirements([CPA], "Accounting major") == [CPA]


def test_format_month_year():
    assert format_month_year(MonthYear(year=2026, month=5)) == "May 2026"
    assert format_month_year(MonthYear(year=2025, month=12)) == "December 2025"
