"""Tests for Stage 2: Profile Extractor."""

import pytest

from models.requests import ProfileHints
from models.schemas.job_extracted import MonthYear
from services.pipeline.s2_profile_extractor import (
    ProfileExtractorService,
    extract_candidate_grad,
    extract_profile_signals,
    map_targets_to_functions,
    read_gpa_band,
    read_school_tier,
    read_targets,
)


class TestConstraints:
    def setup_method(self):
        self.svc = ProfileExtractorService()
        self.svc.ensure_loaded()

    def test_do_not_want_hourly(self):
        c = self.svc.extract_constraints("I do not want hourly pay. Looking for full-time roles.")
        assert c.hard_no_hourly_pay
        assert c.pref_full_time
        assert not c.hard_no_contract

    def test_prefix_no_commission_is_sales_exclusion(self):
        c = self.svc.extract_constraints("Salaried roles only, no commission.")
        assert c.hard_no_sales

    def test_hard_exclusions_list(self):
        c = self.svc.extract_constraints("Hard exclusions: contract, government, fully remote")
        assert c.hard_no_contract
        assert c.hard_no_government
        assert c.hard_no_fully_remote

    def test_bulleted_exclusion_list(self):
        c = self.svc.extract_constraints("Hard exclusions:\n- Hourly pay\n- Commission-based sales\n- Government")
        assert c.hard_no_hourly_pay
        assert c.hard_no_sales
        assert c.hard_no_government
        assert not c.hard_no_contract

    def test_inline_bullets_under_heading(self):
        c = self.svc.extract_constraints("I do not want: • contract work • fully remote roles")
        assert c.hard_no_contract
        assert c.hard_no_fully_remote

    def test_list_heading_ends_at_blank_line(self):
        c = self.svc.extract_constraints("Hard exclusions:\n- Hourly pay\n\nExperience:\n- Sales associate at Target")
        assert c.hard_no_hourly_pay
        assert not c.hard_no_sales

    def test_topic_without_negation_is_not_exclusion(self):
        c = self.svc.extract_constraints("I spent a summer in sales and worked a government internship.")
        assert not c.hard_no_sales
        assert not c.hard_no_government

    def test_negation_in_other_clause_does_not_leak(self):
        c = self.svc.extract_constraints("I do not want to relocate. Sales experience at a startup.")
        assert not c.hard_no_sales

    def test_negation_word_inside_other_word_ignored(self):
        c = self.svc.extract_constraints("Nobody outsold me: top hourly associate at the store.")
        assert not c.hard_no_hourly_pay

    def test_templates_are_adjustable(self):
        svc = ProfileExtractorService(negation_phrases=["never"], prefix_phrases=[])
        svc.ensure_loaded()
        assert svc.extract_constraints("I will never take a contract job.").hard_no_contract
        assert not svc.extract_constraints("No contract work.").hard_no_contract


class TestHintReaders:
    def test_school_tier_hint_wins(self):
        assert read_school_tier(ProfileHints(school_tier="B"), "Harvard College") == "B"

    def test_school_tier_allowlist(self):
        assert read_school_tier(ProfileHints(), "B.A. Economics, Duke University") == "A"
        assert read_school_tier(ProfileHints(), "Wharton School, class of 2026") == "S"
        assert read_school_tier(ProfileHints(), "State College") == "unknown"

    @pytest.mark.parametrize(
        "gpa,expected",
        [(3.9, "3.8_plus"), (3.8, "3.8_plus"), (3.6, "3.5_3.79"), (3.2, "below_3.5"), (None, "unknown")],
    )
    def test_gpa_band_from_decimal(self, gpa, expected):
        assert read_gpa_band(ProfileHints(gpa=gpa)) == expected

    def test_gpa_band_hint_wins(self):
        assert read_gpa_band(ProfileHints(gpa=3.2, gpa_band="3.8_plus")) == "3.8_plus"

    def test_gpa_band_never_guessed_from_prose(self):
        svc = ProfileExtractorService()
        result = svc.predict(profile_text="GPA 3.95, Dean's List")
        assert result.gpa_band == "unknown"


class TestTargets:
    def test_targets_from_hints(self):
        hints = ProfileHints(target_roles_list=["Private Equity", "Brand Marketing"])
        assert read_targets(hints, "") == ["Private Equity", "Brand Marketing"]

    def test_targets_from_prose(self):
        assert read_targets(ProfileHints(), "Interested in consulting and operations.") == [
            "consulting",
            "operations",
        ]

    def test_target_maps_to_every_named_function(self):
        functions = map_targets_to_functions(["marketing"])
        assert "marketing_analytics" in functions
        assert "brand_marketing" in functions

    def test_target_mapping_dedupes(self):
        assert map_targets_to_functions(["investment banking", "IB", "M&A"]) == ["investment_banking_pe_mna"]


class TestCandidateGraduation:
    def test_hint_year_defaults_to_may(self):
        assert extract_candidate_grad("", ProfileHints(grad_year=2026)) == MonthYear(year=2026, month=5)

    def test_hint_year_and_month(self):
        hints = ProfileHints(grad_year=2025, grad_month="Dec")
        assert extract_candidate_grad("Class of 2027", hints) == MonthYear(year=2025, month=12)

    def test_explicit_month_near_keyword(self):
        text = "Analyst intern, June 2024. Expected graduation: December 2025."
        assert extract_candidate_grad(text, ProfileHints()) == MonthYear(year=2025, month=12)

    def test_class_of(self):
        assert extract_candidate_grad("Economics, Class of 2027", ProfileHints()) == MonthYear(year=2027, month=5)

    def test_graduating_year(self):
        assert extract_candidate_grad("Graduating in 2026 with honors", ProfileHints()) == MonthYear(
            year=2026, month=5
        )

    def test_class_of_year_not_replaced_by_later_date(self):
        text = "Class of 2027. Summer intern, May 2025 - Aug 2025."
        assert extract_candidate_grad(text, ProfileHints()) == MonthYear(year=2027, month=5)

    def test_graduation_keyword_does_not_reach_next_sentence(self):
        text = "Graduating soon. Interned at a bank in June 2024."
        assert extract_candidate_grad(text, ProfileHints()) is None

    def test_employment_dates_ignored(self):
        assert extract_candidate_grad("Marketing intern, June 2024 - August 2024", ProfileHints()) is None


def test_profile_signals_capped_at_four():
    text = "Credit analyst. DCF models in Excel. Client presentations. SQL. Research lab."
    assert extract_profile_signals(text) == [
        "Underwriting or credit exposure",
        "Financial modeling and valuation",
        "Excel execution",
        "Stakeholder communication and presentations",
    ]
