"""Tests for Stage 4: Alignment & Depth."""

import pytest

from models.schemas.alignment_result import AlignmentResult
from models.schemas.job_extracted import JobExtracted
from models.schemas.profile_extracted import ProfileExtracted
from services.pipeline.s4_alignment import (
    AlignmentService,
    compute_depth_score,
    depth_label_for,
    infer_alignment_level,
    infer_target_alignment,
)


class TestAlignmentLevel:
    def test_direct(self):
        level, evidence, direct, _ = infer_alignment_level(
            "Built DCF valuation and LBO models", "investment_banking_pe_mna"
        )
        assert level == "direct"
        assert direct == 3
        assert evidence == 5

    def test_strong_adjacent_via_adjacency_table(self):
        level, _, direct, adjacent = infer_alignment_level(
            "Reconciliation and general ledger work at an accounting firm", "investment_banking_pe_mna"
        )
        assert level == "strong_adjacent"
        assert direct == 0
        assert adjacent >= 1

    def test_weak_adjacent_from_generic_signals(self):
        level, *_ = infer_alignment_level(
            "Led a group project and completed a summer internship", "brand_marketing"
        )
        assert level == "weak_adjacent"

    def test_one_generic_signal_is_none(self):
        level, *_ = infer_alignment_level("Completed a summer internship", "brand_marketing")
        assert level == "none"

    def test_unknown_function_is_weak_adjacent(self):
        level, *_ = infer_alignment_level("Anything at all", "unknown")
        assert level == "weak_adjacent"


class TestDepth:
    def test_sum_of_indicators(self):
        text = "Summer intern. Analyst. President of club. Capstone project. Research lab. Major in finance."
        depth, label = compute_depth_score(text, "unknown")
        assert depth == 7
        assert label == "strong"

    def test_seniority_adjustments(self):
        text = "Summer intern and capstone project"  # 2 + 1
        assert compute_depth_score(text, "unknown") == (3, "moderate")
        assert compute_depth_score(text, "experienced") == (2, "weak")
        assert compute_depth_score(text, "internship") == (4, "moderate")

    def test_clamped_at_zero(self):
        assert compute_depth_score("", "experienced") == (0, "weak")

    @pytest.mark.parametrize("depth,label", [(0, "weak"), (2, "weak"), (3, "moderate"), (5, "moderate"), (6, "strong"), (10, "strong")])
    def test_labels(self, depth, label):
        assert depth_label_for(depth) == label


class TestTargetAlignment:
    def test_unclear_without_targets(self):
        assert infer_target_alignment("sales", []) == "unclear"

    def test_on_target(self):
        assert infer_target_alignment("sales", ["brand_marketing", "sales"]) == "on_target"

    def test_off_target(self):
        assert infer_target_alignment("sales", ["consulting_strategy"]) == "off_target"


class TestAlignmentService:
    def setup_method(self):
        self.svc = AlignmentService()
        self.svc._loaded = True

    def test_predict(self):
        result = self.svc.predict(
            profile_text="Summer intern building DCF valuation models. Analyst in investment club.",
            job_extracted=JobExtracted(primary_function="investment_banking_pe_mna", seniority="internship"),
            profile_extracted=ProfileExtracted(target_functions=["investment_banking_pe_mna"]),
        )
        assert isinstance(result, AlignmentResult)
        assert result.level == "direct"
        assert result.depth == 4
        assert result.depth_label == "moderate"
        assert result.target_alignment == "on_target"
