"""Closed vocabularies shared across pipeline stages."""

from typing import Literal

Decision = Literal["Priority Apply", "Apply", "Review", "Pass"]
LocationConstraint = Literal["constrained", "not_constrained", "unclear"]

EmployerTier = Literal[1, 2, 3, 4]
SchoolTier = Literal["S", "A", "B", "C", "unknown"]
GpaBand = Literal["3.8_plus", "3.5_3.79", "below_3.5", "unknown"]

JobSeniority = Literal["internship", "entry", "early_career", "experienced", "unknown"]

JobFunction = Literal[
    "investment_banking_pe_mna",
    "consulting_strategy",
    "finance_accounting",
    "commercial_real_estate",
    "sales",
    "marketing_analytics",
    "brand_marketing",
    "product_program_ops",
    "customer_success",
    "government_public",
    "software_data",
    "research",
    "clinical_health",
    "unknown",
]

AlignmentLevel = Literal["direct", "strong_adjacent", "weak_adjacent", "none"]
DepthLabel = Literal["strong", "moderate", "weak"]
TargetAlignment = Literal["on_target", "off_target", "unclear"]

# Highest first. A ceiling may only move a decision to a larger index.
DECISION_ORDER: tuple[Decision, ...] = ("Priority Apply", "Apply", "Review", "Pass")


def decision_rank(decision: Decision) -> int:
    """0 for Priority Apply ... 3 for Pass."""
    return DECISION_ORDER.index(decision)
