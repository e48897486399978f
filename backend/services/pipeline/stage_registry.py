"""Lazy-loading stage registry for the JobFit pipeline.

Global singleton per stage name, created and loaded on first use.
"""

import logging

from services.pipeline.base import BaseStageService

logger = logging.getLogger(__name__)

_registry: dict[str, BaseStageService] = {}

STAGE_NAMES = (
    "s1_job_extractor",
    "s2_profile_extractor",
    "s3_eligibility",
    "s4_alignment",
    "s5_gates",
    "s6_decision",
    "s7_risk",
    "s8_composer",
)


def _create_stage(name: str) -> BaseStageService:
    """Factory: create a stage service by name with deferred imports."""
    if name == "s1_job_extractor":
        from services.pipeline.s1_job_extractor import JobExtractorService
        return JobExtractorService()
    elif name == "s2_profile_extractor":
        from services.pipeline.s2_profile_extractor import ProfileExtractorService
        return ProfileExtractorService()
    elif name == "s3_eligibility":
        from services.pipeline.s3_eligibility import EligibilityService
        return EligibilityService()
    elif name == "s4_alignment":
        from services.pipeline.s4_alignment import AlignmentService
        return AlignmentService()
    elif name == "s5_gates":
        from services.pipeline.s5_gates import GateService
        return GateService()
    elif name == "s6_decision":
        from services.pipeline.s6_decision import DecisionService
        return DecisionService()
    elif name == "s7_risk":
        from services.pipeline.s7_risk import RiskService
        return RiskService()
    elif name == "s8_composer":
        from services.pipeline.s8_composer import ComposerService
        return ComposerService()
    else:
        raise ValueError(f"Unknown stage: {name}")


def get_stage(name: str) -> BaseStageService:
    """Get a stage service by name, creating and loading it on first access."""
    if name not in _registry:
        _registry[name] = _create_stage(name)
    svc = _registry[name]
    svc.ensure_loaded()
    return svc


def preload(*names: str) -> None:
    """Pre-load stages (e.g. at startup). Loads every stage when no names are given."""
    for name in names or STAGE_NAMES:
        get_stage(name)


def clear() -> None:
    """Drop all stage instances. Useful for testing."""
    _registry.clear()
