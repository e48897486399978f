"""Stage 1: Job Extractor - rule-based classification of the job text.

Reads, from the job description alone:
    employment facts (hourly / contract / fully remote / on-site),
    employer tier, primary job function, seniority band,
    job signal labels, graduation window, explicit credential requirements.

Every extractor is an ordered walk over a table in services.taxonomy and
resolves to an explicit "unknown"/empty value when nothing matches.
"""

import logging
import re
from typing import Any

from models.requests import ProfileHints
from models.schemas.common import EmployerTier, JobFunction, JobSeniority
from models.schemas.job_extracted import GradWindow, JobExtracted, JobFacts, MonthYear, RequirementHit
from services import taxonomy
from services.pipeline.base import BaseStageService
from services.text_normalizer import collapse_whitespace, normalize_text

logger = logging.getLogger(__name__)


class JobExtractorService(BaseStageService):
    stage_name = "s1_job_extractor"

    def load(self) -> None:
        logger.info(
            "S1 Job Extractor ready (%d function rules, %d credential rules)",
            len(taxonomy.JOB_FUNCTION_PATTERNS),
            len(taxonomy.HARD_REQUIREMENTS),
        )

    def predict(self, **kwargs: Any) -> JobExtracted:
        self.ensure_loaded()
        job_text: str = kwargs["job_text"]
        hints: ProfileHints = kwargs.get("hints") or ProfileHints()

        if hints.employer_tier is not None:
            employer_tier, tier_source = hints.employer_tier, "hint"
        else:
            employer_tier, tier_source = infer_employer_tier(job_text), "inferred"

        return JobExtracted(
            facts=extract_job_facts(job_text),
            employer_tier=employer_tier,
            employer_tier_source=tier_source,
            primary_function=infer_job_function(job_text),
            seniority=infer_job_seniority(job_text),
            signals=extract_job_signals(job_text),
            grad_window=extract_grad_window(job_text),
            hard_requirements=detect_hard_requirements(job_text),
        )


# ---------------------------------------------------------------------------
# Job facts
# ---------------------------------------------------------------------------

def _first_match(patterns: list[re.Pattern], text: str) -> str | None:
    for pattern in patterns:
        m = pattern.search(text)
        if m:
            return m.group(0)
    return None


def extract_job_facts(job_text: str) -> JobFacts:
    """Hourly, contract and remote structure. Evidence keeps the job's casing."""
    collapsed = collapse_whitespace(job_text)
    t = collapsed.lower()

    is_hourly = any(p.search(t) for p in taxonomy.HOURLY_PATTERNS)
    hourly_evidence = _first_match(taxonomy.HOURLY_EVIDENCE_PATTERNS, collapsed) if is_hourly else None

    # Blank out document senses ("draft a contract") before looking for employment ones
    employment_text = taxonomy.CONTRACT_NON_EMPLOYMENT_RE.sub(" ", collapsed)
    contract_evidence = _first_match(taxonomy.CONTRACT_PATTERNS, employment_text)

    return JobFacts(
        is_hourly=is_hourly,
        hourly_evidence=hourly_evidence,
        is_contract=contract_evidence is not None,
        contract_evidence=contract_evidence,
        is_fully_remote=bool(taxonomy.FULLY_REMOTE_RE.search(t)),
        is_onsite_required=bool(taxonomy.ONSITE_RE.search(t)),
    )


# ---------------------------------------------------------------------------
# Classifiers
# ---------------------------------------------------------------------------

def infer_job_seniority(job_text: str) -> JobSeniority:
    t = normalize_text(job_text)
    for seniority, pattern in taxonomy.SENIORITY_PATTERNS:
        if pattern.search(t):
            return seniority
    return "unknown"


def infer_employer_tier(job_text: str) -> EmployerTier:
    """Brand/keyword heuristic: tier 1 allowlist, tier 2 program language, else 3."""
    t = normalize_text(job_text)
    if any(p.search(t) for p in taxonomy.TIER1_PATTERNS):
        return 1
    if any(p.search(t) for p in taxonomy.TIER2_PATTERNS):
        return 2
    return 3


def infer_job_function(job_text: str) -> JobFunction:
    t = normalize_text(job_text)
    for function, pattern in taxonomy.JOB_FUNCTION_PATTERNS:
        if pattern.search(t):
            return function
    return "unknown"


def extract_job_signals(job_text: str) -> list[str]:
    t = normalize_text(job_text)
    labels = [label for pattern, label in taxonomy.JOB_SIGNALS if pattern.search(t)]
    return labels[: taxonomy.JOB_SIGNAL_LIMIT]


# ---------------------------------------------------------------------------
# Eligibility inputs
# ---------------------------------------------------------------------------

def parse_month_year(text: str) -> MonthYear | None:
    m = taxonomy.MONTH_YEAR_RE.search(text or "")
    if not m:
        return None
    month = taxonomy.MONTHS.get(m.group(1).lower())
    if month is None:
        return None
    return MonthYear(year=int(m.group(2)), month=month)


def extract_grad_window(job_text: str) -> GradWindow | None:
    """Find "expected graduation between <X> and <Y>" and parse both ends."""
    t = collapse_whitespace(job_text)
    fragment = None
    for anchor in taxonomy.GRAD_WINDOW_ANCHORS:
        m = anchor.search(t)
        if m:
            fragment = m.group(1)
            break
    if fragment is None:
        return None

    pairs = list(taxonomy.MONTH_YEAR_RE.finditer(fragment))
    if len(pairs) < 2:
        return None
    start = parse_month_year(pairs[0].group(0))
    end = parse_month_year(pairs[1].group(0))
    if start is None or end is None:
        return None
    if start.index > end.index:
        start, end = end, start
    return GradWindow(start=start, end=end)


def detect_hard_requirements(job_text: str) -> list[RequirementHit]:
    t = normalize_text(job_text)
    return [
        RequirementHit(key=key, label=label)
        for key, label, pattern in taxonomy.HARD_REQUIREMENTS
        if pattern.search(t)
    ]
