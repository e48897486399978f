"""Stage 2: Profile Extractor - constraints, pedigree and direction.

Structured hints always win over prose. GPA band is never guessed from
prose; school tier falls back to a name allowlist.

Hard exclusions need a negation template and a topic keyword in the same
clause. Two template kinds exist (see config.Settings):
    clause phrases  - "do not want", "hard exclusion", ... anywhere before
                      the topic keyword within the clause
    prefix phrases  - "no" immediately in front of the topic keyword
"""

import logging
import re
from typing import Any

from config import settings
from models.requests import ProfileHints
from models.schemas.common import GpaBand, JobFunction, SchoolTier
from models.schemas.job_extracted import MonthYear
from models.schemas.profile_extracted import ProfileConstraints, ProfileExtracted
from services import taxonomy
from services.pipeline.base import BaseStageService
from services.pipeline.s1_job_extractor import parse_month_year
from services.text_normalizer import collapse_whitespace, normalize_text, uniq_top

logger = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")
_SENTENCE_SPLIT_RE = re.compile(r"[.;!?]+")
_LIST_MARKER_RE = re.compile(r"^\s*(?:[-*–]|\d+[.)])\s*")


class ProfileExtractorService(BaseStageService):
    stage_name = "s2_profile_extractor"

    def __init__(
        self,
        negation_phrases: list[str] | None = None,
        prefix_phrases: list[str] | None = None,
    ) -> None:
        self.negation_phrases = list(
            settings.exclusion_negation_phrases if negation_phrases is None else negation_phrases
        )
        self.prefix_phrases = list(
            settings.exclusion_prefix_phrases if prefix_phrases is None else prefix_phrases
        )
        self._topic_res: dict[str, tuple[re.Pattern | None, re.Pattern | None]] = {}

    def load(self) -> None:
        for topic, keywords in taxonomy.EXCLUSION_TOPICS.items():
            self._topic_res[topic] = (
                _clause_pattern(self.negation_phrases, keywords),
                _prefix_pattern(self.prefix_phrases, keywords),
            )
        logger.info(
            "S2 Profile Extractor ready (%d clause templates, %d prefix templates)",
            len(self.negation_phrases),
            len(self.prefix_phrases),
        )

    def predict(self, **kwargs: Any) -> ProfileExtracted:
        self.ensure_loaded()
        profile_text: str = kwargs["profile_text"]
        hints: ProfileHints = kwargs.get("hints") or ProfileHints()

        targets = read_targets(hints, profile_text)
        return ProfileExtracted(
            constraints=self.extract_constraints(profile_text),
            school_tier=read_school_tier(hints, profile_text),
            gpa_band=read_gpa_band(hints),
            gpa=hints.gpa,
            targets=targets,
            target_functions=map_targets_to_functions(targets),
            grad_date=extract_candidate_grad(profile_text, hints),
            signals=extract_profile_signals(profile_text),
        )

    def extract_constraints(self, profile_text: str) -> ProfileConstraints:
        clauses = split_clauses(profile_text)

        def excluded(topic: str) -> bool:
            clause_re, prefix_re = self._topic_res[topic]
            return any(
                (clause_re is not None and clause_re.search(c)) or (prefix_re is not None and prefix_re.search(c))
                for c in clauses
            )

        t = normalize_text(profile_text)
        return ProfileConstraints(
            hard_no_hourly_pay=excluded("hourly"),
            pref_full_time=bool(taxonomy.FULL_TIME_RE.search(t)),
            hard_no_contract=excluded("contract"),
            hard_no_sales=excluded("sales"),
            hard_no_government=excluded("government"),
            hard_no_fully_remote=excluded("fully_remote"),
        )


def split_clauses(profile_text: str) -> list[str]:
    """Normalized sentence clauses of the profile.

    List items under a line ending in ":" are prefixed with that heading
    until the next blank line or the next heading, so a bulleted
    "Hard exclusions:" list applies to every item.
    """
    clauses: list[str] = []
    heading = ""
    for line in _LINE_SPLIT_RE.split(profile_text or ""):
        if not line.strip():
            heading = ""
            continue
        for item in line.split("•"):
            item = _LIST_MARKER_RE.sub("", item).strip()
            sentences = [normalize_text(s) for s in _SENTENCE_SPLIT_RE.split(item)]
            sentences = [s for s in sentences if s]
            if not sentences:
                continue
            clauses.extend(f"{heading} {s}" if heading else s for s in sentences)
            if item.endswith(":"):
                heading = sentences[-1]
    return clauses


def _alternation(phrases: list[str]) -> str:
    # Longest first so "hard exclusions" wins over "hard exclusion"
    cleaned = sorted({normalize_text(p) for p in phrases if normalize_text(p)}, key=len, reverse=True)
    return "|".join(re.escape(p) for p in cleaned)


def _clause_pattern(phrases: list[str], keywords: list[str]) -> re.Pattern | None:
    negations, topics = _alternation(phrases), _alternation(keywords)
    if not negations or not topics:
        return None
    return re.compile(rf"(?<![\w'])(?:{negations})(?![\w']).*?(?<![\w-])(?:{topics})(?![\w])")


def _prefix_pattern(phrases: list[str], keywords: list[str]) -> re.Pattern | None:
    prefixes, topics = _alternation(phrases), _alternation(keywords)
    if not prefixes or not topics:
        return None
    return re.compile(rf"(?<![\w'])(?:{prefixes})[\s-]+(?:{topics})(?![\w])")


# ---------------------------------------------------------------------------
# Structured hint readers
# ---------------------------------------------------------------------------

def read_school_tier(hints: ProfileHints, profile_text: str) -> SchoolTier:
    if hints.school_tier:
        return hints.school_tier
    t = normalize_text(profile_text)
    for tier, pattern in taxonomy.SCHOOL_TIERS:
        if pattern.search(t):
            return tier
    return "unknown"


def read_gpa_band(hints: ProfileHints) -> GpaBand:
    if hints.gpa_band:
        return hints.gpa_band
    if hints.gpa is None:
        return "unknown"
    if hints.gpa >= 3.8:
        return "3.8_plus"
    if hints.gpa >= 3.5:
        return "3.5_3.79"
    return "below_3.5"


def read_targets(hints: ProfileHints, profile_text: str) -> list[str]:
    if hints.target_roles_list:
        return list(hints.target_roles_list)
    t = normalize_text(profile_text)
    hits = [phrase for phrase in taxonomy.TARGET_PHRASES if phrase in t]
    return uniq_top(hits, taxonomy.TARGET_PHRASE_LIMIT)


def map_targets_to_functions(targets: list[str]) -> list[JobFunction]:
    """Every function a target phrase names, de-duplicated in first-seen order."""
    out: list[JobFunction] = []
    for target in targets:
        t = normalize_text(target)
        for function, pattern in taxonomy.TARGET_FUNCTION_PATTERNS:
            if pattern.search(t) and function not in out:
                out.append(function)
    return out[: taxonomy.TARGET_FUNCTION_LIMIT]


# ---------------------------------------------------------------------------
# Candidate graduation
# ---------------------------------------------------------------------------

def extract_candidate_grad(profile_text: str, hints: ProfileHints) -> MonthYear | None:
    """Hints first, then month-year near a graduation keyword, then year-only forms (May)."""
    if hints.grad_year is not None:
        return MonthYear(year=hints.grad_year, month=hints.grad_month or taxonomy.DEFAULT_GRAD_MONTH)

    t = collapse_whitespace(profile_text)
    for pattern in taxonomy.CANDIDATE_GRAD_PATTERNS:
        m = pattern.search(t)
        if m:
            explicit = parse_month_year(f"{m.group(1)} {m.group(2)}")
            if explicit is not None:
                return explicit

    for pattern in (taxonomy.CLASS_OF_RE, taxonomy.GRADUATING_YEAR_RE):
        m = pattern.search(t)
        if m:
            return MonthYear(year=int(m.group(1)), month=taxonomy.DEFAULT_GRAD_MONTH)
    return None


def extract_profile_signals(profile_text: str) -> list[str]:
    t = normalize_text(profile_text)
    labels = [label for pattern, label in taxonomy.PROFILE_SIGNALS if pattern.search(t)]
    return labels[: taxonomy.PROFILE_SIGNAL_LIMIT]
