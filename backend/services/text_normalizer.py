"""Text normalization and list hygiene shared by every pipeline stage.

Matchers always run against ``normalize_text`` output. Text that may be
echoed back to the user (evidence snippets) is taken from
``collapse_whitespace`` output instead so the original casing survives.
"""

import re
from typing import Iterable

_NARROW_NBSP = "\u202f"
_WHITESPACE_RE = re.compile(r"\s+")
_WORD_RE = re.compile(r"[a-z0-9$%&/+#.'-]+")

# Minimum run of consecutive job-text words that counts as a quote
QUOTE_WINDOW = 10


def collapse_whitespace(text: str | None) -> str:
    """Collapse whitespace runs (including U+202F) to single spaces and trim."""
    cleaned = (text or "").replace(_NARROW_NBSP, " ")
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def normalize_text(text: str | None) -> str:
    """Lower-cased, whitespace-collapsed form used by all regex/keyword tests."""
    return collapse_whitespace(text).lower()


def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def uniq_top(items: Iterable[str], limit: int) -> list[str]:
    """Drop blanks and case-insensitive duplicates, keep order, cap at ``limit``."""
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        text = str(item or "").strip()
        if not text:
            continue
        key = text.lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(text)
        if len(out) >= limit:
            break
    return out


def _words(text: str) -> list[str]:
    # Sentence-final periods are punctuation, not part of the word
    words = (w.rstrip(".") for w in _WORD_RE.findall(normalize_text(text)))
    return [w for w in words if w]


def _ngrams(words: list[str], n: int) -> set[tuple[str, ...]]:
    return {tuple(words[i:i + n]) for i in range(len(words) - n + 1)}


def quotes_job_text(candidate: str, job_text: str, window: int = QUOTE_WINDOW) -> bool:
    """True if ``candidate`` repeats ``window`` or more consecutive job-text words."""
    cand_words = _words(candidate)
    if len(cand_words) < window:
        return False
    job_grams = _ngrams(_words(job_text), window)
    if not job_grams:
        return False
    return not _ngrams(cand_words, window).isdisjoint(job_grams)


def drop_job_quotes(items: Iterable[str], job_text: str) -> list[str]:
    return [item for item in items if not quotes_job_text(item, job_text)]
