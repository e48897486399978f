"""Content fingerprint for a JobFit evaluation.

Identical inputs (after canonicalisation) always produce the same hash,
which is what lets a caller cache results by content. The short code is
the first 10 hex digits of the hash rendered in base 36.
"""

import hashlib
import json
import re
from typing import Any

MISSING = "__MISSING__"
_WHITESPACE_RE = re.compile(r"\s+")
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _canonical(value: Any) -> Any:
    if isinstance(value, str):
        cleaned = _WHITESPACE_RE.sub(" ", value.strip().lower())
        return cleaned or MISSING
    if isinstance(value, (list, tuple)):
        items = [_canonical(v) for v in value if v is not None]
        return sorted(items, key=lambda v: json.dumps(v, sort_keys=True))
    if isinstance(value, dict):
        return {str(k): _canonical(v) for k, v in sorted(value.items(), key=lambda kv: str(kv[0])) if v is not None}
    return value


def canonicalize(payload: dict[str, Any]) -> dict[str, Any]:
    """Trim, lower-case and collapse strings; sort lists and keys; drop nulls."""
    return _canonical(payload)


def to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def build_fingerprint(payload: dict[str, Any]) -> tuple[str, str]:
    """Returns (sha256 hex digest, "JF-" short code)."""
    canonical = json.dumps(canonicalize(payload), sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    code = "JF-" + to_base36(int(digest[:10], 16)).upper()
    return digest, code


def jobfit_fingerprint(
    profile_text: str,
    job_text: str,
    profile_structured: dict[str, Any] | None,
    logic_version: str,
) -> tuple[str, str]:
    return build_fingerprint({
        "job_text": job_text,
        "profile_text": profile_text,
        "profile_structured": profile_structured or {},
        "logic_version": logic_version,
    })
