import math
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from config import settings

_MONTH_NAMES = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}


def _to_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class ProfileHints(BaseModel):
    """Advisory structured profile fields.

    Every field is optional and independently defaultable: a value that
    cannot be used becomes None instead of failing validation. Nested
    ``profile`` / ``job_meta`` objects from the intake flow are flattened,
    top-level keys win.
    """
    school_tier: str | None = None
    gpa: float | None = None
    gpa_band: str | None = None
    employer_tier: int | None = None
    grad_year: int | None = None
    grad_month: int | None = None
    target_roles_list: list[str] = []

    model_config = {"extra": "ignore"}

    @model_validator(mode="before")
    @classmethod
    def _flatten(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return {}
        merged: dict[str, Any] = {}
        for nested_key in ("job_meta", "profile"):
            nested = data.get(nested_key)
            if isinstance(nested, dict):
                merged.update({k: v for k, v in nested.items() if v not in (None, "")})
        merged.update({k: v for k, v in data.items() if v not in (None, "")})
        return merged

    @field_validator("school_tier", mode="before")
    @classmethod
    def _school_tier(cls, value: Any) -> str | None:
        raw = str(value or "").strip().upper()
        return raw if raw in {"S", "A", "B", "C"} else None

    @field_validator("gpa_band", mode="before")
    @classmethod
    def _gpa_band(cls, value: Any) -> str | None:
        raw = str(value or "").strip().lower()
        return raw if raw in {"3.8_plus", "3.5_3.79", "below_3.5"} else None

    @field_validator("gpa", mode="before")
    @classmethod
    def _gpa(cls, value: Any) -> float | None:
        number = _to_number(value)
        if number is None or not 0 < number <= 4.5:
            return None
        return number

    @field_validator("employer_tier", mode="before")
    @classmethod
    def _employer_tier(cls, value: Any) -> int | None:
        number = _to_number(value)
        if number is None or not number.is_integer() or not 1 <= number <= 4:
            return None
        return int(number)

    @field_validator("grad_year", mode="before")
    @classmethod
    def _grad_year(cls, value: Any) -> int | None:
        number = _to_number(value)
        if number is None or not number.is_integer() or not 2000 <= number <= 2100:
            return None
        return int(number)

    @field_validator("grad_month", mode="before")
    @classmethod
    def _grad_month(cls, value: Any) -> int | None:
        if isinstance(value, str) and value.strip()[:3].lower() in _MONTH_NAMES:
            return _MONTH_NAMES[value.strip()[:3].lower()]
        number = _to_number(value)
        if number is None or not number.is_integer() or not 1 <= number <= 12:
            return None
        return int(number)

    @field_validator("target_roles_list", mode="before")
    @classmethod
    def _targets(cls, value: Any) -> list[str]:
        if not isinstance(value, (list, tuple)):
            return []
        cleaned = [str(x).strip() for x in value if x is not None and str(x).strip()]
        return cleaned[:25]

    @classmethod
    def from_raw(cls, raw: Any) -> "ProfileHints":
        if isinstance(raw, ProfileHints):
            return raw
        return cls.model_validate(raw if isinstance(raw, dict) else {})


class JobFitRequest(BaseModel):
    profile_text: str = Field(..., min_length=1, max_length=settings.max_profile_chars, description="Candidate profile text")
    job_text: str = Field(..., min_length=1, max_length=settings.max_job_chars, description="Job description text")
    profile_structured: dict[str, Any] | None = Field(
        default=None, description="Optional structured profile hints"
    )
