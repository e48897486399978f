import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False
    log_level: str = "INFO"
    rate_limit: str = "30/minute"

    # Request size limits (HTTP adapter only)
    max_profile_chars: int = 50000
    max_job_chars: int = 20000

    # Hard-exclusion templates. A clause-level phrase must precede the topic
    # keyword somewhere in the same clause; a prefix phrase must sit directly
    # in front of it ("no hourly", "no sales").
    exclusion_negation_phrases: list[str] = [
        "do not want",
        "don't want",
        "don’t want",
        "d o n o t want",
        "hard exclusion",
        "hard exclusions",
        "not interested in",
        "will not consider",
        "avoid",
    ]
    exclusion_prefix_phrases: list[str] = ["no"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
