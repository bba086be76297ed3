import os
from dataclasses import dataclass
from typing import Optional


def _env_str(name: str) -> Optional[str]:
    raw = os.getenv(name, "").strip()
    return raw or None


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class Settings:
    # Movie search is disabled when no key is configured
    tmdb_api_key: Optional[str] = None
    # None means upstream calls never time out
    upstream_timeout: Optional[float] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            tmdb_api_key=_env_str("TMDB_API_KEY"),
            upstream_timeout=_env_float("UPSTREAM_TIMEOUT_SEC", None),
            log_level=(_env_str("LOG_LEVEL") or "INFO").upper(),
        )
