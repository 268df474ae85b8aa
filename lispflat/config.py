from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_PROMPT = "lispflat> "
DEFAULT_CONTINUATION_PROMPT = "... "
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    prompt: str = DEFAULT_PROMPT
    continuation_prompt: str = DEFAULT_CONTINUATION_PROMPT
    # None leaves the interpreter's own limit untouched
    recursion_limit: Optional[int] = None
    log_level: str = DEFAULT_LOG_LEVEL


def int_from_env(environ: Mapping[str, str], var: str) -> Optional[int]:
    raw = environ.get(var)
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{var} must be positive, got {value}")
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read settings from LISPFLAT_* environment variables."""
    if environ is None:
        environ = os.environ
    return Settings(
        prompt=environ.get("LISPFLAT_PROMPT", DEFAULT_PROMPT),
        continuation_prompt=environ.get("LISPFLAT_CONTINUATION_PROMPT", DEFAULT_CONTINUATION_PROMPT),
        recursion_limit=int_from_env(environ, "LISPFLAT_RECURSION_LIMIT"),
        log_level=environ.get("LISPFLAT_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )
