"""Environment-driven settings for the checker.

Environment (.env)
  PWNED_BASE_URL=https://api.pwnedpasswords.com
  PWNED_USER_AGENT=pwnedcheck/0.1.0 (+https://github.com/pwnedcheck/pwnedcheck)
  PWNED_THROTTLE_MS=1600
  PWNED_DISABLE_PADDING=false
  PWNED_INCLUDE_PLAINTEXT=false
  PWNED_TIMEOUT=10
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import load_dotenv

from .models import DEFAULT_THROTTLE_MS, CheckConfig
from .range_client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    check: CheckConfig = field(default_factory=CheckConfig)


def _flag(env: Mapping[str, str], name: str) -> bool:
    raw = (env.get(name) or "").strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def load_config(
    env: Optional[Mapping[str, str]] = None,
    *,
    include_plain_text: Optional[bool] = None,
    disable_padding: Optional[bool] = None,
    throttle_ms: Optional[int] = None,
) -> Settings:
    """Build Settings from the environment (and .env), then apply overrides.

    Overrides left as None fall back to the environment value. Raises
    ValueError naming the offending variable on bad input.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    check = CheckConfig(
        include_plain_text=(
            include_plain_text
            if include_plain_text is not None
            else _flag(env, "PWNED_INCLUDE_PLAINTEXT")
        ),
        disable_padding=(
            disable_padding if disable_padding is not None else _flag(env, "PWNED_DISABLE_PADDING")
        ),
        throttle_ms=(
            throttle_ms
            if throttle_ms is not None
            else _int(env, "PWNED_THROTTLE_MS", DEFAULT_THROTTLE_MS)
        ),
    )
    return Settings(
        base_url=(env.get("PWNED_BASE_URL") or DEFAULT_BASE_URL).strip(),
        user_agent=(env.get("PWNED_USER_AGENT") or DEFAULT_USER_AGENT).strip(),
        timeout=_float(env, "PWNED_TIMEOUT", DEFAULT_TIMEOUT),
        check=check,
    )
