"""Pwned Passwords range API client (k-anonymity lookups)."""

import logging
import re
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

import requests

from .errors import NetworkError
from .models import DEFAULT_THROTTLE_MS, CheckConfig

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.pwnedpasswords.com"
DEFAULT_USER_AGENT = "pwnedcheck/0.1.0 (+https://github.com/pwnedcheck/pwnedcheck)"
DEFAULT_TIMEOUT = 10.0
MAX_ATTEMPTS = 3  # first try plus two retries, only for HTTP 429
MIN_RETRY_DELAY_MS = DEFAULT_THROTTLE_MS

_PREFIX_RE = re.compile(r"^[0-9A-F]{5}$")


@dataclass
class RangeOk:
    lines: List[str]


@dataclass
class RangeRateLimited:
    status: int = 429


@dataclass
class RangeFailed:
    status: Optional[int]
    cause: Optional[BaseException]
    detail: str = ""


RangeAttempt = Union[RangeOk, RangeRateLimited, RangeFailed]


def parse_range_body(text: str) -> List[str]:
    """Split a range response into 'SUFFIX:COUNT' lines, dropping anything without a colon."""
    return [line.strip() for line in text.splitlines() if ":" in line]


def build_headers(user_agent: str, disable_padding: bool) -> dict:
    headers = {"User-Agent": user_agent}
    if not disable_padding:
        headers["Add-Padding"] = "true"
    return headers


class RangeClient:
    """Issues GET <base>/range/<PREFIX> with bounded retry on rate limiting."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not user_agent:
            raise ValueError("a User-Agent is required by the range API")
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.session = session or requests.Session()
        self._sleep = sleep

    def range_url(self, prefix: str) -> str:
        return f"{self.base_url}/range/{prefix}"

    def attempt(self, prefix: str, config: CheckConfig) -> RangeAttempt:
        """Make a single request and classify the outcome."""
        try:
            r = self.session.get(
                self.range_url(prefix),
                headers=build_headers(self.user_agent, config.disable_padding),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            return RangeFailed(None, e)

        if r.status_code == 429:
            return RangeRateLimited(r.status_code)
        if r.status_code != 200:
            reason = getattr(r, "reason", "") or ""
            return RangeFailed(r.status_code, None, reason)
        return RangeOk(parse_range_body(r.text))

    def query(self, prefix: str, config: Optional[CheckConfig] = None) -> List[str]:
        """Return the bucket for prefix, retrying HTTP 429 up to twice.

        Raises NetworkError on any other failure or once retries run out.
        """
        if not _PREFIX_RE.match(prefix or ""):
            raise ValueError("prefix must be 5 uppercase hex characters")
        config = config or CheckConfig()
        retry_delay = max(config.throttle_ms, MIN_RETRY_DELAY_MS) / 1000.0

        attempts = 0
        while True:
            attempts += 1
            outcome = self.attempt(prefix, config)

            if isinstance(outcome, RangeOk):
                logger.debug("prefix %s: %d lines", prefix, len(outcome.lines))
                return outcome.lines

            if isinstance(outcome, RangeRateLimited):
                if attempts >= MAX_ATTEMPTS:
                    raise NetworkError(
                        prefix, outcome.status, detail=f"rate limited after {attempts} attempts"
                    )
                logger.info(
                    "prefix %s rate limited (attempt %d/%d), retrying in %.1fs",
                    prefix,
                    attempts,
                    MAX_ATTEMPTS,
                    retry_delay,
                )
                self._sleep(retry_delay)
                continue

            logger.warning("prefix %s lookup failed (status=%s)", prefix, outcome.status)
            error = NetworkError(prefix, outcome.status, outcome.cause, outcome.detail)
            if outcome.cause is not None:
                raise error from outcome.cause
            raise error

    def close(self) -> None:
        self.session.close()
