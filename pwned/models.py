"""Shared data models for the pwned-passwords range checker."""

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

DEFAULT_THROTTLE_MS = 1600
MAX_THROTTLE_MS = 10000

_DIGEST_RE = re.compile(r"^[0-9A-F]{40}$")


@dataclass(frozen=True)
class CandidateEntry:
    password: str
    name: Optional[str] = None
    url: Optional[str] = None
    username: Optional[str] = None
    note: Optional[str] = None

    def is_blank(self) -> bool:
        return not self.password or not self.password.strip()


@dataclass(frozen=True)
class HashDigest:
    value: str  # 40 uppercase hex chars

    def __post_init__(self) -> None:
        if not _DIGEST_RE.match(self.value):
            raise ValueError("digest must be 40 uppercase hex characters")

    @property
    def prefix(self) -> str:
        return self.value[:5]

    @property
    def suffix(self) -> str:
        return self.value[5:]


@dataclass(frozen=True)
class CheckConfig:
    include_plain_text: bool = False
    disable_padding: bool = False
    throttle_ms: int = DEFAULT_THROTTLE_MS

    def __post_init__(self) -> None:
        if not 0 <= self.throttle_ms <= MAX_THROTTLE_MS:
            raise ValueError(
                f"throttle_ms must be between 0 and {MAX_THROTTLE_MS}, got {self.throttle_ms}"
            )


@dataclass(frozen=True)
class VerdictRecord:
    password_preview: str
    plain_text: Optional[str]  # only set when plaintext echo is enabled
    sha1_hash: str
    is_pwned: bool
    pwned_count: int
    site_name: Optional[str] = None
    site_url: Optional[str] = None
    username: Optional[str] = None
    note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Export shape used by the CLI's JSON output."""
        out: Dict[str, Any] = {"PasswordPreview": self.password_preview}
        if self.plain_text is not None:
            out["PlainText"] = self.plain_text
        out.update(
            {
                "Sha1Hash": self.sha1_hash,
                "IsPwned": self.is_pwned,
                "PwnedCount": self.pwned_count,
                "SiteName": self.site_name,
                "SiteUrl": self.site_url,
                "Username": self.username,
                "Note": self.note,
            }
        )
        return out


@dataclass
class RunStats:
    checked: int = 0
    pwned: int = 0
    skipped: int = 0
    cache_hits: int = 0
    network_calls: int = 0
