"""Locate a digest's suffix inside a range bucket."""

import logging
import re
from typing import List, Tuple

from .models import HashDigest

logger = logging.getLogger(__name__)

_COUNT_RE = re.compile(r"^[0-9]+$")


def _parse_count(raw: str, prefix: str) -> int:
    raw = raw.strip()
    if not _COUNT_RE.match(raw):
        logger.debug("unparseable count %r in bucket for %s, using 0", raw, prefix)
        return 0
    return int(raw)


def match(digest: HashDigest, bucket: List[str]) -> Tuple[bool, int]:
    """Return (is_pwned, count) for the first line whose suffix matches.

    A matching line with a count of 0, or a count that is not plain ASCII
    digits, reports the password as not pwned.
    """
    suffix = digest.suffix
    for line in bucket:
        candidate, sep, raw_count = line.partition(":")
        if not sep or candidate.strip() != suffix:
            continue
        count = _parse_count(raw_count, digest.prefix)
        return count > 0, count
    return False, 0
