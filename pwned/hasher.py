"""SHA-1 hashing and preview masking for candidate passwords."""

import hashlib

from .models import HashDigest


def digest(password: str) -> HashDigest:
    """Return the uppercase SHA-1 digest of the UTF-8 encoded password.

    Lone surrogates (as produced by reading files with surrogatepass) are
    encoded as-is rather than rejected.
    """
    raw = password.encode("utf-8", "surrogatepass")
    return HashDigest(hashlib.sha1(raw).hexdigest().upper())


def preview_mask(password: str) -> str:
    """Mask all but the first and last character, e.g. hunter2 -> h*****2."""
    if len(password) <= 2:
        return "*" * len(password)
    return password[0] + "*" * (len(password) - 2) + password[-1]
