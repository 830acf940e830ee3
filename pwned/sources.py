"""Turn CLI arguments, files and prompts into candidate entries."""

import csv
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Union

from .models import CandidateEntry

PathLike = Union[str, Path]

METADATA_COLUMNS = ("name", "url", "username", "note")


def entries_from_args(passwords: Iterable[str]) -> List[CandidateEntry]:
    return [CandidateEntry(p) for p in passwords if p and p.strip()]


def entries_from_file(path: PathLike) -> List[CandidateEntry]:
    """One password per line; blank lines are dropped."""
    out: List[CandidateEntry] = []
    with open(path, "r", encoding="utf-8", errors="surrogatepass") as f:
        for line in f:
            password = line.rstrip("\r\n")
            if password.strip():
                out.append(CandidateEntry(password))
    return out


def entries_from_csv(path: PathLike, column: str = "password") -> List[CandidateEntry]:
    """Read a CSV with a header row naming the password column.

    Optional name/url/username/note columns are carried through as metadata.
    """
    out: List[CandidateEntry] = []
    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        if not reader.fieldnames or column not in reader.fieldnames:
            raise ValueError(f"CSV {path} has no {column!r} column")
        for row in reader:
            password = row.get(column) or ""
            if not password.strip():
                continue
            meta = {k: (row.get(k) or None) for k in METADATA_COLUMNS}
            out.append(CandidateEntry(password, **meta))
    return out


def _wipe(buf: bytearray) -> None:
    for i in range(len(buf)):
        buf[i] = 0


@contextmanager
def wiped_secret(prompt: Callable[[], str]) -> Iterator[bytearray]:
    """Hold a prompted secret in a bytearray that is zeroed on every exit path.

    Callers should decode it only for as long as they need the text.
    """
    buf = bytearray(prompt().encode("utf-8", "surrogatepass"))
    try:
        yield buf
    finally:
        _wipe(buf)
