"""In-memory prefix -> range bucket cache for a single run."""

from typing import Dict, List, Optional


class PrefixCache:
    """Unbounded per-run cache. Not safe for concurrent writers."""

    def __init__(self) -> None:
        self._buckets: Dict[str, List[str]] = {}

    def get(self, prefix: str) -> Optional[List[str]]:
        return self._buckets.get(prefix)

    def put(self, prefix: str, bucket: List[str]) -> None:
        self._buckets[prefix] = list(bucket)

    def clear(self) -> None:
        self._buckets.clear()

    def __contains__(self, prefix: object) -> bool:
        return prefix in self._buckets

    def __len__(self) -> int:
        return len(self._buckets)
