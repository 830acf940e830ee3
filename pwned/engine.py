"""Sequential check engine: hash, look up (cached or remote), match, report."""

import logging
import time
from typing import Callable, Iterable, List, Optional

from .cache import PrefixCache
from .errors import CheckCancelled, ValidationError
from .hasher import digest, preview_mask
from .matcher import match
from .models import CandidateEntry, CheckConfig, RunStats, VerdictRecord
from .range_client import RangeClient

logger = logging.getLogger(__name__)

ProgressFn = Callable[[int, int], None]


class CheckEngine:
    """Checks candidate entries one at a time against the range API.

    Distinct-prefix requests are paced by config.throttle_ms; lookups served
    from the prefix cache are not delayed. The engine owns its cache, so
    running it again reuses buckets fetched by earlier runs unless the
    cache is cleared.
    """

    def __init__(
        self,
        client: RangeClient,
        config: Optional[CheckConfig] = None,
        cache: Optional[PrefixCache] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.client = client
        self.config = config or CheckConfig()
        self.cache = cache if cache is not None else PrefixCache()
        self.stats = RunStats()
        self._sleep = sleep
        self._throttle_pending = False

    def check_all(
        self,
        entries: Iterable[CandidateEntry],
        progress: Optional[ProgressFn] = None,
        cancel=None,
    ) -> List[VerdictRecord]:
        """Return one verdict per non-blank entry, in input order.

        `cancel` is anything with an is_set() method (e.g. threading.Event);
        it is checked before each entry, and its wait() is used for the
        throttle delay when it has one, so setting it cuts the delay short.
        A NetworkError from the client aborts the whole run and no verdicts
        are returned.
        """
        entries = list(entries)
        if not entries or all(e.is_blank() for e in entries):
            raise ValidationError("no candidate passwords supplied")

        self.stats = RunStats()
        self._throttle_pending = False
        total = len(entries)
        verdicts: List[VerdictRecord] = []

        for index, entry in enumerate(entries, 1):
            if cancel is not None and cancel.is_set():
                logger.info("run cancelled at entry %d/%d", index, total)
                raise CheckCancelled(verdicts)

            if entry.is_blank():
                self.stats.skipped += 1
            else:
                try:
                    verdicts.append(self.check_one(entry, cancel))
                except CheckCancelled:
                    logger.info(
                        "run cancelled during throttle at entry %d/%d", index, total
                    )
                    raise CheckCancelled(verdicts) from None

            if progress is not None:
                progress(index, total)

        logger.info(
            "checked %d password(s): %d pwned, %d network call(s), %d cache hit(s)",
            self.stats.checked,
            self.stats.pwned,
            self.stats.network_calls,
            self.stats.cache_hits,
        )
        return verdicts

    def check_one(self, entry: CandidateEntry, cancel=None) -> VerdictRecord:
        d = digest(entry.password)
        bucket = self._bucket_for(d.prefix, cancel)
        is_pwned, count = match(d, bucket)

        self.stats.checked += 1
        if is_pwned:
            self.stats.pwned += 1

        return VerdictRecord(
            password_preview=preview_mask(entry.password),
            plain_text=entry.password if self.config.include_plain_text else None,
            sha1_hash=d.value,
            is_pwned=is_pwned,
            pwned_count=count,
            site_name=entry.name,
            site_url=entry.url,
            username=entry.username,
            note=entry.note,
        )

    def _bucket_for(self, prefix: str, cancel=None) -> List[str]:
        bucket = self.cache.get(prefix)
        if bucket is not None:
            self.stats.cache_hits += 1
            return bucket

        # pace distinct-prefix requests; the first request of a run goes out immediately
        if self._throttle_pending and self.config.throttle_ms > 0:
            self._pause(self.config.throttle_ms / 1000.0, cancel)
        self._throttle_pending = False

        bucket = self.client.query(prefix, self.config)
        self.stats.network_calls += 1
        self.cache.put(prefix, bucket)
        self._throttle_pending = True
        return bucket

    def _pause(self, seconds: float, cancel=None) -> None:
        # an event's wait() returns early, and True, once it is set
        if cancel is not None and hasattr(cancel, "wait"):
            if cancel.wait(seconds):
                raise CheckCancelled([])
            return
        self._sleep(seconds)
