"""Per-client, per-endpoint token bucket admission control."""

from __future__ import annotations

import time
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from threading import Lock
from typing import Callable, Dict, Mapping, Tuple

from ..core.config import Settings
from ..core.exceptions import RateLimitExceededError
from ..core.utils import get_logger

LOGGER = get_logger("pdfutility.admission")

Clock = Callable[[], float]

UNLOCK_ENDPOINT = "/api/v1/pdf/unlock"
LOCK_ENDPOINT = "/api/v1/pdf/lock"

# Tolerance for float drift in clock deltas.
TOKEN_EPSILON = 1e-9


class Admission(str, Enum):
    ADMITTED = "admitted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class BucketLimit:
    """``capacity`` tokens, refilled by ``refill_tokens`` every ``window`` seconds."""

    capacity: int
    refill_tokens: int
    window: float

    def __post_init__(self) -> None:
        if self.capacity < 1 or self.refill_tokens < 1:
            raise ValueError("Bucket capacity and refill must be at least 1")
        if self.window <= 0:
            raise ValueError("Bucket window must be positive")


class TokenBucket:
    """A continuously refilling token bucket.

    The bucket starts full. Refill and decrement happen under one lock, so
    concurrent callers can never spend the same token twice.
    """

    def __init__(self, limit: BucketLimit, clock: Clock = time.monotonic) -> None:
        self.limit = limit
        self._clock = clock
        self._tokens = float(limit.capacity)
        self._last_refill = clock()
        self.last_used = self._last_refill
        self._lock = Lock()

    def _refill(self, now: float) -> None:
        elapsed = now - self._last_refill
        if elapsed > 0:
            refilled = self._tokens + elapsed * self.limit.refill_tokens / self.limit.window
            self._tokens = min(float(self.limit.capacity), refilled)
            self._last_refill = now

    @property
    def available_tokens(self) -> float:
        with self._lock:
            self._refill(self._clock())
            return self._tokens

    def try_consume(self, tokens: int = 1) -> bool:
        with self._lock:
            now = self._clock()
            self._refill(now)
            self.last_used = now
            if self._tokens + TOKEN_EPSILON >= tokens:
                self._tokens = max(0.0, self._tokens - tokens)
                return True
            return False


class AdmissionController:
    """Gate requests with one :class:`TokenBucket` per ``(client, endpoint)``.

    Buckets are created on first use. Buckets idle for longer than
    ``idle_ttl`` seconds are dropped, and at most ``max_keys`` buckets are
    kept (least recently used go first), so the table stays bounded. A
    dropped bucket comes back full, which is what an idle bucket would have
    refilled to anyway as long as ``idle_ttl`` covers a full refill.
    """

    def __init__(
        self,
        limits: Mapping[str, BucketLimit] | None = None,
        default_limit: BucketLimit | None = None,
        *,
        idle_ttl: float = 600.0,
        max_keys: int = 10_000,
        clock: Clock = time.monotonic,
    ) -> None:
        self._limits: Dict[str, BucketLimit] = dict(limits or {})
        self._default_limit = default_limit or BucketLimit(10, 10, 60.0)
        self._idle_ttl = idle_ttl
        self._max_keys = max_keys
        self._clock = clock
        self._buckets: "OrderedDict[Tuple[str, str], TokenBucket]" = OrderedDict()
        self._lock = Lock()

    @classmethod
    def from_settings(cls, settings: Settings, *, clock: Clock = time.monotonic) -> "AdmissionController":
        sensitive = BucketLimit(
            settings.sensitive_rate_limit_capacity,
            settings.sensitive_rate_limit_capacity,
            settings.rate_limit_window,
        )
        default = BucketLimit(
            settings.rate_limit_capacity,
            settings.rate_limit_capacity,
            settings.rate_limit_window,
        )
        return cls(
            {UNLOCK_ENDPOINT: sensitive, LOCK_ENDPOINT: sensitive},
            default,
            idle_ttl=settings.rate_limit_idle_ttl,
            max_keys=settings.rate_limit_max_keys,
            clock=clock,
        )

    def limit_for(self, endpoint: str) -> BucketLimit:
        return self._limits.get(endpoint, self._default_limit)

    def __len__(self) -> int:
        with self._lock:
            return len(self._buckets)

    def _evict(self, now: float) -> None:
        while self._buckets:
            key, bucket = next(iter(self._buckets.items()))
            if len(self._buckets) <= self._max_keys and now - bucket.last_used < self._idle_ttl:
                break
            del self._buckets[key]
            LOGGER.debug("Evicted idle rate limit bucket for %s", key)

    def _bucket_for(self, client_key: str, endpoint: str) -> TokenBucket:
        key = (client_key, endpoint)
        with self._lock:
            now = self._clock()
            bucket = self._buckets.get(key)
            if bucket is None:
                bucket = TokenBucket(self.limit_for(endpoint), self._clock)
                self._buckets[key] = bucket
            else:
                self._buckets.move_to_end(key)
            bucket.last_used = now
            self._evict(now)
            return bucket

    def try_admit(self, client_key: str, endpoint: str) -> Admission:
        bucket = self._bucket_for(client_key, endpoint)
        if bucket.try_consume():
            return Admission.ADMITTED
        LOGGER.warning("Rate limit exceeded for %s on %s", client_key, endpoint)
        return Admission.REJECTED

    def require_admission(self, client_key: str, endpoint: str) -> None:
        """Like :meth:`try_admit` but raises :class:`RateLimitExceededError`."""

        if self.try_admit(client_key, endpoint) is Admission.REJECTED:
            raise RateLimitExceededError(client_key, endpoint)


__all__ = [
    "Admission",
    "AdmissionController",
    "BucketLimit",
    "TokenBucket",
    "UNLOCK_ENDPOINT",
    "LOCK_ENDPOINT",
]
