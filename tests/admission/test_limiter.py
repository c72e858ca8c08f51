from __future__ import annotations

import threading

import pytest

from pdfutility.admission import (
    LOCK_ENDPOINT,
    UNLOCK_ENDPOINT,
    Admission,
    AdmissionController,
    BucketLimit,
    TokenBucket,
)
from pdfutility.core.config import Settings
from pdfutility.core.exceptions import CapacityError, RateLimitExceededError


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


def _controller(clock: FakeClock, **kwargs) -> AdmissionController:
    return AdmissionController({}, BucketLimit(3, 3, 60.0), clock=clock, **kwargs)


def test_admits_capacity_then_rejects(clock: FakeClock) -> None:
    controller = _controller(clock)

    results = [controller.try_admit("10.0.0.1", "/api/v1/pdf/split") for _ in range(4)]

    assert results == [Admission.ADMITTED] * 3 + [Admission.REJECTED]


def test_refills_continuously(clock: FakeClock) -> None:
    controller = _controller(clock)
    for _ in range(3):
        controller.try_admit("client", "/split")

    clock.advance(20)
    assert controller.try_admit("client", "/split") is Admission.ADMITTED
    assert controller.try_admit("client", "/split") is Admission.REJECTED


def test_full_window_restores_capacity(clock: FakeClock) -> None:
    controller = _controller(clock)
    for _ in range(4):
        controller.try_admit("client", "/split")

    clock.advance(60)

    assert [controller.try_admit("client", "/split") for _ in range(4)] == [Admission.ADMITTED] * 3 + [
        Admission.REJECTED
    ]


@pytest.mark.parametrize("window", [49.0, 0.3, 7.0, 1e-3])
def test_one_window_refills_a_token_for_uneven_windows(clock: FakeClock, window: float) -> None:
    controller = AdmissionController({}, BucketLimit(1, 1, window), clock=clock)
    assert controller.try_admit("client", "/split") is Admission.ADMITTED
    assert controller.try_admit("client", "/split") is Admission.REJECTED

    clock.advance(window)

    assert controller.try_admit("client", "/split") is Admission.ADMITTED


def test_token_bucket_refills_exact_tokens_after_one_window(clock: FakeClock) -> None:
    bucket = TokenBucket(BucketLimit(3, 3, 49.0), clock=clock)
    for _ in range(3):
        assert bucket.try_consume()

    clock.advance(49.0)

    assert [bucket.try_consume() for _ in range(4)] == [True, True, True, False]


def test_buckets_are_independent_per_client_and_endpoint(clock: FakeClock) -> None:
    controller = _controller(clock)
    for _ in range(3):
        controller.try_admit("a", "/split")

    assert controller.try_admit("a", "/split") is Admission.REJECTED
    assert controller.try_admit("b", "/split") is Admission.ADMITTED
    assert controller.try_admit("a", "/merge") is Admission.ADMITTED


def test_from_settings_uses_stricter_limit_for_password_routes() -> None:
    controller = AdmissionController.from_settings(Settings())

    assert controller.limit_for(UNLOCK_ENDPOINT).capacity == 5
    assert controller.limit_for(LOCK_ENDPOINT).capacity == 5
    assert controller.limit_for("/api/v1/pdf/split").capacity == 10
    assert controller.limit_for("/api/v1/pdf/split").window == 60.0


def test_require_admission_raises_capacity_error(clock: FakeClock) -> None:
    controller = _controller(clock)
    for _ in range(3):
        controller.require_admission("client", "/split")

    with pytest.raises(RateLimitExceededError) as excinfo:
        controller.require_admission("client", "/split")

    assert isinstance(excinfo.value, CapacityError)
    assert "/split" in str(excinfo.value)


def test_idle_buckets_expire(clock: FakeClock) -> None:
    controller = _controller(clock, idle_ttl=10.0)
    controller.try_admit("old", "/split")

    clock.advance(11)
    controller.try_admit("new", "/split")

    assert len(controller) == 1


def test_table_is_bounded_by_max_keys(clock: FakeClock) -> None:
    controller = _controller(clock, max_keys=2)
    for _ in range(3):
        controller.try_admit("first", "/split")

    controller.try_admit("second", "/split")
    controller.try_admit("third", "/split")

    assert len(controller) == 2
    # The least recently used bucket was dropped and comes back full.
    assert controller.try_admit("first", "/split") is Admission.ADMITTED


def test_concurrent_callers_never_exceed_capacity(clock: FakeClock) -> None:
    controller = AdmissionController({}, BucketLimit(5, 5, 60.0), clock=clock)
    results: list[Admission] = []
    lock = threading.Lock()

    def _worker() -> None:
        outcome = controller.try_admit("client", "/split")
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=_worker) for _ in range(25)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(Admission.ADMITTED) == 5
    assert results.count(Admission.REJECTED) == 20


def test_token_bucket_never_exceeds_capacity(clock: FakeClock) -> None:
    bucket = TokenBucket(BucketLimit(2, 1, 1.0), clock)

    clock.advance(100)

    assert bucket.available_tokens == 2


@pytest.mark.parametrize(("capacity", "refill", "window"), [(0, 1, 1.0), (1, 0, 1.0), (1, 1, 0.0)])
def test_bucket_limit_validation(capacity: int, refill: int, window: float) -> None:
    with pytest.raises(ValueError):
        BucketLimit(capacity, refill, window)
