"""Unit tests for RateLimitHandler."""

import threading
from unittest.mock import MagicMock

import pytest

from infrastructure.http.rate_limit import RateLimitHandler

pytestmark = pytest.mark.unit


@pytest.fixture
def sleep(clock):
    """Sleep that advances the fake clock instead of blocking."""
    return MagicMock(side_effect=clock.advance)


@pytest.fixture
def limiter(clock, sleep):
    return RateLimitHandler(3, per_seconds=10, clock=clock, sleep=sleep)


class TestValidation:
    """Test constructor validation."""

    @pytest.mark.parametrize(
        "max_requests,per_seconds,message",
        [
            (0, 1, "max_requests must be at least 1"),
            (5, 0, "per_seconds must be positive"),
            (5, -1, "per_seconds must be positive"),
        ],
    )
    def test_rejects_invalid_limits(self, max_requests, per_seconds, message):
        with pytest.raises(ValueError, match=message):
            RateLimitHandler(max_requests, per_seconds)


class TestWait:
    """Test blocking behaviour."""

    def test_requests_within_limit_do_not_wait(self, limiter, sleep):
        waits = [limiter.wait() for _ in range(3)]

        assert waits == [0.0, 0.0, 0.0]
        sleep.assert_not_called()

    def test_waits_for_oldest_request_to_leave_window(self, limiter, clock, sleep):
        limiter.wait()
        clock.advance(2)
        limiter.wait()
        limiter.wait()

        waited = limiter.wait()

        assert waited == pytest.approx(8)
        sleep.assert_called_once_with(pytest.approx(8))
        assert limiter.get_remaining_requests() == 0

    def test_window_slides(self, limiter, clock, sleep):
        for _ in range(3):
            limiter.wait()
        clock.advance(10)

        assert limiter.wait() == 0.0
        sleep.assert_not_called()
        assert limiter.get_remaining_requests() == 2

    def test_concurrent_callers_never_exceed_limit(self, clock):
        limiter = RateLimitHandler(
            5, per_seconds=1, clock=clock, sleep=MagicMock(side_effect=clock.advance)
        )
        threads = [threading.Thread(target=limiter.wait) for _ in range(20)]

        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert limiter.get_remaining_requests() == 0
        assert clock.now == pytest.approx(1_000_003.0)


class TestInspection:
    """Test non-blocking queries."""

    def test_fresh_limiter(self, limiter):
        assert limiter.get_remaining_requests() == 3
        assert limiter.can_request()
        assert limiter.get_wait_time() == 0.0

    def test_full_window(self, limiter, clock):
        for _ in range(3):
            limiter.wait()
        clock.advance(4)

        assert limiter.get_remaining_requests() == 0
        assert not limiter.can_request()
        assert limiter.get_wait_time() == pytest.approx(6)

    def test_request_at_window_edge_expires(self, limiter, clock):
        limiter.wait()
        clock.advance(10)

        assert limiter.get_remaining_requests() == 3

    def test_queries_do_not_record_requests(self, limiter):
        limiter.get_remaining_requests()
        limiter.can_request()
        limiter.get_wait_time()

        assert limiter.get_remaining_requests() == 3

    def test_reset(self, limiter):
        for _ in range(3):
            limiter.wait()

        limiter.reset()

        assert limiter.can_request()
        assert limiter.get_remaining_requests() == 3
