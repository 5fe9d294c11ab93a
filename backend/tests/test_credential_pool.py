"""Tests for API key rotation and cooldown."""

import pytest

from services.credential_pool import CredentialPool
from services.errors import CredentialsExhaustedError


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


class TestRotation:
    def test_round_robin(self, clock):
        pool = CredentialPool(["a", "b", "c"], clock=clock)
        assert [pool.acquire() for _ in range(4)] == ["a", "b", "c", "a"]

    def test_blank_and_duplicate_keys_dropped(self, clock):
        pool = CredentialPool(["a", "", "a", "b"], clock=clock)
        assert len(pool) == 2

    def test_empty_pool(self, clock):
        pool = CredentialPool([], clock=clock)
        assert not pool.enabled
        with pytest.raises(CredentialsExhaustedError):
            pool.acquire()


class TestHealth:
    def test_rate_limited_key_is_skipped(self, clock):
        pool = CredentialPool(["a", "b"], cooldown_seconds=60, clock=clock)
        pool.report_failure("a", rate_limited=True)
        assert pool.acquire() == "b"
        assert pool.acquire() == "b"
        assert pool.available_count() == 1

    def test_cooldown_expires(self, clock):
        pool = CredentialPool(["a", "b"], cooldown_seconds=60, clock=clock)
        pool.report_failure("a", rate_limited=True)
        clock.now += 61
        assert pool.available_count() == 2
        assert "a" in {pool.acquire(), pool.acquire()}

    def test_all_keys_cooling(self, clock):
        pool = CredentialPool(["a", "b"], clock=clock)
        pool.report_failure("a", rate_limited=True)
        pool.report_failure("b", rate_limited=True)
        with pytest.raises(CredentialsExhaustedError):
            pool.acquire()

    def test_error_count_and_reset(self, clock):
        pool = CredentialPool(["a"], clock=clock)
        pool.report_failure("a")
        pool.report_failure("a")
        assert pool.health("a").error_count == 2
        assert pool.acquire() == "a"  # plain errors do not cool down

        pool.report_success("a")
        assert pool.health("a").error_count == 0

    def test_health_is_a_snapshot(self, clock):
        pool = CredentialPool(["a"], clock=clock)
        snapshot = pool.health("a")
        snapshot.error_count = 99
        assert pool.health("a").error_count == 0

    def test_unknown_key_reports_ignored(self, clock):
        pool = CredentialPool(["a"], clock=clock)
        pool.report_failure("zzz", rate_limited=True)
        pool.report_success("zzz")
        assert pool.available_count() == 1
