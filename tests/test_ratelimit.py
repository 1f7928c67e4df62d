"""Tests for the fixed-window rate limiter."""

from fastapi import Request

from securesite_scanner.ratelimit import FixedWindowRateLimiter, get_client_ip


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def make_request(headers: dict[str, str] | None = None, client=("192.0.2.1", 5000)) -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/scan",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": client,
    }
    return Request(scope)


class TestFixedWindowRateLimiter:
    """Test window accounting."""

    def test_allows_up_to_limit(self):
        """Test the first max_requests hits pass and the next is refused."""
        limiter = FixedWindowRateLimiter(max_requests=3, window_seconds=60, clock=FakeClock())

        decisions = [limiter.hit("a") for _ in range(4)]

        assert [d.allowed for d in decisions] == [True, True, True, False]
        assert [d.remaining for d in decisions] == [2, 1, 0, 0]
        assert decisions[-1].retry_after == 60

    def test_window_resets(self):
        """Test a new window opens once the old one ends."""
        clock = FakeClock()
        limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60, clock=clock)

        assert limiter.hit("a").allowed
        clock.now += 30
        refused = limiter.hit("a")
        assert not refused.allowed
        assert refused.retry_after == 30

        clock.now += 30
        assert limiter.hit("a").allowed

    def test_keys_are_independent(self):
        """Test one client's usage does not affect another."""
        limiter = FixedWindowRateLimiter(max_requests=1, clock=FakeClock())
        assert limiter.hit("a").allowed
        assert not limiter.hit("a").allowed
        assert limiter.hit("b").allowed

    def test_reset(self):
        """Test reset clears every window."""
        limiter = FixedWindowRateLimiter(max_requests=1, clock=FakeClock())
        limiter.hit("a")
        limiter.reset()
        assert limiter.hit("a").allowed


class TestGetClientIp:
    """Test client address resolution."""

    def test_forwarded_for_first_entry(self):
        """Test the first X-Forwarded-For address wins."""
        request = make_request({"X-Forwarded-For": "203.0.113.7, 10.0.0.1", "X-Real-IP": "198.51.100.2"})
        assert get_client_ip(request) == "203.0.113.7"

    def test_real_ip(self):
        """Test X-Real-IP is used without X-Forwarded-For."""
        assert get_client_ip(make_request({"X-Real-IP": "198.51.100.2"})) == "198.51.100.2"

    def test_socket_peer(self):
        """Test the connection address is the fallback."""
        assert get_client_ip(make_request()) == "192.0.2.1"

    def test_unknown(self):
        """Test requests without any address."""
        assert get_client_ip(make_request(client=None)) == "unknown"
