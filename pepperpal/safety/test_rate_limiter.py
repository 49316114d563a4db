from pepperpal.safety.rate_limiter import RateLimitAction, RateLimiter, cooldown_message


class _Clock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_allows_up_to_max_then_warns_once_then_suppresses() -> None:
    clock = _Clock()
    limiter = RateLimiter(max_messages=5, window_seconds=60, clock=clock)

    actions = []
    for _ in range(8):
        actions.append(limiter.check("u1").action)
        clock.now += 1

    assert actions[:5] == [RateLimitAction.ALLOW] * 5
    assert actions[5] is RateLimitAction.WARN
    assert actions[6:] == [RateLimitAction.SUPPRESS, RateLimitAction.SUPPRESS]


def test_warning_carries_seconds_until_reset() -> None:
    clock = _Clock()
    limiter = RateLimiter(max_messages=1, window_seconds=60, clock=clock)

    limiter.check("u1")
    clock.now += 10.5
    decision = limiter.check("u1")

    assert decision.action is RateLimitAction.WARN
    assert decision.retry_after == 50
    assert not decision.allowed


def test_window_resets_after_expiry() -> None:
    clock = _Clock()
    limiter = RateLimiter(max_messages=1, window_seconds=60, clock=clock)

    limiter.check("u1")
    limiter.check("u1")
    clock.now += 61

    assert limiter.check("u1").allowed


def test_users_are_limited_independently() -> None:
    limiter = RateLimiter(max_messages=1, clock=_Clock())

    limiter.check("u1")

    assert limiter.check("u2").allowed
    assert limiter.check("u1").action is RateLimitAction.WARN


def test_missing_user_is_always_allowed() -> None:
    limiter = RateLimiter(max_messages=1, clock=_Clock())

    for _ in range(3):
        assert limiter.check(None).allowed
    assert limiter.size == 0


def test_sweep_drops_finished_windows() -> None:
    clock = _Clock()
    limiter = RateLimiter(window_seconds=60, clock=clock)
    limiter.check("u1")
    clock.now += 30
    limiter.check("u2")
    clock.now += 31

    assert limiter.sweep() == 1
    assert limiter.size == 1


def test_cooldown_message() -> None:
    assert cooldown_message(42) == "Please slow down a bit. You can message me again in 42 seconds."
