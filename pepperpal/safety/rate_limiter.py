"""Per-user fixed-window rate limiting with a single polite warning."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from loguru import logger


class RateLimitAction(str, Enum):
    ALLOW = "allow"
    WARN = "warn"  # first message over the limit: send the cooldown notice
    SUPPRESS = "suppress"  # later messages in the same window: say nothing


@dataclass(slots=True)
class RateLimitRecord:
    count: int
    reset_at: float


@dataclass(frozen=True, slots=True)
class RateLimitDecision:
    action: RateLimitAction
    retry_after: int = 0

    @property
    def allowed(self) -> bool:
        return self.action is RateLimitAction.ALLOW


_ALLOW = RateLimitDecision(RateLimitAction.ALLOW)


def cooldown_message(seconds: int) -> str:
    return f"Please slow down a bit. You can message me again in {seconds} seconds."


class RateLimiter:
    """
    At most ``max_messages`` per user per window.

    The window starts with the first message after the previous one expired;
    it does not slide.
    """

    def __init__(
        self,
        max_messages: int = 5,
        window_seconds: float = 60,
        clock: Callable[[], float] = time.time,
    ):
        self._max = max_messages
        self._window = window_seconds
        self._clock = clock
        self._records: dict[str, RateLimitRecord] = {}

    def check(self, user_id: str | int | None) -> RateLimitDecision:
        if not user_id:
            return _ALLOW

        key = str(user_id)
        now = self._clock()
        record = self._records.get(key)

        if record is None or now > record.reset_at:
            self._records[key] = RateLimitRecord(count=1, reset_at=now + self._window)
            return _ALLOW

        record.count += 1
        if record.count <= self._max:
            return _ALLOW

        if record.count == self._max + 1:
            retry_after = max(1, math.ceil(record.reset_at - now))
            logger.info(f"Rate limit exceeded for user {key} (count={record.count})")
            return RateLimitDecision(RateLimitAction.WARN, retry_after=retry_after)
        return RateLimitDecision(RateLimitAction.SUPPRESS)

    def sweep(self) -> int:
        """Remove records whose window has ended."""
        now = self._clock()
        expired = [k for k, r in self._records.items() if now > r.reset_at]
        for key in expired:
            del self._records[key]
        if expired:
            logger.debug(f"Rate limit cleanup: {len(expired)} entries removed")
        return len(expired)

    @property
    def size(self) -> int:
        return len(self._records)
