"""Silently drop repeated questions from the same user in the same chat."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from loguru import logger

from pepperpal.utils.helpers import normalize_for_hash, rolling_hash


@dataclass(frozen=True, slots=True)
class DuplicateRecord:
    query_hash: str
    timestamp: float


class DuplicateGuard:
    """
    Per (user, conversation) memory of the last question asked.

    Only the most recent question per key is remembered. The store is bounded;
    when full, the record written longest ago is evicted.
    """

    def __init__(
        self,
        window_seconds: float = 30,
        max_entries: int = 1000,
        clock: Callable[[], float] = time.time,
    ):
        self._window = window_seconds
        self._max_entries = max_entries
        self._clock = clock
        # dict preserves insertion order; oldest write is first
        self._records: dict[str, DuplicateRecord] = {}

    def is_duplicate(self, user_id: str | int | None, conversation_id: str | int | None, text: str) -> bool:
        """
        Check and record a question.

        Args:
            user_id: Sender id. Missing ids are never treated as duplicates.
            conversation_id: Chat id; falls back to the user id.
            text: Raw question text.

        Returns:
            True if the same question was seen for this key within the window.
        """
        if not user_id or not text:
            return False

        key = f"{user_id}:{conversation_id or user_id}"
        query_hash = rolling_hash(normalize_for_hash(text))
        now = self._clock()

        existing = self._records.get(key)
        if existing and existing.query_hash == query_hash and now - existing.timestamp < self._window:
            logger.debug(f"Duplicate query from {key} ({now - existing.timestamp:.1f}s after first)")
            return True

        if existing is not None:
            del self._records[key]
        elif len(self._records) >= self._max_entries:
            oldest = next(iter(self._records))
            del self._records[oldest]

        self._records[key] = DuplicateRecord(query_hash=query_hash, timestamp=now)
        return False

    def sweep(self) -> int:
        """Drop records older than the window; returns how many were removed."""
        now = self._clock()
        expired = [k for k, r in self._records.items() if now - r.timestamp > self._window]
        for key in expired:
            del self._records[key]
        if expired:
            logger.debug(f"Duplicate guard cleanup: {len(expired)} entries removed")
        return len(expired)

    def clear(self) -> None:
        self._records.clear()

    @property
    def size(self) -> int:
        return len(self._records)
