"""Model client interface."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True, slots=True)
class CompletionResult:
    """Outcome of one completion call; errors are reported, never raised."""

    success: bool
    content: str | None = None
    usage: dict[str, int] = field(default_factory=dict)
    error: str | None = None
    finish_reason: str = "stop"

    @property
    def total_tokens(self) -> int:
        return self.usage.get("total_tokens", 0)


class ModelClient(Protocol):
    async def complete(
        self,
        messages: list[dict[str, Any]],
        *,
        model: str,
        max_tokens: int,
        temperature: float | None = None,
    ) -> CompletionResult: ...
