"""Safety layers: forbidden-intent filter, guards and output cleanup."""

from pepperpal.safety.compressor import compress, hard_truncate
from pepperpal.safety.duplicate_guard import DuplicateGuard
from pepperpal.safety.intent_detector import ForbiddenCheck, check_forbidden, get_refusal
from pepperpal.safety.output_sanitizer import format_response
from pepperpal.safety.rate_limiter import (
    RateLimitAction,
    RateLimitDecision,
    RateLimiter,
    cooldown_message,
)

__all__ = [
    "DuplicateGuard",
    "ForbiddenCheck",
    "RateLimitAction",
    "RateLimitDecision",
    "RateLimiter",
    "check_forbidden",
    "compress",
    "cooldown_message",
    "format_response",
    "get_refusal",
    "hard_truncate",
]
