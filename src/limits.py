from __future__ import annotations

import os
import sys
from dataclasses import dataclass

DEFAULT_MAX_DEPTH = 256
DEFAULT_MAX_BULK_LENGTH = 512 * 1024 * 1024

# frames kept free for the caller's own stack below the codec
STACK_MARGIN = 200


def max_depth_ceiling() -> int:
    """
    Deepest array nesting the codec can walk without hitting RecursionError.

    The parser spends two frames per nesting level, so the ceiling is half the
    interpreter's recursion limit minus STACK_MARGIN. It is 300 under the
    default limit of 1000 and moves with ``sys.setrecursionlimit``.
    """
    return sys.getrecursionlimit() // 2 - STACK_MARGIN


@dataclass(frozen=True)
class ParserLimits:
    """
    Bounds applied while parsing untrusted input.

    max_depth caps array nesting and may not exceed ``max_depth_ceiling()``,
    so deep input always ends in NestingTooDeep rather than RecursionError.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    max_bulk_length: int = DEFAULT_MAX_BULK_LENGTH

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")
        if self.max_depth > max_depth_ceiling():
            raise ValueError(f"max_depth must not exceed {max_depth_ceiling()}, got {self.max_depth}")
        if self.max_bulk_length < 0:
            raise ValueError(f"max_bulk_length must not be negative, got {self.max_bulk_length}")

    @classmethod
    def from_env(cls) -> ParserLimits:
        return cls(
            max_depth=_int_env("RESP_MAX_DEPTH", DEFAULT_MAX_DEPTH),
            max_bulk_length=_int_env("RESP_MAX_BULK_LENGTH", DEFAULT_MAX_BULK_LENGTH),
        )


DEFAULT_LIMITS = ParserLimits()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default

    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
