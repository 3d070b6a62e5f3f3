from __future__ import annotations

from dataclasses import dataclass

CRLF = b"\r\n"

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class SimpleString:
    value: str


@dataclass(frozen=True)
class Integer:
    value: int


@dataclass(frozen=True)
class RESPError:
    message: str


@dataclass(frozen=True)
class BulkString:
    value: bytes


@dataclass(frozen=True)
class RESPArray:
    items: tuple[RESPValue, ...]


@dataclass(frozen=True)
class Null:
    """Absent value. Decoded from both ``$-1`` and ``*-1``, always encoded as ``$-1``."""


NULL = Null()

RESPValue = SimpleString | Integer | RESPError | BulkString | RESPArray | Null
