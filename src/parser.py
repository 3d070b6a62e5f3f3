from __future__ import annotations

import logging
from typing import BinaryIO

from errors import (
    BulkTooLarge,
    InvalidEncoding,
    InvalidInteger,
    InvalidLength,
    MissingTerminator,
    NestingTooDeep,
    SourceError,
    TrailingBytes,
    UnexpectedByte,
    UnexpectedCR,
    UnexpectedEof,
)
from limits import DEFAULT_LIMITS, ParserLimits
from protocol import (
    CRLF,
    INT64_MAX,
    INT64_MIN,
    NULL,
    BulkString,
    Integer,
    RESPArray,
    RESPError,
    RESPValue,
    SimpleString,
)

log = logging.getLogger(__name__)

CR = 0x0D
LF = 0x0A
MINUS = 0x2D
DIGITS = b"0123456789"
INT64_DIGITS = 19


def parse(data: bytes, limits: ParserLimits | None = None) -> tuple[RESPValue, int]:
    """
    Parse the first RESP value in ``data``.

    Returns the value and the number of bytes it occupied. Bytes after the
    value are left alone; see ``parse_all`` and ``from_text(strict=True)``
    for whole-buffer checks.
    """
    cursor = _Cursor(bytes(data), limits or DEFAULT_LIMITS)
    value = cursor.value(depth=0)
    return value, cursor.pos


def parse_all(data: bytes, limits: ParserLimits | None = None) -> list[RESPValue]:
    data = bytes(data)
    limits = limits or DEFAULT_LIMITS
    values = []
    pos = 0

    while pos < len(data):
        cursor = _Cursor(data, limits, pos)
        values.append(cursor.value(depth=0))
        pos = cursor.pos

    return values


def from_text(
    text: str | bytes,
    *,
    strict: bool = False,
    limits: ParserLimits | None = None,
) -> RESPValue:
    data = text.encode() if isinstance(text, str) else bytes(text)
    value, consumed = parse(data, limits)

    if strict and consumed != len(data):
        raise TrailingBytes(consumed, f"{len(data) - consumed} byte(s) left over")

    return value


def from_source(
    source: BinaryIO,
    *,
    strict: bool = False,
    limits: ParserLimits | None = None,
) -> RESPValue:
    try:
        data = source.read()
    except OSError as exc:
        log.debug("Source read failed: %s", exc)
        raise SourceError(str(exc)) from exc

    return from_text(data, strict=strict, limits=limits)


class _Cursor:
    """Reading position over one input buffer, owned by a single parse call."""

    def __init__(self, data: bytes, limits: ParserLimits, pos: int = 0) -> None:
        self.data = data
        self.limits = limits
        self.pos = pos

    def value(self, depth: int) -> RESPValue:
        start = self.pos
        tag = self.data[start : start + 1]
        self.pos += 1

        match tag:
            case b"+":
                return SimpleString(self._text())
            case b"-":
                return RESPError(self._text())
            case b":":
                return Integer(self._integer())
            case b"$":
                return self._bulk_string()
            case b"*":
                return self._array(start, depth)
            case b"":
                raise UnexpectedByte(start, "no data where a value was expected")
            case _:
                raise UnexpectedByte(start, f"got {tag!r}")

    def _line(self) -> bytes:
        start = self.pos
        cr = self.data.find(b"\r", start)

        if cr == -1:
            raise UnexpectedEof(len(self.data), "no CRLF found")

        self._expect_lf(cr)
        self.pos = cr + 2
        return self.data[start:cr]

    def _expect_lf(self, cr: int) -> None:
        if cr + 1 >= len(self.data):
            raise UnexpectedEof(len(self.data), "input ends after CR")
        if self.data[cr + 1] != LF:
            raise UnexpectedCR(cr)

    def _text(self) -> str:
        start = self.pos
        raw = self._line()
        try:
            return raw.decode()
        except UnicodeDecodeError as exc:
            raise InvalidEncoding(start + exc.start) from None

    def _integer(self) -> int:
        data = self.data
        start = pos = self.pos

        if pos < len(data) and data[pos] == MINUS:
            pos += 1

        digits_start = pos
        while pos < len(data) and data[pos] in DIGITS:
            pos += 1

        if pos >= len(data):
            raise UnexpectedEof(pos, "integer not terminated")
        if data[pos] != CR:
            raise InvalidInteger(pos, f"unexpected byte {data[pos:pos + 1]!r}")
        if pos == digits_start:
            raise InvalidInteger(pos, "no digits")

        self._expect_lf(pos)

        # int() refuses very long digit strings, so reject overflow by length first
        if len(data[digits_start:pos].lstrip(b"0")) > INT64_DIGITS:
            raise InvalidInteger(start, "out of 64-bit range")
        n = int(data[start:pos])
        if not INT64_MIN <= n <= INT64_MAX:
            raise InvalidInteger(start, "out of 64-bit range")

        self.pos = pos + 2
        return n

    def _bulk_string(self) -> RESPValue:
        field = self.pos
        length = self._integer()

        if length == -1:
            return NULL
        if length < 0:
            raise InvalidLength(field, f"bulk string length {length}")
        if length > self.limits.max_bulk_length:
            raise BulkTooLarge(field, f"{length} > {self.limits.max_bulk_length}")

        start = self.pos
        end = start + length
        if end > len(self.data):
            raise UnexpectedEof(len(self.data), f"bulk string needs {length} bytes")

        self.pos = end
        self._terminator()
        return BulkString(self.data[start:end])

    def _terminator(self) -> None:
        pos = self.pos
        found = self.data[pos : pos + 2]

        if found != CRLF:
            if len(found) < 2 and CRLF.startswith(found):
                raise UnexpectedEof(len(self.data), "bulk string not terminated")
            raise MissingTerminator(pos, f"got {found!r}")

        self.pos = pos + 2

    def _array(self, tag_offset: int, depth: int) -> RESPValue:
        field = self.pos
        count = self._integer()

        if count == -1:
            return NULL
        if count < 0:
            raise InvalidLength(field, f"array count {count}")
        if depth >= self.limits.max_depth:
            raise NestingTooDeep(tag_offset, f"limit is {self.limits.max_depth}")

        items = []
        for _ in range(count):
            if self.pos >= len(self.data):
                raise UnexpectedEof(self.pos, f"array has {len(items)} of {count} elements")
            items.append(self.value(depth + 1))

        return RESPArray(tuple(items))
