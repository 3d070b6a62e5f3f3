from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import BinaryIO

from errors import ContentError, SinkError
from limits import max_depth_ceiling
from protocol import (
    CRLF,
    INT64_MAX,
    INT64_MIN,
    BulkString,
    Integer,
    Null,
    RESPArray,
    RESPError,
    RESPValue,
    SimpleString,
)

log = logging.getLogger(__name__)

NULL_BULK = b"$-1\r\n"


def serialize(value: RESPValue) -> bytes:
    return b"".join(_encode(value))


def serialize_into(value: RESPValue, sink: BinaryIO) -> None:
    """
    Stream the encoding of ``value`` into ``sink`` node by node.

    Content is checked as each node is reached, so a ContentError raised deep
    inside an array leaves the already-encoded prefix in the sink. Use
    ``serialize`` first when the sink must only ever see whole values.
    """
    for chunk in _encode(value):
        try:
            sink.write(chunk)
        except OSError as exc:
            log.debug("Sink write failed: %s", exc)
            raise SinkError(str(exc)) from exc


def to_text(value: RESPValue) -> str:
    data = serialize(value)
    try:
        return data.decode()
    except UnicodeDecodeError as exc:
        raise ContentError(f"encoding is not valid UTF-8 text at byte {exc.start}") from None


to_sink = serialize_into


def _encode(value: RESPValue, depth: int = 0) -> Iterator[bytes]:
    match value:
        case SimpleString(text):
            yield b"+" + _line(text, "simple string") + CRLF
        case RESPError(message):
            yield b"-" + _line(message, "error") + CRLF
        case Integer(n):
            yield b":" + _integer(n) + CRLF
        case BulkString(data):
            yield b"$%d\r\n" % len(data) + bytes(data) + CRLF
        case RESPArray(items):
            if depth >= max_depth_ceiling():
                raise ContentError(f"arrays nested deeper than {max_depth_ceiling()} levels")
            yield b"*%d\r\n" % len(items)
            for item in items:
                yield from _encode(item, depth + 1)
        case Null():
            yield NULL_BULK
        case _:
            raise TypeError(f"Cannot serialize {type(value)}")


def _line(text: str, kind: str) -> bytes:
    if "\r" in text or "\n" in text:
        raise ContentError(f"{kind} must not contain CR or LF: {text!r}")
    return text.encode()


def _integer(n: int) -> bytes:
    # bool is an int subclass; True is not a RESP integer
    if isinstance(n, bool) or not isinstance(n, int):
        raise ContentError(f"integer payload must be an int, got {type(n).__name__}")
    if not INT64_MIN <= n <= INT64_MAX:
        raise ContentError(f"integer {n} does not fit in 64 bits")
    return b"%d" % n
