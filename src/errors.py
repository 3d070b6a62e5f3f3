from __future__ import annotations


class RESPException(Exception):
    """Base class for everything the codec raises."""


class ParseError(RESPException, ValueError):
    """Malformed input. ``offset`` is the 0-based byte index that triggered it."""

    reason = "malformed input"

    def __init__(self, offset: int, detail: str | None = None) -> None:
        self.offset = offset
        self.detail = detail
        text = f"{self.reason} at byte {offset}"
        if detail:
            text = f"{text}: {detail}"
        super().__init__(text)


class UnexpectedByte(ParseError):
    reason = "expected one of + - : $ *"


class UnexpectedCR(ParseError):
    reason = "CR not followed by LF"


class InvalidInteger(ParseError):
    reason = "invalid integer"


class InvalidLength(ParseError):
    reason = "invalid length"


class MissingTerminator(ParseError):
    reason = "missing CRLF terminator"


class UnexpectedEof(ParseError):
    reason = "unexpected end of input"


class InvalidEncoding(ParseError):
    reason = "text is not valid UTF-8"


class BulkTooLarge(ParseError):
    reason = "bulk string too large"


class NestingTooDeep(ParseError):
    reason = "arrays nested too deeply"


class TrailingBytes(ParseError):
    reason = "trailing bytes after value"


class ContentError(RESPException, ValueError):
    """A value that cannot be written to the wire as given."""


class SinkError(RESPException):
    """The caller's sink failed while being written to."""


class SourceError(RESPException):
    """The caller's source failed while being read from."""
