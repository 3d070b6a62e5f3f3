import pytest

from protocol import BulkString, Integer, RESPArray, SimpleString


@pytest.fixture
def reply() -> RESPArray:
    return RESPArray((Integer(32), SimpleString("foobar"), BulkString(b"really bulk")))


@pytest.fixture
def reply_bytes() -> bytes:
    return b"*3\r\n:32\r\n+foobar\r\n$11\r\nreally bulk\r\n"
