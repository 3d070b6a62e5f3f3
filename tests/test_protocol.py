import dataclasses

import pytest

from protocol import NULL, BulkString, Integer, Null, RESPArray, RESPError, SimpleString


def test_values_compare_structurally() -> None:
    assert SimpleString("OK") == SimpleString("OK")
    assert SimpleString("OK") != RESPError("OK")
    assert Integer(1) != SimpleString("1")
    assert BulkString(b"a") != BulkString(b"b")
    assert RESPArray((Integer(1), NULL)) == RESPArray((Integer(1), Null()))


def test_null_is_a_single_logical_value() -> None:
    assert Null() == NULL
    assert hash(Null()) == hash(NULL)
    assert NULL != BulkString(b"")
    assert NULL != RESPArray(())


def test_array_order_is_significant() -> None:
    assert RESPArray((Integer(1), Integer(2))) != RESPArray((Integer(2), Integer(1)))


def test_values_are_immutable() -> None:
    value = SimpleString("OK")
    with pytest.raises(dataclasses.FrozenInstanceError):
        value.value = "changed"  # type: ignore[misc]

    array = RESPArray((Integer(1),))
    with pytest.raises(dataclasses.FrozenInstanceError):
        array.items = ()  # type: ignore[misc]


def test_values_are_hashable() -> None:
    seen = {RESPArray((BulkString(b"x"), NULL)), RESPArray((BulkString(b"x"), NULL))}
    assert len(seen) == 1
