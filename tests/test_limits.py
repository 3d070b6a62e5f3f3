import pytest

from limits import DEFAULT_MAX_BULK_LENGTH, DEFAULT_MAX_DEPTH, ParserLimits, max_depth_ceiling


@pytest.fixture(autouse=True)
def clear_env(monkeypatch) -> None:
    monkeypatch.delenv("RESP_MAX_DEPTH", raising=False)
    monkeypatch.delenv("RESP_MAX_BULK_LENGTH", raising=False)


def test_defaults() -> None:
    limits = ParserLimits.from_env()
    assert limits == ParserLimits()
    assert limits.max_depth == DEFAULT_MAX_DEPTH
    assert limits.max_bulk_length == DEFAULT_MAX_BULK_LENGTH


def test_from_env_reads_overrides(monkeypatch) -> None:
    monkeypatch.setenv("RESP_MAX_DEPTH", "8")
    monkeypatch.setenv("RESP_MAX_BULK_LENGTH", "1024")
    assert ParserLimits.from_env() == ParserLimits(max_depth=8, max_bulk_length=1024)


def test_from_env_treats_blank_as_default(monkeypatch) -> None:
    monkeypatch.setenv("RESP_MAX_DEPTH", "  ")
    assert ParserLimits.from_env().max_depth == DEFAULT_MAX_DEPTH


@pytest.mark.parametrize(
    ("name", "raw"),
    [
        ("RESP_MAX_DEPTH", "deep"),
        ("RESP_MAX_DEPTH", "0"),
        ("RESP_MAX_BULK_LENGTH", "-1"),
        ("RESP_MAX_BULK_LENGTH", "1.5"),
    ],
)
def test_from_env_rejects_bad_values(monkeypatch, name: str, raw: str) -> None:
    monkeypatch.setenv(name, raw)
    with pytest.raises(ValueError):
        ParserLimits.from_env()


def test_default_depth_fits_under_ceiling() -> None:
    assert DEFAULT_MAX_DEPTH <= max_depth_ceiling()
    assert ParserLimits(max_depth=max_depth_ceiling()).max_depth == max_depth_ceiling()


def test_depth_above_ceiling_is_rejected(monkeypatch) -> None:
    with pytest.raises(ValueError):
        ParserLimits(max_depth=100_000)

    monkeypatch.setenv("RESP_MAX_DEPTH", "100000")
    with pytest.raises(ValueError):
        ParserLimits.from_env()


def test_ceiling_follows_recursion_limit(monkeypatch) -> None:
    monkeypatch.setattr("limits.sys.getrecursionlimit", lambda: 3000)
    assert max_depth_ceiling() == 1300
    assert ParserLimits(max_depth=1300).max_depth == 1300
