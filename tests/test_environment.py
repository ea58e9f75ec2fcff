"""Tests for environment variable helpers."""

import logging
from datetime import timedelta

import pytest

from keeper_notation.environment import (
    _parse_iso8601_duration,
    get_bool,
    get_int,
    get_log_level,
    get_str,
    get_timedelta,
)


def test_get_str_with_default():
    assert get_str("NONEXISTENT_TEST_VAR_XYZ", "fallback") == "fallback"


def test_get_str_from_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("KEEPER_TEST_STR", "hello")
    assert get_str("TEST_STR") == "hello"


def test_get_str_raises_without_default():
    with pytest.raises(KeyError):
        get_str("NONEXISTENT_TEST_VAR_XYZ")


def test_get_int_default():
    assert get_int("NONEXISTENT_TEST_VAR_XYZ", 10) == 10


def test_get_int_from_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("KEEPER_TEST_INT", "7")
    assert get_int("TEST_INT", 0) == 7


def test_get_bool_default():
    assert get_bool("NONEXISTENT_TEST_VAR_XYZ", True) is True


@pytest.mark.parametrize("raw", ["1", "true", "TRUE", "yes", "On"])
def test_get_bool_truthy(monkeypatch: pytest.MonkeyPatch, raw: str):
    monkeypatch.setenv("KEEPER_TEST_BOOL", raw)
    assert get_bool("TEST_BOOL", False) is True


@pytest.mark.parametrize("raw", ["0", "false", "No", "off", ""])
def test_get_bool_falsy(monkeypatch: pytest.MonkeyPatch, raw: str):
    monkeypatch.setenv("KEEPER_TEST_BOOL", raw)
    assert get_bool("TEST_BOOL", True) is False


def test_get_bool_invalid(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("KEEPER_TEST_BOOL", "maybe")
    with pytest.raises(ValueError, match="KEEPER_TEST_BOOL"):
        get_bool("TEST_BOOL", False)


def test_get_log_level_default():
    assert get_log_level("NONEXISTENT_TEST_VAR_XYZ", logging.INFO) == logging.INFO


def test_get_log_level_is_case_insensitive(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("KEEPER_TEST_LEVEL", "debug")
    assert get_log_level("TEST_LEVEL", logging.INFO) == logging.DEBUG


def test_get_log_level_invalid(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("KEEPER_TEST_LEVEL", "LOUD")
    with pytest.raises(ValueError, match="Invalid log level: LOUD"):
        get_log_level("TEST_LEVEL", logging.INFO)


def test_get_timedelta_default():
    default = timedelta(seconds=5)
    assert get_timedelta("NONEXISTENT_TEST_VAR_XYZ", default) == default


def test_get_timedelta_integer_seconds(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("KEEPER_TEST_TD", "30")
    assert get_timedelta("TEST_TD", timedelta()) == timedelta(seconds=30)


def test_get_timedelta_iso8601(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("KEEPER_TEST_TD", "PT1M")
    assert get_timedelta("TEST_TD", timedelta()) == timedelta(minutes=1)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("PT5S", timedelta(seconds=5)),
        ("PT1M30S", timedelta(minutes=1, seconds=30)),
        ("PT1H", timedelta(hours=1)),
        ("P1DT2H", timedelta(days=1, hours=2)),
    ],
)
def test_parse_iso8601_duration(value: str, expected: timedelta):
    assert _parse_iso8601_duration(value) == expected


def test_parse_iso8601_duration_invalid():
    with pytest.raises(ValueError, match="Cannot parse"):
        _parse_iso8601_duration("not-a-duration")
