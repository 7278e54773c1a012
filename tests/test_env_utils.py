from __future__ import annotations

from telemetry_wrappers.utils.env import env_bool, env_list_float, env_str


def test_env_bool_parsing(monkeypatch):
    monkeypatch.setenv("X_BOOL", "1")
    assert env_bool("X_BOOL") is True
    monkeypatch.setenv("X_BOOL", "true")
    assert env_bool("X_BOOL") is True
    monkeypatch.setenv("X_BOOL", "no")
    assert env_bool("X_BOOL", True) is False
    monkeypatch.delenv("X_BOOL", raising=False)
    assert env_bool("X_BOOL", False) is False


def test_env_str(monkeypatch):
    monkeypatch.setenv("X_STR", "  LOGGING ")
    assert env_str("X_STR", "null") == "LOGGING"
    assert env_str("X_STR", "null", lower=True) == "logging"
    monkeypatch.setenv("X_STR", "   ")
    assert env_str("X_STR", "null") == "null"
    monkeypatch.delenv("X_STR", raising=False)
    assert env_str("X_STR", "dflt") == "dflt"


def test_env_list_float(monkeypatch):
    monkeypatch.setenv("X_LIST", "1, 2.5, 3")
    assert env_list_float("X_LIST", [9]) == [1.0, 2.5, 3.0]
    monkeypatch.setenv("X_LIST", "")
    assert env_list_float("X_LIST", [9]) == [9]
    assert env_list_float("X_MISSING") is None
    monkeypatch.setenv("X_LIST", "a, b")
    assert env_list_float("X_LIST", [4, 5]) == [4, 5]
