"""Tests for category based debug logging."""

from __future__ import annotations

import pytest

from pychip8.utils import debug
from pychip8.utils.debug import CATEGORIES, debug_enabled, debug_log, parse_categories, reload_categories


@pytest.fixture(autouse=True)
def _restore_categories(monkeypatch):
    yield
    monkeypatch.delenv(debug.ENV_VAR, raising=False)
    reload_categories()


def test_disabled_without_environment(monkeypatch, capsys) -> None:
    monkeypatch.delenv(debug.ENV_VAR, raising=False)
    reload_categories()

    debug_log("cpu", "pc=%03x", 0x200)

    assert debug_enabled("cpu") is False
    assert capsys.readouterr().out == ""


def test_selected_categories(monkeypatch, capsys) -> None:
    monkeypatch.setenv(debug.ENV_VAR, "cpu, Input")
    reload_categories()

    assert debug_enabled("cpu")
    assert debug_enabled("input")
    assert not debug_enabled("timer")

    debug_log("cpu", "pc=%03x", 0x200)
    assert capsys.readouterr().out == "[CHIP8][cpu] pc=200\n"


def test_all_enables_everything(monkeypatch) -> None:
    monkeypatch.setenv(debug.ENV_VAR, "all")
    reload_categories()
    assert debug_enabled("loader")
    assert debug_enabled()


def test_bad_format_arguments_are_appended(monkeypatch, capsys) -> None:
    monkeypatch.setenv(debug.ENV_VAR, "cpu")
    reload_categories()
    debug_log("cpu", "no placeholders", 1)
    assert capsys.readouterr().out == "[CHIP8][cpu] no placeholders (1,)\n"


def test_parse_categories_normalises_names() -> None:
    assert parse_categories(" CPU,,timer ,") == frozenset({"cpu", "timer"})
    assert parse_categories("") == frozenset()


def test_all_expands_to_known_categories() -> None:
    parsed = parse_categories("all")
    assert CATEGORIES <= parsed
    assert "all" in parsed


def test_reload_picks_up_environment_changes(monkeypatch) -> None:
    monkeypatch.setenv(debug.ENV_VAR, "loader")
    assert reload_categories() == frozenset({"loader"})
    monkeypatch.setenv(debug.ENV_VAR, "input")
    assert debug_enabled("loader")
    reload_categories()
    assert not debug_enabled("loader")
    assert debug_enabled("input")
