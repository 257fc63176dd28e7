import os

from llsparse import _runtime
from llsparse import get_debug_checks, get_print_options, set_debug_checks, set_print_options


def test_print_options_default(monkeypatch):
    monkeypatch.delenv("LLSPARSE_PRINT_SEP", raising=False)
    _runtime._reset_from_env()
    assert get_print_options() == {"sep": " "}


def test_set_print_options():
    set_print_options(sep=",")
    assert get_print_options()["sep"] == ","
    set_print_options()
    assert get_print_options()["sep"] == ","


def test_setters_leave_environment_alone(monkeypatch):
    monkeypatch.delenv("LLSPARSE_PRINT_SEP", raising=False)
    monkeypatch.delenv("LLSPARSE_DEBUG_CHECKS", raising=False)
    set_print_options(sep=",")
    set_print_options(sep=" ")
    set_debug_checks(True)
    assert "LLSPARSE_PRINT_SEP" not in os.environ
    assert "LLSPARSE_DEBUG_CHECKS" not in os.environ


def test_print_options_env_seeds_default(monkeypatch):
    monkeypatch.setenv("LLSPARSE_PRINT_SEP", "|")
    _runtime._reset_from_env()
    assert get_print_options()["sep"] == "|"
    set_print_options(sep=",")
    assert get_print_options()["sep"] == ","


def test_debug_checks_toggle():
    set_debug_checks(True)
    assert get_debug_checks() is True
    set_debug_checks(False)
    assert get_debug_checks() is False


def test_debug_checks_env(monkeypatch):
    monkeypatch.setenv("LLSPARSE_DEBUG_CHECKS", "yes")
    _runtime._reset_from_env()
    assert get_debug_checks() is True
    monkeypatch.setenv("LLSPARSE_DEBUG_CHECKS", "off")
    _runtime._reset_from_env()
    assert get_debug_checks() is False
