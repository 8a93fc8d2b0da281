"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- print_mapping and print_table in all three modes
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from adcred import output as output_module
from adcred.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("adcred.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("adcred.output._is_tty", lambda: True)


# ------------------------------------------------------------------ #
# OutputFormat resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.RICH

    def test_no_color_flag_forces_plain(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        mgr = OutputManager(format=OutputFormat.AUTO, no_color=True)
        assert mgr.format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env_any_value(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# stdout vs stderr discipline
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:
    def test_print_data_goes_to_stdout(self, capsys, non_tty):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).print_data("hello")
        captured = capsys.readouterr()
        assert captured.out == "hello\n"
        assert captured.err == ""

    @pytest.mark.parametrize(
        ("method", "expected"),
        [
            ("success", "some text"),
            ("warning", "Warning: some text"),
            ("error", "Error: some text"),
            ("suggest", "→ some text"),
        ],
    )
    def test_diagnostics_go_to_stderr(self, capsys, non_tty, method, expected):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        getattr(mgr, method)("some text")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert expected in captured.err


class TestQuietAndVerbose:
    def test_quiet_suppresses_success_and_suggest(self, capsys, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.success("success")
        mgr.suggest("suggest")
        assert capsys.readouterr().err == ""

    def test_quiet_keeps_warnings_and_errors(self, capsys, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.warning("careful")
        mgr.error("broken")
        err = capsys.readouterr().err
        assert "careful" in err
        assert "broken" in err

    def test_debug_only_when_verbose(self, capsys, non_tty):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).debug("hidden")
        assert capsys.readouterr().err == ""
        OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True).debug("shown")
        assert "[debug] shown" in capsys.readouterr().err


# ------------------------------------------------------------------ #
# Mappings and tables
# ------------------------------------------------------------------ #


class TestPrintMapping:
    def test_json(self, capsys, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True)
        mgr.print_mapping({"kind": "compute_engine", "service_account_email": "default"})
        assert json.loads(capsys.readouterr().out) == {
            "kind": "compute_engine",
            "service_account_email": "default",
        }

    def test_plain(self, capsys, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_mapping({"kind": "anonymous", "extra": 1})
        assert capsys.readouterr().out == "kind\tanonymous\nextra\t1\n"

    def test_rich(self, capsys, non_tty):
        mgr = OutputManager(format=OutputFormat.RICH, no_color=True)
        mgr.print_mapping({"kind": "authorized_user"}, title="Credentials")
        out = capsys.readouterr().out
        assert "Credentials" in out
        assert "authorized_user" in out


class TestPrintTable:
    def test_json(self, capsys, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True)
        mgr.print_table(["input", "value"], [["HOME", "'/root'"]])
        assert json.loads(capsys.readouterr().out) == [{"input": "HOME", "value": "'/root'"}]

    def test_plain(self, capsys, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_table(["input", "value"], [["HOME", "(unset)"]])
        assert capsys.readouterr().out == "input\tvalue\nHOME\t(unset)\n"

    def test_rich(self, capsys, non_tty):
        mgr = OutputManager(format=OutputFormat.RICH, no_color=True)
        mgr.print_table(["input", "value"], [["HOME", "(unset)"]], title="Inputs")
        out = capsys.readouterr().out
        assert "input" in out
        assert "unset" in out


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_creates_lazily(self):
        reset_output()
        assert output_module._output is None
        mgr = get_output()
        assert get_output() is mgr

    def test_set_output(self, capsys, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        output_module.print_mapping({"a": "b"})
        output_module.error("oops")
        captured = capsys.readouterr()
        assert captured.out == "a\tb\n"
        assert captured.err == "Error: oops\n"

    def test_module_debug_follows_verbose(self, capsys, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        output_module.debug("hidden")
        assert capsys.readouterr().err == ""
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True))
        output_module.debug("adcred.resolver: step [1]")
        assert capsys.readouterr().err == "[debug] adcred.resolver: step [1]\n"
