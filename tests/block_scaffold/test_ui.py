"""Tests for the progress reporters."""

from __future__ import annotations

from io import StringIO

from rich.console import Console

from block_scaffold.cli.ui import NullReporter, SpinnerReporter


def _console() -> tuple[Console, StringIO]:
    buffer = StringIO()
    return Console(file=buffer, force_terminal=False, width=120), buffer


def test_spinner_reporter_prints_success_line():
    console, buffer = _console()
    reporter = SpinnerReporter(console)

    reporter.start("🚒  Git fetch")
    reporter.succeed()

    assert "✔ 🚒  Git fetch" in buffer.getvalue()


def test_spinner_reporter_prints_failure_line():
    console, buffer = _console()
    reporter = SpinnerReporter(console)

    reporter.start("🚀  Git pull")
    reporter.fail()

    assert "✖ 🚀  Git pull" in buffer.getvalue()


def test_finishing_without_start_is_silent():
    console, buffer = _console()
    reporter = SpinnerReporter(console)

    reporter.succeed()
    reporter.fail()

    assert buffer.getvalue() == ""


def test_null_reporter_accepts_all_calls():
    reporter = NullReporter()
    reporter.start("anything")
    reporter.succeed()
    reporter.fail()
