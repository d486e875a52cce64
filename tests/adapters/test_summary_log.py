from __future__ import annotations

import io
from typing import TYPE_CHECKING

import pytest

from schemagen.adapters.summary_log import SummaryLog, open_summary_log, strip_ansi

if TYPE_CHECKING:
    from pathlib import Path


def test_writes_console_verbatim_and_file_without_ansi(tmp_path: Path) -> None:
    console = io.StringIO()
    path = tmp_path / "logs" / "summary.log"

    with open_summary_log(path, console=console) as summary:
        summary.write("\x1b[31mFailed\x1b[0m block")
        summary.write("second")

    assert console.getvalue() == "\x1b[31mFailed\x1b[0m block\nsecond\n"
    assert path.read_text(encoding="utf-8") == "Failed block\nsecond\n"


def test_appends_to_existing_log(tmp_path: Path) -> None:
    path = tmp_path / "summary.log"
    path.write_text("previous run\n", encoding="utf-8")

    with open_summary_log(path, console=io.StringIO()) as summary:
        summary.write("this run")

    assert path.read_text(encoding="utf-8") == "previous run\nthis run\n"


def test_log_is_flushed_and_closed_when_body_raises(tmp_path: Path) -> None:
    path = tmp_path / "summary.log"
    opened: list[SummaryLog] = []

    with pytest.raises(RuntimeError), open_summary_log(path, console=io.StringIO()) as summary:
        opened.append(summary)
        summary.write("before failure")
        raise RuntimeError("abort")

    assert opened[0].closed
    assert path.read_text(encoding="utf-8") == "before failure\n"


def test_write_after_close_raises(tmp_path: Path) -> None:
    summary = SummaryLog(tmp_path / "summary.log", console=io.StringIO())
    summary.close()

    with pytest.raises(ValueError, match="closed"):
        summary.write("late")


def test_strip_ansi() -> None:
    assert strip_ansi("\x1b[1;35m42\x1b[22;39m ms") == "42 ms"
