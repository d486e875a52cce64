"""Append-only run summary written to the console and to a markdown log file."""

from __future__ import annotations

import re
import sys
from contextlib import contextmanager
from typing import TYPE_CHECKING, Final, TextIO

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path
    from types import TracebackType

_ANSI_ESCAPE: Final[re.Pattern[str]] = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE.sub("", text)


class SummaryLog:
    """Write summary blocks to ``console`` verbatim and to ``path`` without ANSI styling."""

    def __init__(self, path: Path, *, console: TextIO | None = None) -> None:
        self.path = path
        self._console = console if console is not None else sys.stdout
        path.parent.mkdir(parents=True, exist_ok=True)
        self._handle: TextIO | None = path.open("a", encoding="utf-8")

    def write(self, block: str) -> None:
        if self._handle is None:
            raise ValueError(f"Summary log {self.path} is closed")
        data = f"{block}\n"
        self._console.write(data)
        self._handle.write(strip_ansi(data))

    def close(self) -> None:
        if self._handle is None:
            return
        self._handle.flush()
        self._handle.close()
        self._handle = None

    @property
    def closed(self) -> bool:
        return self._handle is None

    def __enter__(self) -> SummaryLog:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


@contextmanager
def open_summary_log(path: Path, *, console: TextIO | None = None) -> Iterator[SummaryLog]:
    """Open the summary log at ``path``; it is flushed and closed on every exit path."""

    summary = SummaryLog(path, console=console)
    try:
        yield summary
    finally:
        summary.close()
