from __future__ import annotations

import threading
from typing import Callable, List, Optional


class ProgressLog:
    """
    Line-oriented progress log shared by the scan workers.

    Appends and the optional echo run under one lock, so lines from
    different mods may interleave but are never torn.
    """

    def __init__(self, echo: Optional[Callable[[str], None]] = None):
        self._lines: List[str] = []
        self._lock = threading.Lock()
        self._echo = echo

    def log(self, msg: str) -> None:
        with self._lock:
            self._lines.append(msg)
            if self._echo:
                self._echo(msg)

    def lines(self) -> List[str]:
        with self._lock:
            return list(self._lines)

    def text(self) -> str:
        lines = self.lines()
        return "\n".join(lines) + ("\n" if lines else "")
