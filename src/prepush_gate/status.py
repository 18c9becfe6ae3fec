"""Colored banners and step progress for the terminal."""

from __future__ import annotations

import os
import sys
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Optional, TextIO

from tqdm import tqdm

COLOR_ENV = "PREPUSH_GATE_COLOR"

RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[0;33m"
RESET = "\033[0m"


def color_enabled(stream: Optional[TextIO] = None) -> bool:
    """Return whether ANSI colors should be written to ``stream``.

    ``PREPUSH_GATE_COLOR`` set to ``1``/``0`` forces the answer. Otherwise
    colors are used for terminals unless ``NO_COLOR`` is set.
    """

    forced = os.environ.get(COLOR_ENV, "").lower()
    if forced in {"1", "true", "yes"}:
        return True
    if forced in {"0", "false", "no"}:
        return False
    if os.environ.get("NO_COLOR"):
        return False
    stream = stream or sys.stdout
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def colorize(text: str, color: str, enabled: bool = True) -> str:
    if not enabled:
        return text
    return f"{color}{text}{RESET}"


@dataclass
class StatusReporter(AbstractContextManager["StatusReporter"]):
    """Log step messages while keeping a progress bar over the steps."""

    total: Optional[int] = None
    description: str = "pre-push"
    unit: str = "step"
    stream: Optional[TextIO] = None
    disable: Optional[bool] = None
    color: Optional[bool] = None

    def __post_init__(self) -> None:
        if self.stream is None:
            self.stream = sys.stdout
        self._bar = None
        if self.disable is None:
            isatty = getattr(self.stream, "isatty", None)
            self.disable = not (isatty and isatty())
        if self.color is None:
            self.color = color_enabled(self.stream)
        if self.total is not None:
            self._bar = tqdm(
                total=self.total,
                desc=self.description,
                unit=self.unit,
                dynamic_ncols=True,
                leave=False,
                file=self.stream,
                disable=self.disable,
            )

    def log(self, message: str) -> None:
        """Log ``message`` above the progress bar."""

        if self._bar is not None and not self.disable:
            tqdm.write(message, file=self.stream)
        else:
            print(message, file=self.stream, flush=True)

    def step(self, name: str) -> None:
        self.log(colorize(f"==> {name}", YELLOW, self.color))

    def success(self, message: str) -> None:
        self.log("")
        self.log(colorize(message, GREEN, self.color))

    def failure(self, message: str, detail: str) -> None:
        self.log("")
        self.log(colorize(message, RED, self.color))
        self.log(colorize(detail, RED, self.color))

    def advance(self, amount: int = 1) -> None:
        if self._bar is None:
            return
        self._bar.update(amount)

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None

    def __exit__(self, exc_type, exc, exc_tb):
        self.close()
        return False
