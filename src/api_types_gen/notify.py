"""Notifier capability used by the pipeline to report progress.

The core only emits semantic events; how they are rendered is up to the
notifier passed in.
"""

from typing import Protocol

import click


class Notifier(Protocol):
    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ClickNotifier:
    """Renders events to the terminal with click."""

    STYLES = {
        "info": ("cyan", "i"),
        "success": ("green", "+"),
        "warning": ("yellow", "!"),
        "error": ("red", "x"),
    }

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def _emit(self, level: str, message: str) -> None:
        # Errors are shown even in quiet mode.
        if self.quiet and level != "error":
            return
        color, icon = self.STYLES[level]
        click.secho(f"[{icon}] {message}", fg=color, err=level == "error")

    def info(self, message: str) -> None:
        self._emit("info", message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def error(self, message: str) -> None:
        self._emit("error", message)


class NullNotifier:
    """Discards every event."""

    def info(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass
