"""Rich console setup shared by the CLI commands.

ConsoleManager hands out a Console for the duration of a command and installs
Rich tracebacks on it. Colour and terminal control codes are turned off when
MEDIAWALK_NO_RICH is set, either by the ``--no-rich`` flag or externally.
"""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from typing import Any, Dict

from rich.console import Console
from rich.traceback import install as install_rich_traceback

__all__ = [
    "ConsoleManager",
    "rich_enabled",
]

ENV_DISABLE_RICH = "MEDIAWALK_NO_RICH"


def rich_enabled() -> bool:
    """Return False when rich output has been disabled through the environment."""
    return os.getenv(ENV_DISABLE_RICH, "0").lower() not in {"1", "true", "yes"}


class ConsoleManager(AbstractContextManager):
    """Yield a Console configured for the current output mode.

    Args:
        record: Keep a copy of everything printed, for ``export_text``.
        force_use: True or False to force rich output on or off. None reads
            MEDIAWALK_NO_RICH.
        **console_kwargs: Passed through to the Console.
    """

    def __init__(
        self,
        *,
        record: bool = False,
        force_use: bool | None = None,
        **console_kwargs: Any,
    ) -> None:
        self._record = record
        self._force_use = force_use
        self._console_kwargs: Dict[str, Any] = console_kwargs
        self.console: Console | None = None

    def __enter__(self) -> Console:
        use_rich = self._force_use if self._force_use is not None else rich_enabled()

        kwargs = dict(self._console_kwargs)
        if not use_rich:
            kwargs["color_system"] = None
            kwargs.setdefault("force_terminal", False)
        self.console = Console(record=self._record, **kwargs)

        install_rich_traceback(console=self.console)
        return self.console

    def __exit__(self, exc_type, exc_val, exc_tb):  # type: ignore[override]
        if self.console is None:
            return False
        if exc_type is not None:
            self.console.print_exception()
        self.console.file.flush()
        return False
