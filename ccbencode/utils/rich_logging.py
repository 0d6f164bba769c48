"""Rich logging integration for ccbencode.

Provides a Rich console handler that stamps correlation IDs on records and
a file formatter that strips Rich markup.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any

from rich.console import Console
from rich.errors import StyleSyntaxError
from rich.logging import RichHandler
from rich.style import Style

_MARKUP_PATTERN = re.compile(r"\[(/?)([^\[\]]*)\]")


class CorrelationRichHandler(RichHandler):
    """RichHandler with correlation ID support."""

    def __init__(
        self,
        *args: Any,
        console: Console | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize handler, defaulting to a stdout console.

        Args:
            *args: Positional arguments for RichHandler
            console: Optional Rich Console instance
            **kwargs: Keyword arguments for RichHandler

        """
        if console is None:
            console = Console(file=sys.stdout)
        super().__init__(*args, console=console, **kwargs)

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record tagged with the current correlation ID."""
        if not hasattr(record, "correlation_id"):
            from ccbencode.utils.logging_config import correlation_id

            record.correlation_id = correlation_id.get() or "no-correlation-id"
        super().emit(record)


def create_rich_handler(
    console: Console | None = None,
    level: int | str = logging.INFO,
    show_path: bool = False,
    rich_tracebacks: bool = True,
) -> logging.Handler:
    """Create a RichHandler with correlation ID support.

    Args:
        console: Optional Rich Console instance
        level: Log level
        show_path: Whether to show file paths in log output
        rich_tracebacks: Whether to use rich tracebacks

    Returns:
        Configured RichHandler instance

    """
    handler = CorrelationRichHandler(
        console=console,
        show_path=show_path,
        rich_tracebacks=rich_tracebacks,
        markup=False,
    )
    handler.setLevel(level)
    return handler


def _strip_style_tag(match: re.Match[str]) -> str:
    closing, tag = match.groups()
    if not tag:
        return "" if closing else match.group(0)
    try:
        Style.parse(tag)
    except StyleSyntaxError:
        return match.group(0)
    return ""


def strip_rich_markup(text: str) -> str:
    """Strip Rich markup tags like ``[red]`` or ``[/bold]`` from text.

    Bracketed text that is not a valid Rich style, such as the repr of a
    byte string or a list, is left in place.
    """
    return _MARKUP_PATTERN.sub(_strip_style_tag, text)


class FileFormatter(logging.Formatter):
    """Formatter for file output that strips Rich markup."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record, stripping Rich markup for file output."""
        return strip_rich_markup(super().format(record))
