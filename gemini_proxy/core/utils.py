"""Console and logging helpers shared by the CLI and the server."""

from __future__ import annotations

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

console = Console()
err_console = Console(stderr=True)

# Libraries that log every HTTP round trip at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "google_genai", "google_genai.models")


def print_error_message(message: str, suggestion: str | None = None) -> None:
    """Print an error message in a red panel."""
    body = f"[bold red]{message}[/bold red]"
    if suggestion:
        body += f"\n\n💡 {suggestion}"
    err_console.print(Panel(body, title="Error", border_style="red"))


def print_command_line_args(args: dict[str, Any]) -> None:
    """Print the command line arguments, hiding secrets."""
    lines = []
    for key, value in sorted(args.items()):
        shown = "***" if "api_key" in key and value else value
        lines.append(f"[bold]{key}[/bold]: {shown}")
    console.print(Panel("\n".join(lines), title="Command Line Arguments", border_style="blue"))


def setup_rich_logging(
    log_level: str = "info",
    log_file: str | None = None,
    *,
    console: Console | None = None,
) -> None:
    """Configure logging to use Rich for consistent, pretty output.

    This configures:
    - The root logger with a RichHandler (plus a plain file handler if requested)
    - Uvicorn's loggers to use the same handlers
    - HTTP client loggers, which are quieted to WARNING

    Args:
        log_level: Logging level (debug, info, warning, error).
        log_file: Optional path of a file that receives a copy of all records.
        console: Optional Rich console to use (the shared one by default).

    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    handler = RichHandler(
        console=console or Console(),
        show_time=True,
        show_level=True,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    handlers: list[logging.Handler] = [handler]
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"),
        )
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)

    for uvicorn_logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        uvicorn_logger = logging.getLogger(uvicorn_logger_name)
        uvicorn_logger.handlers.clear()
        for h in handlers:
            uvicorn_logger.addHandler(h)
        uvicorn_logger.setLevel(level)
        uvicorn_logger.propagate = False

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
