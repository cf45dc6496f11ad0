"""Shared Typer options for the gemini-proxy commands."""

from __future__ import annotations

import typer

from gemini_proxy import constants

# --- Gemini Configuration ---
GEMINI_API_KEY: str | None = typer.Option(
    None,
    "--gemini-api-key",
    help="Google API key for Gemini. Read from GOOGLE_API_KEY or GEMINI_API_KEY if not given.",
    envvar=["GOOGLE_API_KEY", "GEMINI_API_KEY"],
    rich_help_panel="Gemini Configuration",
)
GEMINI_MODEL: str = typer.Option(
    constants.DEFAULT_GEMINI_MODEL,
    "--gemini-model",
    help="The Gemini model to use.",
    envvar="GEMINI_MODEL",
    rich_help_panel="Gemini Configuration",
)
REQUEST_TIMEOUT: float = typer.Option(
    constants.DEFAULT_REQUEST_TIMEOUT,
    "--request-timeout",
    help="Seconds to wait for a single Gemini call before failing it.",
    envvar="GEMINI_TIMEOUT",
    min=1.0,
    rich_help_panel="Gemini Configuration",
)

# --- Server Configuration ---
SERVER_HOST: str = typer.Option(
    constants.DEFAULT_HOST,
    "--host",
    help="Host to bind the server to.",
    envvar="HOST",
    rich_help_panel="Server Configuration",
)
SERVER_PORT: int = typer.Option(
    constants.DEFAULT_PORT,
    "--port",
    help="Port to bind the server to.",
    envvar="PORT",
    rich_help_panel="Server Configuration",
)

# --- General Options ---
LOG_LEVEL: str = typer.Option(
    "info",
    "--log-level",
    help="Set logging level.",
    envvar="LOG_LEVEL",
    case_sensitive=False,
    rich_help_panel="General Options",
)
LOG_FILE: str | None = typer.Option(
    None,
    "--log-file",
    help="Path to a file to write logs to.",
    rich_help_panel="General Options",
)


def _conf_callback(ctx: typer.Context, param: typer.CallbackParam, value: str | None) -> str | None:  # noqa: ARG001
    from gemini_proxy.cli import set_config_defaults  # noqa: PLC0415

    set_config_defaults(ctx, value)
    return value


CONFIG_FILE: str | None = typer.Option(
    None,
    "--config",
    help="Path to a TOML configuration file.",
    is_eager=True,
    callback=_conf_callback,
    rich_help_panel="General Options",
)
PRINT_ARGS: bool = typer.Option(
    False,  # noqa: FBT003
    "--print-args",
    help="Print the command line arguments, including variables taken from the configuration file.",
    is_flag=True,
    rich_help_panel="General Options",
)
