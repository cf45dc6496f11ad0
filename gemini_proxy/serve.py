"""The ``serve`` command: run the proxy's HTTP server."""

from __future__ import annotations

import typer

from gemini_proxy import config, opts
from gemini_proxy.cli import app
from gemini_proxy.core.utils import (
    console,
    print_command_line_args,
    print_error_message,
    setup_rich_logging,
)


@app.command("serve")
def serve(
    host: str = opts.SERVER_HOST,
    port: int = opts.SERVER_PORT,
    gemini_api_key: str | None = opts.GEMINI_API_KEY,
    gemini_model: str = opts.GEMINI_MODEL,
    request_timeout: float = opts.REQUEST_TIMEOUT,
    log_level: str = opts.LOG_LEVEL,
    log_file: str | None = opts.LOG_FILE,
    config_file: str | None = opts.CONFIG_FILE,  # noqa: ARG001
    print_args: bool = opts.PRINT_ARGS,
) -> None:
    """Start the Gemini proxy server.

    Serves category identification, YouTube lecture analysis and
    conversational flashcard generation over HTTP, backed by Gemini.
    """
    if print_args:
        print_command_line_args(locals())

    try:
        general_cfg = config.General(log_level=log_level, log_file=log_file)
        server_cfg = config.ServerConfig(host=host, port=port)
        gemini_cfg = config.GeminiConfig(
            api_key=gemini_api_key,
            model=gemini_model,
            request_timeout=request_timeout,
        )
    except ValueError as exc:
        print_error_message("Invalid configuration.", str(exc))
        raise typer.Exit(1) from exc

    setup_rich_logging(general_cfg.log_level, general_cfg.log_file, console=console)

    try:
        import uvicorn  # noqa: PLC0415

        from gemini_proxy.api import create_app  # noqa: PLC0415
        from gemini_proxy.services.factory import get_generative_service  # noqa: PLC0415
    except ImportError as exc:
        print_error_message(
            "Server dependencies are not installed.",
            "Reinstall with `pip install gemini-proxy`.",
        )
        raise typer.Exit(1) from exc

    service = get_generative_service(gemini_cfg)
    fastapi_app = create_app(service)

    console.print(
        f"[bold green]Starting Gemini proxy on {server_cfg.host}:{server_cfg.port}[/bold green]",
    )
    console.print(f"  🤖 Model: [blue]{gemini_cfg.model}[/blue]")
    console.print(f"  ⏱️ Timeout: [blue]{gemini_cfg.request_timeout:g}s[/blue] per Gemini call")
    console.print(f"  📚 Docs: [blue]http://{server_cfg.host}:{server_cfg.port}/docs[/blue]")

    uvicorn.run(fastapi_app, host=server_cfg.host, port=server_cfg.port, log_config=None)
