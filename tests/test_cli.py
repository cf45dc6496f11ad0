"""Tests for the CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import patch

from typer.testing import CliRunner

from gemini_proxy.cli import app

if TYPE_CHECKING:
    import pytest

runner = CliRunner(env={"NO_COLOR": "1", "TERM": "dumb"})


def test_main_no_args() -> None:
    """Test the main function with no arguments."""
    result = runner.invoke(app)
    assert "No command specified" in result.stdout
    assert "Usage" in result.stdout


def test_serve_help() -> None:
    """Test the serve command help lists its options."""
    result = runner.invoke(app, ["serve", "--help"])
    assert result.exit_code == 0
    assert "--gemini-model" in result.stdout
    assert "--config" in result.stdout


@patch("uvicorn.run")
def test_serve_command(mock_uvicorn_run: pytest.MagicMock) -> None:
    """Test the serve command starts uvicorn with the configured address."""
    result = runner.invoke(
        app,
        ["serve", "--host", "127.0.0.1", "--port", "8080", "--gemini-api-key", "test-key"],
    )
    assert result.exit_code == 0
    assert "Starting Gemini proxy on 127.0.0.1:8080" in result.stdout
    mock_uvicorn_run.assert_called_once()
    _, kwargs = mock_uvicorn_run.call_args
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 8080
    assert kwargs["log_config"] is None


@patch("uvicorn.run")
def test_serve_invalid_log_level(mock_uvicorn_run: pytest.MagicMock) -> None:
    """Test an unknown log level is reported before the server starts."""
    result = runner.invoke(app, ["serve", "--log-level", "chatty"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
    mock_uvicorn_run.assert_not_called()
