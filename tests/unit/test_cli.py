"""Tests for the command-line interface."""

from unittest.mock import patch

from click.testing import CliRunner

from authbase import __version__
from authbase.cli import cli
from authbase.core.config import Settings


def _settings(**overrides):
    values = {"jwt_secret": "cli-secret", "session_store": "memory"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def _value(output, label):
    for line in output.splitlines():
        if line.strip().startswith(f"{label}:"):
            return line.split(":", 1)[1].strip()
    return None


def test_version():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_info_hides_secret():
    with patch("authbase.cli.get_settings", return_value=_settings()):
        result = CliRunner().invoke(cli, ["info"])

    assert result.exit_code == 0
    assert _value(result.output, "JWT secret") == "set"
    assert "cli-secret" not in result.output
    assert _value(result.output, "Backend") == "memory"


def test_info_reports_missing_secret():
    with patch("authbase.cli.get_settings", return_value=_settings(jwt_secret=None)):
        result = CliRunner().invoke(cli, ["info"])

    assert _value(result.output, "JWT secret") == "NOT SET"


def test_init_db_refused_in_production():
    with patch("authbase.cli.get_settings", return_value=_settings(environment="production")):
        result = CliRunner().invoke(cli, ["init-db"])

    assert result.exit_code == 1


def test_init_db_creates_tables(tmp_path):
    db_file = tmp_path / "cli.db"
    settings = _settings(database_url=f"sqlite+aiosqlite:///{db_file}", log_format="console")

    with patch("authbase.cli.get_settings", return_value=settings):
        result = CliRunner().invoke(cli, ["init-db", "--force"])

    assert result.exit_code == 0, result.output
    assert "Database initialized successfully." in result.output
    assert db_file.exists()


def test_serve_passes_overrides():
    with patch("authbase.cli.get_settings", return_value=_settings(environment="production")):
        with patch("uvicorn.run") as run:
            result = CliRunner().invoke(cli, ["serve", "--port", "9000", "--workers", "3"])

    assert result.exit_code == 0, result.output
    args, kwargs = run.call_args
    assert args[0] == "authbase.infrastructure.api.app:app"
    assert kwargs["port"] == 9000
    assert kwargs["workers"] == 3
    assert kwargs["reload"] is False
