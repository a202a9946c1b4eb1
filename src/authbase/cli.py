"""authbase command line: run the API server and manage its database."""

import asyncio

import click

from authbase import __version__
from authbase.core.config import Settings, get_settings
from authbase.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="authbase")
def cli() -> None:
    """authbase - sign-up, sign-in, sign-out and token refresh over HTTP.

    Configuration is read from AUTHBASE_* environment variables and .env.
    """


@cli.command()
@click.option("--host", default=None, help="Bind address. Default: AUTHBASE_HOST")
@click.option("--port", type=int, default=None, help="Bind port. Default: AUTHBASE_PORT")
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Worker processes, ignored with --reload. Default: AUTHBASE_WORKERS",
)
@click.option(
    "--reload/--no-reload",
    default=None,
    help="Restart on code changes. Default: on in development only",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool | None) -> None:
    """Run the HTTP API under uvicorn."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings)

    if reload is None:
        reload = settings.is_development
    options = {
        "host": host or settings.host,
        "port": port or settings.port,
        "workers": 1 if reload else (workers or settings.workers),
        "reload": reload,
    }

    get_logger(__name__).info("Starting authbase server", environment=settings.environment, **options)
    uvicorn.run(
        "authbase.infrastructure.api.app:app",
        log_level=settings.log_level.lower(),
        access_log=True,
        **options,
    )


@cli.command("init-db")
@click.option("--force", is_flag=True, help="Do not ask for confirmation")
def init_db(force: bool) -> None:
    """Create the users table directly from the models.

    Meant for development; deployed databases are managed with alembic.
    """
    from authbase.infrastructure.persistence.database import DatabaseManager

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo("Refusing to run init-db in production; run `alembic upgrade head`.", err=True)
        raise SystemExit(1)
    if not force:
        click.confirm(f"Create tables in {settings.database_url}?", abort=True)

    async def create() -> None:
        db = DatabaseManager(settings)
        db.connect()
        try:
            await db.create_tables()
        finally:
            await db.disconnect()

    asyncio.run(create())
    click.echo("Database initialized successfully.")


def _describe(settings: Settings) -> list[tuple[str, list[tuple[str, object]]]]:
    return [
        (
            "Application",
            [
                ("Environment", settings.environment),
                ("Debug", settings.debug),
                ("API prefix", settings.api_prefix),
            ],
        ),
        (
            "Server",
            [("Host", settings.host), ("Port", settings.port), ("Workers", settings.workers)],
        ),
        ("Database", [("URL", settings.database_url), ("Echo", settings.db_echo)]),
        (
            "Sessions",
            [("Backend", settings.session_store), ("Redis URL", settings.redis_url)],
        ),
        (
            "Tokens",
            [
                ("JWT secret", "set" if settings.jwt_secret else "NOT SET"),
                ("Algorithm", settings.jwt_algorithm),
                ("Access TTL", f"{settings.access_token_expire_minutes} minutes"),
                ("Refresh TTL", f"{settings.refresh_token_expire_days} days"),
                ("bcrypt rounds", settings.password_hash_rounds),
            ],
        ),
        ("Logging", [("Level", settings.log_level), ("Format", settings.log_format)]),
    ]


@cli.command()
def info() -> None:
    """Print the effective configuration. The JWT secret is never shown."""
    settings = get_settings()

    click.secho(f"authbase v{settings.app_version}", bold=True)
    for section, rows in _describe(settings):
        click.echo(f"\n{section}:")
        for label, value in rows:
            click.echo(f"  {label + ':':<15}{value}")


def main() -> None:
    """Entry point for the ``authbase`` script and ``python -m authbase``."""
    cli()


if __name__ == "__main__":
    main()
