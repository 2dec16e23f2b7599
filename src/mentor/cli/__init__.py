"""CLI commands for Mentor Connect.

Provides command-line interface using Typer:
- mentor serve: Run the API server
- mentor init-db: Create database tables

Usage:
    mentor --help
    mentor serve --port 8080
    mentor init-db
"""

import asyncio

import typer

from mentor.cli.serve import app as serve_app

# Main CLI application
app = typer.Typer(
    name="mentor",
    help="Mentor Connect: mentoring threads and student profiles",
    no_args_is_help=True,
)

app.add_typer(serve_app, name="serve")


@app.callback()
def callback() -> None:
    """Mentor Connect: mentoring threads and student profiles."""
    pass


@app.command("init-db")
def init_db_command() -> None:
    """Create database tables if they do not exist."""
    from mentor.persistence.db import close_db, init_db

    async def _run() -> None:
        try:
            await init_db()
        finally:
            await close_db()

    asyncio.run(_run())
    typer.echo("Database tables created")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
