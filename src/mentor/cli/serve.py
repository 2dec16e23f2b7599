"""``mentor serve``: run the API under uvicorn.

    mentor serve
    mentor serve --port 8080 --reload
"""

from __future__ import annotations

import typer

from mentor.config import settings

app = typer.Typer(help="Run the Mentor Connect API server")


@app.callback(invoke_without_command=True)
def serve(
    host: str = typer.Option(settings.host, "--host", "-h", help="Bind address"),
    port: int = typer.Option(settings.port, "--port", "-p", help="Listen port"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Restart on code changes"),
    workers: int = typer.Option(1, "--workers", "-w", help="Worker processes"),
    log_level: str = typer.Option(settings.log_level, "--log-level", "-l", help="Uvicorn log level"),
) -> None:
    """Start the HTTP server."""
    import uvicorn

    if reload and workers > 1:
        typer.echo("--reload runs a single worker; ignoring --workers", err=True)
        workers = 1

    typer.echo(
        f"Mentor Connect on http://{host}:{port} "
        f"(workers={workers}, cache={settings.cache_backend})"
    )
    uvicorn.run(
        "mentor.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level.lower(),
    )
