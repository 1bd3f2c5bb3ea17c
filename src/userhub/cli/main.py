"""userhub CLI - run the server and maintain the database."""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from userhub.config import get_settings
from userhub.log import configure_logging

app = typer.Typer(
    name="userhub",
    help="userhub - user management backend CLI",
    add_completion=False,
)

console = Console()


@app.callback(invoke_without_command=True)
def callback(ctx: typer.Context) -> None:
    """Default command - start server if no subcommand provided."""
    if ctx.invoked_subcommand is None:
        serve(host=None, port=None, reload=False)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Host to bind to (default: HOST)"),
    port: Optional[int] = typer.Option(None, help="Port to bind to (default: PORT)"),
    reload: bool = typer.Option(False, help="Enable auto-reload"),
) -> None:
    """Start the userhub API server."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    host = host or settings.HOST
    port = port or settings.PORT

    console.print(
        Panel.fit(
            f"[bold green]Starting userhub API Server[/bold green]\n"
            f"Host: {host}\n"
            f"Port: {port}\n"
            f"Store: {settings.STORE_BACKEND}\n"
            f"Reload: {reload}",
            title="userhub Server",
        )
    )

    uvicorn.run(
        "userhub.api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_config=None,
    )


async def _init_db() -> None:
    from userhub.db.database import close_db, create_tables, init_db

    await init_db(get_settings())
    try:
        await create_tables()
    finally:
        await close_db()


async def _purge_sessions() -> int:
    from userhub.db.database import close_db, init_db
    from userhub.db.repositories import SqlSessionStore

    session_factory = await init_db(get_settings())
    try:
        return await SqlSessionStore(session_factory).purge_expired()
    finally:
        await close_db()


@app.command("init-db")
def init_db_command() -> None:
    """Create the users and sessions tables."""
    configure_logging(get_settings().LOG_LEVEL)
    asyncio.run(_init_db())
    console.print("[green]Tables created[/green]")


@app.command("purge-sessions")
def purge_sessions_command() -> None:
    """Delete expired sessions from the database."""
    configure_logging(get_settings().LOG_LEVEL)
    removed = asyncio.run(_purge_sessions())
    console.print(f"[green]Removed {removed} expired session(s)[/green]")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
