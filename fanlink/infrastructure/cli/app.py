"""Fanlink CLI - Main application entry point and commands."""

import asyncio
from typing import Annotated

import typer

from fanlink import __version__
from fanlink.application.use_cases import (
    FetchMetadataCommand,
    GenerateLinkCommand,
    GeneratePreSaveLinksCommand,
)
from fanlink.config import get_config, get_logger, settings, setup_loguru_logger
from fanlink.infrastructure.cli.ui import (
    command_error_handler,
    console,
    display_auto_resolve_report,
    display_metadata,
    display_presave_links,
    display_smart_link,
    print_json,
)
from fanlink.infrastructure.container import ServiceContainer
from fanlink.infrastructure.persistence.database import init_db
from fanlink.infrastructure.services.providers import get_available_providers

logger = get_logger(__name__)

app = typer.Typer(
    help=f"🎵 Fanlink v{__version__} - Smart links and pre-saves from any track identifier",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
)

OutputFormat = Annotated[
    str, typer.Option("--format", "-f", help="Output format (table, json)")
]


def get_container() -> ServiceContainer:
    return ServiceContainer.from_settings()


@app.command(name="resolve", rich_help_panel="🔗 Links")
@command_error_handler
def resolve(
    raw_input: Annotated[
        str, typer.Argument(help="UPC, ISRC, platform URL or 'Artist - Title'")
    ],
    output_format: OutputFormat = "table",
) -> None:
    """Generate a smart link with streaming URLs and an accuracy score."""
    use_case = get_container().generate_link()
    result = asyncio.run(use_case.execute(GenerateLinkCommand(input=raw_input)))
    payload = result.as_dict()
    if output_format == "json":
        print_json(payload)
    else:
        display_smart_link(payload)


@app.command(name="metadata", rich_help_panel="🔗 Links")
@command_error_handler
def metadata(
    raw_input: Annotated[
        str, typer.Argument(help="UPC, ISRC, platform URL or 'Artist - Title'")
    ],
    type_hint: Annotated[
        str | None,
        typer.Option("--type", "-t", help="Input kind (upc, isrc, url, query)"),
    ] = None,
    output_format: OutputFormat = "table",
) -> None:
    """Look up release metadata and per-platform URLs."""
    use_case = get_container().fetch_metadata()
    command = FetchMetadataCommand(input=raw_input, type_hint=type_hint)
    payload = asyncio.run(use_case.execute(command)).as_dict()
    if output_format == "json":
        print_json(payload)
    else:
        display_metadata(payload)


@app.command(name="presave-links", rich_help_panel="📅 Pre-saves")
@command_error_handler
def presave_links(
    upc: Annotated[str, typer.Option("--upc", help="Release UPC (12-14 digits)")],
    artist: Annotated[str, typer.Option("--artist", help="Artist name")],
    title: Annotated[str, typer.Option("--title", help="Release title")],
    release_date: Annotated[
        str, typer.Option("--release-date", help="Release date (YYYY-MM-DD)")
    ],
    output_format: OutputFormat = "table",
) -> None:
    """Build the platform list for a pre-save page."""
    container = get_container()
    command = GeneratePreSaveLinksCommand(
        upc=upc,
        artist=artist,
        title=title,
        release_date=release_date,
        upc_bounds=container.presave_upc_bounds,
    )
    payload = asyncio.run(container.presave_links().execute(command)).as_dict()
    if output_format == "json":
        print_json(payload)
    else:
        display_presave_links(payload)


async def _run_auto_resolve(container: ServiceContainer) -> dict:
    async with container.auto_resolve() as use_case:
        report = await use_case.execute()
    return report.as_dict()


@app.command(name="auto-resolve", rich_help_panel="📅 Pre-saves")
@command_error_handler
def auto_resolve(output_format: OutputFormat = "table") -> None:
    """Mark due pre-saves as released once Spotify has the album."""
    with console.status("[bold blue]Checking due pre-saves..."):
        payload = asyncio.run(_run_auto_resolve(get_container()))
    if output_format == "json":
        print_json(payload)
    else:
        display_auto_resolve_report(payload)


@app.command(name="init-db", rich_help_panel="⚙️ System")
@command_error_handler
def initialize_database() -> None:
    """Initialize the database schema. Existing tables are left untouched."""
    with console.status("[bold blue]Initializing database schema..."):
        asyncio.run(init_db())
    console.print("[bold green]✓ Database schema initialized successfully[/bold green]")


@app.command(name="serve", rich_help_panel="⚙️ System")
@command_error_handler
def serve(
    host: Annotated[str, typer.Option("--host", help="Bind address")] = settings.server.host,
    port: Annotated[int, typer.Option("--port", help="Bind port")] = settings.server.port,
) -> None:
    """Run the JSON API with Flask's development server."""
    from fanlink.infrastructure.api import create_app

    console.print(f"[bold]Serving on[/bold] http://{host}:{port}")
    create_app(get_container()).run(host=host, port=port)


@app.command(name="status", rich_help_panel="⚙️ System")
def status() -> None:
    """Show which provider credentials are configured."""
    configured = bool(
        get_config("SPOTIFY_CLIENT_ID") and get_config("SPOTIFY_CLIENT_SECRET")
    )
    mark = "[green]✓ Configured[/green]" if configured else "[red]✗ Not Set[/red]"
    console.print(f"Spotify credentials: {mark}")
    console.print(f"Database: [cyan]{get_config('DATABASE_URL')}[/cyan]")
    console.print(f"Providers: [cyan]{', '.join(get_available_providers())}[/cyan]")


@app.command(name="version", rich_help_panel="⚙️ System")
def version_command() -> None:
    """Show version information."""
    console.print(
        f"[bold bright_blue]🎵 Fanlink[/bold bright_blue] [dim]v{__version__}[/dim]"
    )


@app.callback()
def init_cli(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output"),
    ] = False,
) -> None:
    """Initialize Fanlink CLI."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_loguru_logger(verbose)


def main() -> int:
    """Application entry point."""
    try:
        return app() or 0
    except Exception:
        logger.exception("Unhandled exception")
        return 1
