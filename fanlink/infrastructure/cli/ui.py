"""UI helpers for CLI interaction.

Keeps the Rich presentation separate from the use cases the commands drive.
"""

from collections.abc import Callable
import functools
import json
from typing import Any, ParamSpec, TypeVar

from rich.console import Console
from rich.table import Table
import typer

from fanlink.config import get_logger
from fanlink.domain.errors import TrackNotFoundError, ValidationError

console = Console()
logger = get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def command_error_handler(func: Callable[P, R]) -> Callable[P, R]:
    """Decorator to standardize error handling for CLI commands.

    Expected failures (bad input, nothing found) print a short message;
    anything else is logged with its traceback. Both exit with code 1.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        operation = func.__name__.replace("_", " ")

        with logger.contextualize(operation=operation):
            try:
                logger.debug(f"Executing {operation}")
                return func(*args, **kwargs)

            except typer.Exit:
                raise

            except typer.Abort:
                logger.info(f"Operation {operation} aborted by user")
                raise

            except ValidationError as e:
                console.print(f"[bold red]✗ {e.message}[/bold red]")
                raise typer.Exit(code=1) from e

            except TrackNotFoundError as e:
                console.print(f"[bold yellow]✗ {e.message}[/bold yellow]")
                for suggestion in e.suggestions:
                    console.print(f"  • {suggestion}")
                raise typer.Exit(code=1) from e

            except Exception as e:
                logger.exception(f"Error during {operation}")
                console.print(f"\n[bold red]✗ Error during {operation}:[/bold red] {e}")
                raise typer.Exit(code=1) from e

    return wrapper


def print_json(payload: dict[str, Any]) -> None:
    console.print_json(json.dumps(payload))


def _field_table(title: str, rows: list[tuple[str, Any]]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white", overflow="fold")
    for name, value in rows:
        table.add_row(name, "" if value is None else str(value))
    return table


def _links_table(title: str, links: dict[str, str]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Platform", style="cyan")
    table.add_column("URL", style="blue", overflow="fold")
    for platform, url in links.items():
        table.add_row(platform, url)
    return table


def display_smart_link(payload: dict[str, Any]) -> None:
    """Render a generate-link response."""
    metadata = payload["metadata"]
    console.print(
        _field_table(
            f"{metadata['artist']} - {metadata['title']}",
            [
                ("Album", metadata.get("album")),
                ("ISRC", metadata.get("isrc")),
                ("UPC", metadata.get("upc")),
                ("Release date", metadata.get("release_date")),
                ("Artwork", (metadata.get("artwork") or {}).get("large")),
            ],
        )
    )
    console.print(_links_table("Streaming links", payload["streaming_links"]))

    score = payload["accuracy_score"]
    style = "green" if score >= 90 else "yellow" if score >= 50 else "red"
    console.print(f"\nAccuracy: [bold {style}]{score}[/bold {style}]/100")


def display_metadata(payload: dict[str, Any]) -> None:
    """Render a fetch-music-metadata response."""
    metadata = payload["metadata"]
    console.print(
        _field_table(
            f"{metadata['artist']} - {metadata['title']}",
            [
                ("Album", metadata.get("album")),
                ("Release type", metadata.get("release_type")),
                ("Release date", metadata.get("release_date")),
                ("ISRC", metadata.get("isrc")),
                ("UPC", metadata.get("upc")),
                ("Artwork", metadata.get("artwork_url")),
            ],
        )
    )
    console.print(_links_table("Platforms", metadata["platforms"]))


def display_presave_links(payload: dict[str, Any]) -> None:
    """Render a generate-presave-links response."""
    state = "released" if payload["isReleased"] else "upcoming"
    table = Table(
        title=f"{payload['artist']} - {payload['title']} ({state})",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Platform", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Message")
    table.add_column("URL", style="blue", overflow="fold")
    for link in payload["platforms"]:
        table.add_row(
            link["platformDisplayName"], link["type"], link["message"], link["url"] or ""
        )
    console.print(table)


def display_auto_resolve_report(payload: dict[str, Any]) -> None:
    """Render an auto-resolve batch report."""
    if payload.get("message"):
        console.print(f"[dim]{payload['message']}[/dim]")
        return

    table = Table(title="Auto-resolve results", show_header=True, header_style="bold cyan")
    table.add_column("Pre-save", justify="right")
    table.add_column("Status")
    table.add_column("Details", overflow="fold")
    styles = {"resolved": "green", "not_found": "yellow", "error": "red"}
    for result in payload["results"]:
        status = result["status"]
        table.add_row(
            str(result["id"]),
            f"[{styles.get(status, 'white')}]{status}[/]",
            result.get("details") or "",
        )
    console.print(table)
    console.print(
        f"\nResolved [bold]{payload['resolved']}[/bold] of {payload['checked']} checked"
    )
