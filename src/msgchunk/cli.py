"""CLI interface for msgchunk.

Typer-based command-line interface with Rich output formatting.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from msgchunk import __version__
from msgchunk.chunk import get_chunker
from msgchunk.config import (
    CHUNK_MODES,
    CONFIG_FILE,
    MsgchunkConfig,
    default_config,
    load_config,
    save_config,
)
from msgchunk.deliver import OutboundAdapter
from msgchunk.exceptions import MsgchunkError
from msgchunk.registry import default_registry
from msgchunk.tokens import count_tokens

__all__ = ["app"]

app = typer.Typer(
    name="msgchunk",
    help="Split outbound messages into platform-sized chunks and deliver them.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()

_PREVIEW_CHARS = 60


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """msgchunk command-line interface."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(message: str) -> typer.Exit:
    console.print(message)
    return typer.Exit(code=1)


def _resolve_config(config_path: Path | None) -> MsgchunkConfig:
    """Load an explicit config, else ./msgchunk.toml, else defaults."""
    path = config_path or Path.cwd() / CONFIG_FILE
    if config_path is None and not path.exists():
        return default_config()
    try:
        return load_config(path)
    except MsgchunkError as e:
        raise _fail(f"[red]Invalid config:[/red] {escape(str(e))}") from e


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise _fail(f"[red]File not found:[/red] {escape(source)}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise _fail(f"[red]Cannot read {escape(source)}:[/red] {escape(str(e))}") from e


def _preview(chunk: str) -> Text:
    flat = chunk.replace("\n", "⏎")
    if len(flat) > _PREVIEW_CHARS:
        flat = flat[: _PREVIEW_CHARS - 1] + "…"
    return Text(flat)


@app.command()
def version() -> None:
    """Show msgchunk version."""
    console.print(f"msgchunk {__version__}")


@app.command()
def init(
    mode: Annotated[
        str,
        typer.Option("--mode", "-m", help="Chunker: plain or markdown"),
    ] = "markdown",
    limit: Annotated[
        int,
        typer.Option("--limit", "-l", help="Maximum characters per message"),
    ] = 4000,
    base_url: Annotated[
        str,
        typer.Option("--base-url", help="Messaging API base URL"),
    ] = "",
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config"),
    ] = False,
) -> None:
    """Write a msgchunk.toml in the current directory."""
    path = Path.cwd() / CONFIG_FILE
    if path.exists() and not force:
        console.print(f"[yellow]{CONFIG_FILE} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(code=0)

    if mode not in CHUNK_MODES:
        raise _fail(
            f"[red]Unknown mode:[/red] {escape(mode)} (expected one of {sorted(CHUNK_MODES)})"
        )

    config = default_config()
    config.chunk.mode = mode
    config.chunk.limit = limit
    config.delivery.base_url = base_url

    try:
        save_config(config, path)
    except MsgchunkError as e:
        raise _fail(f"[red]Failed to write config:[/red] {escape(str(e))}") from e

    console.print(f"[green]Wrote[/green] {path}")


@app.command()
def split(
    source: Annotated[str, typer.Argument(help="File to split, or - for stdin")],
    mode: Annotated[
        str | None,
        typer.Option("--mode", "-m", help="Chunker: plain or markdown"),
    ] = None,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-l", help="Maximum characters per chunk (<= 0 disables)"),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to msgchunk.toml"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print chunks as a JSON array"),
    ] = False,
    tokens: Annotated[
        bool,
        typer.Option("--tokens", help="Show a cl100k_base token count per chunk"),
    ] = False,
) -> None:
    """Split a message and show the resulting chunks."""
    config = _resolve_config(config_path)
    effective_mode = mode or config.chunk.mode
    effective_limit = config.chunk.limit if limit is None else limit

    try:
        chunker = get_chunker(effective_mode)
    except MsgchunkError as e:
        raise _fail(f"[red]{escape(str(e))}[/red]") from e

    text = _read_input(source)
    chunks = chunker.split(text, effective_limit)

    if as_json:
        typer.echo(json.dumps(chunks, ensure_ascii=False))
        return

    table = Table(show_header=True, box=None, padding=(0, 2))
    table.add_column("#", style="dim", justify="right")
    table.add_column("chars", justify="right")
    if tokens:
        table.add_column("tokens", justify="right")
    table.add_column("chunk")

    for i, chunk in enumerate(chunks, start=1):
        row: list[str | Text] = [str(i), str(len(chunk))]
        if tokens:
            row.append(str(count_tokens(chunk)))
        row.append(_preview(chunk))
        table.add_row(*row)

    console.print(table)
    console.print(
        f"\n[bold]{len(chunks)} chunk(s)[/bold] (mode={effective_mode}, limit={effective_limit})"
    )


@app.command()
def send(
    source: Annotated[str, typer.Argument(help="File to send, or - for stdin")],
    to: Annotated[str, typer.Option("--to", "-t", help="Recipient (chat, user or room id)")],
    media: Annotated[
        str,
        typer.Option("--media", help="Media URL to send after the text"),
    ] = "",
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to msgchunk.toml"),
    ] = None,
) -> None:
    """Deliver a message through the configured transport."""
    config = _resolve_config(config_path)
    text = _read_input(source)

    try:
        transport = default_registry.create(config)
        adapter = OutboundAdapter(transport=transport, config=config)
        if media:
            results = adapter.send_media(to, text=text, media_url=media)
        else:
            results = adapter.send_text(to, text)
    except MsgchunkError as e:
        raise _fail(f"[red]Delivery failed:[/red] {escape(str(e))}") from e

    for result in results:
        console.print(
            f"  [dim]{result.chunk_index + 1}.[/dim] {result.channel} "
            f"message_id={result.message_id or '-'}"
        )
    console.print(f"[green]Sent {len(results)} message(s)[/green] to {to}")
