"""Command-line interface for Larder."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import typer

from larder.config import get_settings
from larder.logging_utils import configure_logging
from larder.matching import NOTHING_RECOGNIZED_MESSAGE, scan_receipt
from larder.ocr import segment_receipt
from larder.server import run
from larder.server.deps import build_matcher

app = typer.Typer(help="Receipt segmentation and pantry matching commands.")


@app.callback()
def _setup() -> None:
    settings = get_settings()
    configure_logging(
        settings.log_level,
        settings.log_format,
        [settings.api_token or "", settings.openai_api_key or ""],
    )


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    source = Path(path)
    if not source.is_file():
        raise typer.BadParameter(f"Receipt text file not found: {path}", param_hint="PATH")
    return source.read_text(encoding="utf-8")


def _emit(payload: object, pretty: bool) -> None:
    typer.echo(json.dumps(payload, indent=2 if pretty else None, sort_keys=pretty))


@app.command()
def segment(
    path: str = typer.Argument(..., help="Receipt text file, or '-' for stdin."),
    store_hint: Optional[str] = typer.Option(None, "--store-hint", help="Store name printed on the receipt."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """
    Split OCR receipt text into candidate grocery line items.
    """
    layout, items = segment_receipt(_read_text(path), store_hint)
    _emit(
        {"layout": layout.value, "items": [item.model_dump(mode="json") for item in items]},
        pretty,
    )


@app.command()
def match(
    path: str = typer.Argument(..., help="Receipt text file, or '-' for stdin."),
    store_hint: Optional[str] = typer.Option(None, "--store-hint", help="Store name printed on the receipt."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """
    Segment receipt text and match every item against the configured pantry API.
    """
    text = _read_text(path)
    matcher = build_matcher(get_settings())
    result = asyncio.run(scan_receipt(text, matcher, store_hint))
    _emit(result.model_dump(mode="json", by_alias=True), pretty)
    if not result.items:
        typer.secho(NOTHING_RECOGNIZED_MESSAGE, fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)


@app.command()
def serve(
    host: str = typer.Option(run.DEFAULT_HOST, "--host", help="Interface to bind."),
    port: int = typer.Option(run.DEFAULT_PORT, "--port", help="Port to listen on."),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes."),
    duration: Optional[float] = typer.Option(
        None, "--duration", min=0.1, help="Stop after this many seconds."
    ),
) -> None:
    """
    Run the HTTP API under uvicorn.
    """
    run.serve(host, port, reload=reload, duration=duration)


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the ``larder`` script."""
    app(prog_name="larder", args=argv)


if __name__ == "__main__":
    main()
