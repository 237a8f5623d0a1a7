"""Main CLI entry point for logpush-transcoder.

This module provides a command-line interface using Typer around the
transcoder core:
1.  Loading configuration (environment / `.env`, overridden by CLI flags).
2.  Reading newline-delimited, already decompressed Logpush records.
3.  Transcoding each record into a NormalizedMessage.
4.  Writing one GELF JSON payload per line to stdout.

Records that fail to transcode are logged with their line number and skipped;
`--fail-fast` stops at the first failure instead.
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Iterator, Optional, TextIO, Tuple

import typer

from .config import get_settings
from .errors import TranscodeError
from .transcoder import transcode

app = typer.Typer(help="Cloudflare Logpush record transcoder CLI")
logger = logging.getLogger(__name__)


def _iter_lines(stream: TextIO) -> Iterator[Tuple[int, str]]:
    """Yield `(line_no, text)` for every non-blank line (1-based numbering)."""
    for line_no, line in enumerate(stream, start=1):
        text = line.strip()
        if text:
            yield line_no, text


@app.callback()
def main() -> None:  # pragma: no cover - simple callback
    """logpush-transcoder CLI.

    Use a subcommand like 'transcode' to run a process.
    """
    pass


@app.command("transcode", help="Transcode newline-delimited Logpush records to GELF JSON lines.")
def transcode_file(
    path: Optional[Path] = typer.Argument(
        None,
        exists=True,
        dir_okay=False,
        allow_dash=True,
        help="File with one JSON record per line ('-' or omitted reads stdin)",
    ),
    summary_fields: Optional[str] = typer.Option(
        None, help="Comma-separated summary fields (overrides LOGPUSH_MESSAGE_SUMMARY_FIELDS)"
    ),
    message_fields: Optional[str] = typer.Option(
        None, help="Comma-separated fields to include (overrides LOGPUSH_MESSAGE_FIELDS)"
    ),
    use_now_timestamp: Optional[bool] = typer.Option(
        None,
        "--use-now-timestamp/--no-use-now-timestamp",
        help="Stamp messages with the current time. If not specified, uses LOGPUSH_USE_NOW_TIMESTAMP.",
    ),
    host: Optional[str] = typer.Option(
        None, help="Destination host attached to messages (overrides DESTINATION_HOST)"
    ),
    fail_fast: bool = typer.Option(
        False,
        "--fail-fast/--no-fail-fast",
        help="Stop at the first record that fails to transcode.",
    ),
) -> None:
    """Transcode every record in PATH and print GELF payloads to stdout."""
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)
    config = settings.to_transcoder_config(
        message_summary_fields=summary_fields,
        message_fields=message_fields,
        use_now_timestamp=use_now_timestamp,
        destination_host=host,
    )

    processed = 0
    failed = 0
    stream = sys.stdin if path is None or str(path) == "-" else open(path, "r", encoding="utf-8")
    try:
        for line_no, text in _iter_lines(stream):
            try:
                message = transcode(text, config)
            except TranscodeError as e:
                failed += 1
                logger.warning(
                    "Record at line %d failed: code=%s field=%s err=%s",
                    line_no,
                    e.code,
                    e.field,
                    e.message,
                )
                if fail_fast:
                    break
                continue
            typer.echo(json.dumps(message.to_gelf(), ensure_ascii=False))
            processed += 1
    finally:
        if stream is not sys.stdin:
            stream.close()

    typer.echo(f"Processed {processed} record(s), failed {failed}.", err=True)
    if failed:
        raise typer.Exit(code=1)


@app.command(help="Print the resolved transcoder configuration as JSON.")
def show_config() -> None:
    settings = get_settings()
    typer.echo(settings.to_transcoder_config().model_dump_json(indent=2))


if __name__ == "__main__":  # pragma: no cover
    app()
