"""CLI output helpers (Rich).

Why separate components:
- Keeps commands free of colour, JSON and exit-code details.
- Every command prints results and fatal errors the same way.
"""

from __future__ import annotations

import json
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.text import Text

from core.config import AppSettings
from core.domain.errors import ReplicateError
from core.domain.models import ReplicateResetMessage

PROGRAM_NAME = "mc-replicate"

MESSAGE_STYLE = "green"
ERROR_STYLE = "bold red"


def build_console(settings: AppSettings, *, stderr: bool = False) -> Console:
    return Console(stderr=stderr, no_color=settings.no_color, highlight=False, soft_wrap=True)


def print_message(message: ReplicateResetMessage, settings: AppSettings) -> None:
    """Print a result as JSON or as one coloured line (nothing with --quiet)."""

    if settings.json_output:
        typer.echo(message.to_json())
        return
    if settings.quiet:
        return
    build_console(settings).print(Text(str(message), style=MESSAGE_STYLE))


def _error_details(error: ReplicateError | None, headline: str) -> list[str]:
    if error is None:
        return []
    details: list[str] = []
    if error.message and error.message != headline:
        details.append(error.message)
    cause = error.cause_text()
    if cause:
        details.append(cause)
    return details


def error_document(headline: str, error: ReplicateError | None) -> dict[str, Any]:
    body: dict[str, Any] = {"message": headline, "type": "fatal"}
    if error is not None:
        cause = error.to_dict()
        if error.cause_text():
            cause["error"] = error.cause_text()
        body["cause"] = cause
        body["type"] = error.kind
        if error.trace:
            body["trace"] = list(error.trace)
    return {"status": "error", "error": body}


def fatal(settings: AppSettings, error: ReplicateError | None = None, message: str | None = None) -> NoReturn:
    """Print one error (line or JSON document) on stderr and exit with code 1."""

    headline = message or (error.message if error is not None else "Unknown error")
    console = build_console(settings, stderr=True)
    if settings.json_output:
        console.out(json.dumps(error_document(headline, error), indent=1, ensure_ascii=False))
    else:
        text = headline.rstrip(".")
        for detail in _error_details(error, headline):
            text += ". " + detail.rstrip(".")
        line = Text(f"{PROGRAM_NAME}: ")
        line.append("<ERROR> ", style=ERROR_STYLE)
        line.append(text + ".", style=ERROR_STYLE)
        console.print(line)
    raise typer.Exit(code=1)
