"""`resync` / `reset` command: re-replicate previously replicated objects."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import click
import typer
from pydantic import ValidationError
from typer.core import TyperCommand

from adapters.s3_client import new_client
from cli.ui_components import fatal, print_message
from core.config import AppSettings
from core.domain.duration import parse_older_than
from core.domain.errors import InputError, InternalError, ReplicateError
from core.domain.models import ResetRequest
from core.logging_config import configure_logging
from core.services.replicate_reset import ReplicateResetService

# Swapped out in tests; takes (aliased_url, settings) and returns a ReplicationClient.
client_factory = new_client

HELP = "Re-replicate all previously replicated objects."

EPILOG = """\
Examples:

1. Re-replicate previously replicated objects in bucket "mybucket" for alias "myminio" for remote target.

   $ mc-replicate resync myminio/mybucket --remote-bucket "arn:minio:replication::xxx:mybucket"

2. Re-replicate all objects older than 60 days in bucket "mybucket" for remote bucket target.

   $ mc-replicate resync myminio/mybucket --older-than 60d --remote-bucket "arn:minio:replication::xxx:mybucket"
"""


class ReplicateCommand(TyperCommand):
    """Parse failures show the command help and exit 1, like a wrong TARGET count."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            typer.echo(ctx.get_help())
            exc.exit_code = 1
            raise


def load_settings(**flags: bool | Path | None) -> AppSettings:
    """Build settings from env/.env plus CLI flags; invalid env values are fatal."""

    try:
        settings = AppSettings()
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        fatal(
            AppSettings.model_construct().override(**flags),
            InputError("Invalid MC_* environment configuration.", cause=problems),
        )
    return settings.override(**flags)


def check_replicate_reset_syntax(
    ctx: typer.Context,
    targets: list[str],
    remote_bucket: str | None,
    settings: AppSettings,
) -> None:
    """Validate positional arguments and required flags before any I/O."""

    if len(targets) != 1:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=1)
    if not remote_bucket:
        fatal(settings, InputError("--remote-bucket flag needs to be specified."))


def parse_older_than_option(value: str | None) -> int:
    """`None`/empty means no age filter (0 days)."""

    if not value:
        return 0
    return parse_older_than(value)


def resync(
    ctx: typer.Context,
    targets: Optional[List[str]] = typer.Argument(
        None,
        metavar="TARGET",
        help="ALIAS/BUCKET whose replicated objects are re-sent.",
        show_default=False,
    ),
    older_than: Optional[str] = typer.Option(
        None,
        "--older-than",
        help="Re-replicate objects older than n days (e.g. 60d, 2w, 1y).",
    ),
    remote_bucket: Optional[str] = typer.Option(
        None,
        "--remote-bucket",
        help="Remote bucket ARN.",
    ),
    json_output: bool = typer.Option(False, "--json", help="Enable JSON formatted output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color theme."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Disable progress and success messages."),
    debug: bool = typer.Option(False, "--debug", help="Enable debug output."),
    insecure: bool = typer.Option(False, "--insecure", help="Disable TLS certificate verification."),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        "-C",
        help="Path to the directory holding config.json.",
    ),
) -> None:
    settings = load_settings(
        json_output=json_output,
        no_color=no_color,
        quiet=quiet,
        debug=debug,
        insecure=insecure,
        config_dir=config_dir,
    )
    configure_logging(debug=settings.debug, no_color=settings.no_color, force=True)

    targets = targets or []
    check_replicate_reset_syntax(ctx, targets, remote_bucket, settings)
    aliased_url = targets[0]

    try:
        older_than_days = parse_older_than_option(older_than)
    except InputError as exc:
        fatal(settings, exc)

    try:
        client = client_factory(aliased_url, settings)
    except ReplicateError as exc:
        fatal(settings, exc, "Unable to initialize connection.")

    request = ResetRequest(url=aliased_url, older_than_days=older_than_days, target_arn=remote_bucket)
    try:
        message = ReplicateResetService(client).run(request)
    except ReplicateError as exc:
        fatal(settings, exc, "Unable to reset replication")
    except KeyboardInterrupt:
        fatal(settings, InternalError("Operation cancelled."), "Unable to reset replication")

    try:
        print_message(message, settings)
    except InternalError as exc:
        fatal(settings, exc)


def register_replicate_reset_commands(app: typer.Typer) -> None:
    app.command("resync", cls=ReplicateCommand, help=HELP, epilog=EPILOG)(resync)
    app.command("reset", cls=ReplicateCommand, help=HELP, epilog=EPILOG, hidden=True)(resync)
