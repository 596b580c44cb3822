"""mc-replicate command-line entrypoint.

Commands are registered from their own modules; this file only builds the
Typer application.
"""

from __future__ import annotations

import typer

from cli.replicate_reset import register_replicate_reset_commands

app = typer.Typer(
    name="mc-replicate",
    no_args_is_help=True,
    help="Manage bucket replication on MinIO and other S3-compatible servers.",
)

register_replicate_reset_commands(app)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
