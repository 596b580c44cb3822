"""Logging setup for the CLI.

Stdlib `logging` everywhere, rendered by Rich on stderr so log lines never
mix with JSON documents on stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "mc-replicate"


def configure_logging(*, debug: bool = False, no_color: bool = False, force: bool = False) -> None:
    """Install a single Rich handler on the root logger.

    Calling it twice is a no-op unless `force=True`; the CLI forces it once per
    invocation so `--debug` takes effect even inside long-lived test runners.
    """

    root = logging.getLogger()
    existing = [h for h in root.handlers if h.get_name() == _HANDLER_NAME]
    if existing and not force:
        return
    for handler in existing:
        root.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        show_path=debug,
        rich_tracebacks=debug,
        markup=False,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.WARNING)

    # httpx/httpcore are chatty at DEBUG; our adapter logs what matters.
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.INFO if debug else logging.WARNING)
