"""Console logging setup for the pdum_iam CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PROJECT_PREFIX = "pdum.iam"


def configure_logging(verbose: bool = False, console: Console | None = None) -> RichHandler:
    """Route ``pdum.iam`` log records to a Rich console handler.

    Third-party loggers (``googleapiclient``, ``google.auth``) stay at WARNING
    unless ``verbose`` is set.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=verbose,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, RichHandler)]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger(PROJECT_PREFIX).setLevel(logging.DEBUG if verbose else logging.INFO)
    return handler
