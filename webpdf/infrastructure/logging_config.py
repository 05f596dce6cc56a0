from __future__ import annotations

import logging
import sys


def configure_logging(verbose: bool = False) -> None:
    # Plain message format on stdout: log lines double as the CLI's progress output.
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stdout,
    )
