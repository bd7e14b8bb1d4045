# core/logging_setup.py

"""
Logging configuration for the Student Records CLI.

Modules log through `logging.getLogger(__name__)`; this installs the single handler
on the root logger. Log output goes to stderr unless a log file is configured, so it
does not interleave with the interactive menus on stdout.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()

    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
