"""
Logging setup.

On a GitHub Actions runner warnings and errors are written as workflow
commands so they show up as annotations on the run.
"""

import logging
import os
import sys
from contextlib import contextmanager

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def in_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


def escape_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class WorkflowCommandFormatter(logging.Formatter):
    """Render records as ``::<command>::<message>`` lines."""

    def __init__(self):
        super().__init__("%(message)s")

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = getattr(record, "workflow_command", None)
        if command is not None:
            return f"::{command}::{message}"
        command = _COMMANDS.get(record.levelno)
        if command is None:
            return message
        return f"::{command}::{escape_data(message)}"


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose or os.environ.get("RUNNER_DEBUG") == "1" else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    if in_github_actions():
        handler.setFormatter(WorkflowCommandFormatter())
    else:
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    logging.basicConfig(level=level, handlers=[handler], force=True)


@contextmanager
def log_group(title: str):
    """Fold everything logged inside the block under ``title``."""
    if not in_github_actions():
        logger.info(title)
        yield
        return
    logger.info(title, extra={"workflow_command": "group"})
    try:
        yield
    finally:
        logger.info("", extra={"workflow_command": "endgroup"})
