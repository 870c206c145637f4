# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""Logging configuration for tapline.

tapline logs through loguru and never adds handlers on import. Applications
that want tapline's registration and compilation diagnostics call
configure_logging().
"""

import sys
from typing import TYPE_CHECKING

from loguru import logger


if TYPE_CHECKING:
    from loguru import Record


LEVEL_COLORS = {
    "TRACE": "<dim>",
    "DEBUG": "<cyan>",
    "INFO": "<blue>",
    "SUCCESS": "<green>",
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<red><bold>",
}


def _log_format(record: "Record") -> str:
    """Generate the log format string for a record.

    Structured extra fields are appended as key=value pairs.

    Args:
        record: Loguru record containing log metadata, message, and level.

    Returns:
        Formatted string with Loguru color tags for the log message.
    """
    color = LEVEL_COLORS.get(record["level"].name, "<white>")

    # Loguru uses </> to close any open color tag
    close = "</>"

    fmt = (
        f"<dim>{{time:HH:mm:ss}}{close} "
        f"{color}{{level: <8}}{close}"
        f"<dim>│{close} "
        f"<dim>{{name}}{close}:"
        f"{{message}}"
    )

    extra = record["extra"]
    if extra:
        extra_str = " ".join(f"{k}={v!r}" for k, v in extra.items())
        # Escape braces to prevent Loguru format string injection
        extra_str = extra_str.replace("{", "{{").replace("}", "}}")
        # Escape tags so reprs like <function ...> are not parsed as colors
        extra_str = extra_str.replace("<", r"\<")
        fmt += f" <dim>│ {extra_str}{close}"

    fmt += "\n"

    if record["exception"]:
        fmt += "{exception}\n"

    return fmt


def configure_logging(level: str = "INFO") -> None:
    """Configure loguru logging for tapline diagnostics.

    Removes the default handler and adds a formatted stderr handler with
    structured field support.

    Args:
        level: Minimum log level to display (e.g., "DEBUG", "INFO", "WARNING").
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=level,
        format=_log_format,
        colorize=True,
    )
