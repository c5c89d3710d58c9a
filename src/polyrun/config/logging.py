# topmark:header:start
#
#   project      : Polyrun
#   file         : logging.py
#   file_relpath : src/polyrun/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Logging for the ``polyrun`` package.

Polyrun logs through the standard `logging` module under the ``polyrun``
logger namespace. On top of the standard levels it registers ``TRACE``, one
step below ``DEBUG``, which the vendor loader uses for every readiness check.

`setup_logging` attaches a single stderr handler to the ``polyrun`` logger,
never to the root logger, so an application embedding the pipeline keeps its
own handlers. Records still propagate, which lets pytest's ``caplog`` see them.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_LEVEL_ENV_VAR: Final[str] = "POLYRUN_LOG_LEVEL"

# Namespace every module logger lives under
PACKAGE_LOGGER: Final[str] = "polyrun"

logging.addLevelName(TRACE_LEVEL, "TRACE")


class PolyrunLogger(logging.Logger):
    """`logging.Logger` with a `trace` method."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log ``msg % args`` at ``TRACE``; a no-op unless TRACE is enabled."""
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, extra=extra, stacklevel=2)


logging.setLoggerClass(PolyrunLogger)


# Lowest level first; a record takes the style of the highest threshold it reaches
_LEVEL_STYLES: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (TRACE_LEVEL, chalk.blue),
    (logging.DEBUG, chalk.gray),
    (logging.INFO, chalk.green),
    (logging.WARNING, chalk.yellow),
    (logging.ERROR, chalk.red),
    (logging.CRITICAL, chalk.red_bright),
)

_BRIEF_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
_DETAILED_FORMAT: Final[str] = "[%(levelname)s] %(name)s:%(lineno)d %(message)s"


def style_for_level(level: int) -> Callable[[str], str]:
    """Return the chalk style used for records at ``level``.

    Levels below ``TRACE`` are dimmed.
    """
    style: Callable[[str], str] = chalk.dim
    for threshold, candidate in _LEVEL_STYLES:
        if level < threshold:
            break
        style = candidate
    return style


class ChalkFormatter(logging.Formatter):
    """Formatter that colors each record by its level.

    Args:
        fmt (str | None): `logging.Formatter` format string.
        color (bool): When False records are formatted as plain text.
    """

    def __init__(self, fmt: str | None = None, *, color: bool = True) -> None:
        super().__init__(fmt)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        text: str = super().format(record)
        if not self.color:
            return text
        return style_for_level(record.levelno)(text)


class _PolyrunHandler(logging.StreamHandler):
    """Marker type so `setup_logging` replaces only the handler it installed."""


def resolve_env_log_level(environ: Mapping[str, str] | None = None) -> int | None:
    """Return the level named by ``POLYRUN_LOG_LEVEL``, or None.

    Accepts a level name in any case (``trace``, ``DEBUG``, ``warn``) or a
    non-negative integer. Unknown names and empty values yield None.
    """
    raw: str = (environ if environ is not None else os.environ).get(LOG_LEVEL_ENV_VAR, "")
    value: str = raw.strip().upper()
    if not value:
        return None
    if value.isdigit():
        return int(value)
    if value == "WARN":
        value = "WARNING"
    elif value == "FATAL":
        value = "CRITICAL"
    level: int | str = logging.getLevelName(value)
    return level if isinstance(level, int) else None


def setup_logging(level: int | None = None, *, color: bool = True) -> None:
    """Send ``polyrun`` records at ``level`` and above to stderr.

    Args:
        level (int | None): Threshold; when None, ``POLYRUN_LOG_LEVEL`` is
            consulted and CRITICAL is used if it is unset.
        color (bool): Color records by level.

    Calling it again replaces the handler installed by the previous call.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    package_logger: logging.Logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    for old in [h for h in package_logger.handlers if isinstance(h, _PolyrunHandler)]:
        package_logger.removeHandler(old)

    handler = _PolyrunHandler(sys.stderr)
    handler.setFormatter(
        ChalkFormatter(_BRIEF_FORMAT if level >= logging.INFO else _DETAILED_FORMAT, color=color)
    )
    package_logger.addHandler(handler)


def get_logger(name: str) -> PolyrunLogger:
    """Return the `PolyrunLogger` called ``name`` (normally a module's ``__name__``)."""
    return cast("PolyrunLogger", logging.getLogger(name))
