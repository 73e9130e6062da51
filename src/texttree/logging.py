"""Opt-in loguru output for texttree.

The package logs through loguru but stays silent until `enable_logging()` is
called. Tree growth has its own `SPLIT` level, so a caller can watch every
leaf split without the per-example DEBUG chatter.

Importing this module drops loguru's stock stderr handler (ID 0); texttree
output only appears on handlers added by `enable_logging()` or by the caller.
"""

from __future__ import annotations

import contextlib
import sys
import warnings
from typing import TYPE_CHECKING, ClassVar, Final, Literal, TextIO

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

with contextlib.suppress(ValueError):
    logger.remove(0)

# DEBUG is 10, INFO is 20
SPLIT_LEVEL: Final[str] = "SPLIT"
SPLIT_LEVEL_NUMBER: Final[int] = 15

type LogLevel = Literal["TRACE", "DEBUG", "SPLIT", "INFO", "WARNING", "ERROR", "CRITICAL"]
type LogFormat = Literal["short", "full"]

_SHORT_TEMPLATE: Final[str] = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <7}</level> | "  # noqa: RUF027 - loguru format string
    "<cyan>{function}</cyan> - <level>{message}</level>"
)
_FULL_TEMPLATE: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <7}</level> | "  # noqa: RUF027 - loguru format string
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
_SPLIT_SUFFIX: Final[str] = " <dim>(new leaf {extra[new]!r})</dim>"


def _register_split_level() -> None:
    """Add the SPLIT level to loguru, or warn if another number already owns the name.

    loguru cannot renumber an existing level, so a clash is reported rather
    than fixed.
    """
    try:
        existing_level = logger.level(SPLIT_LEVEL)
    except ValueError:
        logger.level(SPLIT_LEVEL, no=SPLIT_LEVEL_NUMBER, icon="🌿")
    else:
        if existing_level.no != SPLIT_LEVEL_NUMBER:
            msg = f"SPLIT level already registered with numeric value {existing_level.no}, expected {SPLIT_LEVEL_NUMBER}"
            warnings.warn(msg, stacklevel=2)


_register_split_level()


class LoggingHandle:
    """One handler added by `enable_logging()`.

    Call `disable()`, or use the handle as a context manager, to remove the
    handler. Removing the last open handle turns texttree logging back off.

    Examples:
        >>> with enable_logging(level="SPLIT"):  # doctest: +SKIP
        ...     TextClassifier.train(instances, labels)
    """

    _open_handler_ids: ClassVar[set[int]] = set()

    def __init__(self, handler_id: int) -> None:
        self.handler_id: int | None = handler_id
        LoggingHandle._open_handler_ids.add(handler_id)

    def disable(self) -> None:
        """Remove this handle's handler; safe to call more than once."""
        if self.handler_id is None:
            return
        LoggingHandle._open_handler_ids.discard(self.handler_id)
        with contextlib.suppress(ValueError):
            logger.remove(self.handler_id)
        self.handler_id = None
        if not LoggingHandle._open_handler_ids:
            logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.disable()


def enable_logging(
    *,
    level: LogLevel = "INFO",
    log_format: LogFormat = "short",
    sink: TextIO | None = None,
) -> LoggingHandle:
    """Write texttree log records to `sink`.

    Only records from inside the package are written; other loguru output in
    the process is left alone. SPLIT records also name the label of the leaf
    the split created.

    Args:
        level (LogLevel): Minimum level written. "INFO" (default) reports
            training, saving and loading. "SPLIT" adds one line per leaf
            split. "DEBUG" also follows each example through the tree.
        log_format (LogFormat): "short" (default) prints the time of day and
            function name; "full" prints the date and module:function:line.
        sink (TextIO | None): Stream to write to. Defaults to `sys.stderr` as
            it is at call time.

    Returns:
        LoggingHandle: Handle that removes the handler again.

    Examples:
        >>> import io
        >>> from texttree import TextBlock, TextClassifier
        >>> stream = io.StringIO()
        >>> with enable_logging(level="SPLIT", sink=stream):
        ...     _ = TextClassifier.train(
        ...         [TextBlock.from_text("buy now"), TextBlock.from_text("hi mom")], ["Spam", "Ham"]
        ...     )
        >>> "Split leaf 'Spam' on 'buy' at 0.25 (new leaf 'Ham')" in stream.getvalue()
        True
    """
    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(
        sys.stderr if sink is None else sink,
        level=level,
        filter=_is_texttree_record,
        format=_record_formatter(_SHORT_TEMPLATE if log_format == "short" else _FULL_TEMPLATE),
        colorize=False if sink is not None else None,
    )
    return LoggingHandle(handler_id)


def _record_formatter(template: str) -> Callable[[Record], str]:
    def format_record(record: Record) -> str:
        line = template
        if record["level"].name == SPLIT_LEVEL and "new" in record["extra"]:
            line += _SPLIT_SUFFIX
        return line + "\n{exception}"

    return format_record


def _is_texttree_record(record: Record) -> bool:
    name = record["name"]
    return name is not None and name.startswith(PACKAGE_NAME)
