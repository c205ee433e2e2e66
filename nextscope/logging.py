"""Logging for Nextscope.

Everything goes to stderr: under an MCP client stdout carries the protocol.
Progress bars use tqdm and switch themselves off when stderr is not a
terminal or ``NEXTSCOPE_DISABLE_PROGRESS`` is set.
"""

import logging
import os
import sys
import time
from collections.abc import Generator, Iterable
from contextlib import contextmanager
from typing import Any, TypeVar

from tqdm import tqdm

LOG_FORMAT = "[Nextscope] %(asctime)s %(levelname)s %(name)s: %(message)s"

_BAR_FORMAT = "{l_bar}{bar}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}]"

logger = logging.getLogger("nextscope")


def progress_disabled() -> bool:
    """Whether progress bars are suppressed for this process."""
    flag = os.getenv("NEXTSCOPE_DISABLE_PROGRESS", "").lower() in ("1", "true", "yes")
    return flag or not sys.stderr.isatty()


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach the stderr handler to the ``nextscope`` logger once.

    Args:
        level: Level name or number. Defaults to ``NEXTSCOPE_LOG_LEVEL``,
            then INFO.

    Returns:
        The package logger.
    """
    if level is None:
        level = os.getenv("NEXTSCOPE_LOG_LEVEL", "INFO").upper()
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
    return logger


configure_logging()


def get_logger(name: str) -> logging.Logger:
    """Child logger, e.g. ``get_logger("plugins.manager")``."""
    return logger.getChild(name)


class TimingContext:
    """Wall-clock timer usable as a context manager.

    Attributes:
        elapsed: Seconds between start and stop.
        elapsed_ms: The same in milliseconds.
    """

    def __init__(self) -> None:
        self.elapsed: float = 0.0
        self.elapsed_ms: float = 0.0
        self._start: float = 0.0

    def start(self) -> None:
        self._start = time.perf_counter()

    def stop(self) -> None:
        self.elapsed = time.perf_counter() - self._start
        self.elapsed_ms = self.elapsed * 1000

    def __enter__(self) -> "TimingContext":
        self.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.stop()


def _format_details(details: dict[str, Any] | None) -> str:
    if not details:
        return ""
    return " (" + ", ".join(f"{key}={value}" for key, value in details.items()) + ")"


@contextmanager
def log_operation(
    operation: str,
    details: dict[str, Any] | None = None,
    log: logging.Logger | None = None,
) -> Generator[TimingContext, None, None]:
    """Log the start and outcome of an operation with its duration.

    Args:
        operation: Label such as ``plugin:hook-extractor`` or ``tool:components``.
        details: Key/value pairs appended to the start line.
        log: Logger to write to; the package logger by default.

    Yields:
        Timer whose ``elapsed_ms`` is filled in once the block exits.

    Raises:
        Whatever the block raises, after logging the failure.
    """
    log = log or logger
    log.debug("%s started%s", operation, _format_details(details))

    with TimingContext() as timing:
        try:
            yield timing
        except Exception as e:
            timing.stop()
            log.error("%s failed after %.1fms: %s", operation, timing.elapsed_ms, e)
            raise

    log.info("%s finished in %.1fms", operation, timing.elapsed_ms)


T = TypeVar("T")


def progress_bar(
    iterable: Iterable[T],
    desc: str | None = None,
    total: int | None = None,
    unit: str = "it",
    disable: bool = False,
) -> Iterable[T]:
    """Wrap an iterable in a tqdm bar drawn on stderr.

    When bars are suppressed, large workloads still get a single log line.

    Args:
        iterable: Items to iterate.
        desc: Label shown before the bar.
        total: Item count, needed for generators.
        unit: Unit name, e.g. "files" or "batches".
        disable: Force the bar off.

    Returns:
        An iterable yielding the same items.
    """
    hidden = disable or progress_disabled()
    if hidden and not disable and total and total > 100:
        logger.info("%s: %d %s queued", desc or "progress", total, unit)

    return tqdm(
        iterable,
        desc=desc,
        total=total,
        unit=unit,
        file=sys.stderr,
        ncols=80,
        leave=False,
        disable=hidden,
        bar_format=_BAR_FORMAT,
    )
