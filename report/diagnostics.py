"""
Run diagnostics for the judge:
    - elapsed wall-clock time between checkpoints
    - process memory usage
"""

import logging
import resource
import sys
import time
import tracemalloc
from typing import Dict

log = logging.getLogger(__name__)

_MIB = 1024 * 1024


class ElapsedTimer:
    """
    Measures time since construction (or the last reset) and logs it.

    Attributes:
        enabled (bool): When False, :meth:`log` is a no-op.
    """

    def __init__(self, enabled: bool = True):
        """
        Start the timer.

        Args:
            enabled (bool): Whether :meth:`log` emits anything.
        """
        self.enabled = enabled
        self._start = time.perf_counter()

    def elapsed_ms(self) -> float:
        """
        Milliseconds since the timer was started or reset.

        Returns:
            float: Elapsed time in milliseconds.
        """
        return (time.perf_counter() - self._start) * 1000.0

    def log(self, message: str = "") -> "ElapsedTimer":
        """
        Log the elapsed time, prefixed by *message*.

        Args:
            message (str): Optional label, e.g. ``"Elapsed time"``.

        Returns:
            ElapsedTimer: ``self``, so calls can be chained with :meth:`reset`.
        """
        if self.enabled:
            prefix = f"{message}: " if message else ""
            log.info("%s%s ms", prefix, f"{self.elapsed_ms():,.3f}")
        return self

    def reset(self) -> "ElapsedTimer":
        """Restart the timer and return ``self``."""
        self._start = time.perf_counter()
        return self


def memory_usage() -> Dict[str, float]:
    """
    Snapshot of the process memory usage in MiB.

    ``max_rss`` comes from :func:`resource.getrusage`; the traced figures are
    zero unless :mod:`tracemalloc` was started.

    Returns:
        dict: ``max_rss``, ``traced_current`` and ``traced_peak``.
    """
    max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # ru_maxrss is KiB on Linux and bytes on macOS.
    max_rss_bytes = max_rss if sys.platform == "darwin" else max_rss * 1024
    current, peak = tracemalloc.get_traced_memory()
    return {
        "max_rss": max_rss_bytes / _MIB,
        "traced_current": current / _MIB,
        "traced_peak": peak / _MIB,
    }


def memory_usage_message() -> str:
    """
    Multi-line summary of :func:`memory_usage`.

    Returns:
        str: Header line, column names and the values.
    """
    usage = memory_usage()
    return "\n".join([
        "Memory Usage (MiB):",
        "Max RSS :: Traced Current :: Traced Peak",
        " :: ".join(f"{value:.2f}" for value in usage.values()),
    ])
