"""Fork/join helpers backed by a shared thread pool.

CSG evaluation and the bounding classifier split their work into two
halves: one half is submitted to an executor while the calling thread runs
the other.  Nested forks on a bounded pool would deadlock if a waiting task
held the only free worker, so a submitted half that has not started yet is
withdrawn and run inline instead of waited on.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, ThreadPoolExecutor, wait
from typing import Callable, Optional, Tuple, TypeVar

from _hex_common import DEFAULT_MAX_WORKERS

logger = logging.getLogger(__name__)

__all__ = ["get_executor", "fork_join"]

L = TypeVar("L")
R = TypeVar("R")

_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


# ---------------------------------------------------------------------------
# Executor management
# ---------------------------------------------------------------------------

def get_executor() -> ThreadPoolExecutor:
    """Return the process-wide pool, creating it on first use."""
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(
                max_workers=DEFAULT_MAX_WORKERS,
                thread_name_prefix="hexarea",
            )
            logger.debug(
                "Created shared ThreadPoolExecutor with %d workers",
                DEFAULT_MAX_WORKERS,
            )
        return _executor


# ---------------------------------------------------------------------------
# Fork / join
# ---------------------------------------------------------------------------

def fork_join(
    left: Callable[[], L],
    right: Callable[[], R],
    executor: Optional[Executor] = None,
) -> Tuple[L, R]:
    """Run *left* and *right* concurrently and return both results.

    *right* is submitted to *executor* (the shared pool by default) and
    *left* runs on the calling thread.  If *left* raises, *right* is
    cancelled or awaited before the exception propagates, so no task
    outlives the call.
    """
    pool = executor if executor is not None else get_executor()
    future = pool.submit(right)
    try:
        a = left()
    except BaseException:
        if not future.cancel():
            wait([future])
        raise
    if future.cancel():
        # Never started: nobody is waiting on a worker for it.
        b = right()
    else:
        b = future.result()
    return a, b
