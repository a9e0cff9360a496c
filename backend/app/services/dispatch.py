"""Async Dispatch — runs a synchronous operation on a worker pool with start/finish logging.

Invariants:
    - dispatch() never raises and never blocks: pool rejection becomes an
      OverloadedError (saturated) or PoolClosedError (shut down) set on the
      returned Future
    - Every dispatched call logs start and completion (or failure) with the
      worker thread name, pool name and elapsed milliseconds
    - Exceptions raised by the operation propagate unchanged through the Future

Design Decisions:
    - One helper for all async variants: PlayerService methods stay one-liners
    - summarize callback lets each operation add result fields (count, found)
      to the completion log without the helper knowing result types
"""

import logging
import threading
import time
from concurrent.futures import Future
from typing import Any, Callable

from app.core.errors import OverloadedError
from app.infrastructure.worker_pool import BoundedWorkerPool, PoolClosedError

logger = logging.getLogger(__name__)


def dispatch(
    pool: BoundedWorkerPool,
    operation: str,
    fn: Callable[..., Any],
    *args: Any,
    log_fields: dict[str, Any] | None = None,
    summarize: Callable[[Any], dict[str, Any]] | None = None,
) -> Future:
    """Submit fn(*args) to pool and return its Future immediately."""
    fields = {"operation": operation, "pool": pool.name, **(log_fields or {})}

    def run():
        worker = threading.current_thread().name
        logger.info(f"Starting async {operation}", extra={**fields, "worker": worker})
        started = time.perf_counter()
        try:
            result = fn(*args)
        except Exception as e:
            logger.error(
                f"Exception in async {operation}: {e}",
                extra={**fields, "worker": worker, "elapsed_ms": _elapsed_ms(started)},
            )
            raise
        logger.info(
            f"Completed async {operation}",
            extra={
                **fields, **(summarize(result) if summarize else {}),
                "worker": worker, "elapsed_ms": _elapsed_ms(started),
            },
        )
        return result

    try:
        return pool.submit(run)
    except OverloadedError as e:
        e.context.operation = operation
        logger.error(
            f"Rejected async {operation}: {e.message}",
            extra={**fields, "error_code": e.code},
        )
        return _failed(e)
    except PoolClosedError as e:
        logger.error(f"Rejected async {operation}: {e}", extra=fields)
        return _failed(e)


def _failed(exc: Exception) -> Future:
    future: Future = Future()
    future.set_exception(exc)
    return future


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
