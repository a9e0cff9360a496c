"""Bounded Worker Pool — thread pool with core/max sizing, bounded queue and idle reaping.

Invariants:
    - Submission never blocks: a task either starts, queues, or is rejected
    - Admission order: start a core thread → enqueue → start an overflow thread → reject
    - At most max_size threads and queue_capacity queued tasks at any time
    - Threads above core_size exit after keep_alive_seconds without work
    - Rejection raises OverloadedError; the returned Future is never left pending

Design Decisions:
    - Own pool over concurrent.futures.ThreadPoolExecutor: the stdlib executor
      has an unbounded queue and no core/max split, so it cannot reject
    - concurrent.futures.Future as the result handle: callers block with
      .result() or bridge into asyncio with asyncio.wrap_future()
    - Workers poll the queue in short slices so shutdown() and idle reaping
      need no sentinel tasks (a bounded queue may have no room for them)
"""

import itertools
import logging
import queue
import threading
import time
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Callable

from app.core.domain_types import PoolName
from app.core.errors import OverloadedError

logger = logging.getLogger(__name__)

_POLL_SECONDS = 0.05


class PoolClosedError(RuntimeError):
    """submit() called after shutdown()."""


class _WorkItem:
    """A submitted callable bound to the Future that reports its outcome."""

    def __init__(self, future: Future, fn: Callable, args: tuple, kwargs: dict):
        self.future = future
        self.fn = fn
        self.args = args
        self.kwargs = kwargs

    def run(self) -> None:
        if not self.future.set_running_or_notify_cancel():
            return
        try:
            result = self.fn(*self.args, **self.kwargs)
        except BaseException as exc:
            self.future.set_exception(exc)
        else:
            self.future.set_result(result)


@dataclass(frozen=True)
class PoolStats:
    """Point-in-time view of a pool, for readiness probes and logs."""
    name: str
    pool_size: int
    active_count: int
    queue_size: int
    core_size: int
    max_size: int
    queue_capacity: int


class BoundedWorkerPool:
    """Fixed-capacity executor with a bounded queue and elastic overflow threads."""

    def __init__(
        self,
        name: str,
        core_size: int,
        max_size: int,
        queue_capacity: int,
        keep_alive_seconds: float,
        thread_name_prefix: str = "",
    ):
        if core_size < 0 or max_size < 1 or max_size < core_size:
            raise ValueError(
                f"Invalid pool sizing: core={core_size}, max={max_size}",
            )
        if queue_capacity < 1:
            raise ValueError(f"queue_capacity must be >= 1, got {queue_capacity}")
        self.name = name
        self.core_size = core_size
        self.max_size = max_size
        self.queue_capacity = queue_capacity
        self.keep_alive_seconds = keep_alive_seconds
        self.thread_name_prefix = thread_name_prefix or f"{name}-"
        self._queue: queue.Queue[_WorkItem] = queue.Queue(maxsize=queue_capacity)
        self._lock = threading.Lock()
        self._workers: set[threading.Thread] = set()
        self._active = 0
        self._counter = itertools.count(1)
        self._shutdown = False

    # ─── Submission ──────────────────────────────────────────────

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Schedule fn(*args, **kwargs).

        Raises OverloadedError when saturated, PoolClosedError after shutdown().
        """
        future: Future = Future()
        item = _WorkItem(future, fn, args, kwargs)
        with self._lock:
            if self._shutdown:
                raise PoolClosedError(f"Pool '{self.name}' is shut down")
            if len(self._workers) < self.core_size:
                self._start_worker(item)
                return future
            try:
                self._queue.put_nowait(item)
            except queue.Full:
                pass
            else:
                if not self._workers:
                    self._start_worker(None)
                return future
            if len(self._workers) < self.max_size:
                self._start_worker(item)
                return future
        logger.warning(
            f"Pool {self.name} rejected task",
            extra={"pool": self.name, "queue_size": self.queue_capacity},
        )
        raise OverloadedError(self.name, self.queue_capacity, self.max_size)

    def _start_worker(self, first: _WorkItem | None) -> None:
        """Caller holds self._lock."""
        thread = threading.Thread(
            target=self._run_worker,
            args=(first,),
            name=f"{self.thread_name_prefix}{next(self._counter)}",
            daemon=True,
        )
        self._workers.add(thread)
        thread.start()

    # ─── Worker Loop ─────────────────────────────────────────────

    def _run_worker(self, first: _WorkItem | None) -> None:
        me = threading.current_thread()
        item = first
        idle_since = time.monotonic()
        try:
            while True:
                if item is not None:
                    self._execute(item)
                    item = None
                    idle_since = time.monotonic()
                try:
                    item = self._queue.get(timeout=_POLL_SECONDS)
                    continue
                except queue.Empty:
                    pass
                if self._shutdown:
                    return
                if time.monotonic() - idle_since >= self.keep_alive_seconds:
                    with self._lock:
                        if (
                            len(self._workers) > self.core_size
                            and self._queue.empty()
                        ):
                            self._workers.discard(me)
                            logger.debug(
                                f"Reaped idle thread {me.name}",
                                extra={"pool": self.name, "worker": me.name},
                            )
                            return
                    idle_since = time.monotonic()
        finally:
            with self._lock:
                self._workers.discard(me)

    def _execute(self, item: _WorkItem) -> None:
        with self._lock:
            self._active += 1
        try:
            item.run()
        finally:
            with self._lock:
                self._active -= 1

    # ─── Lifecycle & Introspection ───────────────────────────────

    def shutdown(self, wait: bool = True, cancel_pending: bool = False) -> None:
        """Stop accepting work. Queued tasks still run unless cancel_pending."""
        with self._lock:
            self._shutdown = True
            workers = list(self._workers)
        if cancel_pending:
            while True:
                try:
                    self._queue.get_nowait().future.cancel()
                except queue.Empty:
                    break
        if wait:
            for thread in workers:
                thread.join()

    def stats(self) -> PoolStats:
        with self._lock:
            return PoolStats(
                name=self.name,
                pool_size=len(self._workers),
                active_count=self._active,
                queue_size=self._queue.qsize(),
                core_size=self.core_size,
                max_size=self.max_size,
                queue_capacity=self.queue_capacity,
            )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown(wait=True)


@dataclass
class WorkerPools:
    """The two independent pools backing async dispatch."""
    record: BoundedWorkerPool
    pagination: BoundedWorkerPool

    def shutdown(self, wait: bool = True) -> None:
        self.record.shutdown(wait=wait)
        self.pagination.shutdown(wait=wait)


def build_worker_pools(settings) -> WorkerPools:
    """Construct both pools from Settings (app.config)."""
    return WorkerPools(
        record=BoundedWorkerPool(
            name=PoolName.RECORD.value,
            core_size=settings.record_pool_core_size,
            max_size=settings.record_pool_max_size,
            queue_capacity=settings.record_pool_queue_capacity,
            keep_alive_seconds=settings.record_pool_keep_alive_seconds,
            thread_name_prefix=settings.record_pool_thread_prefix,
        ),
        pagination=BoundedWorkerPool(
            name=PoolName.PAGINATION.value,
            core_size=settings.pagination_pool_core_size,
            max_size=settings.pagination_pool_max_size,
            queue_capacity=settings.pagination_pool_queue_capacity,
            keep_alive_seconds=settings.pagination_pool_keep_alive_seconds,
            thread_name_prefix=settings.pagination_pool_thread_prefix,
        ),
    )
