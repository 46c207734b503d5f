"""Bounded worker pools with caller-runs overflow.

``concurrent.futures.ThreadPoolExecutor`` queues without limit. This
wrapper caps in-flight work at ``max_pool_size + queue_capacity``. When
the pool is saturated, the submitting thread runs the task itself, so
work is never rejected or dropped and producers slow down naturally.

Shutdown refuses new work and waits, up to the configured bound, for
what is already in flight.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait

import structlog

from notifier.config import ExecutorSettings

logger = structlog.get_logger(__name__)


class ExecutorShutdownError(RuntimeError):
    """Raised when submitting to an executor that is shutting down."""


class BoundedThreadPoolExecutor:
    def __init__(
        self,
        name: str,
        core_pool_size: int,
        max_pool_size: int,
        queue_capacity: int,
        thread_name_prefix: str,
        await_termination_seconds: float,
    ):
        if max_pool_size < core_pool_size:
            raise ValueError(f"max_pool_size ({max_pool_size}) must be >= core_pool_size ({core_pool_size})")

        self.name = name
        self.core_pool_size = core_pool_size
        self.max_pool_size = max_pool_size
        self.queue_capacity = queue_capacity
        self.await_termination_seconds = await_termination_seconds

        # Workers start lazily and are reused once idle, up to max_pool_size.
        self._executor = ThreadPoolExecutor(
            max_workers=max_pool_size,
            thread_name_prefix=thread_name_prefix,
        )
        self._slots = threading.BoundedSemaphore(max_pool_size + queue_capacity)
        self._pending: set[Future] = set()
        self._lock = threading.Lock()
        self._shutdown = False

        logger.info(
            "Executor initialized",
            executor=name,
            core=core_pool_size,
            max=max_pool_size,
            queue=queue_capacity,
        )

    @classmethod
    def from_settings(cls, name: str, settings: ExecutorSettings) -> "BoundedThreadPoolExecutor":
        return cls(
            name=name,
            core_pool_size=settings.core_pool_size,
            max_pool_size=settings.max_pool_size,
            queue_capacity=settings.queue_capacity,
            thread_name_prefix=settings.thread_name_prefix,
            await_termination_seconds=settings.await_termination_seconds,
        )

    @property
    def capacity(self) -> int:
        return self.max_pool_size + self.queue_capacity

    @property
    def in_flight(self) -> int:
        with self._lock:
            return len(self._pending)

    def submit(self, fn, /, *args, **kwargs) -> Future:
        """Schedule ``fn`` on the pool, or run it here if the pool is full."""
        with self._lock:
            if self._shutdown:
                raise ExecutorShutdownError(f"Executor {self.name} is shut down")

            future = None
            if self._slots.acquire(blocking=False):
                try:
                    future = self._executor.submit(fn, *args, **kwargs)
                except BaseException:
                    self._slots.release()
                    raise
                self._pending.add(future)

        if future is None:
            logger.warning("Executor saturated, running task in caller thread", executor=self.name)
            return _run_in_caller(fn, *args, **kwargs)

        future.add_done_callback(self._task_done)
        return future

    def _task_done(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)
        self._slots.release()

    def shutdown(self) -> bool:
        """Stop accepting work and wait for in-flight tasks.

        Returns True when everything finished within ``await_termination_seconds``.
        """
        with self._lock:
            self._shutdown = True
            pending = set(self._pending)

        _, not_done = wait(pending, timeout=self.await_termination_seconds)
        if not_done:
            logger.warning(
                "Executor shutdown timed out with tasks still running",
                executor=self.name,
                still_running=len(not_done),
                waited_seconds=self.await_termination_seconds,
            )

        self._executor.shutdown(wait=False)
        logger.info("Executor shut down", executor=self.name, drained=not not_done)
        return not not_done


def _run_in_caller(fn, /, *args, **kwargs) -> Future:
    future: Future = Future()
    future.set_running_or_notify_cancel()
    try:
        result = fn(*args, **kwargs)
    except BaseException as exc:
        future.set_exception(exc)
    else:
        future.set_result(result)
    return future
