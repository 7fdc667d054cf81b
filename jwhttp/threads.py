"""A fixed-size pool of worker threads fed from a shared queue."""

from __future__ import annotations

import queue
import threading
import traceback
from collections.abc import Callable

_TERMINATE = object()


class ThreadPool:
    """Runs submitted callables on a fixed number of worker threads."""

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("thread pool size must be positive")
        self._queue: queue.SimpleQueue = queue.SimpleQueue()
        self._lock = threading.Lock()
        self._closed = False
        self._workers = [
            threading.Thread(target=self._work, name=f"jwhttp-worker-{index}", daemon=True)
            for index in range(size)
        ]
        for worker in self._workers:
            worker.start()

    @property
    def size(self) -> int:
        return len(self._workers)

    def _work(self) -> None:
        while True:
            job = self._queue.get()
            if job is _TERMINATE:
                return
            try:
                job()
            except Exception:
                traceback.print_exc()

    def execute(self, job: Callable[[], object]) -> None:
        """Queue ``job`` to be called with no arguments by a worker."""
        with self._lock:
            if self._closed:
                raise RuntimeError("thread pool has been shut down")
            self._queue.put(job)

    def shutdown(self) -> None:
        """Let queued jobs finish, then stop and join every worker."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            for _ in self._workers:
                self._queue.put(_TERMINATE)
        current = threading.current_thread()
        for worker in self._workers:
            if worker is not current:
                worker.join()

    def __enter__(self) -> ThreadPool:
        return self

    def __exit__(self, *args: object) -> None:
        self.shutdown()