"""Fixed-size worker pool for accepted client sockets."""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)

ClientAddress = tuple[str, int]
ClientJob = tuple[object, ClientAddress]
ClientHandler = Callable[[object, ClientAddress], None]


class ThreadPool:
    """Worker threads draining an unbounded connection queue."""

    def __init__(self, worker_count: int, handler: ClientHandler) -> None:
        if worker_count <= 0:
            raise ValueError("worker_count must be positive")

        self._handler = handler
        self._queue: queue.Queue[ClientJob | None] = queue.Queue()
        self._stop_event = threading.Event()
        self._threads: list[threading.Thread] = []
        self._worker_count = worker_count

    @property
    def worker_count(self) -> int:
        return self._worker_count

    @property
    def threads(self) -> tuple[threading.Thread, ...]:
        return tuple(self._threads)

    def start(self) -> None:
        for index in range(self._worker_count):
            worker = threading.Thread(
                target=self._worker_loop,
                name=f"dirserve-worker-{index}",
                daemon=True,
            )
            self._threads.append(worker)
            worker.start()

    def submit(self, client_socket: object, address: ClientAddress) -> bool:
        """Queue a connection; returns False once the pool is shut down."""
        if self._stop_event.is_set():
            return False
        self._queue.put((client_socket, address))
        return True

    def shutdown(self) -> None:
        if self._stop_event.is_set():
            return
        self._stop_event.set()
        for _ in self._threads:
            self._queue.put(None)

        for thread in self._threads:
            thread.join(timeout=1.0)
        self._close_pending()

    def _close_pending(self) -> None:
        """Close connections still queued behind the stop sentinels."""
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return
            try:
                if item is None:
                    continue
                client_socket, address = item
                close = getattr(client_socket, "close", None)
                if close is not None:
                    try:
                        close()
                    except OSError as exc:
                        logger.warning("Failed to close pending connection %s: %s", address, exc)
            finally:
                self._queue.task_done()

    def _worker_loop(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is None:
                    return
                client_socket, address = item
                try:
                    self._handler(client_socket, address)
                except Exception:
                    logger.exception("Unhandled error while serving %s", address)
            finally:
                self._queue.task_done()
