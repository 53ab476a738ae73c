"""A client that runs request-processing functions on its own worker threads."""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Optional

from .errors import RestcError

_log = logging.getLogger(__name__)

CONTENT_TYPE = "Content-Type"
JSON_TYPE = "application/json; charset=utf-8"


@dataclass
class ClientProperties:
    """Default settings shared by every request a client makes."""

    headers: dict[str, str] = field(default_factory=dict)
    threads: int = 1

    def copy(self) -> "ClientProperties":
        return ClientProperties(headers=dict(self.headers), threads=self.threads)


class Context:
    """Handed to each processing function; gives access to its client."""

    def __init__(self, client: "RestClient") -> None:
        self.client = client

    def sleep(self, seconds: float) -> None:
        """Pause the current processing function."""
        time.sleep(seconds)


class RestClient:
    """Runs processing functions on worker threads, or on the caller's thread.

    With ``use_main_thread`` false, ``properties.threads`` workers are started
    and keep waiting for work until :meth:`close_when_ready`. With it true, no
    threads are started and queued work runs when :meth:`run` is called.
    """

    def __init__(
        self,
        properties: Optional[ClientProperties] = None,
        use_main_thread: bool = False,
    ) -> None:
        self._properties = properties.copy() if properties is not None else ClientProperties()
        if not any(name.lower() == CONTENT_TYPE.lower() for name in self._properties.headers):
            self._properties.headers[CONTENT_TYPE] = JSON_TYPE

        self._cond = threading.Condition()
        self._tasks: deque[Callable[[], None]] = deque()
        self._active = 0
        self._closed = False
        self._stopped = False
        self._work = not use_main_thread
        self._threads: list[threading.Thread] = []

        if use_main_thread:
            return

        if self._properties.threads < 1:
            raise ValueError("At least one worker thread is required")

        _log.debug("Starting %d worker thread(s)", self._properties.threads)
        for index in range(self._properties.threads):
            worker = threading.Thread(
                target=self._worker, args=(index,), name=f"restkit-worker-{index}", daemon=True
            )
            self._threads.append(worker)
            worker.start()
        _log.debug("All worker threads have started")

    @classmethod
    def create(cls, properties: Optional[ClientProperties] = None) -> "RestClient":
        """Create a client with its own worker threads."""
        return cls(properties, False)

    @classmethod
    def create_use_own_thread(
        cls, properties: Optional[ClientProperties] = None
    ) -> "RestClient":
        """Create a client whose work runs only when the caller calls :meth:`run`."""
        return cls(properties, True)

    def connection_properties(self) -> ClientProperties:
        """Return the default properties used by this client."""
        return self._properties

    def is_closing(self) -> bool:
        return self._closed

    def _worker(self, index: int) -> None:
        _log.debug("Worker %d is starting.", index)
        try:
            self._run_loop()
        except Exception as ex:
            _log.error("Worker %d caught exception: %s", index, ex)
        _log.debug("Worker %d is done.", index)

    def _run_loop(self) -> int:
        count = 0
        while True:
            with self._cond:
                while True:
                    if self._stopped:
                        return count
                    if self._tasks:
                        task = self._tasks.popleft()
                        self._active += 1
                        break
                    if not self._work and self._active == 0:
                        if self._closed:
                            self._stopped = True
                            self._cond.notify_all()
                        return count
                    self._cond.wait()
            try:
                task()
            finally:
                with self._cond:
                    self._active -= 1
                    count += 1
                    self._cond.notify_all()

    def run(self) -> int:
        """Run queued work on the calling thread; return how many tasks ran.

        Returns when no work is left, or, while worker threads are kept alive,
        when the client has been closed and all work is done.
        """
        return self._run_loop()

    def _submit(self, task: Callable[[], None]) -> None:
        with self._cond:
            if self._stopped:
                raise RestcError("The client is closed and accepts no more work.")
            self._tasks.append(task)
            self._cond.notify()

    def process(self, fn: Callable[[Context], Any]) -> None:
        """Queue ``fn`` to be called with a :class:`Context`; errors are logged."""

        def task() -> None:
            try:
                fn(Context(self))
            except Exception as ex:
                _log.error("process: Caught exception: %s", ex)

        self._submit(task)

    def process_with_promise(self, fn: Callable[[Context], Any]) -> Future:
        """Queue ``fn`` and return a future holding its result or exception."""
        future: Future = Future()

        def task() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = fn(Context(self))
            except Exception as ex:
                _log.error("process_with_promise: Caught exception: %s", ex)
                future.set_exception(ex)
            else:
                future.set_result(result)

        self._submit(task)
        return future

    def close_when_ready(self, wait: bool = True) -> None:
        """Stop accepting new work once everything queued or running is done.

        Work already in flight may still queue more. With ``wait`` the call
        blocks until the worker threads have finished.
        """
        with self._cond:
            if not self._closed:
                self._closed = True
                self._work = False
                if not self._tasks and self._active == 0:
                    self._stopped = True
                self._cond.notify_all()
        if wait:
            _log.debug("close_when_ready: Waiting for work to end.")
            current = threading.current_thread()
            for worker in self._threads:
                if worker is not current:
                    worker.join()
            _log.debug("close_when_ready: Done waiting for work to end.")

    def __enter__(self) -> "RestClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close_when_ready(True)