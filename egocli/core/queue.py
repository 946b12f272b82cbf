"""
Single-concurrency execution queue
"""
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable


class ExecutionQueue:
    """
    FIFO queue that runs at most one task at a time.

    ``add()`` returns a Future that resolves with the task's result or raises
    its error. Tasks never overlap and complete in submission order.
    """

    def __init__(self, name: str = "ego-queue"):
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)
        self._pending: list[Future] = []

    def add(self, task: Callable, *args, **kwargs) -> Future:
        future = self._executor.submit(task, *args, **kwargs)
        self._pending.append(future)
        future.add_done_callback(self._forget)
        return future

    def run(self, task: Callable, *args, **kwargs):
        """Submit *task* and block until it finished; its error is re-raised."""
        return self.add(task, *args, **kwargs).result()

    def join(self):
        """Wait for every task submitted so far; they are gone from ``size`` afterwards."""
        for future in list(self._pending):
            try:
                future.result()
            except Exception:
                # the submitter owns the error through its Future
                pass
            # done callbacks may still be pending here
            self._forget(future)

    @property
    def size(self) -> int:
        return len(self._pending)

    def shutdown(self, wait: bool = True):
        self._executor.shutdown(wait=wait)

    def _forget(self, future: Future):
        try:
            self._pending.remove(future)
        except ValueError:
            pass
