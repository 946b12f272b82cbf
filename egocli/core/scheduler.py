"""
Periodic jobs (cron expressions) and filesystem watching
"""
import os
import threading
import time
from concurrent.futures import Future
from pathlib import Path
from typing import Callable, Optional, Sequence

from croniter import croniter
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from ..utils.logging import err, vlog
from .queue import ExecutionQueue

DEFAULT_CRON = "* * * * *"

WatchAction = Callable[[str, str], None]


def _report(exc: BaseException):
    err(f"{type(exc).__name__}: {exc}")


# ══════════════════════════════════════════════════════════════════════════════
#  CRON JOBS
# ══════════════════════════════════════════════════════════════════════════════

class CronJob:
    """
    Calls *action* whenever the cron expression matches.

    Five fields (minute precision) or six fields with seconds first.
    A tick is dropped when the previous invocation is still running.
    """

    def __init__(self, expression: str, action: Callable[[], None],
                 on_error: Callable[[BaseException], None] = _report):
        self.expression = (expression or "").strip() or DEFAULT_CRON
        self.action = action
        self.on_error = on_error
        self._with_seconds = len(self.expression.split()) == 6
        # validates the expression
        self._iter(time.time())

        self._busy = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.runs = 0
        self.skipped = 0

    def _iter(self, start: float) -> croniter:
        if self._with_seconds:
            return croniter(self.expression, start, second_at_beginning=True)
        return croniter(self.expression, start)

    def next_fire_time(self, after: float) -> float:
        return self._iter(after).get_next(float)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name=f"cron:{self.expression}", daemon=True)
        self._thread.start()

    def stop(self):
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=5)
        self._thread = None

    def tick(self) -> bool:
        """Start one invocation; False if the previous one is still running."""
        if not self._busy.acquire(blocking=False):
            self.skipped += 1
            vlog(f"[job] '{self.expression}' still running, tick skipped")
            return False
        threading.Thread(target=self._invoke, daemon=True).start()
        return True

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Block until no invocation is running."""
        if self._busy.acquire(timeout=-1 if timeout is None else timeout):
            self._busy.release()
            return True
        return False

    def _invoke(self):
        try:
            self.action()
        except Exception as exc:
            self.on_error(exc)
        finally:
            self.runs += 1
            self._busy.release()

    def _loop(self):
        while not self._stop.is_set():
            now = time.time()
            delay = max(self.next_fire_time(now) - now, 0)
            if self._stop.wait(delay):
                break
            self.tick()


# ══════════════════════════════════════════════════════════════════════════════
#  FILE WATCHER
# ══════════════════════════════════════════════════════════════════════════════

class _EventHandler(FileSystemEventHandler):
    """Translates watchdog events into ``file:*`` / ``dir:*`` names."""

    def __init__(self, watcher: "FileWatcher"):
        super().__init__()
        self.watcher = watcher

    def on_created(self, event):
        self.watcher.dispatch("dir:add" if event.is_directory else "file:add", event.src_path)

    def on_modified(self, event):
        if not event.is_directory:
            self.watcher.dispatch("file:change", event.src_path)

    def on_deleted(self, event):
        self.watcher.dispatch("dir:unlink" if event.is_directory else "file:unlink", event.src_path)

    def on_moved(self, event):
        kind = "dir" if event.is_directory else "file"
        self.watcher.dispatch(f"{kind}:unlink", event.src_path)
        self.watcher.dispatch(f"{kind}:add", event.dest_path)


class FileWatcher:
    """
    Watches *root* recursively and runs every action for every event, one
    event at a time, through the execution queue. Events that arrive before
    the watcher is ready are dropped.
    """

    def __init__(self, root: Path, actions: Sequence[WatchAction], queue: ExecutionQueue,
                 on_error: Callable[[BaseException], None] = _report,
                 observer_factory=Observer):
        self.root = Path(root).resolve()
        self.actions = list(actions)
        self.queue = queue
        self.on_error = on_error
        self._observer_factory = observer_factory
        self._observer = None
        self.ready = False

    def start(self):
        self._observer = self._observer_factory()
        self._observer.schedule(_EventHandler(self), str(self.root), recursive=True)
        self._observer.start()
        self.ready = True

    def stop(self):
        self.ready = False
        if self._observer is not None:
            self._observer.stop()
            self._observer.join()
            self._observer = None

    def dispatch(self, event: str, path) -> Optional[Future]:
        if not self.ready:
            return None
        if isinstance(path, bytes):
            path = os.fsdecode(path)
        rel = os.path.relpath(path, self.root)
        vlog(f"[watch] {event} {rel}")
        return self.queue.add(self._run_actions, event, rel)

    def _run_actions(self, event: str, rel: str):
        for action in self.actions:
            try:
                action(event, rel)
            except Exception as exc:
                self.on_error(exc)
