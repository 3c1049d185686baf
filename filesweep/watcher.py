"""Watch a directory and report newly created files."""

import asyncio
import os
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from filesweep.errors import WatchError
from filesweep.logsetup import log_debug, log_error, log_info


class _CreatedFileHandler(FileSystemEventHandler):
    """Forward creation events from the observer thread into an asyncio queue."""

    def __init__(self, loop, events):
        super().__init__()
        self._loop = loop
        self._events = events

    def on_created(self, event):
        log_debug("Received watch event", repr(event))
        if event.is_directory:
            return
        path = Path(os.fsdecode(event.src_path))
        try:
            self._loop.call_soon_threadsafe(self._events.put_nowait, path)
        except RuntimeError as exc:
            log_error("Failed to send notify event", exc)


def _start_observer(path, handler, recursive):
    observer = Observer()
    observer.schedule(handler, str(path), recursive=recursive)
    observer.start()
    return observer


def _stop_observer(observer):
    observer.stop()
    observer.join()


async def watch_files(path, queue, config):
    """Put the path of every file created under ``path`` onto ``queue``.

    Runs until cancelled. Raises WatchError if the directory cannot be watched.
    """
    path = Path(path)
    if not path.is_dir():
        msg = f"{path}: directory does not exist"
        log_error("Failed to watch directory", msg)
        raise WatchError(msg)

    loop = asyncio.get_running_loop()
    events = asyncio.Queue()
    handler = _CreatedFileHandler(loop, events)
    try:
        observer = await asyncio.to_thread(_start_observer, path, handler, config.recursive)
    except OSError as exc:
        log_error("Failed to watch directory", f"{path}: {exc}")
        raise WatchError(exc) from exc

    log_info("Watching directory", f"{path}")
    delay = config.processing_delay_ms / 1000
    try:
        while True:
            created = await events.get()
            if not created.is_file():
                continue
            log_info("New file detected", f"{created}")
            # Give the writer a moment to finish before the file is handed on.
            await asyncio.sleep(delay)
            await queue.put(created)
    finally:
        await asyncio.to_thread(_stop_observer, observer)