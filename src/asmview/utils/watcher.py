import time
from pathlib import Path
from typing import Callable, Optional
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler


class ListingUpdateHandler(FileSystemEventHandler):
    """
    Fires `callback(path)` when the watched listing is rewritten.
    """
    def __init__(self, target_file: str, callback: Callable[[str], None], debounce_seconds: float = 0.5):
        self.target_file = str(Path(target_file).resolve())
        self.callback = callback
        self.last_triggered = 0.0
        self.debounce_seconds = debounce_seconds

    def _matches(self, path) -> bool:
        return str(Path(path).resolve()) == self.target_file

    def _trigger(self):
        now = time.time()
        if now - self.last_triggered > self.debounce_seconds:
            self.callback(self.target_file)
            self.last_triggered = now

    def on_modified(self, event):
        if not event.is_directory and self._matches(event.src_path):
            self._trigger()

    def on_created(self, event):
        if not event.is_directory and self._matches(event.src_path):
            self._trigger()

    def on_moved(self, event):
        # Editors that save via rename-over
        if not event.is_directory and self._matches(event.dest_path):
            self._trigger()


class FileWatcher:
    """
    Manages the watchdog observer thread.
    """
    def __init__(self):
        self.observer = Observer()
        self.watch = None
        self.handler: Optional[ListingUpdateHandler] = None

    def start_watching(self, file_path: str, callback: Callable[[str], None]):
        path = Path(file_path).resolve()
        if not path.exists():
            raise FileNotFoundError(f"Cannot watch non-existent file: {file_path}")

        self.handler = ListingUpdateHandler(str(path), callback)
        self.watch = self.observer.schedule(self.handler, str(path.parent), recursive=False)
        self.observer.start()

    def stop_watching(self):
        if self.observer.is_alive():
            self.observer.stop()
            self.observer.join()
