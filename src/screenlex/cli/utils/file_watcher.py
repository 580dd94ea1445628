"""File watching utilities for screenlex CLI."""

from __future__ import annotations

import threading
import time
from pathlib import Path
from typing import Protocol

from watchdog.events import FileSystemEvent, FileSystemEventHandler

from screenlex.api import FountainAnalyzer
from screenlex.config import get_logger
from screenlex.exceptions import ScreenlexError
from screenlex.outline import Scene, SceneScanner

logger = get_logger(__name__)


class OutlineCallback(Protocol):
    """Protocol for outline update callbacks."""

    def __call__(
        self, status: str, path: Path, scenes: list[Scene], error: str | None = None
    ) -> None:
        """Report an outline refresh.

        Args:
            status: Status type (updated, unchanged, error)
            path: File path being watched
            scenes: Current scene list
            error: Optional error message
        """
        ...


class FountainFileHandler(FileSystemEventHandler):
    """Refresh the scene outline of one Fountain file whenever it changes.

    The file is fed to a single ``SceneScanner`` so that each save only
    re-tokenizes the lines that changed.
    """

    def __init__(
        self,
        path: Path,
        analyzer: FountainAnalyzer,
        callback: OutlineCallback | None = None,
        debounce_seconds: float = 0.2,
    ) -> None:
        """Initialize the handler.

        Args:
            path: Fountain file to watch
            analyzer: Analyzer used to load the file with the active settings
            callback: Callback for outline updates
            debounce_seconds: Quiet interval that coalesces a burst of events
        """
        self.path = path.resolve()
        self.analyzer = analyzer
        self.callback = callback
        self.debounce_seconds = debounce_seconds
        self.last_processed = float("-inf")
        self._lock = threading.Lock()
        self._pending: threading.Timer | None = None
        self.scanner = SceneScanner(
            analyzer.load(self.path),
            budget=analyzer.settings.scene_scan_budget,
        )

    @property
    def scenes(self) -> list[Scene]:
        return self.scanner.scenes

    def is_watched(self, event: FileSystemEvent) -> bool:
        """Check whether an event concerns the watched file."""
        if event.is_directory:
            return False
        # Editors often save by renaming a temporary file over the original
        candidates = [event.src_path, getattr(event, "dest_path", "")]
        for candidate in candidates:
            if isinstance(candidate, bytes):
                candidate = candidate.decode()
            if candidate and Path(candidate).resolve() == self.path:
                return True
        return False

    def on_modified(self, event: FileSystemEvent) -> None:
        if self.is_watched(event):
            self.refresh()

    def on_created(self, event: FileSystemEvent) -> None:
        if self.is_watched(event):
            self.refresh()

    def on_moved(self, event: FileSystemEvent) -> None:
        if self.is_watched(event):
            self.refresh()

    def refresh(self, force: bool = False) -> list[Scene] | None:
        """Reload the file and rebuild the outline.

        Events inside the debounce interval are not dropped: a reload is
        scheduled for the end of the interval so the outline always ends up
        built from the last write of a burst.

        Args:
            force: Ignore the debounce interval

        Returns:
            The refreshed scene list, or None if deferred or failed
        """
        with self._lock:
            now = time.monotonic()
            remaining = self.debounce_seconds - (now - self.last_processed)
            if not force and remaining > 0:
                self._schedule(remaining)
                return None
            self._cancel_pending()
            self.last_processed = now
            return self._reload()

    def flush(self) -> list[Scene] | None:
        """Run a scheduled reload now, if one is pending."""
        with self._lock:
            pending = self._pending is not None
        return self.refresh(force=True) if pending else None

    def stop(self) -> None:
        """Cancel any scheduled reload."""
        with self._lock:
            self._cancel_pending()

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def _schedule(self, delay: float) -> None:
        self._cancel_pending()
        timer = threading.Timer(delay, lambda: self._fire(timer))
        timer.daemon = True
        self._pending = timer
        timer.start()

    def _fire(self, timer: threading.Timer) -> None:
        with self._lock:
            if self._pending is not timer:
                return
        self.refresh(force=True)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _reload(self) -> list[Scene] | None:
        try:
            text = self.analyzer.load(self.path)
        except ScreenlexError as e:
            logger.warning(
                "Could not reload file", path=str(self.path), error=e.message
            )
            if self.callback:
                self.callback("error", self.path, self.scanner.scenes, e.message)
            return None

        previous = self.scanner.scenes
        scenes = self.scanner.update(text)
        status = "updated" if scenes != previous else "unchanged"
        logger.debug("Outline refreshed", path=str(self.path), scenes=len(scenes))
        if self.callback:
            self.callback(status, self.path, scenes)
        return scenes
