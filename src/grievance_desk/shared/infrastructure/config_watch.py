"""
Watched YAML Configuration
===========================

Base class for configuration that is loaded from a YAML file and
hot-reloaded when the file changes.

Each reload parses the file into a brand new immutable snapshot and swaps
the reference under a lock, so readers always see one consistent snapshot.
"""

import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Generic, Optional, TypeVar

import yaml
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler

from grievance_desk.core import ConfigurationException
from grievance_desk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

SnapshotT = TypeVar("SnapshotT")


class ConfigFileHandler(FileSystemEventHandler):
    """Watchdog event handler for config file changes."""

    def __init__(self, config_manager: "WatchedYAMLConfig", config_path: Path):
        self.config_manager = config_manager
        self.config_path = config_path
        super().__init__()

    def on_modified(self, event):
        """Handle file modification event."""
        if event.is_directory:
            return
        if Path(event.src_path).resolve() == self.config_path.resolve():
            logger.info(f"Config file changed: {event.src_path}")
            self.config_manager.reload()


class WatchedYAMLConfig(ABC, Generic[SnapshotT]):
    """
    Thread-safe YAML configuration manager with hot-reload support.

    Subclasses turn the parsed YAML mapping into a snapshot object via
    ``build_snapshot``; a missing file falls back to ``default_snapshot``.
    """

    def __init__(self):
        self._snapshot: Optional[SnapshotT] = None
        self._lock = threading.Lock()
        self._path: Optional[Path] = None
        self._observer = None

    @abstractmethod
    def build_snapshot(self, data: dict) -> SnapshotT:
        """Build a snapshot from the parsed YAML mapping."""

    @abstractmethod
    def default_snapshot(self) -> SnapshotT:
        """Snapshot used when no config file exists."""

    def load(self, path: Path) -> SnapshotT:
        """Initial configuration load."""
        self._path = Path(path)
        snapshot = self._load_from_file(self._path)
        with self._lock:
            self._snapshot = snapshot
        return snapshot

    def load_data(self, data: dict) -> SnapshotT:
        """Load configuration from an already-parsed mapping."""
        snapshot = self.build_snapshot(data)
        with self._lock:
            self._snapshot = snapshot
        return snapshot

    def _load_from_file(self, path: Path, initial: bool = True) -> SnapshotT:
        """
        Load and parse YAML config file.

        Only the initial load falls back to defaults; on reload a missing or
        empty file is an error so the current snapshot is kept.
        """
        if not path.exists():
            if not initial:
                raise ConfigurationException(f"Config file disappeared: {path}")
            logger.warning(f"Policy config file not found: {path}, using defaults")
            return self.default_snapshot()

        with open(path, "r") as f:
            try:
                data: Any = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationException(
                    f"Invalid YAML in {path}", {"error": str(e)}
                ) from e

        if data is None:
            if not initial:
                raise ConfigurationException(f"Config file is empty: {path}")
            data = {}

        if not isinstance(data, dict):
            raise ConfigurationException(
                f"Config file {path} must contain a mapping",
                {"type": type(data).__name__}
            )
        return self.build_snapshot(data)

    def reload(self) -> bool:
        """Reload configuration from file, keeping the old snapshot on failure."""
        if self._path is None:
            return False

        try:
            new_snapshot = self._load_from_file(self._path, initial=False)
        except ConfigurationException as e:
            logger.error(
                f"Failed to reload config: {e.message}",
                extra={"path": str(self._path), **e.details}
            )
            return False

        with self._lock:
            self._snapshot = new_snapshot
        logger.info("Configuration reloaded successfully", extra={"path": str(self._path)})
        return True

    def start_watching(self) -> None:
        """
        Start watching configuration file for changes.

        Skips watching if the file doesn't exist or the platform
        cannot provide file events.
        """
        if self._path is None:
            raise RuntimeError("Config not loaded. Call load() first.")

        if not self._path.exists():
            logger.info(f"Config file doesn't exist, skipping file watch: {self._path}")
            return

        try:
            self._observer = Observer()
            handler = ConfigFileHandler(self, self._path)
            self._observer.schedule(handler, str(self._path.parent), recursive=False)
            self._observer.start()
            logger.info(f"Started watching config file: {self._path}")
        except OSError as e:
            logger.warning(f"File watching not available, using static config: {e}")
            self._observer = None

    def stop_watching(self) -> None:
        """Stop watching configuration file (safe to call even if not watching)."""
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=5)
            self._observer = None

    @property
    def snapshot(self) -> SnapshotT:
        """Get current configuration snapshot."""
        with self._lock:
            snapshot = self._snapshot
        if snapshot is None:
            raise RuntimeError("Configuration not loaded")
        return snapshot
