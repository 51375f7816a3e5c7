"""Service locator for process-wide file store components."""

import threading
from typing import Optional

from filestore.owner_directory import OwnerDirectory
from filestore.snapshot import SnapshotStore

_owner_directory: Optional[OwnerDirectory] = None
_snapshot_store: Optional[SnapshotStore] = None
_init_lock = threading.Lock()


def set_owner_directory(directory: OwnerDirectory):
    """Set global owner directory instance"""
    global _owner_directory
    _owner_directory = directory


def get_owner_directory() -> OwnerDirectory:
    """Get global owner directory instance, creating an empty one if none was set"""
    global _owner_directory
    if _owner_directory is None:
        with _init_lock:
            if _owner_directory is None:
                _owner_directory = OwnerDirectory()
    return _owner_directory


def set_snapshot_store(store: SnapshotStore):
    """Set global snapshot store instance"""
    global _snapshot_store
    _snapshot_store = store


def get_snapshot_store() -> SnapshotStore:
    """Get global snapshot store instance, defaulting to the configured path"""
    global _snapshot_store
    if _snapshot_store is None:
        with _init_lock:
            if _snapshot_store is None:
                _snapshot_store = SnapshotStore()
    return _snapshot_store
