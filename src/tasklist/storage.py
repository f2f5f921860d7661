"""
JSON persistence for the task store.

The file holds a flat array of objects with the string fields ``task``,
``priority``, ``date`` and ``time``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .store import TaskStore

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised when the task file cannot be read as a task list."""


def load_store(path: Path) -> TaskStore:
    """
    Load a task store from disk.

    Parameters
    ----------
    path : Path
        JSON task file.

    Returns
    -------
    TaskStore
        Loaded store; empty when the file does not exist.

    Raises
    ------
    StorageError
        If the file is not a JSON array of task records.
    """
    if not path.exists():
        logger.debug("No task file at %s; starting empty", path)
        return TaskStore()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise StorageError(f"unable to read {path}: {exc}") from exc
    if not isinstance(data, list):
        raise StorageError(f"{path} does not contain a task list")
    try:
        store = TaskStore.from_records(data)
    except (KeyError, TypeError, ValueError) as exc:
        raise StorageError(f"{path} has an invalid task record: {exc}") from exc
    logger.debug("Loaded %d tasks from %s", len(store), path)
    return store


def save_store(store: TaskStore, path: Path) -> Path:
    """
    Write a task store to disk.

    Parameters
    ----------
    store : TaskStore
        Store to persist.
    path : Path
        Destination JSON file; parent directories are created.

    Returns
    -------
    Path
        Path where the tasks were saved.

    Raises
    ------
    StorageError
        If the file or its parent directory cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(store.to_records(), indent=2), encoding="utf-8")
    except OSError as exc:
        raise StorageError(f"unable to save {path}: {exc}") from exc
    logger.debug("Saved %d tasks to %s", len(store), path)
    return path
