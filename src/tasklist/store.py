#!/usr/bin/env python3
"""
Ordered, position-addressed task store.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

logger = logging.getLogger(__name__)

PRIORITY_CODES = ("C", "H", "N", "L")
FIELDS = ("priority", "date", "time", "task")

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
_TIME_RE = re.compile(r"^(\d{2}):(\d{2})$", re.ASCII)


class TaskStoreError(Exception):
    """Recoverable failure of a store operation."""


class TaskOutOfRangeError(TaskStoreError):
    """Raised when a position is outside ``1..len(store)``."""

    def __init__(self, position: int, size: int):
        self.position = position
        self.size = size
        if size:
            message = f"Invalid task number {position} (expected 1-{size})"
        else:
            message = f"Invalid task number {position} (no tasks)"
        super().__init__(message)


class EmptyTaskError(TaskStoreError):
    """Raised when a task body is blank."""

    def __init__(self) -> None:
        super().__init__("The task is blank")


def check_priority(value: str) -> str:
    if value not in PRIORITY_CODES:
        raise ValueError(f"Invalid priority code: {value!r}")
    return value


def check_date(value: str) -> str:
    """
    Ensure a date string is a normalized ``YYYY-MM-DD`` calendar date.

    Examples
    --------
    >>> check_date("2024-02-29")
    '2024-02-29'
    """
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValueError(f"Date is not normalized: {value!r}")
    date.fromisoformat(value)
    return value


def check_time(value: str) -> str:
    """
    Ensure a time string is a normalized 24-hour ``HH:MM`` value.

    Examples
    --------
    >>> check_time("23:59")
    '23:59'
    """
    match = _TIME_RE.match(value) if isinstance(value, str) else None
    if not match or int(match.group(1)) > 23 or int(match.group(2)) > 59:
        raise ValueError(f"Time is not normalized: {value!r}")
    return value


@dataclass
class Task:
    """
    A single to-do entry.

    Attributes
    ----------
    text : str
        Task body; may contain embedded line breaks.
    priority : str
        One of C (critical), H (high), N (normal) or L (low).
    date : str
        Due date as ``YYYY-MM-DD``.
    time : str
        Due time as ``HH:MM``.
    """

    text: str
    priority: str
    date: str
    time: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str) or not self.text.strip():
            raise ValueError(f"Task body must be non-blank text: {self.text!r}")
        check_priority(self.priority)
        check_date(self.date)
        check_time(self.time)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Task":
        """
        Build a task from its persisted mapping.

        Examples
        --------
        >>> Task.from_record(
        ...     {"task": "Buy milk", "priority": "C", "date": "2024-03-01", "time": "09:00"}
        ... )
        Task(text='Buy milk', priority='C', date='2024-03-01', time='09:00')
        >>> Task.from_record(
        ...     {"task": None, "priority": "C", "date": "2024-03-01", "time": "09:00"}
        ... )
        Traceback (most recent call last):
        ...
        TypeError: Task field 'task' must be a string, not NoneType
        """
        values = {}
        for key in ("task", "priority", "date", "time"):
            value = record[key]
            if not isinstance(value, str):
                raise TypeError(
                    f"Task field {key!r} must be a string, not {type(value).__name__}"
                )
            values[key] = value
        return cls(
            text=values["task"],
            priority=values["priority"],
            date=values["date"],
            time=values["time"],
        )

    def to_record(self) -> Dict[str, str]:
        return {
            "task": self.text,
            "priority": self.priority,
            "date": self.date,
            "time": self.time,
        }


class TaskStore:
    """
    Ordered collection of tasks addressed by 1-based position.

    Insertion order is display order. Deleting a task shifts every later
    task down by one position.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = list(tasks) if tasks is not None else []

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "TaskStore":
        return cls(Task.from_record(record) for record in records)

    def to_records(self) -> List[Dict[str, str]]:
        return [task.to_record() for task in self._tasks]

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def __getitem__(self, position: int) -> Task:
        return self._tasks[self._index(position)]

    def __repr__(self) -> str:
        return f"TaskStore({self._tasks!r})"

    def tasks(self) -> List[Task]:
        return list(self._tasks)

    def _index(self, position: int) -> int:
        if isinstance(position, bool) or not 1 <= position <= len(self._tasks):
            raise TaskOutOfRangeError(position, len(self._tasks))
        return position - 1

    def add(self, text: str, priority: str, date: str, time: str) -> Task:
        """
        Append a task to the end of the store.

        Parameters
        ----------
        text : str
            Task body.
        priority : str
            Priority code.
        date : str
            Normalized due date.
        time : str
            Normalized due time.

        Returns
        -------
        Task
            The stored task.

        Raises
        ------
        EmptyTaskError
            If ``text`` is blank after trimming.

        Examples
        --------
        >>> store = TaskStore()
        >>> store.add("Buy milk", "C", "2024-03-01", "09:00").text
        'Buy milk'
        >>> len(store)
        1
        """
        if not text.strip():
            raise EmptyTaskError()
        task = Task(text=text, priority=priority, date=date, time=time)
        self._tasks.append(task)
        logger.debug("Added task %d: %r", len(self._tasks), task)
        return task

    def edit_field(self, position: int, field: str, value: str) -> Task:
        """
        Replace one field of the task at ``position``.

        Parameters
        ----------
        position : int
            1-based task position.
        field : str
            One of ``priority``, ``date``, ``time`` or ``task``.
        value : str
            Normalized replacement value.

        Returns
        -------
        Task
            The edited task.

        Raises
        ------
        TaskOutOfRangeError
            If ``position`` is outside ``1..len(store)``.
        EmptyTaskError
            If a replacement body is blank.
        ValueError
            If ``field`` is unknown or ``value`` is not normalized.
        """
        index = self._index(position)
        task = self._tasks[index]
        if field == "priority":
            task.priority = check_priority(value)
        elif field == "date":
            task.date = check_date(value)
        elif field == "time":
            task.time = check_time(value)
        elif field == "task":
            if not value.strip():
                raise EmptyTaskError()
            task.text = value
        else:
            raise ValueError(f"Unknown task field: {field!r}")
        logger.debug("Edited %s of task %d", field, position)
        return task

    def delete(self, position: int) -> Task:
        """
        Remove and return the task at ``position``.

        Raises
        ------
        TaskOutOfRangeError
            If ``position`` is outside ``1..len(store)``.

        Examples
        --------
        >>> store = TaskStore()
        >>> _ = store.add("First", "N", "2024-03-01", "09:00")
        >>> _ = store.add("Second", "L", "2024-03-02", "10:00")
        >>> store.delete(1).text
        'First'
        >>> store[1].text
        'Second'
        """
        task = self._tasks.pop(self._index(position))
        logger.debug("Deleted task %d", position)
        return task
