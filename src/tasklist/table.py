#!/usr/bin/env python3
r"""
Fixed-width bordered table rendering for the task list.

Every cell is padded by display width: ANSI escape sequences take no
terminal cells, so a color mark such as ``"\x1b[101m \x1b[0m"`` counts as
one cell even though it is eleven characters long.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, List

from .classify import due_color, priority_color
from .store import Task

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")
EMPTY_MESSAGE = "No tasks have been input"


@dataclass(frozen=True)
class Column:
    """
    Table column descriptor.

    Attributes
    ----------
    width : int
        Cell width in terminal cells.
    header : str
        Header label.
    content : Callable[[int, Task, date], str]
        Cell text for a task at a 1-based position, given today's date.
    header_shift : int
        Extra left shift of the centered header label.
    """

    width: int
    header: str
    content: Callable[[int, Task, date], str]
    header_shift: int = 0


COLUMNS = (
    Column(4, "N", lambda position, task, today: str(position)),
    Column(12, "Date", lambda position, task, today: task.date),
    Column(7, "Time", lambda position, task, today: task.time),
    Column(3, "P", lambda position, task, today: priority_color(task.priority).mark),
    Column(3, "D", lambda position, task, today: due_color(task.date, today).mark),
    Column(44, "Task", lambda position, task, today: task.text, header_shift=1),
)
CELL_COLUMNS = COLUMNS[:-1]
TASK_COLUMN = COLUMNS[-1]


def display_width(text: str) -> int:
    r"""
    Return the number of terminal cells ``text`` occupies.

    Examples
    --------
    >>> display_width("Date")
    4
    >>> display_width("\x1b[101m \x1b[0m")
    1
    """
    return len(ANSI_RE.sub("", text))


def center(text: str, width: int, shift: int = 0) -> str:
    """
    Center ``text`` in a cell of ``width`` terminal cells.

    The left pad is ``(width - display_width(text)) // 2 - shift`` and the
    right pad takes the remainder.

    Examples
    --------
    >>> center("N", 4)
    ' N  '
    >>> center("Time", 7)
    ' Time  '
    >>> len(center("Task", 44, shift=1))
    44
    """
    text_width = display_width(text)
    left = (width - text_width) // 2 - shift
    return " " * left + text + " " * (width - text_width - left)


def wrap_task_text(text: str, width: int = TASK_COLUMN.width) -> List[str]:
    """
    Split a task body into chunks of at most ``width`` characters.

    Embedded line breaks are honored first. Empty lines produce no chunk,
    and a body with no chunks at all yields a single blank one.

    Examples
    --------
    >>> [len(chunk) for chunk in wrap_task_text("a" * 50)]
    [44, 6]
    >>> wrap_task_text("Buy\\nmilk")
    ['Buy', 'milk']
    >>> wrap_task_text("")
    ['']
    """
    chunks = [
        segment[start:start + width]
        for segment in text.split("\n")
        for start in range(0, len(segment), width)
    ]
    return chunks or [""]


def border_line() -> str:
    """
    Examples
    --------
    >>> border_line()[:20]
    '+----+------------+-'
    >>> len(border_line())
    80
    """
    return "+" + "".join("-" * column.width + "+" for column in COLUMNS)


def header_line() -> str:
    return "|" + "".join(
        center(column.header, column.width, column.header_shift) + "|"
        for column in COLUMNS
    )


def _continuation_prefix() -> str:
    return "|" + "".join(" " * column.width + "|" for column in CELL_COLUMNS)


def render_task_lines(position: int, task: Task, today: date) -> List[str]:
    """
    Render one task as physical table lines, ending with a border.

    Parameters
    ----------
    position : int
        1-based position shown in the N column.
    task : Task
        Task to render.
    today : date
        Reference date for the due mark.

    Returns
    -------
    List[str]
        One line per wrapped body chunk, then a border line.
    """
    cells = "|" + "".join(
        center(column.content(position, task, today), column.width) + "|"
        for column in CELL_COLUMNS
    )
    width = TASK_COLUMN.width
    first, *rest = wrap_task_text(task.text, width)
    lines = [cells + first.ljust(width) + "|"]
    prefix = _continuation_prefix()
    for chunk in rest:
        lines.append(prefix + chunk.ljust(width) + "|")
    lines.append(border_line())
    return lines


def render_table(tasks: Iterable[Task], today: date) -> str:
    """
    Render tasks as a bordered table.

    Parameters
    ----------
    tasks : Iterable[Task]
        Tasks in display order, typically a ``TaskStore``.
    today : date
        Reference date for the due marks.

    Returns
    -------
    str
        Table text without a trailing newline, or ``EMPTY_MESSAGE`` when
        there are no tasks.

    Examples
    --------
    >>> render_table([], date(2024, 3, 1))
    'No tasks have been input'
    """
    ordered = list(tasks)
    if not ordered:
        return EMPTY_MESSAGE
    border = border_line()
    lines = [border, header_line(), border]
    for position, task in enumerate(ordered, start=1):
        lines.extend(render_task_lines(position, task, today))
    return "\n".join(lines)
