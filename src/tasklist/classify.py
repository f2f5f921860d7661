"""
Priority and due-date color marks.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Union


class Color(Enum):
    """
    Colored one-cell marks shown in the P and D columns.

    Each value is a single space on an ANSI bright background followed by a
    reset, so it occupies one terminal cell.
    """

    RED = "\x1b[101m \x1b[0m"
    YELLOW = "\x1b[103m \x1b[0m"
    GREEN = "\x1b[102m \x1b[0m"
    BLUE = "\x1b[104m \x1b[0m"

    @property
    def mark(self) -> str:
        return self.value


PRIORITY_COLORS = {
    "C": Color.RED,
    "H": Color.YELLOW,
    "N": Color.GREEN,
}


def priority_color(code: str) -> Color:
    """
    Return the mark color for a priority code.

    Parameters
    ----------
    code : str
        Priority code (C, H, N or L).

    Returns
    -------
    Color
        RED, YELLOW or GREEN for C, H and N; BLUE otherwise.

    Examples
    --------
    >>> priority_color("C").name
    'RED'
    >>> priority_color("L").name
    'BLUE'
    """
    return PRIORITY_COLORS.get(code, Color.BLUE)


def days_until(due_date: Union[date, str], today: date) -> int:
    """
    Return the signed number of days from ``today`` to ``due_date``.

    Parameters
    ----------
    due_date : Union[date, str]
        Due date, or its ``YYYY-MM-DD`` form.
    today : date
        Reference calendar date.

    Returns
    -------
    int
        Positive when the due date is in the future.

    Examples
    --------
    >>> days_until("2024-03-10", date(2024, 3, 1))
    9
    >>> days_until(date(2023, 12, 31), date(2024, 1, 1))
    -1
    """
    if isinstance(due_date, str):
        due_date = date.fromisoformat(due_date)
    return (due_date - today).days


def due_color(due_date: Union[date, str], today: date) -> Color:
    """
    Return the urgency color for a due date.

    Only the sign of the day difference matters: GREEN for future dates,
    YELLOW for today, RED when overdue.

    Parameters
    ----------
    due_date : Union[date, str]
        Due date, or its ``YYYY-MM-DD`` form.
    today : date
        Reference calendar date (not a timestamp).

    Returns
    -------
    Color
        Urgency color.

    Examples
    --------
    >>> due_color("2024-03-01", date(2024, 3, 1)).name
    'YELLOW'
    >>> due_color("2024-03-02", date(2024, 3, 1)).name
    'GREEN'
    >>> due_color("2024-02-29", date(2024, 3, 1)).name
    'RED'
    """
    remaining = days_until(due_date, today)
    if remaining > 0:
        return Color.GREEN
    if remaining == 0:
        return Color.YELLOW
    return Color.RED
