"""
Interactive field prompts and the validators behind them.
"""

from __future__ import annotations

import re
import sys
from datetime import date
from typing import Callable, Sequence

from .store import FIELDS, PRIORITY_CODES

PRIORITY_PROMPT = "Input the task priority (C, H, N, L):"
DATE_PROMPT = "Input the date (yyyy-mm-dd):"
TIME_PROMPT = "Input the time (hh:mm):"
TASK_PROMPT = "Input a new task (enter a blank line to end):"
FIELD_PROMPT = "Input a field to edit (priority, date, time, task):"

INVALID_DATE = "The input date is invalid"
INVALID_TIME = "The input time is invalid"
INVALID_TASK_NUMBER = "Invalid task number"
INVALID_FIELD = "Invalid field"

_DATE_INPUT_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$", re.ASCII)
_TIME_INPUT_RE = re.compile(r"^(\d{1,2}):(\d{1,2})$", re.ASCII)


def parse_priority(raw: str) -> str:
    """
    Validate a priority code.

    Examples
    --------
    >>> parse_priority(" h ")
    'H'
    """
    code = raw.strip().upper()
    if code not in PRIORITY_CODES:
        raise ValueError(f"Invalid priority: {raw!r}")
    return code


def normalize_date(raw: str) -> str:
    """
    Validate a due date and return it zero-padded.

    Parameters
    ----------
    raw : str
        User input such as ``2024-3-1``.

    Returns
    -------
    str
        Normalized ``YYYY-MM-DD`` date.

    Raises
    ------
    ValueError
        If the input is not a real calendar date with a 4-digit year.

    Examples
    --------
    >>> normalize_date("2024-3-1")
    '2024-03-01'
    >>> normalize_date("2023-02-29")
    Traceback (most recent call last):
    ...
    ValueError: The input date is invalid
    """
    match = _DATE_INPUT_RE.match(raw.strip())
    if not match:
        raise ValueError(INVALID_DATE)
    year, month, day = (int(part) for part in match.groups())
    try:
        parsed = date(year, month, day)
    except ValueError:
        raise ValueError(INVALID_DATE) from None
    return parsed.isoformat()


def normalize_time(raw: str) -> str:
    """
    Validate a 24-hour time and return it zero-padded.

    Examples
    --------
    >>> normalize_time("9:5")
    '09:05'
    >>> normalize_time("24:00")
    Traceback (most recent call last):
    ...
    ValueError: The input time is invalid
    """
    match = _TIME_INPUT_RE.match(raw.strip())
    if not match:
        raise ValueError(INVALID_TIME)
    hours, minutes = (int(part) for part in match.groups())
    if hours > 23 or minutes > 59:
        raise ValueError(INVALID_TIME)
    return f"{hours:02d}:{minutes:02d}"


def parse_task_number(raw: str, count: int) -> int:
    """
    Validate a 1-based task number.

    Examples
    --------
    >>> parse_task_number("2", 3)
    2
    >>> parse_task_number("0", 3)
    Traceback (most recent call last):
    ...
    ValueError: Invalid task number
    """
    text = raw.strip()
    if not text.isascii() or not text.isdigit() or not 1 <= int(text) <= count:
        raise ValueError(INVALID_TASK_NUMBER)
    return int(text)


def prompt_choice(
    prompt: str,
    choices: Sequence[str],
    input_func: Callable[[str], str] = input,
) -> str:
    """
    Ask for one of a fixed set of words, with completion on a terminal.

    Parameters
    ----------
    prompt : str
        Prompt line.
    choices : Sequence[str]
        Words offered for completion.
    input_func : Callable[[str], str], optional
        Input function (default: input).

    Returns
    -------
    str
        Raw user input.
    """
    message = f"{prompt}\n"
    if input_func is not input or not sys.stdin.isatty():
        return input_func(message)
    from prompt_toolkit import prompt as pt_prompt
    from prompt_toolkit.completion import WordCompleter

    completer = WordCompleter(list(choices), ignore_case=True)
    return pt_prompt(message, completer=completer)


def prompt_priority(input_func: Callable[[str], str] = input) -> str:
    while True:
        raw = prompt_choice(PRIORITY_PROMPT, PRIORITY_CODES, input_func=input_func)
        try:
            return parse_priority(raw)
        except ValueError:
            continue


def prompt_date(input_func: Callable[[str], str] = input) -> str:
    while True:
        try:
            return normalize_date(input_func(f"{DATE_PROMPT}\n"))
        except ValueError as exc:
            print(exc)


def prompt_time(input_func: Callable[[str], str] = input) -> str:
    while True:
        try:
            return normalize_time(input_func(f"{TIME_PROMPT}\n"))
        except ValueError as exc:
            print(exc)


def prompt_task_text(input_func: Callable[[str], str] = input) -> str:
    """
    Read a multi-line task body until a blank line.

    Parameters
    ----------
    input_func : Callable[[str], str], optional
        Input function (default: input).

    Returns
    -------
    str
        Stripped lines joined with newlines; empty when the first line is
        blank.
    """
    lines = []
    message = f"{TASK_PROMPT}\n"
    while True:
        line = input_func(message).strip()
        if not line:
            break
        lines.append(line)
        message = ""
    return "\n".join(lines)


def prompt_task_number(count: int, input_func: Callable[[str], str] = input) -> int:
    while True:
        try:
            return parse_task_number(input_func(f"Input the task number (1-{count}):\n"), count)
        except ValueError as exc:
            print(exc)


def prompt_field(input_func: Callable[[str], str] = input) -> str:
    while True:
        field = prompt_choice(FIELD_PROMPT, FIELDS, input_func=input_func).strip().lower()
        if field in FIELDS:
            return field
        print(INVALID_FIELD)


FIELD_PROMPTS = {
    "priority": prompt_priority,
    "date": prompt_date,
    "time": prompt_time,
    "task": prompt_task_text,
}


def prompt_field_value(field: str, input_func: Callable[[str], str] = input) -> str:
    """
    Prompt for a new value of ``field`` using that field's validator.
    """
    return FIELD_PROMPTS[field](input_func=input_func)
