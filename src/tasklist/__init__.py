#!/usr/bin/env python3
"""
Interactive task list with colored priority and due-date marks.
"""

import importlib
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from .config import Settings, load_settings, today_in_zone
from .logging_setup import configure_logging
from .prompts import (
    prompt_choice,
    prompt_date,
    prompt_field,
    prompt_field_value,
    prompt_priority,
    prompt_task_number,
    prompt_task_text,
    prompt_time,
)
from .storage import StorageError, load_store, save_store
from .store import EmptyTaskError, TaskStore, TaskStoreError
from .table import render_table

logger = logging.getLogger(__name__)

ACTIONS = ("add", "print", "edit", "delete", "end")
ACTION_PROMPT = "Input an action (add, print, edit, delete, end):"
INVALID_ACTION = "The input action is invalid"
EXIT_MESSAGE = "Tasklist exiting!"


def enable_line_editing(is_interactive: Optional[bool] = None) -> bool:
    """
    Enable readline-style line editing for interactive input prompts.

    Parameters
    ----------
    is_interactive : Optional[bool], optional
        Override for stdin TTY detection (default: sys.stdin.isatty()).

    Returns
    -------
    bool
        True when a readline-compatible module is available.

    Examples
    --------
    >>> enable_line_editing(is_interactive=False)
    False
    """
    if is_interactive is None:
        is_interactive = sys.stdin.isatty()
    if not is_interactive:
        return False

    for module_name in ("readline", "pyreadline3"):
        try:
            importlib.import_module(module_name)
        except ImportError:
            continue
        return True
    return False


def add_task(store: TaskStore, input_func: Callable[[str], str] = input) -> None:
    priority = prompt_priority(input_func=input_func)
    due_date = prompt_date(input_func=input_func)
    due_time = prompt_time(input_func=input_func)
    text = prompt_task_text(input_func=input_func)
    try:
        store.add(text, priority, due_date, due_time)
    except EmptyTaskError as exc:
        print(exc)


def edit_task(
    store: TaskStore,
    today: date,
    input_func: Callable[[str], str] = input,
) -> None:
    """
    Show the table, then replace one field of a chosen task.

    Parameters
    ----------
    store : TaskStore
        Store to edit.
    today : date
        Reference date for the displayed due marks.
    input_func : Callable[[str], str], optional
        Input function for prompts (default: input).

    Returns
    -------
    None
        Returns without prompting when the store is empty.
    """
    print(render_table(store, today))
    if not len(store):
        return
    position = prompt_task_number(len(store), input_func=input_func)
    field = prompt_field(input_func=input_func)
    value = prompt_field_value(field, input_func=input_func)
    store.edit_field(position, field, value)
    print("The task is changed")


def delete_task(
    store: TaskStore,
    today: date,
    input_func: Callable[[str], str] = input,
) -> None:
    print(render_table(store, today))
    if not len(store):
        return
    store.delete(prompt_task_number(len(store), input_func=input_func))
    print("The task is deleted")


def run_session(
    store: TaskStore,
    *,
    today_func: Callable[[], date],
    input_func: Callable[[str], str] = input,
) -> None:
    """
    Run the action loop until ``end`` or end of input.

    Parameters
    ----------
    store : TaskStore
        Store mutated by the session.
    today_func : Callable[[], date]
        Supplier of the reference date, called on every render.
    input_func : Callable[[str], str], optional
        Input function for prompts (default: input).

    Returns
    -------
    None
        The store is updated in place; persisting it is left to the caller.
    """
    while True:
        try:
            action = prompt_choice(ACTION_PROMPT, ACTIONS, input_func=input_func)
            action = action.strip().lower()
            if action == "end":
                break
            if action == "add":
                add_task(store, input_func=input_func)
            elif action == "print":
                print(render_table(store, today_func()))
            elif action == "edit":
                edit_task(store, today_func(), input_func=input_func)
            elif action == "delete":
                delete_task(store, today_func(), input_func=input_func)
            else:
                print(INVALID_ACTION)
        except TaskStoreError as exc:
            print(exc)
        except (EOFError, KeyboardInterrupt):
            print()
            break


def run_shell(settings: Settings, input_func: Callable[[str], str] = input) -> int:
    """
    Load the task file, run an interactive session, and save on exit.

    Parameters
    ----------
    settings : Settings
        Resolved settings.
    input_func : Callable[[str], str], optional
        Input function for prompts (default: input).

    Returns
    -------
    int
        Exit code.
    """
    try:
        store = load_store(settings.data_path)
    except StorageError as exc:
        print(f"tasklist: {exc}", file=sys.stderr)
        return 1
    run_session(
        store,
        today_func=lambda: today_in_zone(settings.utc_offset),
        input_func=input_func,
    )
    try:
        save_store(store, settings.data_path)
    except StorageError as exc:
        print(f"tasklist: {exc}", file=sys.stderr)
        return 1
    print(EXIT_MESSAGE)
    return 0


def print_tasks(settings: Settings) -> int:
    try:
        store = load_store(settings.data_path)
    except StorageError as exc:
        print(f"tasklist: {exc}", file=sys.stderr)
        return 1
    print(render_table(store, today_in_zone(settings.utc_offset)))
    return 0


def build_app():
    """
    Build the Typer app lazily to keep fast-path imports light.

    Returns
    -------
    typer.Typer
        Configured Typer application for the tasklist CLI.
    """
    import typer

    app = typer.Typer(help="Interactive task list with priority and due-date marks.")

    @app.callback(invoke_without_command=True)
    def root(
        ctx: typer.Context,
        file: Optional[Path] = typer.Option(
            None,
            "--file",
            help="Task list JSON file.",
        ),
        utc_offset: Optional[str] = typer.Option(
            None,
            "--utc-offset",
            help="Reference zone for due marks, e.g. -8 or UTC+05:30.",
        ),
        verbose: bool = typer.Option(
            False,
            "--verbose",
            help="Log diagnostics to stderr.",
        ),
    ):
        """
        Run the interactive task list when no command is given.
        """
        configure_logging(verbose)
        try:
            settings = load_settings(data_path=file, utc_offset=utc_offset)
        except ValueError as exc:
            print(f"tasklist: {exc}", file=sys.stderr)
            raise typer.Exit(code=1)
        logger.debug("Using task file %s", settings.data_path)
        ctx.obj = settings
        if ctx.invoked_subcommand is None:
            raise typer.Exit(code=run_shell(settings))

    @app.command("shell")
    def shell_cmd(ctx: typer.Context):
        """
        Add, print, edit and delete tasks interactively.
        """
        raise typer.Exit(code=run_shell(ctx.obj))

    @app.command("print")
    def print_cmd(ctx: typer.Context):
        """
        Print the task table and exit.
        """
        raise typer.Exit(code=print_tasks(ctx.obj))

    return app


def main():
    """
    Entry point for the tasklist command.
    """
    enable_line_editing()
    app = build_app()
    app()


if __name__ == "__main__":
    main()
