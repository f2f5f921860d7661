"""
Tests for the interactive session loop and the tasklist command.
"""

import doctest
import json
import sys
from datetime import date, timedelta

import pytest

import tasklist
from tasklist.config import Settings
from tasklist.store import TaskStore

TODAY = date(2024, 3, 1)


def scripted(*answers):
    """
    Build an input function that replays answers, then signals EOF.
    """
    queue = list(answers)

    def input_func(_prompt):
        if not queue:
            raise EOFError
        return queue.pop(0)

    return input_func


def run(store, *answers):
    tasklist.run_session(store, today_func=lambda: TODAY, input_func=scripted(*answers))


@pytest.mark.unit
def test_session_adds_task():
    """
    Verify the add action collects every field and appends a task.

    Returns
    -------
    None
        This test asserts on interactive adds.
    """
    store = TaskStore()

    run(store, "add", "c", "2024-3-1", "9:00", "Buy milk", "and bread", "", "end")

    assert len(store) == 1
    task = store[1]
    assert (task.priority, task.date, task.time) == ("C", "2024-03-01", "09:00")
    assert task.text == "Buy milk\nand bread"


@pytest.mark.unit
def test_session_blank_task_is_not_added(capsys):
    """
    Ensure a blank body prints a message and adds nothing.

    Parameters
    ----------
    capsys : pytest.CaptureFixture
        Captured output.

    Returns
    -------
    None
        This test asserts on blank adds.
    """
    store = TaskStore()

    run(store, "add", "H", "2024-03-01", "10:00", "", "end")

    assert len(store) == 0
    assert "The task is blank" in capsys.readouterr().out


@pytest.mark.unit
def test_session_print_and_invalid_action(capsys):
    """
    Verify print renders the table and unknown actions are reported.

    Parameters
    ----------
    capsys : pytest.CaptureFixture
        Captured output.

    Returns
    -------
    None
        This test asserts on action dispatch.
    """
    store = TaskStore()

    run(store, "print", "list", " END ")

    out = capsys.readouterr().out
    assert "No tasks have been input" in out
    assert "The input action is invalid" in out


@pytest.mark.unit
def test_session_edits_task(capsys):
    """
    Ensure edit replaces the chosen field of the chosen task.

    Parameters
    ----------
    capsys : pytest.CaptureFixture
        Captured output.

    Returns
    -------
    None
        This test asserts on interactive edits.
    """
    store = TaskStore()
    store.add("First", "N", "2024-03-01", "09:00")
    store.add("Second", "N", "2024-03-01", "09:00")

    run(store, "edit", "9", "2", "due", "time", "18:5", "end")

    assert store[2].time == "18:05"
    assert store[1].time == "09:00"
    out = capsys.readouterr().out
    assert "Invalid task number" in out
    assert "Invalid field" in out
    assert "The task is changed" in out


@pytest.mark.unit
def test_session_deletes_task_and_renumbers(capsys):
    """
    Verify delete removes the chosen task and later tasks move up.

    Parameters
    ----------
    capsys : pytest.CaptureFixture
        Captured output.

    Returns
    -------
    None
        This test asserts on interactive deletes.
    """
    store = TaskStore()
    for text in ("A", "B", "C"):
        store.add(text, "L", "2024-03-01", "09:00")

    run(store, "delete", "1", "end")

    assert [task.text for task in store] == ["B", "C"]
    assert "The task is deleted" in capsys.readouterr().out


@pytest.mark.unit
def test_edit_and_delete_on_empty_store_return_to_menu(capsys):
    """
    Ensure edit and delete only print the empty message when no tasks exist.

    Parameters
    ----------
    capsys : pytest.CaptureFixture
        Captured output.

    Returns
    -------
    None
        This test asserts on empty-store handling.
    """
    store = TaskStore()

    run(store, "edit", "delete", "end")

    out = capsys.readouterr().out
    assert out.count("No tasks have been input") == 2
    assert "Invalid task number" not in out


@pytest.mark.unit
def test_blank_replacement_text_is_reported(capsys):
    """
    Verify a blank body during edit is reported and the task kept.

    Parameters
    ----------
    capsys : pytest.CaptureFixture
        Captured output.

    Returns
    -------
    None
        This test asserts on recoverable store errors.
    """
    store = TaskStore()
    store.add("Keep", "N", "2024-03-01", "09:00")

    run(store, "edit", "1", "task", "", "end")

    assert store[1].text == "Keep"
    out = capsys.readouterr().out
    assert "The task is blank" in out
    assert "The task is changed" not in out


@pytest.mark.unit
def test_session_stops_on_end_of_input():
    """
    Ensure EOF ends the session without raising.

    Returns
    -------
    None
        This test asserts on EOF handling.
    """
    store = TaskStore()

    run(store, "add", "N", "2024-03-01")

    assert len(store) == 0


@pytest.mark.unit
def test_run_shell_persists_and_says_goodbye(tmp_path, capsys):
    """
    Verify a shell session loads, saves, and prints the exit message.

    Parameters
    ----------
    tmp_path : pathlib.Path
        Temporary directory.
    capsys : pytest.CaptureFixture
        Captured output.

    Returns
    -------
    None
        This test asserts on session persistence.
    """
    path = tmp_path / "tasks.json"
    settings = Settings(data_path=path, utc_offset=timedelta(hours=-8))

    exit_code = tasklist.run_shell(
        settings,
        input_func=scripted("add", "L", "2030-01-01", "12:00", "Later", "", "end"),
    )

    assert exit_code == 0
    assert json.loads(path.read_text(encoding="utf-8")) == [
        {"task": "Later", "priority": "L", "date": "2030-01-01", "time": "12:00"}
    ]
    assert capsys.readouterr().out.endswith("Tasklist exiting!\n")


@pytest.mark.unit
def test_run_shell_reports_corrupt_file(tmp_path, capsys):
    """
    Ensure a corrupt task file is reported and left untouched.

    Parameters
    ----------
    tmp_path : pathlib.Path
        Temporary directory.
    capsys : pytest.CaptureFixture
        Captured output.

    Returns
    -------
    None
        This test asserts on load failures.
    """
    path = tmp_path / "tasks.json"
    path.write_text("{broken", encoding="utf-8")
    settings = Settings(data_path=path, utc_offset=timedelta(0))

    exit_code = tasklist.run_shell(settings, input_func=scripted("end"))

    assert exit_code == 1
    assert capsys.readouterr().err.startswith("tasklist: ")
    assert path.read_text(encoding="utf-8") == "{broken"


@pytest.mark.unit
def test_main_print_command(monkeypatch, tmp_path, capsys):
    """
    Verify ``tasklist print`` renders the stored tasks and exits cleanly.

    Parameters
    ----------
    monkeypatch : pytest.MonkeyPatch
        Monkeypatch fixture.
    tmp_path : pathlib.Path
        Temporary directory.
    capsys : pytest.CaptureFixture
        Captured output.

    Returns
    -------
    None
        This test asserts on the print command.
    """
    path = tmp_path / "tasks.json"
    path.write_text(
        json.dumps([{"task": "Buy milk", "priority": "C", "date": "2024-03-01", "time": "09:00"}]),
        encoding="utf-8",
    )
    monkeypatch.setattr(tasklist, "enable_line_editing", lambda: False)
    monkeypatch.setattr(sys, "argv", ["tasklist", "--file", str(path), "print"])

    with pytest.raises(SystemExit) as excinfo:
        tasklist.main()

    assert excinfo.value.code == 0
    out = capsys.readouterr().out
    assert "| 1  | 2024-03-01 | 09:00 |" in out
    assert "Buy milk" in out


@pytest.mark.unit
def test_main_rejects_bad_offset(monkeypatch, capsys):
    """
    Ensure an invalid --utc-offset exits with an error.

    Parameters
    ----------
    monkeypatch : pytest.MonkeyPatch
        Monkeypatch fixture.
    capsys : pytest.CaptureFixture
        Captured output.

    Returns
    -------
    None
        This test asserts on settings errors.
    """
    monkeypatch.setattr(tasklist, "enable_line_editing", lambda: False)
    monkeypatch.setattr(sys, "argv", ["tasklist", "--utc-offset", "east", "print"])

    with pytest.raises(SystemExit) as excinfo:
        tasklist.main()

    assert excinfo.value.code == 1
    assert "Invalid UTC offset" in capsys.readouterr().err


@pytest.mark.unit
def test_main_enables_line_editing(monkeypatch):
    """
    Verify main enables line editing before dispatching commands.

    Parameters
    ----------
    monkeypatch : pytest.MonkeyPatch
        Monkeypatch fixture.

    Returns
    -------
    None
        This test asserts that enable_line_editing is invoked.
    """
    called = {"value": False}

    def fake_enable_line_editing():
        called["value"] = True
        return True

    monkeypatch.setattr(tasklist, "enable_line_editing", fake_enable_line_editing)
    monkeypatch.setattr(sys, "argv", ["tasklist", "--help"])

    with pytest.raises(SystemExit) as excinfo:
        tasklist.main()

    assert excinfo.value.code == 0
    assert called["value"] is True


@pytest.mark.unit
def test_tasklist_doctest_examples():
    """
    Run doctest examples embedded in the package docstrings.

    Returns
    -------
    None
        This test asserts that doctest examples succeed.
    """
    results = doctest.testmod(tasklist)
    assert results.failed == 0


@pytest.mark.unit
def test_run_shell_reports_undecodable_file(tmp_path, capsys):
    """
    Ensure a task file with invalid UTF-8 exits with an error, not a traceback.

    Parameters
    ----------
    tmp_path : pathlib.Path
        Temporary directory.
    capsys : pytest.CaptureFixture
        Captured output.

    Returns
    -------
    None
        This test asserts on decode failures.
    """
    path = tmp_path / "tasks.json"
    path.write_bytes(b"\xff")
    settings = Settings(data_path=path, utc_offset=timedelta(0))

    exit_code = tasklist.run_shell(settings, input_func=scripted("end"))

    assert exit_code == 1
    assert capsys.readouterr().err.startswith("tasklist: unable to read")


@pytest.mark.unit
def test_run_shell_reports_failed_save(tmp_path, capsys):
    """
    Verify an unwritable task path is reported at the end of the session.

    Parameters
    ----------
    tmp_path : pathlib.Path
        Temporary directory.
    capsys : pytest.CaptureFixture
        Captured output.

    Returns
    -------
    None
        This test asserts on save failures.
    """
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    settings = Settings(data_path=blocker / "tasks.json", utc_offset=timedelta(0))

    exit_code = tasklist.run_shell(settings, input_func=scripted("end"))

    assert exit_code == 1
    captured = capsys.readouterr()
    assert captured.err.startswith("tasklist: unable to save")
    assert "Tasklist exiting!" not in captured.out
