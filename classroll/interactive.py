from __future__ import annotations

import random
from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from classroll import roster, storage
from classroll.errors import ClassrollError, NoEligibleStudentError
from classroll.model import NO_LUCKY_NUMBER, RosterSession, Student

console = Console()


def _println(msg: str = "") -> None:
    console.print(msg)


def _prompt(msg: str) -> str:
    return console.input(msg)


def _confirm(msg: str) -> bool:
    return _prompt(f"{msg} (y/N): ").strip().lower() == "y"


def run_interactive(classes_dir: str | Path, rng: Optional[random.Random] = None) -> RosterSession:
    """
    Interactive menu loop. Returns the final session (handy for tests).
    """
    rng = rng or random.Random()
    session = _startup(roster.empty_session(classes_dir))

    while True:
        _print_header(session)

        choice = _prompt(
            "\n[1] Show students\n"
            "[2] Add student\n"
            "[3] Remove student\n"
            "[4] Toggle presence\n"
            "[5] Rename student\n"
            "[6] Lucky number\n"
            "[7] Random student\n"
            "[8] Switch class\n"
            "[9] New class\n"
            "[10] Delete class\n"
            "[0] Exit\n"
            "Select: "
        ).strip()

        if choice == "0":
            _println("Bye.")
            return session

        try:
            if choice == "1":
                _flow_show(session)
            elif choice == "2":
                session = _flow_add(session)
            elif choice == "3":
                session = _flow_remove(session)
            elif choice == "4":
                session = _flow_toggle(session)
            elif choice == "5":
                session = _flow_rename(session)
            elif choice == "6":
                session = _flow_lucky(session, rng)
            elif choice == "7":
                _flow_pick(session, rng)
            elif choice == "8":
                session = _flow_select_class(session)
            elif choice == "9":
                session = _flow_create_class(session, "Create a new class!")
            elif choice == "10":
                session = _flow_delete_class(session)
            else:
                _println("Invalid choice.")
        except ClassrollError as e:
            _println(f"[red]Error:[/] {escape(str(e))}")


def _startup(session: RosterSession) -> RosterSession:
    """
    Same as opening the app: pick an existing class, or create one if there is none.
    """
    try:
        if storage.list_classes(session.classes_dir):
            return _flow_select_class(session)
        return _flow_create_class(session, "No class found!")
    except ClassrollError as e:
        _println(f"[red]Error:[/] {escape(str(e))}")
        return session


def _print_header(session: RosterSession) -> None:
    _println("\n=== Classroll (interactive) ===")
    if not session.is_active:
        _println("No class selected – use [8] or [9].")
        return

    present = len(session.present_students())
    _println(f"Class: [bold cyan]{escape(session.class_name)}[/] | students: {len(session.students)} | present: {present}")
    if session.lucky_number != NO_LUCKY_NUMBER:
        _println(f"Lucky number: [yellow]{session.lucky_number}[/]")


def _students_table(session: RosterSession, title: str) -> Table:
    table = Table(title=title, box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Present", justify="center")
    for s in session.students:
        number = f"[yellow]{s.number}[/]" if s.number == session.lucky_number else str(s.number)
        mark = "[green]+[/]" if s.present else "[red]-[/]"
        table.add_row(number, escape(s.name), mark)
    return table


def _ask_student(session: RosterSession, action: str) -> Optional[Student]:
    if not session.students:
        _println("No students in this class.")
        return None

    console.print(_students_table(session, f"{action} student"))
    pick = _prompt("Enter number (blank = cancel): ").strip()
    if not pick:
        return None
    if not pick.isdigit():
        _println("Not a number.")
        return None

    student = session.find(int(pick))
    if student is None:
        _println("Out of range.")
    return student


def _flow_show(session: RosterSession) -> None:
    if not session.is_active:
        _println("No class selected.")
        return
    if not session.students:
        _println("No students in this class.")
        return
    console.print(_students_table(session, f"Class {escape(session.class_name)}"))


def _flow_add(session: RosterSession) -> RosterSession:
    """
    Add students one after another until the name prompt is left blank.
    """
    if not session.is_active:
        _println("No class selected, choose a class before adding students.")
        return session

    while True:
        name = _prompt("Student name (blank = back): ").strip()
        if not name:
            return session
        session = roster.add_student(session, name)
        added = session.students[-1]
        _println(f"Added: {added.number} {escape(added.name)}")


def _flow_remove(session: RosterSession) -> RosterSession:
    student = _ask_student(session, "Remove")
    if student is None:
        return session
    session = roster.remove_student(session, student.number)
    _println(f"Removed: {escape(student.name)}")
    return session


def _flow_toggle(session: RosterSession) -> RosterSession:
    student = _ask_student(session, "Toggle presence of")
    if student is None:
        return session
    session = roster.toggle_presence(session, student.number)
    state = "present" if not student.present else "absent"
    _println(f"{escape(student.name)} is now {state}.")
    return session


def _flow_rename(session: RosterSession) -> RosterSession:
    student = _ask_student(session, "Rename")
    if student is None:
        return session
    name = _prompt(f"New name for {escape(student.name)} (blank = cancel): ").strip()
    if not name:
        return session
    session = roster.rename_student(session, student.number, name)
    _println(f"Renamed to: {escape(name)}")
    return session


def _flow_lucky(session: RosterSession, rng: random.Random) -> RosterSession:
    number = roster.choose_lucky_number(session, rng=rng)
    _println(f"Lucky number: [bold yellow]{number}[/]")
    return roster.with_lucky_number(session, number)


def _flow_pick(session: RosterSession, rng: random.Random) -> None:
    if not session.students:
        _println("No students in this class.")
        return
    try:
        student = roster.pick_random_present(session, rng=rng)
    except NoEligibleStudentError as e:
        _println(escape(str(e)))
        return
    _println(f"Picked student: [bold]{escape(student.name)}[/] ({student.number})")


def _flow_select_class(session: RosterSession) -> RosterSession:
    names = storage.list_classes(session.classes_dir)
    if not names:
        _println("No classes found.")
        return session

    table = Table(title="Choose a class", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Class")
    for i, name in enumerate(names, start=1):
        table.add_row(str(i), escape(name))
    console.print(table)

    pick = _prompt("Enter number (blank = cancel): ").strip()
    if not pick:
        return session
    if not pick.isdigit() or not (1 <= int(pick) <= len(names)):
        _println("Out of range.")
        return session

    new_session = roster.open_class(session.classes_dir, names[int(pick) - 1])
    _println(f"Opened class: {escape(new_session.class_name)} ({len(new_session.students)} students)")
    return new_session


def _flow_create_class(session: RosterSession, message: str) -> RosterSession:
    _println(message)
    name = _prompt("Name of the new class (blank = cancel): ").strip()
    if not name:
        return session

    if name in storage.list_classes(session.classes_dir):
        if not _confirm(f"Class '{escape(name)}' already exists. Overwrite it?"):
            return session
        new_session = roster.create_class(session.classes_dir, name, overwrite=True)
    else:
        new_session = roster.create_class(session.classes_dir, name)

    _println(f"Created class: {escape(new_session.class_name)}")
    return new_session


def _flow_delete_class(session: RosterSession) -> RosterSession:
    if not session.is_active:
        _println("No class is currently selected.")
        return session

    name = session.class_name
    if not _confirm(f"Delete class '{escape(name)}'?"):
        return session

    new_session = roster.delete_class(session)
    _println(f"Class '{escape(name)}' was deleted.")
    return new_session
