"""
CLI (Command Line Interface).

This module provides quick terminal commands for scripting and for testing, e.g.:

    classroll classes
    classroll create <class>
    classroll add <class> <name>
    classroll remove <class> <number>
    classroll pick <class>
    classroll interactive

Note:
- The interactive UI lives in classroll/interactive.py
- This CLI is intentionally simple and prints plain text (no rich formatting)
- Every command loads the class file fresh, so the lucky number only lives
  inside one call (use `pick --exclude N` to pass it along)
"""

from __future__ import annotations

import argparse
import logging

from classroll import roster, storage
from classroll.config import resolve_classes_dir, setup_logging
from classroll.errors import ClassrollError, NoEligibleStudentError
from classroll.model import RosterSession, Student

logger = logging.getLogger(__name__)


def _student_line(s: Student) -> str:
    mark = "present" if s.present else "absent"
    return f"{s.number:>3} | {s.name} | {mark}"


def _open(args: argparse.Namespace) -> RosterSession:
    return roster.open_class(args.classes_dir, args.class_name)


def _cmd_classes(args: argparse.Namespace) -> int:
    names = storage.list_classes(args.classes_dir)
    if not names:
        print("No classes found.")
        return 0
    for name in names:
        print(name)
    return 0


def _cmd_create(args: argparse.Namespace) -> int:
    session = roster.create_class(args.classes_dir, args.class_name, overwrite=args.force)
    print(f"Created class: {session.class_name}")
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    session = _open(args)
    if not session.students:
        print(f"Class {session.class_name} has no students.")
        return 0

    present = len(session.present_students())
    print(f"Class {session.class_name}: {len(session.students)} students, {present} present")
    for s in session.students:
        print(_student_line(s))
    return 0


def _cmd_add(args: argparse.Namespace) -> int:
    name = " ".join(args.name).strip()
    if not name:
        print("Please provide a student name.")
        return 1

    session = roster.add_student(_open(args), name)
    added = session.students[-1]
    print(f"Added: {added.number} {added.name} (students: {len(session.students)})")
    return 0


def _cmd_remove(args: argparse.Namespace) -> int:
    session = _open(args)
    student = session.find(args.number)
    session = roster.remove_student(session, args.number)
    name = student.name if student else ""
    print(f"Removed: {args.number} {name} (students: {len(session.students)})")
    return 0


def _cmd_mark(args: argparse.Namespace) -> int:
    session = _open(args)
    if args.toggle:
        session = roster.toggle_presence(session, args.number)
    else:
        session = roster.set_presence(session, args.number, present=args.present)

    student = session.find(args.number)
    assert student is not None
    print(_student_line(student))
    return 0


def _cmd_rename(args: argparse.Namespace) -> int:
    name = " ".join(args.name).strip()
    if not name:
        print("Please provide a student name.")
        return 1

    session = roster.rename_student(_open(args), args.number, name)
    student = session.find(args.number)
    assert student is not None
    print(f"Renamed: {_student_line(student)}")
    return 0


def _cmd_lucky(args: argparse.Namespace) -> int:
    number = roster.choose_lucky_number(_open(args))
    print(f"Lucky number: {number}")
    return 0


def _cmd_pick(args: argparse.Namespace) -> int:
    session = _open(args)
    try:
        student = roster.pick_random_present(session, excluded_number=args.exclude)
    except NoEligibleStudentError as e:
        # benign outcome, not an error
        print(str(e))
        return 0

    print(f"Picked: {student.number} {student.name}")
    return 0


def _cmd_delete(args: argparse.Namespace) -> int:
    roster.delete_class(_open_for_delete(args))
    print(f"Deleted class: {args.class_name}")
    return 0


def _open_for_delete(args: argparse.Namespace) -> RosterSession:
    # a corrupt file can still be deleted, so do not parse it
    name = storage.validate_class_name(args.class_name)
    return RosterSession(classes_dir=args.classes_dir, class_name=name)


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="classroll", description="Classroll – class roster and attendance CLI")
    parser.add_argument("--classes-dir", type=str, default=None, help="Folder with class files")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More log output (-vv for debug)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("classes", help="List all classes")

    p_create = sub.add_parser("create", help="Create a new, empty class")
    p_create.add_argument("class_name", type=str, help="Class name (e.g. 3B)")
    p_create.add_argument("--force", action="store_true", help="Overwrite an existing class")

    p_show = sub.add_parser("show", help="Show the students of a class")
    p_show.add_argument("class_name", type=str, help="Class name")

    p_add = sub.add_parser("add", help="Add a student")
    p_add.add_argument("class_name", type=str, help="Class name")
    p_add.add_argument("name", nargs="+", help="Student name")

    p_remove = sub.add_parser("remove", help="Remove a student by number")
    p_remove.add_argument("class_name", type=str, help="Class name")
    p_remove.add_argument("number", type=int, help="Student number")

    p_mark = sub.add_parser("mark", help="Mark a student present or absent")
    p_mark.add_argument("class_name", type=str, help="Class name")
    p_mark.add_argument("number", type=int, help="Student number")
    group = p_mark.add_mutually_exclusive_group(required=True)
    group.add_argument("--present", dest="present", action="store_true", help="Mark present")
    group.add_argument("--absent", dest="absent", action="store_true", help="Mark absent")
    group.add_argument("--toggle", action="store_true", help="Flip the current mark")

    p_rename = sub.add_parser("rename", help="Rename a student")
    p_rename.add_argument("class_name", type=str, help="Class name")
    p_rename.add_argument("number", type=int, help="Student number")
    p_rename.add_argument("name", nargs="+", help="New name")

    p_lucky = sub.add_parser("lucky", help="Draw a lucky number")
    p_lucky.add_argument("class_name", type=str, help="Class name")

    p_pick = sub.add_parser("pick", help="Pick a random present student")
    p_pick.add_argument("class_name", type=str, help="Class name")
    p_pick.add_argument("--exclude", type=int, default=None, help="Lucky number to skip")

    p_delete = sub.add_parser("delete", help="Delete a class file")
    p_delete.add_argument("class_name", type=str, help="Class name")

    sub.add_parser("interactive", help="Interactive menu mode")

    return parser


COMMANDS = {
    "classes": _cmd_classes,
    "create": _cmd_create,
    "show": _cmd_show,
    "add": _cmd_add,
    "remove": _cmd_remove,
    "mark": _cmd_mark,
    "rename": _cmd_rename,
    "lucky": _cmd_lucky,
    "pick": _cmd_pick,
    "delete": _cmd_delete,
}


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    args.classes_dir = resolve_classes_dir(args.classes_dir)
    logger.debug("Classes folder: %s", args.classes_dir)

    if args.command == "interactive":
        from classroll.interactive import run_interactive

        run_interactive(args.classes_dir)
        raise SystemExit(0)

    handler = COMMANDS.get(args.command)
    if handler is None:
        raise SystemExit(2)

    try:
        raise SystemExit(handler(args))
    except ClassrollError as e:
        print(f"Error: {e}")
        raise SystemExit(1)
