"""
Roster operations.

All functions take a RosterSession and return a new one (or a value).
Mutations write the class file before returning, so when saving fails the
caller simply keeps its previous session and nothing is half-applied.

Numbering rule (checked after every add/remove):

    students[i].number == i + 1
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Optional

from classroll import storage
from classroll.errors import (
    InvalidNameError,
    NoActiveRosterError,
    NoEligibleStudentError,
    StudentNotFoundError,
)
from classroll.model import NO_LUCKY_NUMBER, RosterSession, Student

logger = logging.getLogger(__name__)


def _require_active(session: RosterSession) -> str:
    if session.class_name is None:
        raise NoActiveRosterError()
    return session.class_name


def _validate_student_name(name: str) -> str:
    clean = (name or "").strip()
    if not clean:
        raise InvalidNameError("Student name must not be empty.")
    # would break the line format
    if "," in clean or "\n" in clean or "\r" in clean:
        raise InvalidNameError(f"Student name must not contain commas or line breaks: {name!r}")
    return clean


def _renumber(students: Iterable[Student]) -> tuple[Student, ...]:
    return tuple(s if s.number == i else replace(s, number=i) for i, s in enumerate(students, start=1))


def _commit(session: RosterSession, students: tuple[Student, ...]) -> RosterSession:
    new_session = replace(session, students=students)
    persist(new_session)
    return new_session


# ---------------------------------------------------------------------------
# Class lifecycle
# ---------------------------------------------------------------------------


def empty_session(classes_dir: str | Path) -> RosterSession:
    return RosterSession(classes_dir=Path(classes_dir))


def open_class(classes_dir: str | Path, class_name: str) -> RosterSession:
    """
    Load a class file into a fresh session (lucky number reset).

    Numbers are taken from file order, so a file with gaps or repeated
    numbers is renumbered 1..n in memory and written back on the next change.
    """
    name = storage.validate_class_name(class_name)
    students = _renumber(storage.load_roster(name, classes_dir))
    return RosterSession(classes_dir=Path(classes_dir), class_name=name, students=students)


def create_class(classes_dir: str | Path, class_name: str, overwrite: bool = False) -> RosterSession:
    name = storage.validate_class_name(class_name)
    storage.create_class_file(name, classes_dir, overwrite=overwrite)
    return RosterSession(classes_dir=Path(classes_dir), class_name=name)


def delete_class(session: RosterSession) -> RosterSession:
    """
    Delete the class file of the active class and return a session without a class.
    """
    name = _require_active(session)
    storage.delete_class_file(name, session.classes_dir)
    return empty_session(session.classes_dir)


def persist(session: RosterSession) -> None:
    name = _require_active(session)
    storage.save_roster(name, session.students, session.classes_dir)


# ---------------------------------------------------------------------------
# Students
# ---------------------------------------------------------------------------


def _index_of(session: RosterSession, number: int) -> int:
    # first match only
    for i, s in enumerate(session.students):
        if s.number == number:
            return i
    raise StudentNotFoundError(number)


def _replace_at(session: RosterSession, index: int, student: Student) -> tuple[Student, ...]:
    return session.students[:index] + (student,) + session.students[index + 1 :]


def add_student(session: RosterSession, name: str) -> RosterSession:
    """
    Append a new, present student with the next free number.
    """
    _require_active(session)
    clean = _validate_student_name(name)
    students = _renumber(session.students + (Student(number=0, name=clean, present=True),))
    logger.info("Adding student %d: %s", students[-1].number, clean)
    return _commit(session, students)


def remove_student(session: RosterSession, number: int) -> RosterSession:
    """
    Remove the student with the given number; everyone after them moves up one number.
    """
    _require_active(session)
    index = _index_of(session, number)

    remaining = _renumber(session.students[:index] + session.students[index + 1 :])
    logger.info("Removed student %d, %d students left", number, len(remaining))
    return _commit(session, remaining)


def set_presence(session: RosterSession, number: int, present: bool) -> RosterSession:
    _require_active(session)
    index = _index_of(session, number)
    student = replace(session.students[index], present=present)
    return _commit(session, _replace_at(session, index, student))


def toggle_presence(session: RosterSession, number: int) -> RosterSession:
    _require_active(session)
    index = _index_of(session, number)
    student = session.students[index]
    return _commit(session, _replace_at(session, index, replace(student, present=not student.present)))


def rename_student(session: RosterSession, number: int, new_name: str) -> RosterSession:
    _require_active(session)
    index = _index_of(session, number)
    clean = _validate_student_name(new_name)
    return _commit(session, _replace_at(session, index, replace(session.students[index], name=clean)))


# ---------------------------------------------------------------------------
# Random draws (never persisted)
# ---------------------------------------------------------------------------


def choose_lucky_number(session: RosterSession, rng: Optional[random.Random] = None) -> int:
    """
    Return a uniformly random number in 1..len(students).
    """
    _require_active(session)
    if not session.students:
        raise NoEligibleStudentError("The class has no students, cannot choose a lucky number.")
    rng = rng or random.Random()
    return rng.randint(1, len(session.students))


def with_lucky_number(session: RosterSession, number: int) -> RosterSession:
    return replace(session, lucky_number=number)


def pick_random_present(
    session: RosterSession,
    excluded_number: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Student:
    """
    Pick a random present student.

    excluded_number defaults to the session's lucky number;
    NO_LUCKY_NUMBER (-1) means nobody is excluded.
    """
    if excluded_number is None:
        excluded_number = session.lucky_number

    eligible = [
        s
        for s in session.students
        if s.present and (excluded_number == NO_LUCKY_NUMBER or s.number != excluded_number)
    ]
    if not eligible:
        raise NoEligibleStudentError()

    rng = rng or random.Random()
    return rng.choice(eligible)
