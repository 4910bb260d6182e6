"""
Persistent storage of class rosters.

Every class is one plain text file in the classes folder:

    <classes_dir>/<class_name>.txt

with one student per line:

    1,Anna,+
    2,Jan,-

`+` marks a present student, anything else an absent one. The file is
always rewritten as a whole; there is no incremental update.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from classroll.errors import (
    ClassAlreadyExistsError,
    ClassNotFoundError,
    InvalidNameError,
    RosterParseError,
    StorageError,
)
from classroll.model import Student

logger = logging.getLogger(__name__)

CLASS_FILE_SUFFIX = ".txt"
PRESENT_MARK = "+"
ABSENT_MARK = "-"


def validate_class_name(class_name: str) -> str:
    """
    Return the stripped class name or raise InvalidNameError.

    The name becomes a file name, so path separators are not allowed.
    """
    name = (class_name or "").strip()
    if not name:
        raise InvalidNameError("Class name must not be empty.")
    if name in (".", "..") or "/" in name or "\\" in name:
        raise InvalidNameError(f"Invalid class name: {class_name!r}")
    return name


def class_file_path(class_name: str, classes_dir: str | Path) -> Path:
    return Path(classes_dir) / f"{validate_class_name(class_name)}{CLASS_FILE_SUFFIX}"


def list_classes(classes_dir: str | Path) -> list[str]:
    """
    Return the names of all classes (file names without extension), sorted.

    Creates the classes folder on first access.
    """
    folder = Path(classes_dir)
    try:
        folder.mkdir(parents=True, exist_ok=True)
        names = [p.stem for p in folder.iterdir() if p.is_file() and p.suffix == CLASS_FILE_SUFFIX]
    except OSError as e:
        raise StorageError(f"Cannot read classes folder {folder}: {e}") from e
    return sorted(names)


# ---------------------------------------------------------------------------
# Line format
# ---------------------------------------------------------------------------


def parse_roster_lines(lines: Iterable[str]) -> list[Student]:
    """
    Parse class file lines into students (file order is kept).

    - blank lines and lines with fewer than 2 fields are skipped
    - extra fields are ignored
    - a missing mark means absent
    - a number that is not an integer fails the whole load
    """
    students: list[Student] = []
    for line_no, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue

        parts = line.split(",")
        if len(parts) < 2:
            continue

        try:
            number = int(parts[0].strip())
        except ValueError as e:
            raise RosterParseError(line_no, line, str(e)) from e

        name = parts[1].strip()
        present = len(parts) > 2 and parts[2].strip() == PRESENT_MARK
        students.append(Student(number=number, name=name, present=present))

    return students


def format_student(student: Student) -> str:
    mark = PRESENT_MARK if student.present else ABSENT_MARK
    return f"{student.number},{student.name},{mark}"


def format_roster(students: Iterable[Student]) -> str:
    return "\n".join(format_student(s) for s in students)


# ---------------------------------------------------------------------------
# File operations
# ---------------------------------------------------------------------------


def load_roster(class_name: str, classes_dir: str | Path) -> list[Student]:
    path = class_file_path(class_name, classes_dir)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ClassNotFoundError(class_name) from e
    except (OSError, UnicodeDecodeError) as e:
        raise StorageError(f"Cannot read {path}: {e}") from e

    students = parse_roster_lines(text.splitlines())
    logger.info("Loaded class %s (%d students)", class_name, len(students))
    return students


def save_roster(class_name: str, students: Iterable[Student], classes_dir: str | Path) -> None:
    """
    Overwrite the class file with the given students.

    Creates the classes folder if needed.
    """
    path = class_file_path(class_name, classes_dir)
    students = list(students)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(format_roster(students), encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Cannot write {path}: {e}") from e
    logger.debug("Saved class %s (%d students) to %s", class_name, len(students), path)


def create_class_file(class_name: str, classes_dir: str | Path, overwrite: bool = False) -> Path:
    """
    Create an empty class file. Refuses to replace an existing one unless overwrite=True.
    """
    path = class_file_path(class_name, classes_dir)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.exists() and not overwrite:
            raise ClassAlreadyExistsError(class_name)
        path.write_text("", encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Cannot create {path}: {e}") from e
    logger.info("Created class %s at %s", class_name, path)
    return path


def delete_class_file(class_name: str, classes_dir: str | Path) -> None:
    path = class_file_path(class_name, classes_dir)
    try:
        path.unlink()
    except FileNotFoundError as e:
        raise ClassNotFoundError(class_name) from e
    except OSError as e:
        raise StorageError(f"Cannot delete {path}: {e}") from e
    logger.info("Deleted class %s", class_name)
