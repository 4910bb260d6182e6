"""
Central data model definitions used across the project.

This module defines the canonical structure of Student and RosterSession objects so that:
- storage, roster operations and both front ends share the same field names
- the whole state of one running instance lives in a single explicit value
- the code stays readable and beginner-friendly
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

# "no lucky number chosen yet"
NO_LUCKY_NUMBER = -1


@dataclass(frozen=True)
class Student:
    """
    Represents one line of a class file: `number,name,presenceMark`.
    """

    number: int
    name: str
    present: bool = True


@dataclass(frozen=True)
class RosterSession:
    """
    Everything the user currently works with.

    class_name is None while no class is loaded. Operations in
    classroll.roster never modify a session, they return a new one.
    The lucky number is never written to disk.
    """

    classes_dir: Path
    class_name: Optional[str] = None
    students: Tuple[Student, ...] = ()
    lucky_number: int = NO_LUCKY_NUMBER

    @property
    def is_active(self) -> bool:
        return self.class_name is not None

    def find(self, number: int) -> Optional[Student]:
        for s in self.students:
            if s.number == number:
                return s
        return None

    def present_students(self) -> list[Student]:
        return [s for s in self.students if s.present]
