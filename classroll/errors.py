"""
Exceptions raised by storage and roster operations.

Front ends catch ClassrollError and show the message to the user.
"""

from __future__ import annotations


class ClassrollError(Exception):
    """Base class for all errors of this application."""


class NoActiveRosterError(ClassrollError):
    """An operation needs a loaded class, but none is selected."""

    def __init__(self, message: str = "No class selected. Choose or create a class first.") -> None:
        super().__init__(message)


class ClassNotFoundError(ClassrollError):
    def __init__(self, class_name: str) -> None:
        super().__init__(f"Class '{class_name}' does not exist.")
        self.class_name = class_name


class ClassAlreadyExistsError(ClassrollError):
    def __init__(self, class_name: str) -> None:
        super().__init__(f"Class '{class_name}' already exists.")
        self.class_name = class_name


class StudentNotFoundError(ClassrollError):
    def __init__(self, number: int) -> None:
        super().__init__(f"No student with number {number}.")
        self.number = number


class InvalidNameError(ClassrollError, ValueError):
    """A class or student name that cannot be stored in the file format."""


class RosterParseError(ClassrollError):
    """A class file line with a malformed student number."""

    def __init__(self, line_no: int, line: str, detail: str) -> None:
        super().__init__(f"Line {line_no}: {line!r} is not a valid student record ({detail}).")
        self.line_no = line_no
        self.line = line


class StorageError(ClassrollError):
    """Reading, writing or deleting a class file failed on the OS level."""


class NoEligibleStudentError(ClassrollError):
    """
    Nobody can be drawn (empty roster, or nobody present apart from the lucky number).

    This is a normal outcome, not a failure.
    """

    def __init__(self, message: str = "Nobody in the class meets the requirements.") -> None:
        super().__init__(message)
