"""
Tests for CLI entry points.

These tests focus on:
- exit codes (0 for success and for "nobody eligible", 1 for user errors)
- the class file on disk after each command
All commands run against a temporary classes folder via --classes-dir.
"""

import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from classroll.cli import main


def run_cli(*argv: str) -> tuple[int, str]:
    out = io.StringIO()
    with redirect_stdout(out):
        try:
            main(list(argv))
        except SystemExit as e:
            return int(e.code or 0), out.getvalue()
    return 0, out.getvalue()


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = self._tmp.name
        self.addCleanup(self._tmp.cleanup)

    def cli(self, *argv: str) -> tuple[int, str]:
        return run_cli("--classes-dir", self.dir, *argv)

    def class_text(self, name: str = "3B") -> str:
        return (Path(self.dir) / f"{name}.txt").read_text(encoding="utf-8")

    def test_command_is_required(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            main([])
        self.assertNotEqual(ctx.exception.code, 0)

    def test_create_add_show(self) -> None:
        self.assertEqual(self.cli("create", "3B")[0], 0)
        code, out = self.cli("add", "3B", "Anna", "Nowak")
        self.assertEqual(code, 0)
        self.assertIn("Added: 1 Anna Nowak", out)
        self.cli("add", "3B", "Jan")
        self.assertEqual(self.class_text(), "1,Anna Nowak,+\n2,Jan,+")

        code, out = self.cli("show", "3B")
        self.assertEqual(code, 0)
        self.assertIn("2 students, 2 present", out)
        self.assertIn("Jan", out)

    def test_classes_lists_names(self) -> None:
        code, out = self.cli("classes")
        self.assertEqual((code, out.strip()), (0, "No classes found."))
        self.cli("create", "3B")
        self.cli("create", "1A")
        code, out = self.cli("classes")
        self.assertEqual(out.split(), ["1A", "3B"])

    def test_create_existing_needs_force(self) -> None:
        self.cli("create", "3B")
        self.cli("add", "3B", "Anna")
        code, out = self.cli("create", "3B")
        self.assertEqual(code, 1)
        self.assertIn("already exists", out)
        self.assertEqual(self.class_text(), "1,Anna,+")

        self.assertEqual(self.cli("create", "3B", "--force")[0], 0)
        self.assertEqual(self.class_text(), "")

    def test_remove_renumbers(self) -> None:
        (Path(self.dir) / "3B.txt").write_text("1,Anna,+\n2,Jan,-", encoding="utf-8")
        code, out = self.cli("remove", "3B", "1")
        self.assertEqual(code, 0)
        self.assertIn("Removed: 1 Anna", out)
        self.assertEqual(self.class_text(), "1,Jan,-")

    def test_remove_unknown_student(self) -> None:
        self.cli("create", "3B")
        code, out = self.cli("remove", "3B", "4")
        self.assertEqual(code, 1)
        self.assertIn("No student with number 4", out)

    def test_mark_and_rename(self) -> None:
        self.cli("create", "3B")
        self.cli("add", "3B", "Anna")
        self.assertEqual(self.cli("mark", "3B", "1", "--absent")[0], 0)
        self.assertEqual(self.class_text(), "1,Anna,-")
        self.cli("mark", "3B", "1", "--toggle")
        self.assertEqual(self.class_text(), "1,Anna,+")
        self.cli("rename", "3B", "1", "Anna", "Maria")
        self.assertEqual(self.class_text(), "1,Anna Maria,+")

    def test_lucky_and_pick(self) -> None:
        self.cli("create", "3B")
        self.cli("add", "3B", "Anna")
        self.cli("add", "3B", "Jan")
        self.cli("mark", "3B", "2", "--absent")

        code, out = self.cli("lucky", "3B")
        self.assertEqual(code, 0)
        self.assertRegex(out, r"Lucky number: [12]")

        code, out = self.cli("pick", "3B")
        self.assertEqual((code, out.strip()), (0, "Picked: 1 Anna"))

        # nobody left is a normal outcome
        code, out = self.cli("pick", "3B", "--exclude", "1")
        self.assertEqual(code, 0)
        self.assertIn("Nobody", out)

    def test_missing_class(self) -> None:
        code, out = self.cli("show", "nope")
        self.assertEqual(code, 1)
        self.assertIn("does not exist", out)

    def test_corrupt_file_reports_parse_error(self) -> None:
        (Path(self.dir) / "3B.txt").write_text("x,Anna,+", encoding="utf-8")
        code, out = self.cli("show", "3B")
        self.assertEqual(code, 1)
        self.assertIn("Line 1", out)

        # still deletable
        self.assertEqual(self.cli("delete", "3B")[0], 0)
        self.assertFalse((Path(self.dir) / "3B.txt").exists())

    def test_delete_missing(self) -> None:
        code, _ = self.cli("delete", "3B")
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
