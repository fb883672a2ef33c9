import tempfile
import unittest
from pathlib import Path

from colorama import Fore

from account_assertions.invariant_checker import InvariantResult
from account_assertions.reporter import Reporter


class ReporterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.reporter = Reporter(use_color=False)

    def test_render_summarises_entries(self) -> None:
        self.reporter.add_custom("scenario", "ok", True, "fine")
        self.reporter.add_invariant(
            "invariants",
            InvariantResult(name="balance_positive", passed=False, message="System Error: Balance dropped zero!"),
            label="empty",
        )

        rendered = self.reporter.render()
        self.assertIn("[PASS] ok - fine", rendered)
        self.assertIn("[FAIL] Invariant balance_positive [empty]", rendered)
        self.assertIn("Summary: passed=1, failed=1, total=2", rendered)
        self.assertTrue(self.reporter.has_failures)

    def test_render_groups_entries_by_phase(self) -> None:
        self.reporter.add_custom("scenario", "first", True, "fine")
        self.reporter.add_custom("invariants", "check", True, "fine")
        self.reporter.add_custom("scenario", "second", False, "broken")

        lines = self.reporter.render().splitlines()
        self.assertEqual(
            lines[1:6],
            [
                "-- scenario (passed=1, failed=1)",
                "[PASS] first - fine",
                "[FAIL] second - broken",
                "-- invariants (passed=1, failed=0)",
                "[PASS] check - fine",
            ],
        )
        self.assertEqual([entry.name for entry in self.reporter.failures], ["second"])

    def test_no_entries_has_no_failures(self) -> None:
        self.assertFalse(self.reporter.has_failures)
        self.assertIn("Summary: passed=0, failed=0, total=0", self.reporter.render())

    def test_write_creates_uncoloured_report_file(self) -> None:
        reporter = Reporter(use_color=True)
        reporter.add_custom("scenario", "ok", True, "fine")
        self.assertIn(Fore.GREEN, reporter.render())

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "report.txt"
            reporter.write(path)
            content = path.read_text(encoding="utf-8")

        self.assertIn("[PASS] ok - fine", content)
        self.assertNotIn("\x1b[", content)


if __name__ == "__main__":
    unittest.main()
