import contextlib
import io
import tempfile
import unittest
from pathlib import Path

from rationals.demo import builtin_checks, load_cases, main, run_checks

CASES = """
[[case]]
name = "sum"
op = "add"
a = "1/2"
b = "1/3"
expect = "5/6"

[[case]]
op = "str"
a = "-2/4"
expect = "-1/2"

[[case]]
op = "compare"
a = "1/2"
b = "2/3"
expect = -1

[[case]]
name = "divide by zero"
op = "divide"
a = "1/2"
b = "0/5"
raises = true

[[case]]
name = "bad literal"
op = "negate"
a = "1/2/3"
raises = true
"""


class DemoTests(unittest.TestCase):
    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmpdir.cleanup)
        self.tmp = Path(self._tmpdir.name)

    def write_cases(self, text: str) -> Path:
        path = self.tmp / "cases.toml"
        path.write_text(text)
        return path

    def run_main(self, argv):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main(argv)
        return code, out.getvalue().splitlines()

    def test_builtin_checks_pass(self):
        results = run_checks(builtin_checks())
        self.assertEqual(len(results), 12)
        self.assertTrue(all(result.passed for result in results))

    def test_main_prints_one_boolean_per_check(self):
        code, lines = self.run_main([])
        self.assertEqual(code, 0)
        self.assertEqual(lines, ["True"] * 12)

    def test_main_with_names(self):
        code, lines = self.run_main(["--names"])
        self.assertEqual(code, 0)
        self.assertEqual(lines[0], "sum: True")

    def test_load_cases(self):
        checks = load_cases(self.write_cases(CASES))
        self.assertEqual(
            [name for name, _ in checks],
            ["sum", "case 2", "case 3", "divide by zero", "bad literal"],
        )
        self.assertTrue(all(result.passed for result in run_checks(checks)))

    def test_failing_case_sets_exit_code(self):
        path = self.write_cases('[[case]]\nop = "add"\na = "1/2"\nb = "1/3"\nexpect = "1/3"\n')
        code, lines = self.run_main(["--no-builtin", "--cases", str(path)])
        self.assertEqual(code, 1)
        self.assertEqual(lines, ["False"])

    def test_raises_case_fails_when_nothing_raised(self):
        path = self.write_cases('[[case]]\nop = "negate"\na = "1/2"\nraises = true\n')
        code, lines = self.run_main(["--no-builtin", "--cases", str(path)])
        self.assertEqual(code, 1)
        self.assertEqual(lines, ["False"])

    def test_malformed_cases_rejected(self):
        bad_cases = [
            '[[case]]\nop = "pow"\na = "1"\nexpect = "1"\n',
            '[[case]]\nop = "add"\na = "1"\nexpect = "1"\n',
            '[[case]]\nop = "negate"\nexpect = "1"\n',
            '[[case]]\nop = "negate"\na = "1"\n',
            '[[case]]\nop = "negate"\na = "1"\nexpect = "-1"\nraises = true\n',
            '[[case]]\nop = "compare"\na = "1"\nb = "2"\nexpect = "less"\n',
            '[[case]]\nop = "compare"\na = "1"\nb = "2"\nexpect = 2\n',
            '[[case]]\nop = "add"\na = "1"\nb = "2"\nexpect = "3/0"\n',
            '[[case]]\nop = "add"\na = "1"\nb = "2"\nexpect = 1.5\n',
        ]
        for text in bad_cases:
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    load_cases(self.write_cases(text))

    def test_missing_case_file(self):
        with self.assertRaises(FileNotFoundError):
            main(["--cases", str(self.tmp / "missing.toml")])


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
