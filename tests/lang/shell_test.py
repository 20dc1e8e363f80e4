import io
import re
import unittest
from contextlib import redirect_stdout

from minicaml.lang.error import ErrorHandler
from minicaml.lang.session import Session
from minicaml.lang.shell import Shell
from minicaml.pure.value import Int

ANSI = re.compile(r"\x1b\[[0-9;]*m")


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.shell = Shell(Session(ErrorHandler(), Session.SH_FILE, cmd_line=True))

    def run_lines(self, *lines):
        """Feeds lines to the shell, returns (printed lines, return value of last command)."""
        out = io.StringIO()
        stop = None
        with redirect_stdout(out):
            for line in lines:
                stop = self.shell.onecmd(line)
        return ANSI.sub("", out.getvalue()).splitlines(), stop

    def test_statements(self):
        lines, stop = self.run_lines("let foo = 42;;", "foo;;", "2 == 3;;")
        self.assertEqual(["val foo : int = 42", "- : int = 42", "- : bool = false"], lines)
        self.assertFalse(stop)

    def test_several_statements_per_line(self):
        lines, __ = self.run_lines("let a = 1;; a + 1;;")
        self.assertEqual(["val a : int = 1", "- : int = 2"], lines)

    def test_continuation(self):
        lines, __ = self.run_lines("let x =")
        self.assertEqual([], lines)
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)

        lines, __ = self.run_lines("", "  2 + 3 * 4;;")
        self.assertEqual(["val x : int = 14"], lines)
        self.assertEqual(Shell.prompt, self.shell.prompt)

    def test_errors_are_not_fatal(self):
        lines, stop = self.run_lines("let a = 1;;", "[1; 2] + 3;;", "a;;")
        self.assertEqual("val a : int = 1", lines[0])
        self.assertTrue(lines[1].startswith("Error: "), lines[1])
        self.assertEqual("- : int = 1", lines[-1])
        self.assertFalse(stop)
        self.assertEqual({"a": Int(1)}, self.shell.sess.env.bindings)

    def test_parse_errors_are_not_fatal(self):
        lines, stop = self.run_lines("let = 1;;", "let 1 = 2;;", "[true];;", "1;;")
        self.assertEqual("Error: expected an identifier after 'let', found '='", lines[0])
        self.assertEqual("Error: expected an identifier after 'let', found '1'", lines[1])
        self.assertEqual("Error: expected an integer list element, found 'true'", lines[2])
        self.assertEqual("- : int = 1", lines[3])
        self.assertFalse(stop)

    def test_long_sum(self):
        lines, stop = self.run_lines(" + ".join(["1"] * 1500) + ";;", "2;;")
        self.assertEqual(["- : int = 1500", "- : int = 2"], lines)
        self.assertFalse(stop)

    def test_identifiers_are_not_commands(self):
        lines, stop = self.run_lines("help;;", "exit;;")
        self.assertEqual(["Error: unbound value 'help'", "Error: unbound value 'exit'"], lines)
        self.assertFalse(stop)

    def test_directives(self):
        lines, __ = self.run_lines("let a = 1;;", "let b = [2];;", "#env;;")
        self.assertEqual(["val a : int = 1", "val b : int list = [2]"], lines[2:])

        lines, __ = self.run_lines("#reset;;", "#env")
        self.assertEqual([], lines)

        lines, __ = self.run_lines("#help;;")
        self.assertIn("Directives:", lines)

        lines, stop = self.run_lines("#bogus;;")
        self.assertEqual(["Error: unknown directive '#bogus'"], lines)
        self.assertFalse(stop)

        __, stop = self.run_lines("#quit;;")
        self.assertTrue(stop)

    def test_statements_after_directive(self):
        lines, stop = self.run_lines("let a = 1;;", "#env;; 1;;")
        self.assertEqual(["val a : int = 1", "val a : int = 1", "- : int = 1"], lines)
        self.assertFalse(stop)

        lines, __ = self.run_lines("#reset;; let b =", "2;;")
        self.assertEqual(["val b : int = 2"], lines)
        self.assertEqual({"b": Int(2)}, self.shell.sess.env.bindings)

        __, stop = self.run_lines("#quit;; 1;;")
        self.assertTrue(stop)

    def test_eof(self):
        __, stop = self.run_lines("EOF")
        self.assertTrue(stop)

    def test_eof_with_pending_statement(self):
        lines, stop = self.run_lines("1 +", "EOF")
        self.assertTrue(stop)
        self.assertEqual("", lines[0])
        self.assertEqual("Error: '1 +' must end with ';;'", lines[1])


if __name__ == '__main__':
    unittest.main()
