"""Handles interactive/command-line mode for minicaml interpreter. Uses cmd as backend."""

import cmd

from minicaml.lang.error import GenericException
from minicaml.pure.evaluator import TERMINATOR


class Shell(cmd.Cmd):
    """minicaml toplevel shell."""
    intro = "minicaml toplevel :: Python backend\nType '#help;;' for more information."
    prompt = "# "
    secondary_prompt = "  "  # used for line continuations
    _tmp_prompt = "# "       # also used for prompt swapping in line continuations

    HELP = ("Welcome to the minicaml toplevel!\n\n"
            "Statements end with ';;' and may span several lines. Try 'let foo = 2 + 3 * 4;;', then\n"
            "'let foo = 5 in foo * 2;;' and 'foo;;': the local 'foo' only shadows the global one.\n\n"
            "Values are ints, bools ('true', 'false') and int lists ('[1; 2; 3]').\n\n"
            "Directives:\n"
            "  #env;;    list global bindings\n"
            "  #reset;;  remove every global binding\n"
            "  #help;;   show this message\n"
            "  #quit;;   exit (so does Ctrl-D)")

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess

    def parseline(self, line):
        """Only EOF is dispatched to a do_* method: everything else (directives included) goes to default, so that
        identifiers such as 'help' stay usable.
        """
        line = line.strip()
        if line == "EOF":
            return "EOF", "", line
        return None, None, line

    def default(self, line):
        """Executes arbitrary minicaml input. Statements are evaluated as soon as their ';;' is read."""
        if not self.sess.pending and line.startswith("#"):
            name, __, rest = line.partition(TERMINATOR)  # statements may follow the directive
            if self.directive(name):
                return True
            return self.default(rest.strip()) if rest.strip() else False

        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            statements = self.sess.preprocess_line(line)
            self.prompt = self.secondary_prompt if self.sess.pending else self._tmp_prompt

            for statement in statements:
                self.sess.add(statement)
                self.sess.report()

    def directive(self, line):
        """Runs a '#' directive. Returns True if the shell should exit."""
        name = line.partition(TERMINATOR)[0].strip()

        if name == "#quit":
            return True
        elif name == "#env":
            for binding in self.sess.env_lines():
                print(binding)
        elif name == "#reset":
            self.sess.reset()
        elif name == "#help":
            print(Shell.HELP)
        else:
            with self.sess.error_handler:
                raise GenericException("unknown directive '{}'", name, diagnosis=False)
        return False

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter. An unterminated statement is evaluated first, so that its missing ';;' is reported."""
        print()
        pending = self.sess.flush()
        if pending:
            with self.sess.error_handler:
                self.sess.add(pending)
        return True
