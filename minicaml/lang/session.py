"""Session control for minicaml. Owns the global environment that successive statements are evaluated against, either
in command-line mode or file interpretation mode.
"""

from minicaml.lang.error import GenericException
from minicaml.pure.evaluator import TERMINATOR, Output, evaluate
from minicaml.pure.value import Environment


class Session:
    """Governs a minicaml session, with control over the global environment."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path=SH_FILE, cmd_line=True, show_env=False):
        self.error_handler = error_handler

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.show_env = show_env  # whether or not to print the environment after each statement

        self.env = Environment()  # global bindings, shared by every statement of the session
        self.results = []         # rendered outputs not yet popped
        self.pending = ""         # text of a statement whose ';;' hasn't been read yet

        if self.cmd_line:
            self.error_handler.fatal = False
        elif path == Session.SH_FILE:
            raise GenericException("'<in>' is a reserved filename")

    def preprocess_line(self, line):
        """Appends line to the pending text and returns every statement it completes, terminators included. Text
        after the last ';;' stays pending and starts the next statement.
        """
        text = self.pending + "\n" + line if self.pending else line
        statements = []

        while TERMINATOR in text:
            end = text.index(TERMINATOR) + len(TERMINATOR)
            statements.append(text[:end])
            text = text[end:]

        self.pending = text if text.strip() else ""
        return statements

    def flush(self):
        """Returns the pending (unterminated) text and clears it."""
        pending, self.pending = self.pending, ""
        return pending

    def add(self, statement, line_num=None):
        """Evaluates statement against the session's environment and stores the rendered result. Will raise any errors
        that are encountered; bindings made before the error are kept.
        """
        if not self.cmd_line:
            self.error_handler.locate(self.path, line_num)

        self.results.append(evaluate(statement, self.env))

        if not self.cmd_line:
            self.error_handler.forget()

    def pop(self):
        """Returns oldest result that hasn't been popped yet."""
        return self.results.pop(0)

    def report(self):
        """Prints every result that hasn't been popped yet (and the environment, if show_env)."""
        while self.results:
            print(self.pop())
            if self.show_env:
                print("\n".join("  " + line for line in self.env_lines()) or "  (empty environment)")

    def env_lines(self):
        """Global bindings, rendered like the output of the statements that made them."""
        return [str(Output(name, value)) for name, value in self.env]

    def reset(self):
        """Removes every global binding."""
        self.env.clear()
        self.pending = ""

    def run(self):
        """Interprets self.path statement by statement, printing results as they come. A statement left without ';;'
        at the end of the file raises a BoundaryError.
        """
        try:
            with open(self.path, "r") as file:
                lines = file.read().splitlines()
        except OSError:
            raise GenericException("'{}' could not be opened", self.path, diagnosis=False)

        for line_num, line in enumerate(lines):
            for statement in self.preprocess_line(line):
                self.add(statement, line_num + 1)
                self.report()

        pending = self.flush()
        if pending:
            self.add(pending, len(lines))
