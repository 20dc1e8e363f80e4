"""Error handling for minicaml. Only GenericExceptions should be encountered during running: if another type of error
is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a minicaml error. exprs are
    substituted into msg; exprs[0] should be the offending expr, and start/end delimit the offending part of it.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException."""
        if exprs is None:
            exprs = ""
        if not isinstance(exprs, (list, tuple)):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        self.plain = msg.format(*exprs)
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.plain)


class BoundaryError(GenericException):
    """Statement is missing its ';;' terminator."""


class LexError(GenericException):
    """Statement contains a character (or digit run) that cannot be tokenized."""


class ParseError(GenericException):
    """Token sequence does not follow the grammar."""

    def __init__(self, msg, exprs=None, **kwargs):
        kwargs.setdefault("diagnosis", False)  # tokens carry no positions
        super().__init__(msg, exprs, **kwargs)


class EvaluationError(GenericException):
    """Superclass of errors raised while walking a syntax tree."""

    def __init__(self, msg, exprs=None, **kwargs):
        kwargs.setdefault("diagnosis", False)
        super().__init__(msg, exprs, **kwargs)


class TypeMismatchError(EvaluationError):
    """Operator applied to operands of incompatible type, or to a binding."""


class UnboundNameError(EvaluationError):
    """Identifier has no entry in the active environment."""


class DivisionByZeroError(EvaluationError):
    """Integer division by zero."""


class ErrorHandler:
    """Context manager wrapped around statements: prints minicaml errors instead of raising them. In file mode
    (fatal) the first error exits with status 1; any exception that isn't a GenericException is reported as internal
    and re-raised.
    """
    COLOR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.location = None  # (path, line_num) of the file statement being run

    def locate(self, path, line_num):
        """Marks the statement about to run as coming from line_num of path, so errors can point at it."""
        self.location = (path, line_num)

    def forget(self):
        self.location = None

    @staticmethod
    def underline(error):
        """error.expr with error.expr[start:end] highlighted, and a caret marker on the line below."""
        end = max(error.end, error.start + 1)
        before, span, after = error.expr[:error.start], error.expr[error.start:end], error.expr[end:]
        marker = "^" + "~" * (len(span) - 1)

        span = colored(span, ErrorHandler.COLOR, attrs=["bold"])
        marker = colored(marker, ErrorHandler.COLOR, attrs=["bold"])
        return f"  {before}{span}{after}\n  {' ' * len(before)}{marker}"

    def throw(self, error):
        """Prints error (preceded by its file location, if any). Exits if self.fatal."""
        lines = []
        if self.location:
            lines.append("File '{}', line {}:".format(*self.location))

        tag = "[internal] Error: " if error.internal else "Error: "
        lines.append(colored(tag, ErrorHandler.COLOR, attrs=["bold"]) + error.msg)

        if error.diagnosis and error.expr and not error.internal:
            lines.append(ErrorHandler.underline(error))
        print("\n".join(lines))

        if self.fatal:
            sys.exit(1)
        self.forget()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or exc_type is SystemExit:
            return False

        if issubclass(exc_type, GenericException):
            self.throw(exc_val)
            return True
        elif exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
            return True

        self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
        return False
