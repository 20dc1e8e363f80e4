"""Uses minicaml to interpret files of ';;'-terminated statements or to run an interactive toplevel. Also uses error
handling context manager. Called from the minicaml console script.

Python version must be >=3.7, because error handling requires that dicts are insertion-ordered.
"""

import argparse
import os
import sys

from minicaml.lang.error import ErrorHandler
from minicaml.lang.session import Session
from minicaml.lang.shell import Shell


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="minicaml", description="minimal OCaml-like toplevel")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--show-env", action="store_true", help="print global bindings after every statement")
    parser.add_argument("--no-color", action="store_true", help="disable colored error messages")
    return parser.parse_args(argv)


def main(argv=None):
    """Runs minicaml interpreter. Called from minicaml console script."""
    assert sys.version_info >= (3, 7), "minicaml cannot be run with python < 3.7"

    args = parse_args(argv)
    if args.no_color:
        os.environ["ANSI_COLORS_DISABLED"] = "1"  # honored by termcolor

    with ErrorHandler() as error_handler:
        if args.file is not None:
            Session(error_handler, args.file, cmd_line=False, show_env=args.show_env).run()
        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, show_env=args.show_env)).cmdloop()


if __name__ == "__main__":
    main()
