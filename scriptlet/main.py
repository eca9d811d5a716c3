"""Runs scriptlet programs from the command line. Uses the ErrorHandler context manager, so every error is reported in
one place and decides the exit status. Called from the scriptlet console script and `python -m scriptlet`.
"""

import argparse
import sys

from scriptlet.lang.error import ErrorHandler
from scriptlet.lang.session import Session


def main(argv=None):
    """Runs scriptlet interpreter on the file named in argv (sys.argv[1:] by default)."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="scriptlet", description="Interpret and run a scriptlet source file.")
        parser.add_argument("file", help="source file to interpret and run", nargs="?")
        parser.add_argument("--tokens", action="store_true", help="print the file's tokens instead of running it")
        args = parser.parse_args(argv)

        if args.file is None:
            print(f"usage: {parser.prog} [--tokens] <source_file>", file=sys.stderr)
            sys.exit(1)

        sess = Session(error_handler, args.file)
        if args.tokens:
            for token in sess.tokens():
                print(token)
        else:
            sess.run()

    return 0
