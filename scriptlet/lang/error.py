"""Error handling for the scriptlet language. Only GenericExceptions should be encountered during running: if another
type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Nothing below the driver terminates the process. Errors are raised as GenericExceptions and the single ErrorHandler
wrapping the driver decides whether to exit.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a scriptlet error. Non-fatal errors are reported but
    do not change the exit status.
    """

    def __init__(self, msg, exprs=None, line=None, line_num=None, start=0, end=-1, diagnosis=True, internal=False,
                 fatal=True):
        """Parses args for GenericException. line is the source line the error occurred on (exprs[0] if not given)."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs] or [""]

        super().__init__(msg.format(*exprs))
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]
        self.line = line if line is not None else self.expr
        self.line_num = line_num
        self.end = end if end != -1 else len(self.line)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal
        self.fatal = fatal


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom scriptlet errors."""
    ERROR = "red"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream
        self.path = None

    def register_file(self, path):
        """Registers path as the file errors are reported against."""
        self.path = path

    @staticmethod
    def diagnose(error):
        """Returns offending part of error.line highlighted and bolded."""
        diagnosis = "  " + error.line[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.line[error.start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += error.line[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def location(self, error):
        """Returns 'file:line:col: ' prefix for error, or as much of it as is known."""
        if self.path is None:
            return ""
        if error.line_num is None:
            return colored(f"{self.path}: ", attrs=["bold"])
        return colored(f"{self.path}:{error.line_num}:{error.start + 1}: ", attrs=["bold"])

    def throw(self, error):
        """Reports error on stderr. error must be a GenericException. Exits with status 1 if both the handler and
        the error are fatal.
        """
        stream = self.stream if self.stream is not None else sys.stderr

        error_msg = self.location(error)
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg, file=stream)

        if not error.internal and error.line and error.diagnosis:
            print(ErrorHandler.diagnose(error), file=stream)

        stream.flush()
        if self.fatal and error.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt", diagnosis=False))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("expression nested too deeply, maximum recursion depth exceeded",
                                        diagnosis=False))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
