"""Session control for the scriptlet language. Loads a program from a file (or takes it as a string), owns the program's
variables and runs it through the interpreter.
"""

from scriptlet.lang.error import GenericException
from scriptlet.lang.interpreter import Interpreter
from scriptlet.lang.lexical import Lexer


class Session:
    """Governs a scriptlet session: one source text and the variables it assigns."""
    STRING_FILE = "<string>"  # name reported for programs not read from a file

    def __init__(self, error_handler, path=STRING_FILE, source=None, emit=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path      # used for error messages
        self.emit = emit      # receives printed lines (stdout if None)
        self.variables = {}   # name: float, shared by every statement of the program

        if source is None:
            source = self.read(path)
        self.source = source

    @staticmethod
    def read(path):
        """Returns contents of the file at path."""
        try:
            with open(path, "r") as file:
                return file.read()
        except OSError:
            raise GenericException("could not open file '{}'", path, diagnosis=False)
        except UnicodeDecodeError:
            raise GenericException("'{}' is not a text file", path, diagnosis=False)

    def tokens(self):
        """Returns every token of the source, ending with the End token."""
        return list(Lexer(self.source))

    def run(self):
        """Runs the whole program. Errors are raised as GenericExceptions for the error handler to report."""
        Interpreter(Lexer(self.source), self.variables, self.emit).parse()
        return self.variables
