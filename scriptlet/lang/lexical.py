"""Lexical analysis for the scriptlet language. The Lexer is pull-based: it hands out one token per call to next_token
and never looks further ahead than the character after the cursor.

All tokens can be loosely defined as follows:

```
<number>     ::= ["-"] <digit>+ ["." <digit>*]   ; "-" only counts when directly followed by a digit
<identifier> ::= <letter> (<letter> | <digit> | "_")*
<string>     ::= '"' <char>* ['"']               ; unterminated strings run to the end of input
<print>      ::= "print"
<punct>      ::= "+" | "-" | "*" | "/" | "=" | ";" | "(" | ")" | ","

<comment>    ::= "//" <char>* <newline>          ; skipped entirely
```

Any other character becomes an Unknown token; rejecting it is up to the interpreter.
"""

import enum
import string
from typing import NamedTuple


DIGITS = frozenset(string.digits)
LETTERS = frozenset(string.ascii_letters)
WORD_CHARS = DIGITS | LETTERS | {"_"}


class TokenKind(enum.Enum):
    """Kinds of tokens. Values are used in error messages."""
    NUMBER = "number"
    IDENTIFIER = "identifier"
    STRING = "string"
    PLUS = "'+'"
    MINUS = "'-'"
    STAR = "'*'"
    SLASH = "'/'"
    EQUALS = "'='"
    SEMICOLON = "';'"
    LPAREN = "'('"
    RPAREN = "')'"
    COMMA = "','"
    PRINT = "'print'"
    END = "end of input"
    UNKNOWN = "unknown character"


PUNCTUATION = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "=": TokenKind.EQUALS,
    ";": TokenKind.SEMICOLON,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
}

KEYWORDS = {"print": TokenKind.PRINT}


class Token(NamedTuple):
    """Kind and literal text of a lexical unit. pos is the source offset it starts at (for error messages only)."""
    kind: TokenKind
    value: str
    pos: int = 0

    def describe(self):
        """Short human-readable form of this token, e.g. for 'got ...' in error messages."""
        if self.kind is TokenKind.END:
            return self.kind.value
        if self.kind is TokenKind.STRING:
            return f'"{self.value}"'
        return f"'{self.value}'"

    def __str__(self):
        return f"{self.kind.name} '{self.value}'"


class Lexer:
    """Converts source text into tokens on demand. Once the end is reached, every call returns an End token."""

    def __init__(self, src):
        self.src = src
        self.index = 0

    def peek(self, offset=0):
        """Returns character offset positions after the cursor, or '' past the end of input."""
        index = self.index + offset
        return self.src[index] if index < len(self.src) else ""

    def next_token(self):
        """Returns the next token and advances past it."""
        while True:
            while self.peek().isspace():
                self.index += 1

            if self.peek() == "/" and self.peek(1) == "/":
                self._skip_comment()
            else:
                break

        start = self.index
        char = self.peek()

        if not char:
            return Token(TokenKind.END, "", start)
        if char == '"':
            return self._string()
        if char in DIGITS or (char == "-" and self.peek(1) in DIGITS):
            return self._number()
        if char in LETTERS:
            return self._word()

        self.index += 1
        return Token(PUNCTUATION.get(char, TokenKind.UNKNOWN), char, start)

    def locate(self, pos):
        """Returns (line, line_num, col) of source offset pos. line_num is 1-based, col is 0-based."""
        line_start = self.src.rfind("\n", 0, pos) + 1
        line_end = self.src.find("\n", pos)
        if line_end == -1:
            line_end = len(self.src)

        line = self.src[line_start:line_end].rstrip("\r")
        return line, self.src.count("\n", 0, pos) + 1, pos - line_start

    def _skip_comment(self):
        while self.peek() and self.peek() != "\n":
            self.index += 1

    def _string(self):
        start = self.index
        self.index += 1  # opening quote
        while self.peek() and self.peek() != '"':
            self.index += 1

        value = self.src[start + 1:self.index]
        if self.peek():
            self.index += 1  # closing quote
        return Token(TokenKind.STRING, value, start)

    def _number(self):
        start = self.index
        if self.peek() == "-":
            self.index += 1

        has_decimal = False
        while self.peek() in DIGITS or self.peek() == ".":
            if self.peek() == ".":
                if has_decimal:
                    break  # a second point ends the literal
                has_decimal = True
            self.index += 1

        return Token(TokenKind.NUMBER, self.src[start:self.index], start)

    def _word(self):
        start = self.index
        while self.peek() in WORD_CHARS:
            self.index += 1

        word = self.src[start:self.index]
        return Token(KEYWORDS.get(word, TokenKind.IDENTIFIER), word, start)

    def __iter__(self):
        """Yields the remaining tokens, up to and including the first End token."""
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.END:
                return
