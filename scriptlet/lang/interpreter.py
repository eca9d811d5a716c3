"""Single-pass interpreter for the scriptlet language. Statements are evaluated while they are parsed: there is no
syntax tree.

```
<program>    ::= <statement>*
<statement>  ::= "print" "(" <display> ")" ";"
               | <identifier> "=" <expr> ";"

<display>    ::= (<string> | <identifier> | <number> | ",")*   ; concatenated, no arithmetic

<expr>       ::= <term> (("+" | "-") <term>)*
<term>       ::= <factor> (("*" | "/") <factor>)*
<factor>     ::= <number> | <identifier> | "(" <expr> ")"
```
"""

import functools

from scriptlet.lang.error import GenericException
from scriptlet.lang.lexical import TokenKind
from scriptlet.lang.numerical import display, divide, number


DISPLAY_STOP = (TokenKind.END, TokenKind.SEMICOLON, TokenKind.RPAREN)


class Interpreter:
    """Pulls tokens from a Lexer and executes statements as it recognizes them.

    variables is the program's environment (name -> float). It is mutated in place, so a caller that passes its own
    dict sees every assignment. emit receives each printed line.
    """

    def __init__(self, lexer, variables=None, emit=None):
        self.lexer = lexer
        self.variables = {} if variables is None else variables
        self.emit = emit if emit is not None else functools.partial(print, flush=True)

        self.current_token = self.lexer.next_token()

    def parse(self):
        """Runs statements until end of input. An unexpected token at the start of a statement stops the program
        with a non-fatal error; all other errors are fatal.
        """
        while self.current_token.kind is not TokenKind.END:
            if self.current_token.kind is TokenKind.PRINT:
                self.print_statement()
            elif self.current_token.kind is TokenKind.IDENTIFIER:
                self.assignment()
            else:
                raise self.error("unexpected token {}", self.current_token.describe(), fatal=False)

    def eat(self, kind):
        """Advances past the current token if it is of the given kind."""
        if self.current_token.kind is not kind:
            raise self.error("expected {}, got {}", (kind.value, self.current_token.describe()))
        self.current_token = self.lexer.next_token()

    def error(self, msg, exprs=None, token=None, fatal=True):
        """Returns a GenericException located at token (the current token by default)."""
        if token is None:
            token = self.current_token

        line, line_num, col = self.lexer.locate(token.pos)
        width = len(token.describe()) if token.kind is TokenKind.STRING else len(token.value)
        return GenericException(msg, exprs, line=line, line_num=line_num, start=col, end=col + max(width, 1),
                                fatal=fatal)

    def print_statement(self):
        self.eat(TokenKind.PRINT)
        self.eat(TokenKind.LPAREN)
        self.emit(self.display_expression())
        self.eat(TokenKind.RPAREN)
        self.eat(TokenKind.SEMICOLON)

    def assignment(self):
        name = self.current_token.value
        self.eat(TokenKind.IDENTIFIER)
        self.eat(TokenKind.EQUALS)
        value = self.expression()
        self.variables[name] = value
        self.eat(TokenKind.SEMICOLON)

    def display_expression(self):
        """Concatenates strings, variables and number literals up to ')', ';' or end of input. Commas separate parts
        without adding anything. Operators and other stray tokens are skipped: print(1 + 2) displays '12'.
        """
        parts = []
        while self.current_token.kind not in DISPLAY_STOP:
            token = self.current_token

            if token.kind is TokenKind.STRING:
                parts.append(token.value)
            elif token.kind is TokenKind.IDENTIFIER:
                parts.append(display(self.display_variable(token.value)))
            elif token.kind is TokenKind.NUMBER:
                parts.append(display(number(token.value)))

            self.eat(token.kind)

        return "".join(parts)

    # Undefined names read as zero in print but are fatal in arithmetic. Both lookups are intentional and neither
    # defines the name.

    def display_variable(self, name):
        return self.variables.get(name, 0.0)

    def numeric_variable(self, token):
        try:
            return self.variables[token.value]
        except KeyError:
            raise self.error("undefined variable '{}'", token.value, token=token)

    def expression(self):
        result = self.term()
        while self.current_token.kind in (TokenKind.PLUS, TokenKind.MINUS):
            if self.current_token.kind is TokenKind.PLUS:
                self.eat(TokenKind.PLUS)
                result += self.term()
            else:
                self.eat(TokenKind.MINUS)
                result -= self.term()
        return result

    def term(self):
        result = self.factor()
        while self.current_token.kind in (TokenKind.STAR, TokenKind.SLASH):
            if self.current_token.kind is TokenKind.STAR:
                self.eat(TokenKind.STAR)
                result *= self.factor()
            else:
                self.eat(TokenKind.SLASH)
                result = divide(result, self.factor())
        return result

    def factor(self):
        token = self.current_token

        if token.kind is TokenKind.NUMBER:
            self.eat(TokenKind.NUMBER)
            return number(token.value)

        elif token.kind is TokenKind.IDENTIFIER:
            self.eat(TokenKind.IDENTIFIER)
            return self.numeric_variable(token)

        elif token.kind is TokenKind.LPAREN:
            self.eat(TokenKind.LPAREN)
            result = self.expression()
            self.eat(TokenKind.RPAREN)
            return result

        raise self.error("expected number, identifier or '(', got {}", token.describe())
