"""Lexer that splits a query string into command-line style words."""

import re

import ply.lex as lex

from flat_tables.parsing.errors import ParseError

_ESCAPE = re.compile(r"\\(.)", re.DOTALL)


class QueryLexer:
    """Lexer for tokenizing a query given as a single string.

    Words are separated by whitespace. Parentheses always form their own
    token, and quoted strings become one word with the quotes removed.
    """

    tokens = [
        "STRING",
        "WORD",
        "LPAREN",
        "RPAREN",
    ]

    t_LPAREN = r"\("
    t_RPAREN = r"\)"

    t_ignore = " \t\r"

    def __init__(self) -> None:
        self.lexer: lex.LexToken = None  # type: ignore

    def t_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r'"([^"\\]|\\.)*"|\'[^\']*\''
        if t.value.startswith('"'):
            t.value = _ESCAPE.sub(r"\1", t.value[1:-1])
        else:
            t.value = t.value[1:-1]
        return t

    def t_WORD(self, t: lex.LexToken) -> lex.LexToken:
        r"""[^\s()"']+"""
        return t

    def t_NEWLINE(self, t: lex.LexToken) -> None:
        r"\n+"
        t.lexer.lineno += len(t.value)

    def t_error(self, t: lex.LexToken) -> None:
        raise ParseError(f"Unterminated string at position {t.lexpos}")

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize."""
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next token."""
        return self.lexer.token()

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens

    def split(self, data: str) -> list[str]:
        """Return the token values, ready for the clause parser."""
        return [tok.value for tok in self.tokenize(data)]
