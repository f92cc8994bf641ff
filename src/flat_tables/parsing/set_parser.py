"""Evaluator for set expressions over row indices.

Operands are row index sets joined by ``&`` (intersection) and ``|``
(union). Both operators have the same precedence and associate to the
left, so ``A | B & C`` is ``(A | B) & C``. Only parentheses group.
"""

from __future__ import annotations

from typing import Any, Iterable

import ply.lex as lex
import ply.yacc as yacc

from flat_tables.parsing.errors import ParseError

SetToken = frozenset[int] | str

OPERATOR_TOKENS = {
    "&": "AND",
    "|": "OR",
    "(": "LPAREN",
    ")": "RPAREN",
}


class SetTokenStream:
    """Feeds an already tokenized set expression to the parser."""

    def __init__(self, tokens: Iterable[SetToken]) -> None:
        self._tokens: list[lex.LexToken] = []
        for position, value in enumerate(tokens):
            tok = lex.LexToken()
            if isinstance(value, str):
                if value not in OPERATOR_TOKENS:
                    raise ParseError(f"Unknown set operator '{value}'")
                tok.type = OPERATOR_TOKENS[value]
            else:
                tok.type = "SET"
            tok.value = value
            tok.lineno = 1
            tok.lexpos = position
            self._tokens.append(tok)
        self._position = 0

    @property
    def empty(self) -> bool:
        return not self._tokens

    def input(self, data: Any) -> None:
        pass

    def token(self) -> lex.LexToken | None:
        if self._position >= len(self._tokens):
            return None
        tok = self._tokens[self._position]
        self._position += 1
        return tok


class SetExpressionParser:
    """Parser that reduces a set expression to one set of row indices."""

    tokens = ["SET", "AND", "OR", "LPAREN", "RPAREN"]

    def __init__(self) -> None:
        self.parser: yacc.LRParser = None  # type: ignore

    def p_expression_and(self, p: yacc.YaccProduction) -> None:
        """expression : expression AND operand"""
        p[0] = p[1] & p[3]

    def p_expression_or(self, p: yacc.YaccProduction) -> None:
        """expression : expression OR operand"""
        p[0] = p[1] | p[3]

    def p_expression_operand(self, p: yacc.YaccProduction) -> None:
        """expression : operand"""
        p[0] = p[1]

    def p_operand_set(self, p: yacc.YaccProduction) -> None:
        """operand : SET"""
        p[0] = p[1]

    def p_operand_group(self, p: yacc.YaccProduction) -> None:
        """operand : LPAREN expression RPAREN"""
        p[0] = p[2]

    def p_operand_empty_group(self, p: yacc.YaccProduction) -> None:
        """operand : LPAREN RPAREN"""
        p[0] = frozenset()

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise ParseError(f"Unexpected '{_describe(p.value)}' at position {p.lexpos} in WHERE clause")
        else:
            raise ParseError("Unexpected end of WHERE clause")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, start="expression", **kwargs)

    def evaluate(self, tokens: Iterable[SetToken]) -> frozenset[int]:
        """Evaluate a sequence of sets and set operators."""
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        stream = SetTokenStream(tokens)
        if stream.empty:
            return frozenset()
        return self.parser.parse(lexer=stream)


def _describe(value: SetToken) -> str:
    if isinstance(value, str):
        return value
    return "{" + " ".join(str(i) for i in sorted(value)) + "}"
