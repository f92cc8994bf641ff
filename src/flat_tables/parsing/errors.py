"""Errors raised while parsing queries."""


class ParseError(SyntaxError):
    """Malformed or incomplete SELECT/FROM/WHERE structure."""
