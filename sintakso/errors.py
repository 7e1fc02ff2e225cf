"""
Error types for the grammatical pipeline.

Fatal conditions (unscannable input, bad configuration) raise. A grammar rule
that does not apply returns NO_MATCH so the caller can try the next rule.
"""


class SintaksoError(Exception):
    """Base class for all errors raised by sintakso."""


class TokenizeError(SintaksoError):
    """Raised when the tokenizer meets a character no rule can scan."""

    def __init__(self, message: str, line: int, column: int, offset: int):
        super().__init__(f"{message} at line {line}, column {column} (byte {offset})")
        self.line = line
        self.column = column
        self.offset = offset


class TagError(SintaksoError):
    """Raised for an invalid tagging mode, language or statistical model."""


class NoMatch:
    """
    Signal returned by a grammar rule that does not apply at a position.

    There is exactly one instance, NO_MATCH. It is falsy, so callers can write
    ``if result is NO_MATCH`` or simply ``if not result``.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "NO_MATCH"


NO_MATCH = NoMatch()


class UnsupportedLanguageError(SintaksoError, ValueError):
    """Raised when no rule tables are registered for a language code."""
