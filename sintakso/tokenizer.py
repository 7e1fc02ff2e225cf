"""
Tokenizer: turns raw text into Tokens carrying exact source spans.

Scanning is ordered-alternative. At every position the language profile's
patterns are tried in order and the first one that matches wins, so
multi-character units (contractions, clitic verbs, elisions, interpunct
compounds) are emitted whole instead of being split by the generic word and
punctuation patterns.

Whitespace is consumed between tokens. It moves the line/column/byte cursor
but never belongs to a token.
"""
import logging
import re
from typing import List, Optional, Tuple

from .errors import TokenizeError
from .languages import get_language
from .languages.profile import INITIAL_TAGS
from .nodes import Span, Token, UNRESOLVED

logger = logging.getLogger(__name__)

WHITESPACE = re.compile(r"\s+")
NEWLINE = re.compile(r"\r\n|\r|\n")


class Cursor:
    """Running (line, column, byte offset) position in the source text."""

    def __init__(self):
        self.line = 1
        self.column = 0
        self.offset = 0

    @property
    def position(self) -> Tuple[int, int]:
        return (self.line, self.column)

    def advance(self, chunk: str):
        """Move past ``chunk``, counting CRLF, CR and LF as one line break each."""
        self.offset += len(chunk.encode("utf-8"))
        breaks = list(NEWLINE.finditer(chunk))
        if breaks:
            self.line += len(breaks)
            self.column = len(chunk) - breaks[-1].end()
        else:
            self.column += len(chunk)


def tokenize(text: str, language=None) -> List[Token]:
    """
    Split ``text`` into tokens.

    Args:
        text: Arbitrary Unicode text. Empty or whitespace-only input yields [].
        language: Language code or LanguageProfile (default: English).

    Returns:
        Tokens in source order. Numbers are pre-tagged ``num``, punctuation
        ``punct``, everything else is left unresolved for the tagger.

    Raises:
        TokenizeError: A character matched no pattern.
        UnsupportedLanguageError: Unknown language code.
    """
    profile = get_language(language)
    cursor = Cursor()
    tokens = []
    position = 0
    length = len(text)

    while position < length:
        space = WHITESPACE.match(text, position)
        if space:
            cursor.advance(space.group())
            position = space.end()
            continue

        kind, match = _scan(profile, text, position)
        if match is None:
            raise TokenizeError(
                f"Unexpected character {text[position]!r}",
                line=cursor.line, column=cursor.column, offset=cursor.offset,
            )

        chunk = match.group()
        start_pos, start_offset = cursor.position, cursor.offset
        cursor.advance(chunk)
        tokens.append(Token(
            text=chunk,
            span=Span(start_pos, start_offset, cursor.position, cursor.offset),
            pos_tag=INITIAL_TAGS.get(kind, UNRESOLVED),
            language=profile.code,
        ))
        position = match.end()

    logger.debug(f"Tokenized {length} characters into {len(tokens)} tokens ({profile.code})")
    return tokens


def _scan(profile, text: str, position: int) -> Tuple[Optional[str], Optional[re.Match]]:
    for kind, pattern in profile.patterns:
        match = pattern.match(text, position)
        # Lookahead-only matches would never advance
        if match and match.end() > position:
            return kind, match
    return None, None
