"""
Shared test helpers.
"""
from sintakso.nodes import Span, Token


def tagged(text, language="en"):
    """
    Build tokens from ``word/tag`` pairs, e.g. ``"the/det cat/noun"``.

    Spans are laid out as if the words were separated by single spaces.
    """
    tokens = []
    column = offset = 0
    for item in text.split():
        word, pos_tag = item.rsplit("/", 1)
        size = len(word.encode("utf-8"))
        span = Span((1, column), offset, (1, column + len(word)), offset + size)
        tokens.append(Token(text=word, span=span, pos_tag=pos_tag, language=language))
        column += len(word) + 1
        offset += size + 1
    return tokens


def relations(edges):
    """Edges as ``rel(head, dependent)`` strings."""
    return [repr(edge) for edge in edges]
