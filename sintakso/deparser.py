"""
The De-parser (tree -> text).

Two ways back to text: ``surface`` cuts the exact source substring out by
span, ``deparse`` re-joins a sentence's tokens with ordinary spacing rules
(useful when the source is not at hand). ``pretty_print`` renders a tree for
humans.
"""
from typing import List

from .nodes import (
    Clause, Document, NounPhrase, Paragraph, PrepositionalPhrase,
    RelativeClause, Sentence, Token, VerbPhrase,
)

# No space before these
CLOSING = {".", ",", ";", ":", "!", "?", ")", "]", "}", "»", "”", "’", "…", "%"}
# No space after these
OPENING = {"(", "[", "{", "¿", "¡", "«", "“", "‘"}


def surface(node, source: str) -> str:
    """Exact source text covered by ``node``."""
    return node.span.extract(source)


def deparse(sentence: Sentence) -> str:
    """
    Rebuild a sentence string from its tokens.

    Only the tokens inside the parse tree are used, so stripped punctuation
    (the final period) is not restored.
    """
    return join_tokens(sentence.tokens())


def join_tokens(tokens: List[Token]) -> str:
    parts = []
    previous = None
    for token in tokens:
        text = token.text
        if previous is not None and not _glued(previous.text, text):
            parts.append(" ")
        parts.append(text)
        previous = token
    return "".join(parts)


def _glued(left: str, right: str) -> bool:
    # Elided articles (l', d') and clitic apostrophes attach to the next word
    if left in OPENING or left.endswith(("'", "’")):
        return True
    return right in CLOSING


def pretty_print(node, indent: int = 0) -> str:
    """
    Render a node as an indented tree, one constituent per line.

    For "The cat sat."::

        Sentence (declarative, simple)
          Clause (independent)
            subject: NounPhrase
              det: The [det]
              head: cat [noun]
            predicate: VerbPhrase
              head: sat [verb]
    """
    return "\n".join(_render(node, indent, label=None))


def _render(node, depth: int, label) -> List[str]:
    pad = "  " * depth
    prefix = f"{label}: " if label else ""

    if isinstance(node, Token):
        return [f"{pad}{prefix}{node.text} [{node.pos_tag}]"]

    if isinstance(node, Document):
        lines = [f"{pad}{prefix}Document ({node.language}, {len(node.sentences)} sentences)"]
        for paragraph in node.paragraphs:
            lines.extend(_render(paragraph, depth + 1, None))
        return lines

    if isinstance(node, Paragraph):
        lines = [f"{pad}{prefix}Paragraph"]
        for sentence in node.sentences:
            lines.extend(_render(sentence, depth + 1, None))
        return lines

    if isinstance(node, Sentence):
        lines = [f"{pad}{prefix}Sentence ({node.function.value}, {node.structure.value})"]
        for clause in node.clauses():
            lines.extend(_render(clause, depth + 1, None))
        return lines

    if isinstance(node, Clause):
        lines = [f"{pad}{prefix}Clause ({node.type.value})"]
        if node.subordinator is not None:
            lines.extend(_render(node.subordinator, depth + 1, "subordinator"))
        if node.subject is not None:
            lines.extend(_render(node.subject, depth + 1, "subject"))
        lines.extend(_render(node.predicate, depth + 1, "predicate"))
        return lines

    if isinstance(node, NounPhrase):
        lines = [f"{pad}{prefix}NounPhrase"]
        if node.determiner is not None:
            lines.extend(_render(node.determiner, depth + 1, "det"))
        for modifier in node.modifiers:
            lines.extend(_render(modifier, depth + 1, "mod"))
        lines.extend(_render(node.head, depth + 1, "head"))
        for post_modifier in node.post_modifiers:
            lines.extend(_render(post_modifier, depth + 1, "post"))
        return lines

    if isinstance(node, VerbPhrase):
        lines = [f"{pad}{prefix}VerbPhrase"]
        for auxiliary in node.auxiliaries:
            lines.extend(_render(auxiliary, depth + 1, "aux"))
        lines.extend(_render(node.head, depth + 1, "head"))
        for complement in node.complements:
            lines.extend(_render(complement, depth + 1, "comp"))
        return lines

    if isinstance(node, PrepositionalPhrase):
        lines = [f"{pad}{prefix}PrepositionalPhrase"]
        lines.extend(_render(node.head, depth + 1, "prep"))
        lines.extend(_render(node.object, depth + 1, "object"))
        return lines

    if isinstance(node, RelativeClause):
        lines = [f"{pad}{prefix}RelativeClause ({node.type.value})"]
        lines.extend(_render(node.relativizer, depth + 1, "relativizer"))
        lines.extend(_render(node.clause, depth + 1, None))
        return lines

    raise ValueError(f"Cannot render {type(node).__name__}")
