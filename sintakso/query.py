"""
Queries over syntax trees.

Traversal works on any node (Document down to Token). Children are visited
in source order:

    Document -> paragraphs -> sentences -> clauses
    Clause -> subordinator, subject, predicate
    NounPhrase -> determiner, modifiers, head, post-modifiers
    VerbPhrase -> auxiliaries, head, complements
    PrepositionalPhrase -> preposition, object
    RelativeClause -> relativizer, clause

Validators return a list of problems, empty when the tree is sound.
"""
from typing import Callable, Iterable, Iterator, List, Optional, Pattern, Tuple, Type, Union

from .nodes import (
    Clause, Document, NounPhrase, OPEN_CLASS_TAGS, Paragraph, PrepositionalPhrase,
    RelativeClause, Sentence, Span, Token, VerbPhrase,
)

# ============================================================================
# Traversal
# ============================================================================


def children(node) -> List:
    """Immediate children of ``node`` in source order."""
    if isinstance(node, Document):
        return list(node.paragraphs)
    if isinstance(node, Paragraph):
        return list(node.sentences)
    if isinstance(node, Sentence):
        return node.clauses()
    if isinstance(node, Clause):
        parts = [node.subordinator, node.subject, node.predicate]
    elif isinstance(node, NounPhrase):
        parts = [node.determiner, *node.modifiers, node.head, *node.post_modifiers]
    elif isinstance(node, VerbPhrase):
        parts = [*node.auxiliaries, node.head, *node.complements]
    elif isinstance(node, PrepositionalPhrase):
        parts = [node.head, node.object]
    elif isinstance(node, RelativeClause):
        parts = [node.relativizer, node.clause]
    else:
        return []
    present = [part for part in parts if part is not None]
    return sorted(present, key=lambda part: part.span.start_offset)


def walk(node) -> Iterator:
    """Pre-order: each node before its children."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(children(current)))


def walk_post(node) -> Iterator:
    """Post-order: each node after its children."""
    for child in children(node):
        yield from walk_post(child)
    yield node


def collect(node, predicate: Callable[[object], bool]) -> List:
    """Every node in pre-order for which ``predicate`` holds."""
    return [current for current in walk(node) if predicate(current)]


def find(node, predicate: Callable[[object], bool]):
    """First node in pre-order for which ``predicate`` holds, or None."""
    return next((current for current in walk(node) if predicate(current)), None)


# ============================================================================
# Queries
# ============================================================================


def find_all(node, node_type: Union[Type, Tuple[Type, ...]]) -> List:
    """
    All nodes of the given class (or classes), e.g. every NounPhrase of a sentence.
    """
    return collect(node, lambda current: isinstance(current, node_type))


def find_by_pos(node, pos_tag: str) -> List[Token]:
    return collect(node, lambda current: isinstance(current, Token) and current.pos_tag == pos_tag)


def find_by_lemma(node, lemma: str) -> List[Token]:
    return collect(node, lambda current: isinstance(current, Token) and current.lemma == lemma)


def find_by_text(node, pattern: Union[str, Pattern]) -> List[Token]:
    """Tokens whose text equals ``pattern``, or matches it when it is a compiled regex."""
    if isinstance(pattern, str):
        return collect(node, lambda current: isinstance(current, Token) and current.text == pattern)
    return collect(node, lambda current: isinstance(current, Token) and pattern.search(current.text) is not None)


def find_by_pos_in(node, pos_tags: Iterable[str]) -> List[Token]:
    pos_tags = frozenset(pos_tags)
    return collect(node, lambda current: isinstance(current, Token) and current.pos_tag in pos_tags)


def content_words(node) -> List[Token]:
    """Nouns, proper nouns, verbs, adjectives and adverbs, in source order."""
    return find_by_pos_in(node, OPEN_CLASS_TAGS)


def find_subject(node) -> Optional[NounPhrase]:
    """Subject of a sentence's main clause, or of a clause."""
    if isinstance(node, Sentence):
        node = node.main_clause
    return node.subject if isinstance(node, Clause) else None


def find_main_verb(node) -> Optional[Token]:
    """Head of the predicate of a sentence's main clause, clause or verb phrase."""
    if isinstance(node, Sentence):
        node = node.main_clause
    if isinstance(node, Clause):
        node = node.predicate
    return node.head if isinstance(node, VerbPhrase) else None


def extract_spans(node, text: str, predicate: Callable[[object], bool]) -> List[Tuple[str, Span]]:
    """(source text, span) for every matching node."""
    return [(current.span.extract(text), current.span) for current in collect(node, predicate)]


# ============================================================================
# Validation
# ============================================================================


def validate_spans(node) -> List[str]:
    """
    Check that every child span lies inside its parent's span.

    Returns:
        One message per violation, empty for a well-formed tree.
    """
    errors = []
    for parent in walk(node):
        for child in children(parent):
            if not parent.span.contains(child.span):
                errors.append(
                    f"{type(child).__name__} {_describe(child.span)} is outside "
                    f"{type(parent).__name__} {_describe(parent.span)}"
                )
    return errors


def validate_language(node) -> List[str]:
    """Check that every node carrying a language agrees with the root."""
    expected = getattr(node, "language", None)
    errors = []
    for current in walk(node):
        language = getattr(current, "language", expected)
        if language != expected:
            errors.append(
                f"{type(current).__name__} {_describe(current.span)} is '{language}', expected '{expected}'"
            )
    return errors


def _describe(span: Span) -> str:
    return f"{span.start_offset}:{span.end_offset}"
