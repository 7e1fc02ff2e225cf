"""
Dependency extraction: flattens a parsed sentence into labeled head-dependent edges.

Visiting order is fixed, so the same sentence always yields the same list:
for each clause, ``nsubj`` and the subject's inner edges, then the
predicate's edges, then ``mark`` for a subordinator.

Relations (Universal Dependencies):
    nsubj   predicate <- subject head
    det     noun <- determiner
    amod    noun <- adjective
    nummod  noun <- numeral
    flat    name <- following name part
    aux     verb <- auxiliary
    obj     verb <- object head
    obl     verb <- head of a prepositional complement
    nmod    noun <- head of a prepositional post-modifier
    case    prepositional object <- preposition
    advmod  verb <- adverb
    acl     noun <- relative clause predicate
    mark    predicate <- subordinator or relativizer
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from .nodes import (
    Clause, Dependency, Document, NounPhrase, PrepositionalPhrase,
    RelativeClause, Sentence, Token, VerbPhrase,
)

logger = logging.getLogger(__name__)

MODIFIER_RELATIONS = {
    "propn": "flat",
    "num": "nummod",
}


def extract(sentence: Sentence) -> List[Dependency]:
    """All dependency edges of ``sentence``, main clause first."""
    edges: List[Dependency] = []
    for clause in sentence.clauses():
        _clause_edges(clause, edges)
    logger.debug(f"Extracted {len(edges)} dependencies")
    return edges


def extract_document(document: Document, workers: Optional[int] = None) -> List[List[Dependency]]:
    """One edge list per sentence, in document order."""
    sentences = document.sentences
    if workers and workers > 1 and len(sentences) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(extract, sentences))
    return [extract(sentence) for sentence in sentences]


def _edge(relation: str, head: Token, dependent: Token) -> Dependency:
    return Dependency(relation=relation, head=head, dependent=dependent)


def _clause_edges(clause: Clause, edges: List[Dependency]):
    predicate = clause.predicate.head
    if clause.subject is not None:
        edges.append(_edge("nsubj", predicate, clause.subject.head))
        _noun_phrase_edges(clause.subject, edges)
    _verb_phrase_edges(clause.predicate, edges)
    if clause.subordinator is not None:
        edges.append(_edge("mark", predicate, clause.subordinator))


def _verb_phrase_edges(phrase: VerbPhrase, edges: List[Dependency]):
    for auxiliary in phrase.auxiliaries:
        edges.append(_edge("aux", phrase.head, auxiliary))
    for complement in phrase.complements:
        if isinstance(complement, NounPhrase):
            edges.append(_edge("obj", phrase.head, complement.head))
            _noun_phrase_edges(complement, edges)
        elif isinstance(complement, PrepositionalPhrase):
            _prepositional_edges("obl", phrase.head, complement, edges)
        else:
            edges.append(_edge("advmod", phrase.head, complement))


def _noun_phrase_edges(phrase: NounPhrase, edges: List[Dependency]):
    head = phrase.head
    if phrase.determiner is not None:
        edges.append(_edge("det", head, phrase.determiner))
    for modifier in phrase.modifiers:
        edges.append(_edge(MODIFIER_RELATIONS.get(modifier.pos_tag, "amod"), head, modifier))
    for post_modifier in phrase.post_modifiers:
        if isinstance(post_modifier, PrepositionalPhrase):
            _prepositional_edges("nmod", head, post_modifier, edges)
        elif isinstance(post_modifier, RelativeClause):
            _relative_clause_edges(head, post_modifier, edges)


def _prepositional_edges(relation: str, governor: Token, phrase: PrepositionalPhrase, edges: List[Dependency]):
    # The attachment site decides the label: obl inside a verb phrase, nmod inside a noun phrase
    edges.append(_edge(relation, governor, phrase.object.head))
    edges.append(_edge("case", phrase.object.head, phrase.head))
    _noun_phrase_edges(phrase.object, edges)


def _relative_clause_edges(noun: Token, relative: RelativeClause, edges: List[Dependency]):
    predicate = relative.clause.predicate.head
    edges.append(_edge("acl", noun, predicate))
    edges.append(_edge("mark", predicate, relative.relativizer))
    _clause_edges(relative.clause, edges)
