"""
Sentence and clause parser.

Works over the tagged token stream:

1. Segment at sentence-final punctuation (a run such as "?!" closes one
   sentence; an unterminated remainder is still a sentence).
2. Strip opening punctuation and the closing run; the first closing mark
   decides the sentence function.
3. A leading subordinating conjunction makes the rest a subordinate clause.
4. Otherwise the first coordinating conjunction splits a compound sentence,
   if both sides parse as clauses.
5. Otherwise the whole group is one simple clause.
6. Anything that fails becomes a one-token fragment, so every segment yields
   exactly one Sentence.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import List, Optional, Sequence

from .errors import NO_MATCH
from .languages import get_language
from .nodes import (
    Clause, ClauseType, Document, Paragraph, Sentence, SentenceFunction,
    SentenceStructure, Span, Token, VerbPhrase,
)
from .phrase_parser import PhraseParser

logger = logging.getLogger(__name__)

FUNCTIONS = {
    "?": SentenceFunction.INTERROGATIVE,
    "!": SentenceFunction.EXCLAMATIVE,
}
PREDICATE_TAGS = ("verb", "aux")


def split_sentences(tokens: Sequence[Token], language=None) -> List[List[Token]]:
    """Partition tokens into sentence groups, each ending with its terminators."""
    profile = get_language(language or _language_of(tokens))
    groups, current = [], []
    for i, token in enumerate(tokens):
        current.append(token)
        if _is_terminator(token, profile):
            following = tokens[i + 1] if i + 1 < len(tokens) else None
            if following is not None and _is_terminator(following, profile):
                continue
            groups.append(current)
            current = []
    if current:
        groups.append(current)
    return groups


def parse_clause(tokens: Sequence[Token], language=None, parser: Optional[PhraseParser] = None):
    """
    Parse a simple clause: optional subject, then a verb phrase.

    Returns:
        Clause, or NO_MATCH when the tokens contain no verb or auxiliary.
    """
    parser = parser or PhraseParser(language or _language_of(tokens))
    verb_pos = next((i for i, token in enumerate(tokens) if token.pos_tag in PREDICATE_TAGS), None)
    if verb_pos is None:
        return NO_MATCH

    subject = None
    if verb_pos == 0:
        predicate = parser.parse_verb_phrase(tokens, 0)
        if not predicate:
            return NO_MATCH
        verb_phrase, i = predicate
        # Post-posed subject after the object: "Come pan el niño."
        inverted = parser.parse_noun_phrase(tokens, i)
        if inverted:
            subject = inverted[0]
    else:
        candidate = parser.parse_noun_phrase(tokens, 0)
        if candidate and candidate[1] <= verb_pos:
            subject = candidate[0]
        # Without a usable subject the clause is pro-drop
        predicate = parser.parse_verb_phrase(tokens, verb_pos)
        if not predicate:
            return NO_MATCH
        verb_phrase = predicate[0]

    return Clause(predicate=verb_phrase, type=ClauseType.INDEPENDENT, subject=subject,
                  language=parser.language)


def parse_sentences(tokens: Sequence[Token], language=None, workers: Optional[int] = None) -> List[Sentence]:
    """
    Parse tagged tokens into sentences.

    Args:
        tokens: Tagged (ideally also analyzed) tokens.
        language: Language code or profile; defaults to the tokens' language.
        workers: Parse sentence groups on this many threads when > 1.

    Returns:
        One Sentence per segment, in input order. Never raises on bad input.
    """
    tokens = list(tokens)
    if not tokens:
        return []
    parser = PhraseParser(language or _language_of(tokens))
    groups = split_sentences(tokens, parser.profile)

    def parse_group(group):
        return _parse_group(group, parser)

    if workers and workers > 1 and len(groups) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            sentences = list(executor.map(parse_group, groups))
    else:
        sentences = [parse_group(group) for group in groups]

    logger.debug(f"Parsed {len(sentences)} sentences from {len(tokens)} tokens")
    return sentences


def parse_document(tokens: Sequence[Token], language=None, workers: Optional[int] = None) -> Document:
    """
    Parse tokens into a Document, starting a new paragraph after a blank line.
    """
    tokens = list(tokens)
    code = get_language(language or _language_of(tokens)).code
    sentences = parse_sentences(tokens, code, workers=workers)

    paragraphs, current = [], []
    for sentence in sentences:
        if current and sentence.span.start_pos[0] - current[-1].span.end_pos[0] > 1:
            paragraphs.append(Paragraph(sentences=current, language=code))
            current = []
        current.append(sentence)
    if current:
        paragraphs.append(Paragraph(sentences=current, language=code))

    return Document(
        paragraphs=paragraphs,
        language=code,
        metadata={"token_count": len(tokens), "sentence_count": len(sentences)},
    )


def _parse_group(group: List[Token], parser: PhraseParser) -> Sentence:
    profile = parser.profile
    span = Span.union(*(token.span for token in group))

    end = len(group)
    while end > 0 and _is_terminator(group[end - 1], profile):
        end -= 1
    function = FUNCTIONS.get(group[end].text, SentenceFunction.DECLARATIVE) if end < len(group) else SentenceFunction.DECLARATIVE

    start = 0
    while start < end and group[start].pos_tag == "punct" and group[start].text in profile.opening_punctuation:
        start += 1
    body = group[start:end]

    if body:
        sentence = (_subordinate(body, function, span, parser)
                    or _compound(body, function, span, parser)
                    or _simple(body, function, span, parser))
        if sentence:
            return sentence

    logger.debug(f"Falling back to a fragment for '{' '.join(t.text for t in group)}'")
    return _fragment(body or group, function, span, parser.language)


def _subordinate(body, function, span, parser):
    if body[0].pos_tag != "sconj":
        return NO_MATCH
    clause = parse_clause(body[1:], parser=parser)
    if not clause:
        return NO_MATCH
    clause = replace(clause, type=ClauseType.SUBORDINATE, subordinator=body[0], span=None)
    return Sentence(function=function, structure=SentenceStructure.FRAGMENT, main_clause=clause,
                    language=parser.language, span=span)


def _compound(body, function, span, parser):
    split = next((i for i, token in enumerate(body) if token.pos_tag == "cconj"), None)
    if split is None:
        return NO_MATCH
    left = parse_clause(body[:split], parser=parser)
    right = parse_clause(body[split + 1:], parser=parser)
    if not left or not right:
        return NO_MATCH
    return Sentence(function=function, structure=SentenceStructure.COMPOUND, main_clause=left,
                    additional_clauses=[right], language=parser.language, span=span)


def _simple(body, function, span, parser):
    clause = parse_clause(body, parser=parser)
    if not clause:
        return NO_MATCH
    return Sentence(function=function, structure=SentenceStructure.SIMPLE, main_clause=clause,
                    language=parser.language, span=span)


def _fragment(tokens, function, span, language) -> Sentence:
    head = next((token for token in tokens if token.pos_tag in PREDICATE_TAGS), tokens[0])
    clause = Clause(predicate=VerbPhrase(head=head, language=language), language=language)
    return Sentence(function=function, structure=SentenceStructure.FRAGMENT, main_clause=clause,
                    language=language, span=span)


def _is_terminator(token: Token, profile) -> bool:
    return token.pos_tag == "punct" and token.text in profile.sentence_terminators


def _language_of(tokens: Sequence[Token]) -> Optional[str]:
    return tokens[0].language if tokens else None
