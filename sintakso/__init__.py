# This file makes the 'sintakso' directory a Python package.

from sintakso.errors import NO_MATCH, NoMatch, SintaksoError, TagError, TokenizeError, UnsupportedLanguageError
from sintakso.nodes import (
    Clause, ClauseType, Dependency, Document, Feature, NounPhrase, Paragraph,
    PrepositionalPhrase, RelativeClause, RelativeClauseType, Sentence,
    SentenceFunction, SentenceStructure, Span, Token, VerbPhrase,
)
from sintakso.tokenizer import tokenize
from sintakso.tagger import TagMode, tag
from sintakso.morphology import analyze, lemmatize
from sintakso.phrase_parser import PhraseParser
from sintakso.sentence_parser import parse_clause, parse_document, parse_sentences, split_sentences
from sintakso.dependency_extractor import extract, extract_document
from sintakso.pipeline import Analysis, GrammarPipeline
from sintakso.query import collect, find_all, find_by_lemma, find_by_pos, validate_spans, walk

__version__ = "0.1.0"

__all__ = [
    'Analysis',
    'Clause',
    'ClauseType',
    'Dependency',
    'Document',
    'Feature',
    'GrammarPipeline',
    'NO_MATCH',
    'NoMatch',
    'NounPhrase',
    'Paragraph',
    'PhraseParser',
    'PrepositionalPhrase',
    'RelativeClause',
    'RelativeClauseType',
    'Sentence',
    'SentenceFunction',
    'SentenceStructure',
    'SintaksoError',
    'Span',
    'TagError',
    'TagMode',
    'Token',
    'TokenizeError',
    'UnsupportedLanguageError',
    'VerbPhrase',
    'analyze',
    'collect',
    'extract',
    'extract_document',
    'find_all',
    'find_by_lemma',
    'find_by_pos',
    'lemmatize',
    'parse_clause',
    'parse_document',
    'parse_sentences',
    'split_sentences',
    'tag',
    'tokenize',
    'validate_spans',
    'walk',
]
