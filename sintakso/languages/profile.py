"""
Per-language rule tables driving the shared engine.

A LanguageProfile bundles everything a language supplies: token patterns,
closed-class lexicons, tagging rules, lemmatization tables and the few
grammar switches the phrase parser needs. Profiles are built once at import
time and never mutated afterwards, so concurrent readers need no locking.
"""
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Optional, Pattern, Sequence, Tuple

from ..nodes import Feature
from ..rules import LemmaRule

# Token kinds whose initial tag is already known
INITIAL_TAGS = {
    "number": "num",
    "punct": "punct",
}


def normalize_word(text: str) -> str:
    """Lexicon key for a surface form."""
    return text.lower().replace("’", "'")


@dataclass
class LanguageProfile:
    code: str
    name: str
    # Ordered (kind, regex) alternatives, most specific first
    token_patterns: Sequence[Tuple[str, str]]
    # Ordered (tag, words) categories; the first category listing a word wins
    lexicon_categories: Sequence[Tuple[str, Sequence[str]]]
    # Callables (token, previous_tagged, next_raw, profile) -> tag or None
    context_rules: Sequence[Callable] = ()
    # Ordered (predicate_over_word, tag) pairs
    morphological_rules: Sequence[Tuple[Callable[[str], bool], str]] = ()
    # (lowercased form, pos_tag) -> lemma
    irregular_lemmas: Dict[Tuple[str, str], str] = field(default_factory=dict)
    lemma_rules: Dict[str, Sequence[LemmaRule]] = field(default_factory=dict)
    # Verb carrying enclitic pronouns -> bare host verb (dámelo -> da)
    enclitic_host: Optional[Callable[[str], str]] = None
    # pos_tag -> ordered (predicate(word, lemma), {Feature: value}) pairs
    feature_rules: Dict[str, Sequence[Tuple[Callable[[str, str], bool], Dict[Feature, str]]]] = field(default_factory=dict)
    # Determiners that never stand alone as a noun phrase
    articles: FrozenSet[str] = frozenset()
    relativizers: FrozenSet[str] = frozenset()
    adverbial_relativizers: FrozenSet[str] = frozenset()
    non_restrictive_relativizers: FrozenSet[str] = frozenset()
    # None allows any adjective before the head noun
    quantifier_adjectives: Optional[FrozenSet[str]] = None
    postnominal_adjectives: bool = False
    sentence_terminators: FrozenSet[str] = frozenset({".", "!", "?"})
    opening_punctuation: FrozenSet[str] = frozenset({'"', "(", "[", "'", "“", "‘"})

    lexicon: Dict[str, str] = field(init=False, repr=False)
    patterns: Sequence[Tuple[str, Pattern]] = field(init=False, repr=False)

    def __post_init__(self):
        lexicon = {}
        for tag, words in self.lexicon_categories:
            for word in words:
                lexicon.setdefault(normalize_word(word), tag)
        self.lexicon = lexicon
        self.patterns = [(kind, re.compile(regex)) for kind, regex in self.token_patterns]

    def lookup(self, text: str) -> Optional[str]:
        """Closed-class tag for a surface form, or None."""
        return self.lexicon.get(normalize_word(text))

    def __hash__(self):
        return hash(self.code)


# Regex fragments shared by the token patterns
LETTER = r"[^\W\d_]"
WORD = rf"(?:{LETTER}[\u0300-\u036f]*)+"
NOT_LETTER = rf"(?!{LETTER})"
NUMBER = r"\d+(?:[.,]\d+)*"
APOSTROPHE = r"['’]"
PUNCTUATION = r"""[.!?,;:$'"()\[\]{}\-–—…/&%*#@+=<>“”‘’`~^|\\_§°]"""
