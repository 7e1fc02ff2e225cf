"""
Morphological analysis: lemmas and inflectional features.

Lemmatization tries the irregular-form dictionary, then strips enclitic
pronouns from verbs where the language has them, then the ordered suffix
rewrite rules for the token's part of speech, and falls back to the
lowercased word. Features come from independent predicates per part of
speech; the first rule that sets a feature decides it.
"""
import logging
from dataclasses import replace
from typing import Dict, List, Sequence

from .languages import get_language
from .nodes import Feature, Token

logger = logging.getLogger(__name__)

UNINFLECTED_TAGS = ("num", "punct")
VERB_TAGS = ("verb", "aux")


def analyze(tagged_tokens: Sequence[Token], language=None) -> List[Token]:
    """
    Fill in ``lemma`` and ``morphology`` for every token.

    Args:
        tagged_tokens: Tokens that already carry a part-of-speech tag.
        language: Language code or profile; defaults to the tokens' language.

    Returns:
        New tokens; the input is left untouched.
    """
    tagged_tokens = list(tagged_tokens)
    if not tagged_tokens:
        return []
    profile = get_language(language or tagged_tokens[0].language)

    analyzed = []
    for token in tagged_tokens:
        if token.pos_tag in UNINFLECTED_TAGS:
            analyzed.append(replace(token, lemma=token.text, morphology={}))
            continue
        word = token.text.lower()
        lemma = lemmatize(word, token.pos_tag, profile)
        if token.pos_tag in VERB_TAGS and profile.enclitic_host is not None:
            word = profile.enclitic_host(word)
        analyzed.append(replace(token, lemma=lemma, morphology=extract_features(word, lemma, token.pos_tag, profile)))

    logger.debug(f"Analyzed {len(analyzed)} tokens ({profile.code})")
    return analyzed


def lemmatize(word: str, pos_tag: str, language=None) -> str:
    """
    Base form of ``word`` read as ``pos_tag``.

    >>> lemmatize("running", "verb", "en")
    'run'
    """
    profile = get_language(language)
    word = word.lower()
    if pos_tag in UNINFLECTED_TAGS:
        return word

    irregular = profile.irregular_lemmas.get((word, pos_tag))
    if irregular is not None:
        return irregular

    if pos_tag in VERB_TAGS and profile.enclitic_host is not None:
        host = profile.enclitic_host(word)
        if host != word:
            return lemmatize(host, pos_tag, profile)

    for rule in profile.lemma_rules.get(pos_tag, ()):
        lemma = rule.apply(word)
        if lemma is not None:
            return lemma
    return word


def extract_features(word: str, lemma: str, pos_tag: str, profile) -> Dict[Feature, str]:
    """Merge the feature rules for ``pos_tag``; earlier rules win per feature."""
    features: Dict[Feature, str] = {}
    for predicate, values in profile.feature_rules.get(pos_tag, ()):
        if predicate(word, lemma):
            for feature, value in values.items():
                features.setdefault(feature, value)
    return features
