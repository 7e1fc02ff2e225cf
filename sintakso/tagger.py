"""
Part-of-speech tagger.

Rule-based tagging is a single left-to-right pass. Each token takes the tag
of the first step that applies:

    (a) ``num`` / ``punct`` from the tokenizer pass through
    (b) exact lookup in the closed-class lexicon
    (c) context rules: previous *tagged* token, next *raw* token
    (d) the morphological (suffix) rule bank
    (e) ``noun``

The statistical modes keep (a) and (b) and hand everything else to a trained
model. Ensemble mode votes between all available taggers.
"""
import logging
import os
from collections import Counter
from dataclasses import replace
from enum import Enum
from typing import Dict, List, Optional, Sequence

from .errors import TagError, UnsupportedLanguageError
from .hmm import HMMTagger
from .languages import get_language
from .logging_config import log_with_context
from .nodes import Token

logger = logging.getLogger(__name__)

DEFAULT_TAG = "noun"
PRESET_TAGS = ("num", "punct")


class TagMode(Enum):
    RULE_BASED = "rule_based"
    HMM = "hmm"
    NEURAL = "neural"
    ENSEMBLE = "ensemble"


# Tie-break order for ensemble votes
ENSEMBLE_PRIORITY = (TagMode.HMM, TagMode.NEURAL, TagMode.RULE_BASED)


def tag(tokens: Sequence[Token], mode=TagMode.RULE_BASED, language=None,
        hmm_model=None, neural_model=None) -> List[Token]:
    """
    Assign a part-of-speech tag to every token.

    Args:
        tokens: Tokens from the tokenizer (or previously tagged tokens).
        mode: TagMode or its string value.
        language: Language code or profile. Defaults to the language the
            tokens were scanned in.
        hmm_model: HMMTagger or path to a saved ``.npz`` model.
        neural_model: NeuralTagger or path to a saved checkpoint.

    Returns:
        New tokens with ``pos_tag`` set. Input tokens are not modified.

    Raises:
        TagError: Invalid mode, unknown language, or a missing or unusable model.
    """
    mode = resolve_mode(mode)
    tokens = list(tokens)
    if language is None and tokens:
        language = tokens[0].language
    try:
        profile = get_language(language)
    except UnsupportedLanguageError as e:
        raise TagError(str(e)) from e

    hmm = load_hmm_model(hmm_model) if hmm_model is not None else None
    neural = load_neural_model(neural_model) if neural_model is not None else None
    if mode is TagMode.HMM and hmm is None:
        raise TagError("HMM tagging requires an hmm_model")
    if mode is TagMode.NEURAL and neural is None:
        raise TagError("Neural tagging requires a neural_model")
    if mode is TagMode.ENSEMBLE and hmm is None and neural is None:
        raise TagError("Ensemble tagging requires at least one statistical model")

    if not tokens:
        return []

    fixed = _fixed_tags(tokens, profile)
    if mode is TagMode.RULE_BASED:
        tags = _rule_based_tags(tokens, fixed, profile)
    elif mode is TagMode.HMM:
        tags = _statistical_tags(tokens, fixed, hmm)
    elif mode is TagMode.NEURAL:
        tags = _statistical_tags(tokens, fixed, neural)
    else:
        votes = {TagMode.RULE_BASED: _rule_based_tags(tokens, fixed, profile)}
        if hmm is not None:
            votes[TagMode.HMM] = _statistical_tags(tokens, fixed, hmm)
        if neural is not None:
            votes[TagMode.NEURAL] = _statistical_tags(tokens, fixed, neural)
        tags = _vote(votes, len(tokens))

    log_with_context(
        f"Tagged {len(tokens)} tokens ({profile.code}, {mode.value})",
        context={"tags": " ".join(tags)},
        logger=logger,
    )
    return [replace(token, pos_tag=pos_tag) for token, pos_tag in zip(tokens, tags)]


def resolve_mode(mode) -> TagMode:
    """Accept a TagMode or its string value."""
    if isinstance(mode, TagMode):
        return mode
    try:
        return TagMode(str(mode).lower().replace("-", "_"))
    except ValueError:
        choices = ", ".join(m.value for m in TagMode)
        raise TagError(f"Invalid tagging mode '{mode}'. Choose one of: {choices}") from None


def load_hmm_model(model) -> HMMTagger:
    if isinstance(model, HMMTagger):
        if not model.trained:
            raise TagError("HMM model has not been trained or loaded")
        return model
    if isinstance(model, (str, os.PathLike)):
        return HMMTagger.load(model)
    raise TagError(f"Unusable HMM model: {model!r}")


def load_neural_model(model):
    try:
        from .neural import NeuralTagger
    except ImportError as e:
        raise TagError("Neural tagging requires torch: pip install 'sintakso[neural]'") from e
    if isinstance(model, NeuralTagger):
        if not model.trained:
            raise TagError("Neural tagger has not been trained or loaded")
        return model
    if isinstance(model, (str, os.PathLike)):
        return NeuralTagger.load(model)
    raise TagError(f"Unusable neural model: {model!r}")


def _fixed_tags(tokens: Sequence[Token], profile) -> Dict[int, str]:
    """Steps (a) and (b): tags no later step may change."""
    fixed = {}
    for i, token in enumerate(tokens):
        if token.pos_tag in PRESET_TAGS:
            fixed[i] = token.pos_tag
        else:
            lexical = profile.lookup(token.text)
            if lexical is not None:
                fixed[i] = lexical
    return fixed


def _rule_based_tags(tokens: Sequence[Token], fixed: Dict[int, str], profile) -> List[str]:
    tags = []
    previous: Optional[Token] = None
    for i, token in enumerate(tokens):
        pos_tag = fixed.get(i)
        if pos_tag is None:
            following = tokens[i + 1] if i + 1 < len(tokens) else None
            pos_tag = (
                _contextual_tag(token, previous, following, profile)
                or _morphological_tag(token.text, profile)
                or DEFAULT_TAG
            )
        tags.append(pos_tag)
        previous = replace(token, pos_tag=pos_tag)
    return tags


def _contextual_tag(token, previous, following, profile) -> Optional[str]:
    for rule in profile.context_rules:
        result = rule(token, previous, following, profile)
        if result:
            return result
    return None


def _morphological_tag(word: str, profile) -> Optional[str]:
    for predicate, pos_tag in profile.morphological_rules:
        if predicate(word):
            return pos_tag
    return None


def _statistical_tags(tokens: Sequence[Token], fixed: Dict[int, str], model) -> List[str]:
    words = [token.text for token in tokens]
    if isinstance(model, HMMTagger):
        predicted = model.predict(words, constraints=fixed)
    else:
        predicted = model.predict(words)
    return [fixed.get(i, pos_tag) for i, pos_tag in enumerate(predicted)]


def _vote(votes: Dict[TagMode, List[str]], length: int) -> List[str]:
    """Per-token majority vote; ties go to the first mode in ENSEMBLE_PRIORITY."""
    voters = [mode for mode in ENSEMBLE_PRIORITY if mode in votes]
    tags = []
    for i in range(length):
        candidates = [votes[mode][i] for mode in voters]
        counts = Counter(candidates)
        # max() keeps the first of equally counted candidates, i.e. the highest priority
        tags.append(max(candidates, key=lambda candidate: counts[candidate]))
    return tags
