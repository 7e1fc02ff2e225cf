"""
Building blocks for the per-language rule tables.

Language modules describe their morphology as ordered lists of
``(predicate, result)`` pairs. The predicates here take the surface word
(or the word and its lemma) and return True when the rule applies.
"""
import re
from typing import Callable, Iterable, NamedTuple, Tuple

VOWELS = frozenset("aeiouáéíóúàèòïü")


def suffix(*endings: str, min_length: int = 0) -> Callable[[str], bool]:
    """Word ends with one of ``endings`` and is at least ``min_length`` long."""
    endings = tuple(endings)

    def predicate(word: str) -> bool:
        lowered = word.lower()
        return len(lowered) >= min_length and lowered.endswith(endings)

    predicate.__name__ = f"suffix_{'_'.join(endings)}"
    return predicate


def capitalized(min_length: int = 2) -> Callable[[str], bool]:
    """Word starts with an uppercase letter."""
    def predicate(word: str) -> bool:
        return len(word) >= min_length and word[0].isupper()

    return predicate


def matches(pattern: str) -> Callable[[str], bool]:
    """Lowercased word fully matches a regular expression."""
    compiled = re.compile(pattern)

    def predicate(word: str) -> bool:
        return compiled.fullmatch(word.lower()) is not None

    return predicate


def contains(fragment: str, min_length: int = 0) -> Callable[[str], bool]:
    def predicate(word: str) -> bool:
        return len(word) >= min_length and fragment in word.lower()

    return predicate


def both(*predicates: Callable[[str], bool]) -> Callable[[str], bool]:
    """All given predicates hold."""
    def predicate(word: str) -> bool:
        return all(check(word) for check in predicates)

    return predicate


def ends_like(endings: Iterable[str]) -> Callable[[str, str], bool]:
    """Feature predicate: the word (not the lemma) ends with one of ``endings``."""
    endings = tuple(endings)

    def predicate(word: str, lemma: str) -> bool:
        return word.endswith(endings)

    return predicate


def inflected(word: str, lemma: str) -> bool:
    """Feature predicate: the word differs from its lemma."""
    return word != lemma


def uninflected(word: str, lemma: str) -> bool:
    return word == lemma


def always(word: str, lemma: str) -> bool:
    return True


class LemmaRule(NamedTuple):
    """
    Suffix rewrite used for lemmatization.

    The rule applies when the word ends with ``suffix`` and is at least
    ``min_length`` characters long. The suffix is replaced by ``replacement``.
    With ``undouble`` a doubled final consonant of the stem is reduced
    (``running`` -> ``run``); ``restore_e`` lists stem endings after which a
    silent ``e`` comes back (``making`` -> ``make``). ``after`` restricts the
    rule to stems ending in one of the given characters.
    """
    suffix: str
    replacement: str = ""
    min_length: int = 0
    undouble: bool = False
    restore_e: Tuple[str, ...] = ()
    after: frozenset = frozenset()

    def apply(self, word: str):
        """Return the rewritten word, or None if the rule does not apply."""
        if not word.endswith(self.suffix) or len(word) < max(self.min_length, len(self.suffix) + 1):
            return None
        stem = word[:len(word) - len(self.suffix)]
        if self.after and stem[-1] not in self.after:
            return None
        if self.undouble and len(stem) >= 3 and stem[-1] == stem[-2] and stem[-1] not in "lsz" and stem[-1] not in VOWELS:
            return stem[:-1] + self.replacement
        if self.restore_e and stem.endswith(self.restore_e):
            return stem + "e" + self.replacement
        return stem + self.replacement


def word_in(words: Iterable[str]) -> Callable[[str, str], bool]:
    """Feature predicate: the lowercased word is one of ``words``."""
    words = frozenset(words)

    def predicate(word: str, lemma: str) -> bool:
        return word in words

    return predicate
