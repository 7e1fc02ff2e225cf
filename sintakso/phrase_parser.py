"""
Phrase-structure parser.

Greedy, left-to-right recognizers over a tagged token list. Every rule has
the shape ``rule(tokens, pos) -> (node, next_pos)`` or returns NO_MATCH, and
never recurses without consuming a token first.

Grammar:
    NounPhrase          := Det? QuantAdj* (Noun | Propn+ | Pron) Adj* PostModifier*
    VerbPhrase          := Aux* Verb NounPhrase? (PrepositionalPhrase | Adv)*
    PrepositionalPhrase := Adp NounPhrase
    PostModifier        := RelativeClause | PrepositionalPhrase
    RelativeClause      := Relativizer (VerbPhrase | NounPhrase VerbPhrase)

Post-modifiers attach to the nearest noun phrase: in "the cat on the mat
that sits" the relative clause modifies "mat".
"""
import logging
from typing import Optional, Sequence, Tuple

from .errors import NO_MATCH
from .languages import get_language
from .nodes import (
    Clause, ClauseType, NounPhrase, PrepositionalPhrase, RelativeClause,
    RelativeClauseType, Token, VerbPhrase,
)

logger = logging.getLogger(__name__)

NOMINAL_HEADS = ("noun", "pron")


class PhraseParser:
    """Phrase rules for one language."""

    def __init__(self, language=None):
        self.profile = get_language(language)
        self.language = self.profile.code

    # ========================================================================
    # Noun phrases
    # ========================================================================

    def parse_noun_phrase(self, tokens: Sequence[Token], pos: int):
        """
        Det? QuantAdj* (Noun | Propn+ | Pron) Adj* PostModifier*

        A name run (``New York``) keeps its first word as head and the rest
        as modifiers. A determiner that is not an article and has no noun
        after it (``I love her``, ``I see that``, ``I think that he left``)
        stands alone as the head.
        """
        if pos >= len(tokens):
            return NO_MATCH
        i = pos
        determiner = None
        if tokens[i].pos_tag == "det":
            determiner = tokens[i]
            i += 1

        modifiers = []
        while i < len(tokens) and self._prenominal(tokens[i]):
            modifiers.append(tokens[i])
            i += 1

        head = _at(tokens, i)
        if head is not None and head.pos_tag in NOMINAL_HEADS:
            i += 1
        elif head is not None and head.pos_tag == "propn":
            i += 1
            while i < len(tokens) and tokens[i].pos_tag == "propn":
                modifiers.append(tokens[i])
                i += 1
        elif modifiers and modifiers[-1].pos_tag == "num":
            # "3 of them", "than 21": a bare number is the head
            head = modifiers.pop()
        else:
            return self._standalone_determiner(determiner, modifiers, pos)

        # Pronouns take no determiner and no post-modifiers
        if head.pos_tag == "pron":
            if determiner is not None:
                # "I think that he left": the determiner does not attach to "he"
                return self._standalone_determiner(determiner, modifiers, pos)
            return NounPhrase(head=head, modifiers=modifiers, language=self.language), i

        if self.profile.postnominal_adjectives:
            while i < len(tokens) and tokens[i].pos_tag == "adj":
                modifiers.append(tokens[i])
                i += 1

        post_modifiers, i = self._post_modifiers(tokens, i)
        return NounPhrase(head=head, determiner=determiner, modifiers=modifiers,
                          post_modifiers=post_modifiers, language=self.language), i

    def _standalone_determiner(self, determiner, modifiers, pos):
        if determiner is None or modifiers or determiner.text.lower() in self.profile.articles:
            return NO_MATCH
        return NounPhrase(head=determiner, language=self.language), pos + 1

    def _prenominal(self, token: Token) -> bool:
        if token.pos_tag == "num":
            return True
        if token.pos_tag != "adj":
            return False
        quantifiers = self.profile.quantifier_adjectives
        return quantifiers is None or token.text.lower() in quantifiers

    def _post_modifiers(self, tokens, i) -> Tuple[list, int]:
        post_modifiers = []
        while i < len(tokens):
            result = self.parse_relative_clause(tokens, i) or self.parse_prepositional_phrase(tokens, i)
            if not result:
                break
            node, i = result
            post_modifiers.append(node)
        return post_modifiers, i

    # ========================================================================
    # Verb phrases
    # ========================================================================

    def parse_verb_phrase(self, tokens: Sequence[Token], pos: int):
        """
        Aux* Verb NounPhrase? (PrepositionalPhrase | Adv)*

        Without a main verb the last auxiliary is the head (copula:
        "the cat is a pet").
        """
        i = pos
        auxiliaries = []
        while i < len(tokens) and tokens[i].pos_tag == "aux":
            auxiliaries.append(tokens[i])
            i += 1

        verb = _at(tokens, i)
        if verb is not None and verb.pos_tag == "verb":
            head = verb
            i += 1
        elif auxiliaries:
            head = auxiliaries.pop()
        else:
            return NO_MATCH

        complements = []
        obj = self.parse_noun_phrase(tokens, i)
        if obj:
            node, i = obj
            complements.append(node)

        while i < len(tokens):
            token = tokens[i]
            if token.pos_tag == "adv":
                complements.append(token)
                i += 1
                continue
            pp = self.parse_prepositional_phrase(tokens, i)
            if not pp:
                break
            node, i = pp
            complements.append(node)

        return VerbPhrase(head=head, auxiliaries=auxiliaries, complements=complements,
                          language=self.language), i

    # ========================================================================
    # Prepositional phrases
    # ========================================================================

    def parse_prepositional_phrase(self, tokens: Sequence[Token], pos: int):
        """Adp NounPhrase. Comparative "than" counts as a preposition."""
        preposition = _at(tokens, pos)
        if preposition is None:
            return NO_MATCH
        if preposition.pos_tag != "adp" and not (
                preposition.pos_tag == "sconj" and preposition.text.lower() == "than"):
            return NO_MATCH

        obj = self.parse_noun_phrase(tokens, pos + 1)
        if not obj:
            return NO_MATCH
        node, i = obj
        return PrepositionalPhrase(head=preposition, object=node, language=self.language), i

    # ========================================================================
    # Relative clauses
    # ========================================================================

    def parse_relative_clause(self, tokens: Sequence[Token], pos: int):
        """
        [","] Relativizer (VerbPhrase | NounPhrase VerbPhrase)

        A comma before a non-restrictive relativizer (who, which) makes the
        clause non-restrictive; the comma itself is not part of the node.
        """
        clause_type = RelativeClauseType.RESTRICTIVE
        i = pos
        token = _at(tokens, i)
        if token is not None and token.pos_tag == "punct" and token.text == ",":
            following = _at(tokens, i + 1)
            if following is None or following.text.lower() not in self.profile.non_restrictive_relativizers:
                return NO_MATCH
            clause_type = RelativeClauseType.NON_RESTRICTIVE
            i += 1

        relativizer = _at(tokens, i)
        if relativizer is None or not self._is_relativizer(relativizer):
            return NO_MATCH
        i += 1

        # The relativizer is the subject: "that sits"
        predicate = self.parse_verb_phrase(tokens, i)
        subject = None
        if not predicate:
            # The relativizer is the object: "that the dog chased"
            subject_result = self.parse_noun_phrase(tokens, i)
            if not subject_result:
                return NO_MATCH
            subject, after_subject = subject_result
            predicate = self.parse_verb_phrase(tokens, after_subject)
            if not predicate:
                return NO_MATCH

        verb_phrase, i = predicate
        clause = Clause(predicate=verb_phrase, type=ClauseType.RELATIVE, subject=subject,
                        language=self.language)
        logger.debug(f"Relative clause on '{relativizer.text}' ({clause_type.value})")
        return RelativeClause(relativizer=relativizer, clause=clause, type=clause_type), i

    def _is_relativizer(self, token: Token) -> bool:
        word = token.text.lower()
        if token.pos_tag in ("pron", "det"):
            return word in self.profile.relativizers
        if token.pos_tag in ("adv", "sconj"):
            return word in self.profile.adverbial_relativizers
        return False


def _at(tokens: Sequence[Token], pos: int) -> Optional[Token]:
    return tokens[pos] if 0 <= pos < len(tokens) else None
