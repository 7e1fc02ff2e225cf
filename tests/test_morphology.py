"""
Tests for lemmatization and feature extraction.
"""
import unittest

from sintakso.languages.spanish import strip_enclitics
from sintakso.morphology import analyze, lemmatize
from sintakso.nodes import Feature, FEATURE_VALUES, Span, Token
from sintakso.rules import LemmaRule
from sintakso.tagger import tag
from sintakso.tokenizer import tokenize


def analyzed(text, language="en"):
    return analyze(tag(tokenize(text, language)))


class TestLemmaRule(unittest.TestCase):

    def test_plain_rewrite(self):
        """Tests suffix replacement."""
        self.assertEqual(LemmaRule("ies", "y").apply("flies"), "fly")

    def test_does_not_apply(self):
        """Tests that a non-matching or too-short word returns None."""
        self.assertIsNone(LemmaRule("ing", "").apply("walk"))
        self.assertIsNone(LemmaRule("s", "", min_length=3).apply("is"))
        self.assertIsNone(LemmaRule("s", "").apply("s"))

    def test_undouble_and_restore_e(self):
        """Tests consonant undoubling and silent-e restoration."""
        rule = LemmaRule("ing", "", undouble=True, restore_e=("k",))
        self.assertEqual(rule.apply("running"), "run")
        self.assertEqual(rule.apply("making"), "make")
        self.assertEqual(rule.apply("falling"), "fall")

    def test_after_restricts_stem(self):
        """Tests that ``after`` limits the rule to certain stem endings."""
        rule = LemmaRule("s", "", after=frozenset("t"))
        self.assertEqual(rule.apply("cats"), "cat")
        self.assertIsNone(rule.apply("dogs"))


class TestEnglishLemmas(unittest.TestCase):

    def test_irregular_forms(self):
        """Tests the irregular-form dictionary."""
        self.assertEqual(lemmatize("went", "verb"), "go")
        self.assertEqual(lemmatize("was", "aux"), "be")
        self.assertEqual(lemmatize("children", "noun"), "child")
        self.assertEqual(lemmatize("better", "adj"), "good")

    def test_suffix_rules(self):
        """Tests the ordered suffix rewrite rules."""
        self.assertEqual(lemmatize("running", "verb"), "run")
        self.assertEqual(lemmatize("making", "verb"), "make")
        self.assertEqual(lemmatize("walked", "verb"), "walk")
        self.assertEqual(lemmatize("tries", "verb"), "try")
        self.assertEqual(lemmatize("watches", "verb"), "watch")
        self.assertEqual(lemmatize("cats", "noun"), "cat")
        self.assertEqual(lemmatize("cities", "noun"), "city")
        self.assertEqual(lemmatize("boxes", "noun"), "box")
        self.assertEqual(lemmatize("happiest", "adj"), "happy")

    def test_identity_fallback(self):
        """Tests that words with no rule keep their lowercased form."""
        self.assertEqual(lemmatize("Glass", "noun"), "glass")
        self.assertEqual(lemmatize("quickly", "adv"), "quickly")

    def test_numbers_and_punctuation(self):
        """Tests that uninflected tokens keep their text."""
        tokens = analyzed("3 cats!")
        self.assertEqual(tokens[0].lemma, "3")
        self.assertEqual(tokens[0].morphology, {})
        self.assertEqual(tokens[2].lemma, "!")


class TestEnglishFeatures(unittest.TestCase):

    def test_plural_noun(self):
        """Tests noun number."""
        cat, cats = analyzed("the cat")[1], analyzed("the cats")[1]
        self.assertEqual(cat.morphology, {Feature.NUMBER: "singular"})
        self.assertEqual(cats.morphology, {Feature.NUMBER: "plural"})
        self.assertEqual(cats.lemma, "cat")

    def test_past_verb(self):
        """Tests past tense on an irregular verb."""
        sat = analyzed("The cat sat.")[2]
        self.assertEqual(sat.lemma, "sit")
        self.assertEqual(sat.morphology[Feature.TENSE], "past")
        self.assertEqual(sat.morphology[Feature.MOOD], "indicative")

    def test_progressive_verb(self):
        """Tests progressive aspect after an auxiliary."""
        running = analyzed("They are running")[2]
        self.assertEqual(running.lemma, "run")
        self.assertEqual(running.morphology[Feature.ASPECT], "progressive")

    def test_first_rule_wins(self):
        """Tests that an earlier rule decides a feature later rules also set."""
        sits = analyzed("The cat sits.")[2]
        self.assertEqual(sits.morphology[Feature.PERSON], "third")
        self.assertEqual(sits.morphology[Feature.TENSE], "present")
        self.assertEqual(sits.morphology[Feature.MOOD], "indicative")

    def test_pronoun_features(self):
        """Tests person, number and gender on pronouns."""
        she = analyzed("she")[0]
        self.assertEqual(she.morphology, {
            Feature.PERSON: "third", Feature.NUMBER: "singular", Feature.GENDER: "feminine",
        })

    def test_adjective_degree(self):
        """Tests comparative and superlative degree."""
        happiest = analyze([Token("happiest", Span((1, 0), 0, (1, 8), 8), pos_tag="adj")])[0]
        self.assertEqual(happiest.lemma, "happy")
        self.assertEqual(happiest.morphology[Feature.DEGREE], "superlative")
        self.assertEqual(lemmatize("bigger", "adj"), "big")

    def test_feature_values_are_known(self):
        """Tests that every produced feature value is in the fixed inventory."""
        for token in analyzed("The children were running quickly to the biggest houses."):
            for feature, value in token.morphology.items():
                self.assertIn(value, FEATURE_VALUES[feature])

    def test_input_untouched(self):
        """Tests that analysis returns new tokens."""
        tagged = tag(tokenize("cats"))
        result = analyze(tagged)
        self.assertIsNone(tagged[0].lemma)
        self.assertEqual(result[0].lemma, "cat")

    def test_empty(self):
        """Tests that an empty list analyzes to an empty list."""
        self.assertEqual(analyze([]), [])


class TestSpanishMorphology(unittest.TestCase):

    def test_lemmas(self):
        """Tests Spanish verb, noun and adjective lemmas."""
        self.assertEqual(lemmatize("come", "verb", "es"), "comer")
        self.assertEqual(lemmatize("hablaba", "verb", "es"), "hablar")
        self.assertEqual(lemmatize("fue", "aux", "es"), "ser")
        self.assertEqual(lemmatize("gatos", "noun", "es"), "gato")
        self.assertEqual(lemmatize("canciones", "noun", "es"), "canción")
        self.assertEqual(lemmatize("negras", "adj", "es"), "negro")

    def test_enclitic_verbs(self):
        """Tests that enclitic pronouns are stripped before the verb endings."""
        self.assertEqual(lemmatize("comerlo", "verb", "es"), "comer")
        self.assertEqual(lemmatize("decírselo", "verb", "es"), "decir")
        self.assertEqual(lemmatize("diciéndoselo", "verb", "es"), "decir")
        self.assertEqual(lemmatize("hablándole", "verb", "es"), "hablar")
        self.assertEqual(lemmatize("Dámelo", "verb", "es"), "dar")

    def test_enclitic_lookalikes(self):
        """Tests verbs whose endings only resemble enclitic pronouns."""
        self.assertEqual(lemmatize("comíamos", "verb", "es"), "comer")
        self.assertEqual(lemmatize("duerme", "verb", "es"), "dormir")
        self.assertEqual(strip_enclitics("parte"), "parte")
        self.assertEqual(strip_enclitics("convierte"), "convierte")
        self.assertEqual(strip_enclitics("come"), "come")

    def test_enclitic_verb_features(self):
        """Tests that a gerund with enclitics keeps its progressive aspect."""
        [token] = analyzed("diciéndoselo", "es")
        self.assertEqual(token.lemma, "decir")
        self.assertEqual(token.morphology[Feature.ASPECT], "progressive")

    def test_features(self):
        """Tests gender and number agreement features."""
        tokens = analyzed("Las gatas negras comen.", "es")
        gatas = tokens[1]
        self.assertEqual(gatas.lemma, "gata")
        self.assertEqual(gatas.morphology[Feature.GENDER], "feminine")
        self.assertEqual(gatas.morphology[Feature.NUMBER], "plural")

    def test_imperfect_tense(self):
        """Tests imperfect tense detection."""
        tokens = analyzed("Yo hablaba.", "es")
        self.assertEqual(tokens[1].pos_tag, "verb")
        self.assertEqual(tokens[1].morphology[Feature.TENSE], "imperfect")


class TestCatalanMorphology(unittest.TestCase):

    def test_lemmas(self):
        """Tests Catalan irregular and regular lemmas."""
        self.assertEqual(lemmatize("bones", "adj", "ca"), "bo")
        self.assertEqual(lemmatize("dorm", "verb", "ca"), "dormir")
        self.assertEqual(lemmatize("cantava", "verb", "ca"), "cantar")
        self.assertEqual(lemmatize("estacions", "noun", "ca"), "estació")
        self.assertEqual(lemmatize("gats", "noun", "ca"), "gat")

    def test_features(self):
        """Tests Catalan noun number."""
        tokens = analyzed("Els gats dormen.", "ca")
        self.assertEqual(tokens[1].morphology[Feature.NUMBER], "plural")


if __name__ == '__main__':
    unittest.main()
