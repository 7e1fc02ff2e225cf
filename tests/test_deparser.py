"""
Tests for turning trees back into text.
"""
import unittest

from sintakso.deparser import deparse, join_tokens, pretty_print, surface
from sintakso.pipeline import GrammarPipeline
from sintakso.tokenizer import tokenize


class TestSurface(unittest.TestCase):

    def test_sentence_surface(self):
        """Tests that a sentence cuts its exact source text out."""
        text = "The cat sat.  I ran home."
        analysis = GrammarPipeline().analyze(text)
        self.assertEqual([surface(s, text) for s in analysis.sentences], ["The cat sat.", "I ran home."])

    def test_phrase_surface(self):
        """Tests the surface of a subject noun phrase in multibyte text."""
        text = "¿El gato negro come?"
        [sentence] = GrammarPipeline(language="es").analyze(text).sentences
        self.assertEqual(surface(sentence.main_clause.subject, text), "El gato negro")


class TestDeparse(unittest.TestCase):

    def test_deparse_tree_tokens(self):
        """Tests that deparse joins the tokens inside the tree."""
        [sentence] = GrammarPipeline().analyze("The cat sat on the mat.").sentences
        self.assertEqual(deparse(sentence), "The cat sat on the mat")

    def test_join_tokens_spacing(self):
        """Tests spacing around punctuation and elided words."""
        self.assertEqual(join_tokens(tokenize("L'home col·labora.", "ca")), "L'home col·labora.")
        self.assertEqual(join_tokens(tokenize("¿Dónde está?", "es")), "¿Dónde está?")
        self.assertEqual(join_tokens(tokenize("Yes , (really) !")), "Yes, (really)!")
        self.assertEqual(join_tokens([]), "")


class TestPrettyPrint(unittest.TestCase):

    def test_sentence_tree(self):
        """Tests the indented rendering of a simple sentence."""
        [sentence] = GrammarPipeline().analyze("The cat sat.").sentences
        self.assertEqual(pretty_print(sentence).splitlines(), [
            "Sentence (declarative, simple)",
            "  Clause (independent)",
            "    subject: NounPhrase",
            "      det: The [det]",
            "      head: cat [noun]",
            "    predicate: VerbPhrase",
            "      head: sat [verb]",
        ])

    def test_document_and_relative_clause(self):
        """Tests rendering a document with a post-modifier."""
        document = GrammarPipeline().analyze("I see the cat that sits.").document
        lines = pretty_print(document).splitlines()
        self.assertEqual(lines[0], "Document (en, 1 sentences)")
        self.assertEqual(lines[1], "  Paragraph")
        self.assertIn("            post: RelativeClause (restrictive)", lines)
        self.assertIn("              relativizer: that [det]", lines)

    def test_unknown_node(self):
        """Tests that only tree nodes can be rendered."""
        with self.assertRaises(ValueError):
            pretty_print("The cat sat.")


if __name__ == '__main__':
    unittest.main()
