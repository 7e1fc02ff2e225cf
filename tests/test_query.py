"""
Tests for tree traversal, queries and validation.
"""
import re
import unittest

from helpers import tagged

from sintakso.nodes import (
    Clause, Document, NounPhrase, PrepositionalPhrase, RelativeClause, Sentence, Span, Token, VerbPhrase,
)
from sintakso.pipeline import GrammarPipeline
from sintakso.query import (
    children, collect, content_words, extract_spans, find, find_all, find_by_lemma, find_by_pos,
    find_by_text, find_main_verb, find_subject, validate_language, validate_spans, walk, walk_post,
)

TEXT = "The cat sat on the mat. I see the cat that sits."


class QueryTestCase(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.analysis = GrammarPipeline().analyze(TEXT)
        cls.document = cls.analysis.document
        cls.first, cls.second = cls.analysis.sentences


class TestTraversal(QueryTestCase):

    def test_children_in_source_order(self):
        """Tests the immediate children of a clause and of a token."""
        clause = self.first.main_clause
        self.assertEqual(children(clause), [clause.subject, clause.predicate])
        self.assertEqual(children(clause.subject.head), [])
        self.assertEqual(children(self.document), list(self.document.paragraphs))

    def test_walk_is_pre_order(self):
        """Tests that parents come before children and tokens follow the text."""
        nodes = list(walk(self.first))
        self.assertIs(nodes[0], self.first)
        self.assertIsInstance(nodes[1], Clause)
        tokens = [node.text for node in nodes if isinstance(node, Token)]
        self.assertEqual(tokens, ["The", "cat", "sat", "on", "the", "mat"])

    def test_walk_post(self):
        """Tests that children come before their parents."""
        nodes = list(walk_post(self.first))
        self.assertIs(nodes[-1], self.first)
        self.assertEqual(nodes[0].text, "The")
        self.assertLess(nodes.index(self.first.main_clause.subject.head),
                        nodes.index(self.first.main_clause.subject))

    def test_collect_and_find(self):
        """Tests predicate collection and the first match."""
        adpositions = collect(self.document, lambda node: isinstance(node, Token) and node.pos_tag == "adp")
        self.assertEqual([token.text for token in adpositions], ["on"])
        self.assertEqual(find(self.document, lambda node: isinstance(node, VerbPhrase)).head.text, "sat")
        self.assertIsNone(find(self.document, lambda node: isinstance(node, Token) and node.text == "dog"))


class TestQueries(QueryTestCase):

    def test_find_all(self):
        """Tests finding nodes by class."""
        self.assertEqual([np.head.text for np in find_all(self.first, NounPhrase)], ["cat", "mat"])
        self.assertEqual(len(find_all(self.document, Sentence)), 2)
        [relative] = find_all(self.document, RelativeClause)
        self.assertEqual(relative.relativizer.text, "that")
        self.assertEqual(len(find_all(self.first, (NounPhrase, PrepositionalPhrase))), 3)

    def test_find_by_pos_and_lemma(self):
        """Tests token queries by tag and lemma."""
        self.assertEqual([t.text for t in find_by_pos(self.first, "det")], ["The", "the"])
        self.assertEqual([t.text for t in find_by_lemma(self.first, "sit")], ["sat"])

    def test_find_by_text(self):
        """Tests exact and regular-expression text queries."""
        self.assertEqual(len(find_by_text(self.document, "cat")), 2)
        self.assertEqual([t.text for t in find_by_text(self.first, re.compile(r"^[Tt]he$"))], ["The", "the"])

    def test_subject_and_main_verb(self):
        """Tests the sentence-level shortcuts."""
        self.assertEqual(find_subject(self.first).head.text, "cat")
        self.assertEqual(find_subject(self.second.main_clause).head.text, "I")
        self.assertEqual(find_main_verb(self.first).text, "sat")
        self.assertEqual(find_main_verb(self.second.main_clause.predicate).text, "see")
        self.assertIsNone(find_subject(self.first.main_clause.subject))
        self.assertIsNone(find_main_verb(self.first.main_clause.subject.head))

    def test_content_words(self):
        """Tests that only open-class words are returned."""
        self.assertEqual([t.text for t in content_words(self.first)], ["cat", "sat", "mat"])

    def test_extract_spans(self):
        """Tests source text for matching nodes."""
        spans = extract_spans(self.first, TEXT, lambda node: isinstance(node, NounPhrase))
        self.assertEqual([text for text, _ in spans], ["The cat", "the mat"])
        self.assertEqual(spans[0][1], self.first.main_clause.subject.span)


class TestValidation(unittest.TestCase):

    def test_pipeline_trees_are_valid(self):
        """Tests that analysis output passes both validators in every language."""
        for language, text in [
            ("en", "The cat sat on the mat. I see the cat, which sits.\n\nBecause I ran home."),
            ("es", "El gato negro come. Come pan el niño."),
            ("ca", "El gat dorm. L'home col·labora."),
        ]:
            document = GrammarPipeline(language=language).analyze(text).document
            self.assertEqual(validate_spans(document), [], language)
            self.assertEqual(validate_language(document), [], language)

    def test_child_outside_parent(self):
        """Tests that a span not covering its children is reported."""
        the, cat = tagged("the/det cat/noun")
        phrase = NounPhrase(head=cat, determiner=the, span=Span((1, 0), 0, (1, 3), 3))
        self.assertEqual(validate_spans(phrase), ["Token 4:7 is outside NounPhrase 0:3"])

    def test_language_mismatch(self):
        """Tests that a node in another language is reported."""
        [gato] = tagged("gato/noun", language="en")
        phrase = NounPhrase(head=gato, language="es")
        self.assertEqual(validate_language(phrase), ["Token 0:4 is 'en', expected 'es'"])

    def test_empty_document(self):
        """Tests that an empty document is valid."""
        self.assertEqual(validate_spans(Document()), [])


if __name__ == '__main__':
    unittest.main()
