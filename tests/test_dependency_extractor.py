"""
Tests for dependency extraction.
"""
import unittest

from helpers import relations, tagged

from sintakso.dependency_extractor import extract, extract_document
from sintakso.nodes import Span
from sintakso.sentence_parser import parse_document, parse_sentences


def edges_of(text, language="en"):
    [sentence] = parse_sentences(tagged(text, language))
    return relations(extract(sentence))


class TestExtract(unittest.TestCase):

    def test_subject_and_determiner(self):
        """Tests the smallest declarative sentence."""
        self.assertEqual(
            edges_of("the/det cat/noun sat/verb ./punct"),
            ["nsubj(sat, cat)", "det(cat, the)"],
        )

    def test_oblique(self):
        """Tests a prepositional complement of the verb."""
        self.assertEqual(
            edges_of("the/det cat/noun sat/verb on/adp the/det mat/noun ./punct"),
            ["nsubj(sat, cat)", "det(cat, the)", "obl(sat, mat)", "case(mat, on)", "det(mat, the)"],
        )

    def test_nominal_modifier(self):
        """Tests that a prepositional phrase inside a noun phrase is nmod."""
        self.assertEqual(
            edges_of("I/pron saw/verb the/det cat/noun on/adp the/det mat/noun"),
            ["nsubj(saw, I)", "obj(saw, cat)", "det(cat, the)",
             "nmod(cat, mat)", "case(mat, on)", "det(mat, the)"],
        )

    def test_modifier_relations(self):
        """Tests flat, nummod and amod."""
        self.assertEqual(
            edges_of("New/propn York/propn has/aux 3/num big/adj parks/noun"),
            ["nsubj(has, New)", "flat(New, York)", "obj(has, parks)",
             "nummod(parks, 3)", "amod(parks, big)"],
        )

    def test_auxiliaries_and_adverb(self):
        """Tests aux and advmod edges."""
        self.assertEqual(
            edges_of("she/pron has/aux been/aux running/verb quickly/adv"),
            ["nsubj(running, she)", "aux(running, has)", "aux(running, been)",
             "advmod(running, quickly)"],
        )

    def test_subordinator(self):
        """Tests that the subordinator is marked on the predicate."""
        self.assertEqual(
            edges_of("because/sconj I/pron ran/verb ./punct"),
            ["nsubj(ran, I)", "mark(ran, because)"],
        )

    def test_relative_clause(self):
        """Tests acl and mark for a relative clause."""
        self.assertEqual(
            edges_of("I/pron see/verb the/det cat/noun that/det sits/verb ./punct"),
            ["nsubj(see, I)", "obj(see, cat)", "det(cat, the)", "acl(cat, sits)", "mark(sits, that)"],
        )

    def test_compound_main_clause_first(self):
        """Tests that additional clauses follow the main clause."""
        self.assertEqual(
            edges_of("I/pron ran/verb and/cconj she/pron sat/verb"),
            ["nsubj(ran, I)", "nsubj(sat, she)"],
        )

    def test_spanish_postnominal_adjective(self):
        """Tests a Spanish subject with a post-nominal adjective."""
        self.assertEqual(
            edges_of("El/det gato/noun negro/adj come/verb ./punct", "es"),
            ["nsubj(come, gato)", "det(gato, El)", "amod(gato, negro)"],
        )

    def test_fragment_has_no_edges(self):
        """Tests that a one-word fragment yields no edges."""
        self.assertEqual(edges_of("Hello/intj !/punct"), [])

    def test_deterministic(self):
        """Tests that extraction always yields the same list."""
        [sentence] = parse_sentences(tagged("I/pron see/verb the/det cat/noun that/det sits/verb"))
        self.assertEqual(extract(sentence), extract(sentence))

    def test_edge_span(self):
        """Tests that an edge spans from its head to its dependent."""
        tokens = tagged("the/det cat/noun sat/verb")
        [sentence] = parse_sentences(tokens)
        nsubj = extract(sentence)[0]
        self.assertEqual(nsubj.head, tokens[2])
        self.assertEqual(nsubj.dependent, tokens[1])
        self.assertEqual(nsubj.span, Span.union(tokens[1].span, tokens[2].span))


class TestExtractDocument(unittest.TestCase):

    def test_one_list_per_sentence(self):
        """Tests document order and the threaded path."""
        document = parse_document(tagged("the/det cat/noun sat/verb ./punct Hello/intj !/punct I/pron ran/verb"))
        expected = [["nsubj(sat, cat)", "det(cat, the)"], [], ["nsubj(ran, I)"]]
        self.assertEqual([relations(edges) for edges in extract_document(document)], expected)
        self.assertEqual([relations(edges) for edges in extract_document(document, workers=3)], expected)


if __name__ == '__main__':
    unittest.main()
