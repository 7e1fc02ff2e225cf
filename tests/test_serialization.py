"""
Tests for the JSON views of trees and dependencies.
"""
import json
import unittest

from sintakso.pipeline import GrammarPipeline
from sintakso.serialization import span_to_dict, to_dict


class TestToDict(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.analysis = GrammarPipeline().analyze("The cats sat.")

    def test_token(self):
        """Tests the token view, with feature names as keys."""
        data = to_dict(self.analysis.tokens[1])
        self.assertEqual(data["type"], "Token")
        self.assertEqual(data["text"], "cats")
        self.assertEqual(data["pos_tag"], "noun")
        self.assertEqual(data["lemma"], "cat")
        self.assertEqual(data["morphology"], {"number": "plural"})
        self.assertEqual(data["span"]["start"], {"line": 1, "column": 4, "offset": 4})

    def test_sentence(self):
        """Tests that composite nodes carry their class name and enum values."""
        data = to_dict(self.analysis.sentences[0])
        self.assertEqual(data["type"], "Sentence")
        self.assertEqual(data["function"], "declarative")
        self.assertEqual(data["structure"], "simple")
        self.assertEqual(data["additional_clauses"], [])
        clause = data["main_clause"]
        self.assertEqual(clause["type"], "independent")
        self.assertEqual(clause["subject"]["head"]["text"], "cats")
        self.assertIsNone(clause["subordinator"])

    def test_dependency(self):
        """Tests that edges refer to tokens by text, tag and offset."""
        nsubj = to_dict(self.analysis.dependencies[0][0])
        self.assertEqual(nsubj["relation"], "nsubj")
        self.assertEqual(nsubj["head"], {"text": "sat", "pos_tag": "verb", "offset": 9})
        self.assertEqual(nsubj["dependent"], {"text": "cats", "pos_tag": "noun", "offset": 4})

    def test_document_is_json(self):
        """Tests that a whole document serializes to JSON."""
        data = json.loads(json.dumps(to_dict(self.analysis.document)))
        self.assertEqual(data["metadata"], {"token_count": 4, "sentence_count": 1})
        self.assertEqual(len(data["paragraphs"]), 1)

    def test_span(self):
        """Tests the span view."""
        span = self.analysis.document.span
        self.assertEqual(span_to_dict(span), {
            "start": {"line": 1, "column": 0, "offset": 0},
            "end": {"line": 1, "column": 13, "offset": 13},
        })


if __name__ == '__main__':
    unittest.main()
