"""
Tests for the GrammarPipeline orchestrator.

This test suite validates:
- Full analysis from raw text to dependencies
- Stopping after each intermediate stage
- Errors recorded on the trace
- Span invariants of the resulting tree
"""
import unittest

from sintakso.config import Settings
from sintakso.errors import TagError, TokenizeError, UnsupportedLanguageError
from sintakso.nodes import ClauseType, SentenceStructure
from sintakso.pipeline import Analysis, GrammarPipeline, STAGES
from sintakso.query import validate_spans
from sintakso.tagger import TagMode
from sintakso.trace import ExecutionTrace


def relations(analysis):
    return [[repr(edge) for edge in edges] for edges in analysis.dependencies]


class TestGrammarPipeline(unittest.TestCase):
    """Test suite for the GrammarPipeline class."""

    def setUp(self):
        self.pipeline = GrammarPipeline()

    def test_defaults(self):
        """Tests the default language and tag mode."""
        self.assertEqual(self.pipeline.language, "en")
        self.assertEqual(self.pipeline.tag_mode, TagMode.RULE_BASED)
        self.assertIsNone(self.pipeline.hmm_model)

    def test_invalid_configuration(self):
        """Tests that bad languages and modes fail at construction."""
        with self.assertRaises(UnsupportedLanguageError):
            GrammarPipeline(language="eo")
        with self.assertRaises(TagError):
            GrammarPipeline(tag_mode="telepathy")

    def test_analyze_simple_sentence(self):
        """Tests the full analysis of the smallest declarative sentence."""
        analysis = self.pipeline.analyze("The cat sat.")
        self.assertEqual([t.pos_tag for t in analysis.tokens], ["det", "noun", "verb", "punct"])
        self.assertEqual(analysis.tokens[2].lemma, "sit")
        [sentence] = analysis.sentences
        self.assertEqual(sentence.structure, SentenceStructure.SIMPLE)
        self.assertEqual(relations(analysis), [["nsubj(sat, cat)", "det(cat, The)"]])

    def test_analyze_prepositional_phrase(self):
        """Tests an oblique prepositional complement."""
        analysis = self.pipeline.analyze("The cat sat on the mat.")
        self.assertEqual(relations(analysis), [[
            "nsubj(sat, cat)", "det(cat, The)", "obl(sat, mat)", "case(mat, on)", "det(mat, the)",
        ]])

    def test_analyze_subordinate_clause(self):
        """Tests that a leading subordinator makes the sentence a subordinate fragment."""
        analysis = self.pipeline.analyze("Because I ran home.")
        [sentence] = analysis.sentences
        self.assertEqual(sentence.structure, SentenceStructure.FRAGMENT)
        self.assertEqual(sentence.main_clause.type, ClauseType.SUBORDINATE)
        self.assertEqual(sentence.main_clause.subordinator.text, "Because")
        self.assertEqual(relations(analysis), [["nsubj(ran, I)", "obj(ran, home)", "mark(ran, Because)"]])

    def test_analyze_relative_clause(self):
        """Tests acl and mark edges for a relative clause in raw text."""
        analysis = self.pipeline.analyze("I see the cat that sits.")
        self.assertEqual(relations(analysis), [[
            "nsubj(see, I)", "obj(see, cat)", "det(cat, the)", "acl(cat, sits)", "mark(sits, that)",
        ]])

    def test_determiner_not_attached_to_pronoun(self):
        """Tests that "that" before a pronoun is not its determiner."""
        analysis = self.pipeline.analyze("I think that he left.")
        self.assertEqual(relations(analysis), [["nsubj(think, I)", "obj(think, that)"]])

    def test_analyze_empty_text(self):
        """Tests that empty input yields an empty analysis."""
        analysis = self.pipeline.analyze("")
        self.assertEqual(analysis.tokens, [])
        self.assertEqual(analysis.sentences, [])
        self.assertEqual(analysis.dependencies, [])

    def test_analyze_raises_tokenize_error(self):
        """Tests that analyze() propagates scanner errors."""
        with self.assertRaises(TokenizeError):
            self.pipeline.analyze("The cat ☃ sat.")

    def test_spans_nest(self):
        """Tests that sentences contain their tokens and cover their source text."""
        text = "The cat sat on the mat. I see the cat that sits."
        analysis = self.pipeline.analyze(text)
        self.assertEqual(len(analysis.sentences), 2)
        self.assertEqual(validate_spans(analysis.document), [])
        for sentence in analysis.sentences:
            for token in sentence.tokens():
                self.assertTrue(sentence.span.contains(token.span))
        self.assertEqual(analysis.sentences[0].span.extract(text), "The cat sat on the mat.")
        self.assertEqual(analysis.document.span.extract(text), text)

    def test_workers(self):
        """Tests that threaded parsing gives the same analysis."""
        text = "The cat sat. The dog sat on the mat. I see the cat that sits."
        threaded = GrammarPipeline(workers=3).analyze(text)
        self.assertEqual(threaded.document, self.pipeline.analyze(text).document)
        self.assertEqual(relations(threaded), relations(self.pipeline.analyze(text)))

    def test_from_settings(self):
        """Tests building a pipeline from settings."""
        pipeline = GrammarPipeline.from_settings(Settings(language="ca", workers=2))
        self.assertEqual(pipeline.language, "ca")
        self.assertEqual(pipeline.workers, 2)


class TestPipelineRun(unittest.TestCase):
    """Test suite for traced runs."""

    def setUp(self):
        self.pipeline = GrammarPipeline()

    def test_run_records_every_stage(self):
        """Tests that a full run records all stages and the analysis."""
        trace = self.pipeline.run("The cat sat.")
        self.assertIsInstance(trace, ExecutionTrace)
        self.assertEqual([step["name"] for step in trace.steps], list(STAGES))
        self.assertIsInstance(trace.result, Analysis)
        self.assertIsNone(trace.error)
        self.assertIsNotNone(trace.end_time)
        self.assertEqual(trace.step("Tokenizer")["outputs"]["tokens"], ["The", "cat", "sat", "."])
        self.assertEqual(trace.step("Tagger")["inputs"]["mode"], "rule_based")
        self.assertEqual(
            trace.step("DependencyExtractor")["outputs"]["dependencies"],
            [["nsubj(sat, cat)", "det(cat, The)"]],
        )

    def test_stop_after_each_stage(self):
        """Tests that the run stops after the requested stage."""
        for index, stage in enumerate(STAGES[:-1]):
            with self.subTest(stage=stage):
                trace = self.pipeline.run("The cat sat.", stop_after=stage)
                self.assertEqual(len(trace.steps), index + 1)
                self.assertEqual(trace.steps[-1]["name"], stage)
                self.assertIsNone(trace.result)
                self.assertIsNone(trace.error)

    def test_unknown_stage(self):
        """Tests that an unknown stage name is rejected up front."""
        with self.assertRaises(ValueError):
            self.pipeline.run("The cat sat.", stop_after="Orchestrator")

    def test_error_recorded_on_trace(self):
        """Tests that a failing stage ends the trace with an error."""
        trace = self.pipeline.run("The cat ☃ sat.")
        self.assertEqual(trace.steps, [])
        self.assertIsNone(trace.result)
        self.assertIn("line 1", trace.error)
        self.assertIsNotNone(trace.end_time)


class TestOtherLanguages(unittest.TestCase):

    def test_spanish(self):
        """Tests a Spanish subject with a post-nominal adjective."""
        analysis = GrammarPipeline(language="es").analyze("El gato negro come.")
        self.assertEqual(relations(analysis), [["nsubj(come, gato)", "det(gato, El)", "amod(gato, negro)"]])
        self.assertEqual(analysis.tokens[3].lemma, "comer")

    def test_catalan(self):
        """Tests a Catalan elided article."""
        analysis = GrammarPipeline(language="ca").analyze("L'home col·labora.")
        self.assertEqual([t.text for t in analysis.tokens], ["L'", "home", "col·labora", "."])
        self.assertEqual(relations(analysis), [["nsubj(col·labora, home)", "det(home, L')"]])


if __name__ == '__main__':
    unittest.main()
