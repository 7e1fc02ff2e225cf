"""
Tests for the ExecutionTrace.
"""
import unittest
import json

from sintakso.pipeline import Analysis
from sintakso.trace import ExecutionTrace


class TestExecutionTrace(unittest.TestCase):

    def test_trace_initialization(self):
        """Tests that the trace is initialized correctly."""
        trace = ExecutionTrace(initial_text="The cat sat.", language="en")
        self.assertEqual(trace.initial_text, "The cat sat.")
        self.assertEqual(trace.language, "en")
        self.assertIsNotNone(trace.trace_id)
        self.assertTrue(trace.start_time.endswith("Z"))
        self.assertIsNone(trace.end_time)
        self.assertEqual(trace.steps, [])
        self.assertIsNone(trace.result)
        self.assertIsNone(trace.error)

    def test_add_step(self):
        """Tests that steps are numbered in order."""
        trace = ExecutionTrace("text")
        trace.add_step("Tokenizer", inputs={"text_length": 4}, outputs={"tokens": ["text"]},
                       description="Split the text.")
        trace.add_step("Tagger", inputs={}, outputs={})
        self.assertEqual([step["step_id"] for step in trace.steps], [1, 2])
        first = trace.steps[0]
        self.assertEqual(first["name"], "Tokenizer")
        self.assertEqual(first["outputs"], {"tokens": ["text"]})
        self.assertEqual(first["description"], "Split the text.")
        self.assertNotIn("description", trace.steps[1])

    def test_step_lookup(self):
        """Tests finding a step by name."""
        trace = ExecutionTrace("text")
        trace.add_step("Tokenizer", inputs={}, outputs={"tokens": []})
        self.assertEqual(trace.step("Tokenizer")["outputs"], {"tokens": []})
        self.assertIsNone(trace.step("Tagger"))

    def test_set_result(self):
        """Tests that a result concludes the trace."""
        trace = ExecutionTrace("text")
        analysis = Analysis()
        trace.set_result(analysis)
        self.assertIs(trace.result, analysis)
        self.assertIsNotNone(trace.end_time)
        self.assertIsNone(trace.error)

    def test_set_error(self):
        """Tests that an error concludes the trace."""
        trace = ExecutionTrace("text")
        trace.set_error("Something went wrong.")
        self.assertEqual(trace.error, "Something went wrong.")
        self.assertIsNotNone(trace.end_time)
        self.assertIsNone(trace.result)

    def test_to_json(self):
        """Tests serialization to JSON, including a result."""
        trace = ExecutionTrace("¿Qué?", language="es")
        trace.add_step("Tokenizer", inputs={}, outputs={})
        trace.set_result(Analysis())

        data = json.loads(trace.to_json())
        self.assertEqual(data["trace_id"], trace.trace_id)
        self.assertEqual(data["initial_text"], "¿Qué?")
        self.assertEqual(data["language"], "es")
        self.assertEqual(len(data["steps"]), 1)
        self.assertEqual(data["result"]["type"], "Analysis")
        self.assertEqual(data["result"]["tokens"], [])
        self.assertIsNone(data["error"])
        # Non-ASCII text is written as is
        self.assertIn("¿Qué?", trace.to_json())


if __name__ == '__main__':
    unittest.main()
