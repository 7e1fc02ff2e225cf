"""
Execution traces: a step-by-step record of one pipeline run.
"""
import json
import uuid
from datetime import datetime, timezone


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


class ExecutionTrace:
    """
    Represents a single, complete run of the grammatical pipeline.
    """
    def __init__(self, initial_text: str, language: str = None):
        self.trace_id = str(uuid.uuid4())
        self.start_time = _now()
        self.end_time = None
        self.initial_text = initial_text
        self.language = language
        self.steps = []
        self.result = None
        self.error = None

    def add_step(self, step_name: str, inputs: dict, outputs: dict, description: str = None):
        """
        Adds a step to the execution trace.

        Args:
            step_name: The stage that ran (e.g., "Tokenizer", "Tagger").
            inputs: A dictionary of inputs to the step.
            outputs: A dictionary of outputs from the step.
            description: An optional natural language description of the step.
        """
        step = {
            "step_id": len(self.steps) + 1,
            "name": step_name,
            "timestamp": _now(),
            "inputs": inputs,
            "outputs": outputs,
        }
        if description:
            step["description"] = description
        self.steps.append(step)

    def step(self, step_name: str):
        """The first recorded step with this name, or None."""
        return next((step for step in self.steps if step["name"] == step_name), None)

    def set_result(self, result):
        """Stores the final analysis and concludes the trace."""
        self.result = result
        self.end_time = _now()

    def set_error(self, error_message: str):
        """Records an error and concludes the trace."""
        self.error = error_message
        self.end_time = _now()

    def to_json(self, indent=2):
        """Serializes the trace to a JSON string."""
        from .serialization import trace_to_dict
        return json.dumps(trace_to_dict(self), indent=indent, ensure_ascii=False)
