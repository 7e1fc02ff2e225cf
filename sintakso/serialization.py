"""
JSON-ready views of syntax trees, dependencies and traces.
"""
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Dict

from .nodes import Dependency, Span, Token


def to_dict(node) -> Any:
    """
    Convert a node (or a list/dict of nodes) into plain JSON-compatible data.

    Composite nodes become ``{"type": <class name>, <field>: ...}``; enums
    become their values and Feature keys their names in the morphology map.
    """
    if node is None or isinstance(node, (str, int, float, bool)):
        return node
    if isinstance(node, Enum):
        return node.value
    if isinstance(node, Span):
        return span_to_dict(node)
    if isinstance(node, Token):
        return {
            "type": "Token",
            "text": node.text,
            "pos_tag": node.pos_tag,
            "lemma": node.lemma,
            "morphology": {feature.value: value for feature, value in node.morphology.items()},
            "language": node.language,
            "span": span_to_dict(node.span),
        }
    if isinstance(node, Dependency):
        return {
            "relation": node.relation,
            "head": _token_ref(node.head),
            "dependent": _token_ref(node.dependent),
            "span": span_to_dict(node.span),
        }
    if is_dataclass(node):
        data = {"type": type(node).__name__}
        for field in fields(node):
            data[field.name] = to_dict(getattr(node, field.name))
        return data
    if isinstance(node, dict):
        return {
            (key.value if isinstance(key, Enum) else key): to_dict(value)
            for key, value in node.items()
        }
    if isinstance(node, (list, tuple)):
        return [to_dict(item) for item in node]
    return str(node)


def span_to_dict(span: Span) -> Dict:
    return {
        "start": {"line": span.start_pos[0], "column": span.start_pos[1], "offset": span.start_offset},
        "end": {"line": span.end_pos[0], "column": span.end_pos[1], "offset": span.end_offset},
    }


def _token_ref(token: Token) -> Dict:
    return {"text": token.text, "pos_tag": token.pos_tag, "offset": token.span.start_offset}


def trace_to_dict(trace) -> Dict:
    """Plain-data view of an ExecutionTrace."""
    return {
        "trace_id": trace.trace_id,
        "start_time": trace.start_time,
        "end_time": trace.end_time,
        "initial_text": trace.initial_text,
        "language": trace.language,
        "steps": [to_dict(step) for step in trace.steps],
        "result": to_dict(trace.result),
        "error": trace.error,
    }
