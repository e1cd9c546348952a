"""AST serialization: JSON round-trip for wheelpat nodes.

Converts pattern, color and document nodes to/from JSON-compatible dicts.
Used for storing parsed artwork documents and for comparing parses.

All output is deterministic (sorted keys): identical source text always
serializes to identical JSON.

Example:
    from wheelpat import parse_document
    from wheelpat.serialization import to_json, from_json

    doc = parse_document("rings:\\nO(120.0, 16): $d").ast
    assert from_json(to_json(doc)) == doc

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from typing import Any

from wheelpat.nodes import (
    ColorFunction,
    ColorHsb,
    ColorReference,
    ColorRgb,
    Command,
    Document,
    DotDefinition,
    ElementCount,
    GrammarItem,
    GuidesDefinition,
    RingDefinition,
    Sequence,
    Symbol,
    VariableDefinition,
    VariableReference,
)

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type] = {
    "Symbol": Symbol,
    "Sequence": Sequence,
    "Command": Command,
    "ElementCount": ElementCount,
    "VariableReference": VariableReference,
    "GrammarItem": GrammarItem,
    "ColorFunction": ColorFunction,
    "ColorRgb": ColorRgb,
    "ColorHsb": ColorHsb,
    "ColorReference": ColorReference,
    "Document": Document,
    "RingDefinition": RingDefinition,
    "DotDefinition": DotDefinition,
    "GuidesDefinition": GuidesDefinition,
    "VariableDefinition": VariableDefinition,
}

# Fields holding plain string-keyed mappings rather than nodes
_MAPPING_FIELDS: frozenset[tuple[str, str]] = frozenset(
    {("ColorFunction", "params"), ("Document", "palette")}
)


def to_dict(node: Any) -> dict[str, Any]:
    """Convert an AST node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.

    Args:
        node: Any wheelpat node (pattern, color, document or GrammarItem).

    Returns:
        Dict with ``_type`` and all node fields.

    Raises:
        ValueError: If ``node`` is not a known node type.

    """
    type_name = type(node).__name__
    if _NODE_TYPES.get(type_name) is not type(node):
        msg = f"Cannot serialize {type_name!r}"
        raise ValueError(msg)

    result: dict[str, Any] = {"_type": type_name}
    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if is_dataclass(value) and not isinstance(value, type):
        return to_dict(value)
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _serialize_value(item) for key, item in value.items()}
    # Primitives: str, int, float, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Any:
    """Reconstruct a typed node from a dict.

    Uses the ``_type`` discriminator to determine the node class.

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name not in data:
            continue
        value = data[f.name]
        if (type_name, f.name) in _MAPPING_FIELDS and isinstance(value, dict):
            # Keys are user text and may look like a discriminator
            kwargs[f.name] = {key: _deserialize_value(item) for key, item in value.items()}
        else:
            kwargs[f.name] = _deserialize_value(value)
    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict):
        return from_dict(value)
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(node: Any, *, indent: int | None = None) -> str:
    """Serialize a node (usually a Document) to a JSON string.

    Output is deterministic (sorted keys).

    Args:
        node: Node to serialize.
        indent: JSON indentation level (None for compact).

    """
    return json.dumps(to_dict(node), sort_keys=True, indent=indent)


def from_json(data: str) -> Any:
    """Deserialize a node from a JSON string (as produced by to_json)."""
    raw = json.loads(data)
    if not isinstance(raw, dict):
        msg = f"Expected a serialized node object, got {type(raw).__name__}"
        raise ValueError(msg)
    return from_dict(raw)


__all__ = [
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
]
