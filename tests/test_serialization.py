"""Tests for wheelpat.serialization: AST JSON round-trip."""

import json
from collections.abc import Mapping

import pytest

from wheelpat.document import parse_document
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
from wheelpat.parser import parse
from wheelpat.serialization import from_dict, from_json, to_dict, to_json

_SOURCE = """\
rings:
O(120.0, 16): $d
O(180.0, 32): mir($dh) [A, B]
O(200.0, 1): -
dot:
size: 80.0
color: A
visible: true
guides:
variables:
@basePattern = seq($d, 2)
palette:
A = triadic(baseHue: 180, saturation: 85)
B = rgb(255, 128, 64)
C = hsb(180, 85, 90)
"""


class TestRoundTrip:
    """Verify round-trip serialization for all node types."""

    @pytest.mark.parametrize(
        "source", ["d3H2", "$Vx", "seq($dh, 3)", "mir(seq($dh, 2))", "$dh:7", "seq(@a, 2)"]
    )
    def test_patterns(self, source: str) -> None:
        ast = parse(source).ast
        assert from_dict(to_dict(ast)) == ast

    def test_symbol_defaults(self) -> None:
        node = Symbol("d")
        assert to_dict(node) == {"_type": "Symbol", "char": "d", "rotated": False, "count": None}
        assert from_dict(to_dict(node)) == node

    def test_element_count(self) -> None:
        node = ElementCount(pattern=Command(name="mir", args=(Symbol("h"),)), count=4)
        assert from_dict(to_dict(node)) == node

    def test_variable_reference(self) -> None:
        node = VariableReference(name="base")
        assert from_dict(to_dict(node)) == node

    def test_grammar_item(self) -> None:
        item = GrammarItem("v", True)
        assert from_dict(to_dict(item)) == item

    @pytest.mark.parametrize(
        "color",
        [
            ColorRgb(1, 2, 3),
            ColorHsb(4, 5, 6),
            ColorReference(name="A"),
            ColorFunction(name="triadic", params={"baseHue": 180.0}),
        ],
    )
    def test_colors(self, color) -> None:
        assert from_dict(to_dict(color)) == color

    def test_params_stay_a_mapping(self) -> None:
        color = from_dict(to_dict(ColorFunction(name="f", params={"a": 1.0})))
        assert isinstance(color.params, Mapping)
        assert dict(color.params) == {"a": 1.0}

    def test_discriminator_like_param_key(self) -> None:
        color = ColorFunction(name="triadic", params={"_type": 3.0})
        assert from_dict(to_dict(color)) == color

    def test_discriminator_like_palette_name(self) -> None:
        doc = Document(palette={"_type": ColorRgb(1, 2, 3)})
        assert from_dict(to_dict(doc)) == doc

    def test_empty_document(self) -> None:
        assert from_dict(to_dict(Document())) == Document()

    def test_handbuilt_document(self) -> None:
        doc = Document(
            rings=(
                RingDefinition(
                    radius=1.5,
                    element_count=3,
                    pattern=Sequence(patterns=(Symbol("d", count=2),), count=2),
                    colors=("A",),
                ),
            ),
            dot=DotDefinition(visible=False),
            guides=GuidesDefinition(),
            variables=(VariableDefinition(name="v", pattern=Symbol("x")),),
            palette={"A": ColorRgb(9, 9, 9)},
        )
        assert from_dict(to_dict(doc)) == doc

    def test_parsed_document(self) -> None:
        doc = parse_document(_SOURCE).ast
        assert doc is not None
        assert from_dict(to_dict(doc)) == doc


class TestJsonRoundTrip:
    def test_json_round_trip(self) -> None:
        doc = parse_document(_SOURCE).ast
        assert from_json(to_json(doc)) == doc

    def test_json_deterministic(self) -> None:
        first = to_json(parse_document(_SOURCE).ast)
        second = to_json(parse_document(_SOURCE).ast)
        assert first == second

    def test_json_valid(self) -> None:
        data = json.loads(to_json(parse_document(_SOURCE).ast))
        assert data["_type"] == "Document"
        assert data["palette"]["B"] == {"_type": "ColorRgb", "b": 64, "g": 128, "r": 255}

    def test_json_with_indent(self) -> None:
        doc = parse_document(_SOURCE).ast
        indented = to_json(doc, indent=2)
        assert "\n" in indented
        assert from_json(indented) == doc

    def test_discriminator_like_param_in_document(self) -> None:
        doc = parse_document("palette:\nA = triadic(_type: 3)").ast
        assert doc is not None
        assert from_json(to_json(doc)) == doc
        assert doc.palette["A"].params == {"_type": 3.0}

    def test_pattern_json(self) -> None:
        ast = parse("mir($dh):5").ast
        assert from_json(to_json(ast)) == ast


class TestErrorHandling:
    def test_missing_type_field(self) -> None:
        with pytest.raises(ValueError, match="Missing '_type'"):
            from_dict({"char": "d"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown node type"):
            from_dict({"_type": "UnknownNode"})

    def test_unserializable_object(self) -> None:
        with pytest.raises(ValueError, match="Cannot serialize"):
            to_dict(object())

    def test_from_json_non_object(self) -> None:
        with pytest.raises(ValueError, match="Expected a serialized node object"):
            from_json("[1, 2]")
