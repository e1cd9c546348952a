"""Tests for palette color expressions."""

import pytest

from wheelpat.nodes import ColorFunction, ColorHsb, ColorRgb
from wheelpat.palette import leading_float, parse_color_expression


class TestTriples:
    def test_rgb(self) -> None:
        assert parse_color_expression("rgb(255, 128, 64)") == ColorRgb(r=255, g=128, b=64)

    def test_rgb_without_spaces(self) -> None:
        assert parse_color_expression("rgb(1,2,3)") == ColorRgb(1, 2, 3)

    def test_hsb(self) -> None:
        assert parse_color_expression("  hsb(180, 85, 90) ") == ColorHsb(h=180, s=85, b=90)

    @pytest.mark.parametrize(
        "expression",
        ["rgb(1, 2)", "rgb(1.5, 2, 3)", "rgb(-1, 2, 3)", "hsb()", "rgb(a: 1)"],
    )
    def test_malformed_triples_are_rejected(self, expression: str) -> None:
        """rgb and hsb are never read as generic generator functions."""
        assert parse_color_expression(expression) is None

    def test_uppercase_rgb_is_rejected(self) -> None:
        assert parse_color_expression("RGB(1, 2, 3)") is None


class TestFunctions:
    def test_named_params(self) -> None:
        assert parse_color_expression("triadic(baseHue: 180, saturation: 85)") == (
            ColorFunction(name="triadic", params={"baseHue": 180.0, "saturation": 85.0})
        )

    def test_name_is_lowercased(self) -> None:
        color = parse_color_expression("Analogous(spread: 30)")
        assert isinstance(color, ColorFunction)
        assert color.name == "analogous"

    def test_no_params(self) -> None:
        assert parse_color_expression("complementary()") == ColorFunction(
            name="complementary", params={}
        )

    def test_fractional_and_negative_params(self) -> None:
        color = parse_color_expression("tetradic(offset: -12.5, gain: .5)")
        assert color == ColorFunction(name="tetradic", params={"offset": -12.5, "gain": 0.5})

    def test_pairs_without_numbers_are_skipped(self) -> None:
        color = parse_color_expression("triadic(mode: warm, baseHue: 10, 20)")
        assert color == ColorFunction(name="triadic", params={"baseHue": 10.0})

    def test_unknown_function_names_are_allowed(self) -> None:
        color = parse_color_expression("gradient(steps: 4)")
        assert isinstance(color, ColorFunction)

    def test_params_are_read_only(self) -> None:
        params = {"spread": 30.0}
        color = ColorFunction(name="analogous", params=params)
        params["spread"] = 1.0
        assert color.params["spread"] == 30.0
        with pytest.raises(TypeError):
            color.params["spread"] = 1.0  # type: ignore[index]

    def test_hashable(self) -> None:
        first = parse_color_expression("triadic(baseHue: 180)")
        second = parse_color_expression("triadic(baseHue: 180)")
        assert first == second
        assert len({first, second}) == 1

    @pytest.mark.parametrize("expression", ["", "blue", "#ff8040", "triadic(", "(a: 1)"])
    def test_other_shapes(self, expression: str) -> None:
        assert parse_color_expression(expression) is None


class TestLeadingFloat:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("80", 80.0),
            ("80.5", 80.5),
            ("80px", 80.0),
            (" 12.25 ", 12.25),
            ("-3", -3.0),
            ("1e2", 100.0),
            ("7.", 7.0),
        ],
    )
    def test_parses_prefix(self, text: str, expected: float) -> None:
        assert leading_float(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "px80", "."])
    def test_no_number(self, text: str) -> None:
        assert leading_float(text) is None
