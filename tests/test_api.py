"""Tests for the high-level wheelpat API."""


class TestParsePattern:
    """Tests for parse_pattern(): parse plus expansion."""

    def test_expanded_items(self) -> None:
        """Successful results carry the AST and the expansion."""
        from wheelpat import GrammarItem, parse_pattern

        result = parse_pattern("seq($dH, 2)")
        assert result.success
        assert result.ast is not None
        assert result.expanded == (
            GrammarItem("d", False),
            GrammarItem("h", True),
            GrammarItem("d", False),
            GrammarItem("h", True),
        )

    def test_parse_failure_passes_through(self) -> None:
        from wheelpat import parse_pattern

        result = parse_pattern("$")
        assert not result.success
        assert result.expanded is None
        assert "Empty sequence" in result.error.message

    def test_expansion_failure_becomes_parse_error(self) -> None:
        """Expansion errors are returned at the start of input, not raised."""
        from wheelpat import ParseError, parse_pattern

        result = parse_pattern("mir($d, $h)")
        assert not result.success
        assert result.ast is None
        assert result.error == ParseError("mir command requires exactly 1 argument", 0, 1, 1)

    def test_variable_reference_is_reported(self) -> None:
        from wheelpat import parse_pattern

        result = parse_pattern("seq(@base, 2)")
        assert not result.success
        assert "@base" in result.error.message

    def test_deterministic(self) -> None:
        from wheelpat import parse_pattern

        assert parse_pattern("mir(seq($dh, 2)):7") == parse_pattern("mir(seq($dh, 2)):7")


class TestCompileFunctions:
    """Tests for the compile helpers re-exported at package level."""

    def test_compile_pattern_string(self) -> None:
        from wheelpat import compile_pattern_string

        assert compile_pattern_string("-") == "-"
        assert compile_pattern_string("d3h2") == "d3h2"
        assert compile_pattern_string("$dh:5") == "dhdhd"

    def test_compile_pattern(self) -> None:
        from wheelpat import compile_pattern, parse

        assert compile_pattern(parse("seq($dh,3)").ast) == "dhdhdh"
        assert compile_pattern(parse("mir($dh)").ast) == "hd"


class TestParseDocument:
    def test_rings(self) -> None:
        from wheelpat import parse_document

        doc = parse_document("rings:\nO(120.0, 16): mir($dh)").ast
        assert doc.rings[0].radius == 120.0
        assert doc.rings[0].element_count == 16


class TestPublicSurface:
    def test_version(self) -> None:
        import wheelpat

        assert wheelpat.__version__ == "0.1.0"

    def test_all_names_exist(self) -> None:
        import wheelpat

        for name in wheelpat.__all__:
            assert hasattr(wheelpat, name), name

    def test_logger_names(self) -> None:
        from wheelpat.utils.logger import get_logger

        assert get_logger("compiler").name == "wheelpat.compiler"
        assert get_logger("wheelpat.document").name == "wheelpat.document"
        assert get_logger("wheelpat").name == "wheelpat"
