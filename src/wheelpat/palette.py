"""Palette color expressions.

A small matcher for the right-hand side of palette lines, independent of
the pattern lexer:

    rgb(255, 128, 64)                      -> ColorRgb
    hsb(180, 85, 90)                       -> ColorHsb
    triadic(baseHue: 180, saturation: 85)  -> ColorFunction

"""

from __future__ import annotations

import re

from wheelpat.nodes import ColorFunction, ColorHsb, ColorNode, ColorRgb

_RGB_RE = re.compile(r"^rgb\((\d+),\s*(\d+),\s*(\d+)\)$")
_HSB_RE = re.compile(r"^hsb\((\d+),\s*(\d+),\s*(\d+)\)$")
_FUNCTION_RE = re.compile(r"^(\w+)\((.*)\)$")
_LEADING_FLOAT_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# Function names whose arguments are positional integer triples
_TRIPLE_FUNCTIONS = frozenset({"rgb", "hsb"})


def leading_float(text: str) -> float | None:
    """Parse the numeric prefix of text, or None if there is none.

    ``"80px"`` gives 80.0; ``"abc"`` gives None.
    """
    match = _LEADING_FLOAT_RE.match(text.strip())
    if match is None:
        return None
    return float(match.group(0))


def _parse_params(params_str: str) -> dict[str, float]:
    """Parse ``key: number`` pairs; pairs without a number are skipped."""
    params: dict[str, float] = {}
    if not params_str.strip():
        return params
    for pair in params_str.split(","):
        key, _, value = (part.strip() for part in pair.partition(":"))
        if not key or not value:
            continue
        number = leading_float(value)
        if number is not None:
            params[key] = number
    return params


def parse_color_expression(expression: str) -> ColorNode | None:
    """Match a color expression.

    Args:
        expression: Text after ``=`` on a palette line

    Returns:
        The color node, or None when the expression has no recognized shape.
    """
    trimmed = expression.strip()

    rgb = _RGB_RE.match(trimmed)
    if rgb:
        r, g, b = (int(value) for value in rgb.groups())
        return ColorRgb(r=r, g=g, b=b)

    hsb = _HSB_RE.match(trimmed)
    if hsb:
        h, s, b = (int(value) for value in hsb.groups())
        return ColorHsb(h=h, s=s, b=b)

    function = _FUNCTION_RE.match(trimmed)
    if function:
        name = function.group(1).lower()
        if name in _TRIPLE_FUNCTIONS:
            return None
        return ColorFunction(name=name, params=_parse_params(function.group(2)))

    return None


__all__ = [
    "leading_float",
    "parse_color_expression",
]
