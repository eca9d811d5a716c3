"""Numbers in scriptlet are Python floats. This module converts number literals, divides without raising on zero, and
formats values for print statements.
"""

import math

from scriptlet.lang.error import GenericException


def number(literal):
    """Returns float value of a number literal such as '-3.25' or '7.'."""
    try:
        return float(literal)
    except ValueError:
        raise GenericException("'{}' is not a valid number", literal, internal=True)


def divide(dividend, divisor):
    """Floating-point division. Division by zero gives inf, -inf or nan instead of raising."""
    if divisor != 0:
        return dividend / divisor

    if dividend == 0 or math.isnan(dividend):
        return math.nan
    return math.copysign(math.inf, dividend) * math.copysign(1.0, divisor)


def display(value):
    """Returns value in fixed-point notation with trailing zeros (and a bare trailing point) stripped.

    Six fractional digits are kept before stripping, so display(2.5) == '2.5', display(2.0) == '2' and
    display(1 / 3) == '0.333333'. Infinities and nan come out as 'inf', '-inf' and 'nan'.
    """
    text = f"{value:f}"
    if "." not in text:
        return text
    return text.rstrip("0").rstrip(".")
