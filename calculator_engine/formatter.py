"""
Result formatting.

Turns a float into the text shown on the calculator display: integers without a
fractional part, everything else with a fixed number of decimals (half-up),
trailing zeros stripped, never in exponent notation.
"""
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext

from calculator_engine.config import DEFAULT_PRECISION, INTEGER_TOLERANCE


@dataclass(frozen=True)
class CalculationResult:
    value: float
    text: str
    expression: str


def format_result(value: float, precision: int = DEFAULT_PRECISION,
                  tolerance: float = INTEGER_TOLERANCE) -> str:
    # Exact integers, and values within `tolerance` of one, drop the fraction.
    if value == int(value):
        return str(int(value))
    nearest = round(value)
    if abs(value - nearest) < tolerance:
        return str(int(nearest))

    with localcontext() as ctx:
        ctx.prec = 60
        quantum = Decimal(1).scaleb(-precision)
        rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
        text = format(rounded.normalize(), "f")

    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text
