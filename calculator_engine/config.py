"""
Engine settings.

Module-level defaults plus a small validated Settings object handed to
CalculatorEngine. Angle mode defaults to "rad": trigonometric functions receive
their argument unchanged.
"""
from dataclasses import dataclass

DEFAULT_PRECISION = 10        # fractional digits kept by the formatter
INTEGER_TOLERANCE = 1e-9      # results this close to an integer print as one
ERROR_PREFIX = "Erreur: "     # prefix for failures on the primary display

ANGLE_MODES = ("rad", "deg")
DEFAULT_ANGLE_MODE = "rad"


@dataclass
class Settings:
    angle_mode: str = DEFAULT_ANGLE_MODE
    precision: int = DEFAULT_PRECISION
    integer_tolerance: float = INTEGER_TOLERANCE

    def validate(self) -> None:
        if self.angle_mode not in ANGLE_MODES:
            raise ValueError(f"angle_mode must be one of {ANGLE_MODES}")
        if not (1 <= int(self.precision) <= 15):
            raise ValueError("precision must be 1..15")
        if self.integer_tolerance < 0:
            raise ValueError("integer_tolerance must be >= 0")
