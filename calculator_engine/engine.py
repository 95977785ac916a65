import logging
from typing import Optional

from calculator_engine.config import ANGLE_MODES, Settings
from calculator_engine.errors import EvalError, Evaluation
from calculator_engine.evaluator import evaluate_tokens
from calculator_engine.formatter import CalculationResult, format_result
from calculator_engine.resolver import resolve_implicit_multiplication
from calculator_engine.tokenizer import tokenize

logger = logging.getLogger(__name__)


class CalculatorEngine:
    """
    Runs the full pipeline on an expression string:
    tokenize -> implicit multiplication -> two-stack evaluation -> formatting.

    The engine keeps settings only; every call works on its own token list and
    stacks, so one instance serves a whole session.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.settings.validate()

    @property
    def mode(self) -> str:
        return self.settings.angle_mode

    def set_mode(self, mode: str):
        if mode in ANGLE_MODES:
            self.settings.angle_mode = mode

    def evaluate_value(self, expression: str) -> float:
        """Evaluate to a bare float; raises EvalError on failure."""
        tokens = resolve_implicit_multiplication(tokenize(expression))
        return evaluate_tokens(tokens, self.settings.angle_mode)

    def format(self, value: float) -> str:
        return format_result(value, self.settings.precision,
                             self.settings.integer_tolerance)

    def calculate(self, expression: str) -> Evaluation:
        """
        Calculate an expression string. Never raises: the returned Evaluation
        holds either the CalculationResult or the EvalError.
        """
        try:
            value = self.evaluate_value(expression)
        except EvalError as e:
            logger.info("evaluation of %r failed: %s (%s)", expression, e.message, e.kind.value)
            return Evaluation.failure(e)

        result = CalculationResult(value=value, text=self.format(value), expression=expression)
        logger.debug("%s = %s", expression, result.text)
        return Evaluation.success(result)
