"""Evaluation errors and the result type returned by CalculatorEngine.calculate."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from calculator_engine.formatter import CalculationResult


class ErrorKind(Enum):
    INVALID_NUMBER = "InvalidNumber"
    UNBALANCED_PARENTHESES = "UnbalancedParentheses"
    EMPTY_EXPRESSION = "EmptyExpression"
    INVALID_EXPRESSION = "InvalidExpression"
    DIVISION_BY_ZERO = "DivisionByZero"
    DOMAIN_ERROR = "DomainError"
    UNSUPPORTED_OPERATOR = "UnsupportedOperator"


_DEFAULT_MESSAGES = {
    ErrorKind.INVALID_NUMBER: "Invalid number",
    ErrorKind.UNBALANCED_PARENTHESES: "Unbalanced parentheses",
    ErrorKind.EMPTY_EXPRESSION: "Empty expression",
    ErrorKind.INVALID_EXPRESSION: "Invalid expression",
    ErrorKind.DIVISION_BY_ZERO: "Division by zero",
    ErrorKind.DOMAIN_ERROR: "Math domain error",
    ErrorKind.UNSUPPORTED_OPERATOR: "Unsupported operator",
}


class EvalError(Exception):
    """Raised by the evaluator; `kind` tells which rule was broken."""

    def __init__(self, kind: ErrorKind, message: Optional[str] = None):
        self.kind = kind
        self.message = message or _DEFAULT_MESSAGES[kind]
        super().__init__(self.message)


@dataclass(frozen=True)
class Evaluation:
    """
    Outcome of one calculation: exactly one of `result` / `error` is set.
    """
    result: Optional[CalculationResult] = None
    error: Optional[EvalError] = None

    @classmethod
    def success(cls, result: CalculationResult) -> "Evaluation":
        return cls(result=result)

    @classmethod
    def failure(cls, error: EvalError) -> "Evaluation":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None
