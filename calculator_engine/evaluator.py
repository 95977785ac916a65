"""
Two-stack expression evaluator.

Tokens are processed left to right with a value stack and an operator stack
(shunting-yard without building a parse tree). Binary operators of equal
precedence are applied left to right. Functions and '(' wait on the operator
stack until the matching ')' arrives; a function sitting right below that '('
is then applied to the value the group produced.

Arithmetic runs on numpy float64 scalars; NaN or infinite results are reported
as domain errors instead of reaching the display.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List

import numpy as np

from calculator_engine.config import DEFAULT_ANGLE_MODE
from calculator_engine.errors import ErrorKind, EvalError
from calculator_engine.tokens import (
    DIVIDE,
    FACTORIAL,
    FUNCTION_NAMES,
    MODULO,
    MULTIPLY,
    PERCENT,
    PI,
    POWER,
    Token,
    TokenKind,
)

logger = logging.getLogger(__name__)


# -------------------------
# Operator tables
# -------------------------
PRECEDENCE: Dict[str, int] = {name: 5 for name in FUNCTION_NAMES}
PRECEDENCE.update({
    FACTORIAL: 5,
    POWER: 4,
    "(": 3, ")": 3,   # sentinel only, never compared
    MULTIPLY: 2, DIVIDE: 2, MODULO: 2, PERCENT: 2,
    "+": 1, "-": 1,
})

CONSTANTS: Dict[str, float] = {PI: float(np.pi)}

_BINARY: Dict[str, Callable] = {
    "+": np.add,
    "-": np.subtract,
    MULTIPLY: np.multiply,
    DIVIDE: np.true_divide,
    MODULO: np.fmod,   # result keeps the sign of the dividend
    POWER: np.power,
}

_FUNCTIONS: Dict[str, Callable] = {
    "sin": np.sin,
    "cos": np.cos,
    "tan": np.tan,
    "asin": np.arcsin,
    "acos": np.arccos,
    "atan": np.arctan,
    "ln": np.log,
    "exp": np.exp,
    "sqrt": np.sqrt,
}
_FORWARD_TRIG = ("sin", "cos", "tan")
_INVERSE_TRIG = ("asin", "acos", "atan")

# largest n whose factorial is a finite float64
MAX_FACTORIAL = 170


def precedence(token: Token) -> int:
    return PRECEDENCE.get(token.symbol, 0)


def _checked(result, what: str) -> float:
    if np.isnan(result):
        raise EvalError(ErrorKind.DOMAIN_ERROR, f"{what} is undefined for this value")
    if np.isinf(result):
        raise EvalError(ErrorKind.DOMAIN_ERROR, "Result out of range")
    return float(result)


def factorial(x: float) -> float:
    if x < 0 or x != math.floor(x):
        raise EvalError(ErrorKind.DOMAIN_ERROR,
                        "Factorial needs a non-negative integer")
    if x > MAX_FACTORIAL:
        raise EvalError(ErrorKind.DOMAIN_ERROR, "Result out of range")
    return float(math.factorial(int(x)))


@dataclass
class EvaluationState:
    """The two stacks of a single evaluation; discarded afterwards."""
    angle_mode: str = DEFAULT_ANGLE_MODE
    values: List[float] = field(default_factory=list)
    operators: List[Token] = field(default_factory=list)

    # -------------------------
    # Value stack
    # -------------------------
    def push_number(self, token: Token) -> None:
        value = token.value
        if not math.isfinite(value):
            raise EvalError(ErrorKind.INVALID_NUMBER, "Number too large")
        if token.was_percent:
            value = value / 100
        self.values.append(value)

    def pop_value(self, symbol: str) -> float:
        if not self.values:
            raise EvalError(ErrorKind.INVALID_EXPRESSION,
                            f"Missing operand for '{symbol}'")
        return self.values.pop()

    def apply_percent(self) -> None:
        self.values.append(self.pop_value(PERCENT) / 100)

    # -------------------------
    # Operator stack
    # -------------------------
    def push_operator(self, token: Token) -> None:
        while self.operators and self.operators[-1].kind is not TokenKind.OPEN_PAREN \
                and precedence(self.operators[-1]) >= precedence(token):
            self.apply_top()
        self.operators.append(token)

    def close_paren(self) -> None:
        while self.operators and self.operators[-1].kind is not TokenKind.OPEN_PAREN:
            self.apply_top()
        if not self.operators:
            raise EvalError(ErrorKind.UNBALANCED_PARENTHESES,
                            "Closing parenthesis without an opening one")
        self.operators.pop()
        if self.operators and self.operators[-1].kind is TokenKind.FUNCTION:
            self.apply_top()

    def apply_top(self) -> None:
        self.apply(self.operators.pop())

    def apply(self, token: Token) -> None:
        symbol = token.symbol
        if token.kind is TokenKind.OPEN_PAREN:
            raise EvalError(ErrorKind.UNBALANCED_PARENTHESES,
                            "Opening parenthesis is never closed")
        if token.kind is TokenKind.FUNCTION:
            self.values.append(self._call(symbol, self.pop_value(symbol)))
        elif symbol == FACTORIAL:
            self.values.append(factorial(self.pop_value(symbol)))
        elif symbol in _BINARY:
            b = self.pop_value(symbol)
            a = self.pop_value(symbol)
            self.values.append(self._binary(symbol, a, b))
        else:
            raise EvalError(ErrorKind.UNSUPPORTED_OPERATOR,
                            f"Unsupported operator: {symbol}")

    # -------------------------
    # Arithmetic
    # -------------------------
    def _binary(self, symbol: str, a: float, b: float) -> float:
        if symbol in (DIVIDE, MODULO) and b == 0:
            raise EvalError(ErrorKind.DIVISION_BY_ZERO)
        with np.errstate(all="ignore"):
            result = _BINARY[symbol](np.float64(a), np.float64(b))
        return _checked(result, symbol)

    def _call(self, name: str, x: float) -> float:
        fn = _FUNCTIONS.get(name)
        if fn is None:
            raise EvalError(ErrorKind.UNSUPPORTED_OPERATOR, f"Unknown function: {name}")
        if name == "ln" and x <= 0:
            raise EvalError(ErrorKind.DOMAIN_ERROR, "ln needs a positive argument")
        if name == "sqrt" and x < 0:
            raise EvalError(ErrorKind.DOMAIN_ERROR, "sqrt needs a non-negative argument")

        arg = np.float64(x)
        if self.angle_mode == "deg" and name in _FORWARD_TRIG:
            arg = np.radians(arg)
        with np.errstate(all="ignore"):
            result = fn(arg)
        if self.angle_mode == "deg" and name in _INVERSE_TRIG:
            result = np.degrees(result)
        return _checked(result, name)

    def finish(self) -> float:
        while self.operators:
            self.apply_top()
        if len(self.values) != 1:
            raise EvalError(ErrorKind.INVALID_EXPRESSION)
        return self.values[0]


def substitute_constants(tokens: Iterable[Token]) -> List[Token]:
    out: List[Token] = []
    for token in tokens:
        if token.kind is TokenKind.CONSTANT:
            if token.symbol not in CONSTANTS:
                raise EvalError(ErrorKind.UNSUPPORTED_OPERATOR,
                                f"Unknown constant: {token.symbol}")
            out.append(Token.number(CONSTANTS[token.symbol]))
        else:
            out.append(token)
    return out


def evaluate_tokens(tokens: List[Token], angle_mode: str = DEFAULT_ANGLE_MODE) -> float:
    """
    Evaluate a resolved token sequence and return its value.

    Raises EvalError for every failure; the engine facade turns it into an
    Evaluation for callers.
    """
    if not tokens:
        raise EvalError(ErrorKind.EMPTY_EXPRESSION)

    state = EvaluationState(angle_mode)
    for token in substitute_constants(tokens):
        kind = token.kind
        if kind is TokenKind.NUMBER:
            state.push_number(token)
        elif kind is TokenKind.OPERATOR and token.symbol == PERCENT:
            state.apply_percent()
        elif kind in (TokenKind.FUNCTION, TokenKind.OPEN_PAREN):
            state.operators.append(token)
        elif kind is TokenKind.CLOSE_PAREN:
            state.close_paren()
        else:
            state.push_operator(token)

    value = state.finish()
    logger.debug("evaluated %d tokens -> %r", len(tokens), value)
    return value
