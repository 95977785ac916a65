import math

import pytest

from calculator_engine.engine import CalculatorEngine
from calculator_engine.errors import ErrorKind, EvalError
from calculator_engine.evaluator import (
    EvaluationState,
    evaluate_tokens,
    factorial,
    precedence,
)
from calculator_engine.resolver import resolve_implicit_multiplication
from calculator_engine.tokenizer import tokenize
from calculator_engine.tokens import Token, TokenKind


def calc(expr, mode="rad"):
    return evaluate_tokens(resolve_implicit_multiplication(tokenize(expr)), mode)


def kind_of(expr):
    with pytest.raises(EvalError) as e:
        calc(expr)
    return e.value.kind


# ---------------------------
# Precedence and associativity
# ---------------------------

@pytest.mark.parametrize("expr, expected", [
    ("3+4x2", 11),
    ("10-4-3", 3),
    ("8÷4÷2", 1),
    ("8÷2x4", 16),
    ("2^3^2", 64),
    ("2+3x4^2", 50),
    ("(3+4)x2", 14),
    ("2(3+4)", 14),
    ("-3+5", 2),
    ("(-5)x2", -10),
    ("3x-2", -6),
])
def test_arithmetic(expr, expected):
    assert calc(expr) == expected


def test_precedence_table_order():
    fn = Token(TokenKind.FUNCTION, "sin")
    assert precedence(fn) == precedence(Token.operator("!")) == 5
    assert precedence(Token.operator("^")) == 4
    assert precedence(Token.operator("x")) == precedence(Token.operator("mod")) == 2
    assert precedence(Token.operator("+")) == precedence(Token.operator("-")) == 1


# ---------------------------
# Percent and modulo
# ---------------------------

def test_percent_divides_the_value_on_its_left():
    assert math.isclose(calc("2+3%"), 2.03)
    assert calc("50%") == 0.5
    assert math.isclose(calc("(1+1)%"), 0.02)


def test_modulo_keeps_sign_of_dividend():
    assert calc("10%3") == 1
    assert calc("10mod4") == 2
    assert calc("-7mod3") == -1


# ---------------------------
# Functions, factorial, constants
# ---------------------------

def test_factorial():
    assert calc("5!") == 120
    assert calc("0!") == 1
    assert calc("3!+1") == 7
    assert calc("2x3!") == 12


def test_functions_apply_to_their_group():
    assert calc("sqrt(16)") == 4
    assert calc("ln(1)") == 0
    assert calc("exp(0)") == 1
    assert calc("sin(0)") == 0
    assert calc("2sqrt(9)") == 6
    assert math.isclose(calc("sqrt(4)+sqrt(9)"), 5)


def test_pi_and_trig_in_radians():
    assert math.isclose(calc("2π"), 2 * math.pi)
    assert math.isclose(calc("cos(π)"), -1)
    assert math.isclose(calc("sin(π÷2)"), 1)
    # no degree conversion by default
    assert math.isclose(calc("sin(30)"), math.sin(30))


def test_degree_mode_converts_trig():
    assert math.isclose(calc("sin(30)", mode="deg"), 0.5)
    assert math.isclose(calc("asin(1)", mode="deg"), 90)
    assert math.isclose(calc("ln(exp(2))", mode="deg"), 2)


# ---------------------------
# Errors
# ---------------------------

@pytest.mark.parametrize("expr", ["5÷0", "5mod0", "5%0", "1÷(2-2)"])
def test_division_by_zero(expr):
    assert kind_of(expr) is ErrorKind.DIVISION_BY_ZERO


@pytest.mark.parametrize("expr", ["ln(0)", "ln(-1)", "sqrt(-4)", "2.5!", "(-3)!", "asin(2)", "exp(1000)", "171!"])
def test_domain_errors(expr):
    assert kind_of(expr) is ErrorKind.DOMAIN_ERROR


def test_empty_expression():
    assert kind_of("") is ErrorKind.EMPTY_EXPRESSION
    assert kind_of("@@") is ErrorKind.EMPTY_EXPRESSION


def test_unbalanced_parentheses():
    assert kind_of("3)") is ErrorKind.UNBALANCED_PARENTHESES
    assert kind_of("(3") is ErrorKind.UNBALANCED_PARENTHESES


@pytest.mark.parametrize("expr", ["3+", "()", "3 4", "sin", "x5", "%"])
def test_invalid_expression(expr):
    assert kind_of(expr) is ErrorKind.INVALID_EXPRESSION


def test_number_too_large_is_invalid_number():
    assert kind_of("9" * 400) is ErrorKind.INVALID_NUMBER


def test_unknown_operator_and_constant_are_unsupported():
    with pytest.raises(EvalError) as e:
        evaluate_tokens([Token.number(1.0), Token.operator("&"), Token.number(2.0)])
    assert e.value.kind is ErrorKind.UNSUPPORTED_OPERATOR

    with pytest.raises(EvalError) as e:
        evaluate_tokens([Token(TokenKind.CONSTANT, "e")])
    assert e.value.kind is ErrorKind.UNSUPPORTED_OPERATOR


def test_factorial_helper_rejects_non_integers():
    assert factorial(4.0) == 24
    with pytest.raises(EvalError):
        factorial(-1.0)
    with pytest.raises(EvalError):
        factorial(0.5)


# ---------------------------
# Stack shape
# ---------------------------

def test_single_value_left_when_operators_are_exhausted():
    state = EvaluationState()
    for token in resolve_implicit_multiplication(tokenize("1+2x3")):
        if token.is_number:
            state.push_number(token)
        else:
            state.push_operator(token)
    assert state.finish() == 7
    assert state.values == [7] and state.operators == []


def test_two_values_left_is_invalid():
    state = EvaluationState(values=[1.0, 2.0])
    with pytest.raises(EvalError) as e:
        state.finish()
    assert e.value.kind is ErrorKind.INVALID_EXPRESSION


def test_pipeline_is_pure():
    engine = CalculatorEngine()
    first = engine.calculate("((1+2)x(3+4))")
    second = engine.calculate("((1+2)x(3+4))")
    assert first.result.value == second.result.value == 21
