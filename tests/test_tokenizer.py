import pytest

from calculator_engine.tokenizer import disambiguate_percent, scan, tokenize
from calculator_engine.tokens import CLOSE_PAREN, OPEN_PAREN, Token, TokenKind


def num(value, was_percent=False):
    return Token.number(float(value), was_percent)


def op(symbol):
    return Token.operator(symbol)


# ---------------------------
# Literals and operators
# ---------------------------

def test_numbers_and_binary_operators():
    assert tokenize("12+3.5") == [num(12), op("+"), num(3.5)]


def test_minus_after_digit_is_subtraction():
    assert tokenize("5-3") == [num(5), op("-"), num(3)]


def test_minus_after_close_paren_is_subtraction():
    assert tokenize("(2)-3") == [OPEN_PAREN, num(2), CLOSE_PAREN, op("-"), num(3)]


def test_leading_minus_is_a_sign():
    assert tokenize("-5+3") == [num(-5), op("+"), num(3)]


def test_minus_after_operator_is_a_sign():
    assert tokenize("3x-2") == [num(3), op("x"), num(-2)]


def test_parenthesized_negative_literal_expands_to_three_tokens():
    assert tokenize("(-5)") == [OPEN_PAREN, num(-5), CLOSE_PAREN]


def test_minus_before_paren_stays_an_operator():
    assert tokenize("-(1)") == [op("-"), OPEN_PAREN, num(1), CLOSE_PAREN]


def test_point_without_fraction_is_dropped():
    assert tokenize("5.") == [num(5)]


def test_unknown_characters_are_dropped():
    assert tokenize("1@+ 2") == [num(1), op("+"), num(2)]
    assert tokenize("2²") == [num(2)]


def test_all_single_character_symbols():
    kinds = [t.kind for t in tokenize("+-x÷^!()")]
    assert kinds == [TokenKind.OPERATOR] * 6 + [TokenKind.OPEN_PAREN, TokenKind.CLOSE_PAREN]


# ---------------------------
# Keywords
# ---------------------------

@pytest.mark.parametrize("name", ["sin", "cos", "tan", "asin", "acos", "atan", "ln", "exp", "sqrt"])
def test_function_keywords(name):
    tokens = tokenize(f"{name}(1)")
    assert tokens[0] == Token(TokenKind.FUNCTION, name)
    assert tokens[1:] == [OPEN_PAREN, num(1), CLOSE_PAREN]


def test_mod_keyword_and_pi_constant():
    assert tokenize("3mod2") == [num(3), op("mod"), num(2)]
    assert tokenize("2π") == [num(2), Token(TokenKind.CONSTANT, "π")]


# ---------------------------
# Percent handling
# ---------------------------

def test_percent_between_numbers_becomes_modulo():
    assert tokenize("10%3") == [num(10), op("mod"), num(3)]


def test_percent_after_number_is_folded_into_the_number():
    assert tokenize("50%") == [num(50, was_percent=True)]
    assert tokenize("2+3%") == [num(2), op("+"), num(3, was_percent=True)]


def test_percent_after_paren_stays_unary():
    assert tokenize("(1)%") == [OPEN_PAREN, num(1), CLOSE_PAREN, op("%")]


def test_second_percent_is_not_folded_again():
    assert tokenize("5%%") == [num(5, was_percent=True), op("%")]


def test_percent_next_to_function_result_is_not_modulo():
    # known limitation: only literal numbers on both sides make a modulo
    tokens = disambiguate_percent(tokenize("sin(30)") + [op("%"), num(5)])
    assert tokens[-2] == op("%")


# ---------------------------
# Spans
# ---------------------------

def test_scan_reports_source_positions():
    spans = scan("12+sin(")
    assert [(s.start, s.length) for s in spans] == [(0, 2), (2, 1), (3, 3), (6, 1)]
    assert spans[-1].end == 7


def test_scan_skips_unknown_characters_but_keeps_offsets():
    spans = scan("1 +2")
    assert [(s.start, s.end) for s in spans] == [(0, 1), (2, 3), (3, 4)]
