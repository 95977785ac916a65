"""
Implicit multiplication.

Inserts an explicit 'x' between two adjacent tokens that both stand for
operands, e.g. 2(3) -> 2x(3), (1)(2) -> (1)x(2), 2π -> 2xπ, πsin(1) -> πxsin(1).
"""
from typing import List

from calculator_engine.tokens import IMPLICIT_MULTIPLY, Token, TokenKind

NUMBER = TokenKind.NUMBER
CONSTANT = TokenKind.CONSTANT
FUNCTION = TokenKind.FUNCTION
OPEN = TokenKind.OPEN_PAREN
CLOSE = TokenKind.CLOSE_PAREN

# previous token kind -> kinds of the next token that need an 'x' in between
_INSERT_BEFORE = {
    NUMBER: {OPEN, CONSTANT, FUNCTION},
    CLOSE: {NUMBER, CONSTANT, OPEN, FUNCTION},
    CONSTANT: {NUMBER, OPEN, FUNCTION},
}


def needs_multiplication(prev: Token, nxt: Token) -> bool:
    if prev.kind is FUNCTION:
        # a function not followed by '(' is malformed; the evaluator reports it
        return nxt.kind is not OPEN
    return nxt.kind in _INSERT_BEFORE.get(prev.kind, ())


def resolve_implicit_multiplication(tokens: List[Token]) -> List[Token]:
    resolved: List[Token] = []
    for token in tokens:
        if resolved and needs_multiplication(resolved[-1], token):
            resolved.append(IMPLICIT_MULTIPLY)
        resolved.append(token)
    return resolved
