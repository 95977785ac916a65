"""
Input buffer editor.

InputBuffer owns the expression the user is typing. Every keypad action goes
through one of its methods; none of them raise, an edit that makes no sense
(a second decimal point, an operator on an empty buffer) is simply ignored.

The editor reads the buffer with the same scanner as the tokenizer, so
backspace removes whole tokens ("sin(" at once) but only one digit of a number.
"""
import logging
import re
from enum import Enum
from typing import Optional, Tuple

from calculator_engine.engine import CalculatorEngine
from calculator_engine.errors import Evaluation
from calculator_engine.tokenizer import DIGITS, scan
from calculator_engine.tokens import BINARY_BUTTON_OPERATORS, PERCENT, TokenKind

logger = logging.getLogger(__name__)

# Rightmost operand for sign toggling: digits with an optional point, possibly
# already wrapped as "(-n)", possibly after a binary operator.
_LAST_OPERAND = re.compile(r"(.*?[+\-x÷])?(\(-?[0-9]+(?:\.[0-9]*)?\)|-?[0-9]+(?:\.[0-9]*)?)$")


class BufferState(Enum):
    EMPTY = "AC"          # clear button shows "AC"
    FILLED = "backspace"  # clear button shows backspace


def balance_parentheses(text: str) -> str:
    """Append one ')' per unmatched '('."""
    missing = text.count("(") - text.count(")")
    return text + ")" * max(missing, 0)


def trailing_token(text: str) -> Optional[Tuple[int, bool]]:
    """
    Length of the token ending exactly at the end of `text`, and whether it
    is a number literal. A function name directly followed by '(' is one token.
    None when the tail of `text` is not a token.
    """
    spans = scan(text)
    if not spans or spans[-1].end != len(text):
        return None
    last = spans[-1]
    if last.token.kind is TokenKind.OPEN_PAREN and len(spans) > 1:
        before = spans[-2]
        if before.token.kind is TokenKind.FUNCTION and before.end == last.start:
            return last.end - before.start, False
    return last.length, last.token.is_number


class InputBuffer:
    def __init__(self, text: str = ""):
        self._text = text
        self._state = BufferState.FILLED if text else BufferState.EMPTY
        self._showing_result = False

    # -------------------------
    # Read-only view
    # -------------------------
    @property
    def text(self) -> str:
        return self._text

    @property
    def state(self) -> BufferState:
        return self._state

    @property
    def is_empty(self) -> bool:
        return not self._text

    @property
    def can_backspace(self) -> bool:
        return self._state is BufferState.FILLED

    @property
    def showing_result(self) -> bool:
        """True right after a successful evaluate() until the next edit."""
        return self._showing_result

    def _filled(self) -> None:
        self._state = BufferState.FILLED
        self._showing_result = False

    def _current_operand(self) -> str:
        i = len(self._text)
        while i > 0 and self._text[i - 1] in DIGITS + ".":
            i -= 1
        return self._text[i:]

    # -------------------------
    # Edits
    # -------------------------
    def append_digit_or_point(self, text: str) -> None:
        if self._showing_result:
            # new number after a computed result starts a new calculation
            self._text = ""
        if text == ".":
            operand = self._current_operand()
            if "." in operand:
                return
            self._text += "." if operand else "0."
        elif len(text) == 1 and text in DIGITS:
            self._text += text
        else:
            logger.debug("ignored non-digit input %r", text)
            return
        self._filled()

    def append_operator(self, symbol: str) -> None:
        if not self._text:
            return
        if self._text[-1] in BINARY_BUTTON_OPERATORS:
            self._text = self._text[:-1]
        self._text += symbol
        self._filled()

    def append_text(self, text: str) -> None:
        """Raw append, used for function names, parentheses, powers and π."""
        if not text:
            return
        self._text += text
        self._filled()

    def append_percent(self) -> None:
        self._text += PERCENT
        self._filled()

    def clear(self) -> None:
        self._text = ""
        self._state = BufferState.EMPTY
        self._showing_result = False

    def backspace(self) -> None:
        if not self._text:
            return
        tail = trailing_token(self._text)
        if tail is None:
            remove = 1
        else:
            length, is_number = tail
            remove = 1 if is_number and length > 1 else length
        self._text = self._text[:-remove]
        self._showing_result = False
        if not self._text:
            self._state = BufferState.EMPTY

    def toggle_sign(self) -> None:
        if not self._text:
            return
        if self._text.startswith("-"):
            self._text = self._text[1:]
        else:
            match = _LAST_OPERAND.search(self._text)
            if match is None:
                return
            prefix = self._text[:match.start(2)]
            number = match.group(2)
            if number.startswith("(") and number.endswith(")"):
                number = number[1:-1]
            number = number[1:] if number.startswith("-") else "-" + number
            if number.startswith("-"):
                number = f"({number})"
            self._text = prefix + number
        self._showing_result = False
        if not self._text:
            self._state = BufferState.EMPTY

    # -------------------------
    # Evaluation
    # -------------------------
    def evaluate(self, engine: CalculatorEngine) -> Evaluation:
        """
        Evaluate a balanced copy of the buffer. On success the buffer becomes
        the formatted result; on failure it is left untouched.
        """
        balanced = balance_parentheses(self._text)
        evaluation = engine.calculate(balanced)
        if evaluation.ok:
            self._text = evaluation.result.text
            self._state = BufferState.EMPTY
            self._showing_result = True
        return evaluation
