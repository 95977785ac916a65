"""
Controller between the display and the expression engine.

The display only knows how to show strings and emit command tokens from a
fixed vocabulary (the button labels). The controller maps each command onto an
InputBuffer edit and pushes the new display state back.
"""
import logging
from enum import Enum
from typing import Dict, Optional, Protocol

from calculator_engine.buffer import BufferState, InputBuffer
from calculator_engine.config import ERROR_PREFIX
from calculator_engine.engine import CalculatorEngine

logger = logging.getLogger(__name__)


class ViewKind(Enum):
    BASIC = "basic"
    SCIENTIFIC = "scientific"


class Display(Protocol):
    def set_display(self, text: str) -> None: ...

    def set_expression(self, text: str) -> None: ...

    def set_clear_label(self, label: str) -> None: ...

    def set_scientific_visible(self, visible: bool) -> None: ...


# -------------------------
# Command vocabulary
# -------------------------
DIGITS = tuple("0123456789")
OPERATORS = ("+", "-", "x", "÷")
BACKSPACE = "⌫"
CLEAR_LABELS = {BufferState.EMPTY: "AC", BufferState.FILLED: BACKSPACE}

# scientific button label -> text appended to the buffer
SCIENTIFIC_COMMANDS: Dict[str, str] = {
    "sin": "sin(", "cos": "cos(", "tan": "tan(",
    "asin": "asin(", "acos": "acos(", "atan": "atan(",
    "ln": "ln(", "exp": "exp(",
    "√": "sqrt(",
    "x²": "^2",
    "xʸ": "^",
    "n!": "!",
    "π": "π",
    "(": "(",
    ")": ")",
}

# keyboard character / keysym -> command
KEY_COMMANDS: Dict[str, str] = {
    "*": "x",
    "/": "÷",
    "=": "=",
    "Return": "=",
    "KP_Enter": "=",
    "BackSpace": BACKSPACE,
    "KP_Multiply": "x",
    "KP_Divide": "÷",
    "KP_Add": "+",
    "KP_Subtract": "-",
}
PASSTHROUGH_KEYS = "0123456789+-.%"
CLOSE_REQUEST = "Escape"


def command_for_key(char: str, keysym: str) -> Optional[str]:
    """Translate a key press into a command token (or None to ignore it)."""
    if keysym == CLOSE_REQUEST:
        return CLOSE_REQUEST
    if keysym in KEY_COMMANDS:
        return KEY_COMMANDS[keysym]
    if char and char in PASSTHROUGH_KEYS:
        return char
    return KEY_COMMANDS.get(char)


class Controller:
    def __init__(self, display: Display, view: ViewKind = ViewKind.SCIENTIFIC,
                 engine: Optional[CalculatorEngine] = None):
        self.display = display
        self.view = view
        self.engine = engine or CalculatorEngine()
        self.buffer = InputBuffer()
        self.scientific_visible = False

    @property
    def supports_scientific(self) -> bool:
        return self.view is ViewKind.SCIENTIFIC

    def _refresh(self) -> None:
        self.display.set_display(self.buffer.text or "0")
        self.display.set_clear_label(CLEAR_LABELS[self.buffer.state])

    def handle_input(self, command: str) -> None:
        """Dispatch one command token coming from a button or the keyboard."""
        if command in DIGITS or command == ".":
            self.buffer.append_digit_or_point(command)
        elif command in OPERATORS:
            self.buffer.append_operator(command)
        elif command == "AC":
            self.buffer.clear()
            self.display.set_expression("")
        elif command in (BACKSPACE, "←"):
            self.buffer.backspace()
        elif command == "±":
            self.buffer.toggle_sign()
        elif command == "%":
            self.buffer.append_percent()
        elif command == "=":
            self._evaluate()
            return
        elif command == "Sci":
            self.toggle_scientific_mode()
            return
        elif command in SCIENTIFIC_COMMANDS:
            if not self.supports_scientific:
                logger.debug("scientific command %r on a basic view", command)
                return
            self.buffer.append_text(SCIENTIFIC_COMMANDS[command])
        else:
            logger.debug("unknown command %r", command)
            return
        self._refresh()

    def handle_clear_button(self) -> None:
        """The AC/backspace button: its meaning follows the buffer state."""
        self.handle_input(BACKSPACE if self.buffer.can_backspace else "AC")

    def _evaluate(self) -> None:
        if self.buffer.is_empty:
            return
        evaluation = self.buffer.evaluate(self.engine)
        if not evaluation.ok:
            self.display.set_display(ERROR_PREFIX + evaluation.error.message)
            return
        self.display.set_expression(evaluation.result.expression)
        self._refresh()

    def toggle_scientific_mode(self) -> None:
        if not self.supports_scientific:
            return
        self.scientific_visible = not self.scientific_visible
        self.display.set_scientific_visible(self.scientific_visible)
