"""Interactive calculator state driven by button presses."""

from __future__ import annotations

import math
from typing import Callable, Optional

from scicalc.evaluator import contains_variable, evaluate_arithmetic
from scicalc.parser import FUNCTIONS, PI_SYMBOL, ExpressionError

_TRAILING_OPERATORS = frozenset("+-*/^%.")
_CLOSING_CHARS = frozenset(")!ex" + PI_SYMBOL)
_INT64_LIMIT = 2**63

MSG_IS_FUNCTION = "Expression is a function"
MSG_INVALID = "Invalid expression"
MSG_CONVERSION = "Number conversion error"
FUNCTION_RESULT = "Function"

CalculationCallback = Callable[[str, str], None]
PlotCallback = Callable[[str], None]


def prepare_expression(raw: str) -> str:
    """Trim, drop dangling operators and close any open parentheses."""
    exp = raw.strip()
    while exp and exp[-1] in _TRAILING_OPERATORS:
        exp = exp[:-1]
    balance = exp.count("(") - exp.count(")")
    if balance > 0:
        exp += ")" * balance
    return exp


def format_result(value: float) -> str:
    """Render a result: integers without a fraction, others with 17 significant digits."""
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if abs(value) < _INT64_LIMIT:
        nearest = math.floor(value + 0.5) if value >= 0 else math.ceil(value - 0.5)
        if abs(value - nearest) < 1e-12:
            return str(int(nearest))
    return f"{value:.17g}"


class Calculator:
    """Expression being typed, its live preview and the error state."""

    def __init__(
        self,
        on_calculation: Optional[CalculationCallback] = None,
        on_plot_requested: Optional[PlotCallback] = None,
    ) -> None:
        self._on_calculation = on_calculation
        self._on_plot_requested = on_plot_requested
        self._current_number = ""
        self._expression = ""
        self._preview_result = ""
        self._error_message = ""
        self._has_error = False
        self._last_was_result = False
        self._angle_degrees = False
        self._has_variable = False
        self._open_parens = 0

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def preview_result(self) -> str:
        return self._preview_result

    @property
    def has_error(self) -> bool:
        return self._has_error

    @property
    def error_message(self) -> str:
        return self._error_message

    @property
    def angle_degrees(self) -> bool:
        return self._angle_degrees

    @property
    def has_variable(self) -> bool:
        return self._has_variable

    @property
    def current_number(self) -> str:
        return self._current_number

    def _set_expression(self, expression: str) -> None:
        if expression != self._expression:
            self._expression = expression
            self._has_variable = contains_variable(expression)

    def _clear_error(self) -> None:
        self._has_error = False
        self._error_message = ""

    def _set_error(self, message: str) -> None:
        self._has_error = True
        self._error_message = message

    def _reset_after_result(self) -> None:
        if self._last_was_result:
            self.clear()
            self._last_was_result = False

    def _try_evaluate(self, expression: str) -> Optional[str]:
        try:
            value = evaluate_arithmetic(expression, self._angle_degrees)
        except (ExpressionError, OverflowError):
            return None
        return format_result(value)

    def append_digit(self, digit: str) -> None:
        self._clear_error()
        self._reset_after_result()
        if self._current_number == "0":
            self._current_number = digit
        else:
            self._current_number += digit
        self._set_expression(self._expression + digit)
        self.evaluate_preview()

    def append_operator(self, op: str) -> None:
        self._clear_error()
        if self._last_was_result:
            self._set_expression(self._current_number)
            self._last_was_result = False

        if op != "!" and self._expression and self._expression[-1] in _TRAILING_OPERATORS:
            self._set_expression(self._expression[:-1] + op)
        else:
            self._set_expression(self._expression + op)

        if op != "!":
            self._current_number = ""
        self.evaluate_preview()

    def append_dot(self) -> None:
        self._clear_error()
        if "." not in self._current_number:
            self._current_number = self._current_number + "." if self._current_number else "0."
            self._set_expression(self._expression + ".")
            self.evaluate_preview()

    def append_variable(self) -> None:
        self._clear_error()
        self._reset_after_result()
        self._current_number = ""
        self._set_expression(self._expression + "x")
        self.evaluate_preview()

    def delete_last(self) -> None:
        self._clear_error()
        expression = self._expression
        if not expression:
            return

        if expression.endswith("("):
            start = len(expression) - 1
            while start > 0 and expression[start - 1].isalpha():
                start -= 1
            if expression[start:-1] in FUNCTIONS:
                self._set_expression(expression[:start])
            else:
                self._set_expression(expression[:-1])
            if self._open_parens > 0:
                self._open_parens -= 1
        else:
            self._set_expression(expression[:-1])
            if self._current_number:
                self._current_number = self._current_number[:-1]

        self.evaluate_preview()

    def clear(self) -> None:
        self._current_number = ""
        self._set_expression("")
        self._preview_result = ""
        self._open_parens = 0
        self._clear_error()

    def evaluate_preview(self) -> None:
        prepared = prepare_expression(self._expression)
        if not prepared or self._has_variable:
            self._preview_result = ""
            return
        text = self._try_evaluate(prepared)
        self._preview_result = text if text is not None and text != "nan" else ""

    def evaluate_result(self) -> None:
        self._clear_error()
        prepared = prepare_expression(self._expression)

        if self._has_variable:
            self._set_error(MSG_IS_FUNCTION)
            return

        text = self._try_evaluate(prepared)
        if text is None or text in ("nan", "inf"):
            self._set_error(MSG_INVALID)
            return

        self._current_number = text
        self._set_expression(text)
        self._last_was_result = True
        self._preview_result = ""
        if self._on_calculation is not None:
            self._on_calculation(prepared, text)

    def calculate(self) -> None:
        self.evaluate_result()

    def backspace(self) -> None:
        self.delete_last()

    def add_decimal_point(self) -> None:
        self.append_dot()

    def percentage(self) -> None:
        self._clear_error()
        current = self._current_number
        if not current:
            return
        try:
            value = float(current)
        except ValueError:
            self._set_error(MSG_CONVERSION)
            return

        text = f"{value / 100.0:.15g}"
        if self._expression.endswith(current):
            self._set_expression(self._expression[: len(self._expression) - len(current)] + text)
        else:
            self._set_expression(self._expression + text)
        self._current_number = text
        self.evaluate_preview()

    def append_function(self, func: str) -> None:
        self._clear_error()
        self._reset_after_result()
        self._set_expression(self._expression + func + "(")
        self._open_parens += 1
        self._current_number = ""
        self.evaluate_preview()

    def append_constant(self, symbol: str) -> None:
        self._clear_error()
        self._reset_after_result()
        self._current_number = ""
        self._set_expression(self._expression + symbol)
        self.evaluate_preview()

    def add_parenthesis(self) -> None:
        self._clear_error()
        expression = self._expression
        close = (
            self._open_parens > 0
            and bool(expression)
            and (expression[-1].isdecimal() or expression[-1] in _CLOSING_CHARS)
        )
        if close:
            self._set_expression(expression + ")")
            self._open_parens -= 1
        else:
            self._reset_after_result()
            self._set_expression(self._expression + "(")
            self._open_parens += 1
        self.evaluate_preview()

    def sqrt(self) -> None:
        self.append_function("sqrt")

    def power(self) -> None:
        self.append_operator("^")

    def factorial(self) -> None:
        self.append_operator("!")

    def load_expression(self, expr: str) -> None:
        self._clear_error()
        self._set_expression(expr)
        self._current_number = ""
        self._last_was_result = False
        self.evaluate_preview()

    def toggle_angle_mode(self) -> None:
        self._angle_degrees = not self._angle_degrees
        self.evaluate_preview()

    def request_plot(self) -> None:
        if self._has_variable and self._expression:
            prepared = prepare_expression(self._expression)
            self._preview_result = ""
            if self._on_plot_requested is not None:
                self._on_plot_requested(prepared)
            if self._on_calculation is not None:
                self._on_calculation(prepared, FUNCTION_RESULT)