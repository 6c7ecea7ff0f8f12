"""Evaluation of parsed expressions, with or without the variable x."""

from __future__ import annotations

import math
from typing import Callable, Iterable

from scicalc.parser import (
    ExpressionError,
    Token,
    TokenType,
    infix_to_postfix,
    tokenize,
)

_FUZZY_ZERO = 1e-12


class EvaluationError(ExpressionError):
    """Raised when a well-formed expression cannot be computed."""


def _is_fuzzy_zero(value: float) -> bool:
    return abs(value) <= _FUZZY_ZERO


def _signed_infinity(base: float, exponent: float) -> float:
    odd_integer = exponent.is_integer() and exponent % 2 == 1
    return math.copysign(math.inf, base) if odd_integer else math.inf


def _power(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        return _signed_infinity(base, exponent)
    except ValueError:
        if base == 0:
            return _signed_infinity(base, exponent)
        return math.nan


def _lenient(func: Callable[[float], float], arg: float) -> float:
    """Apply ``func``, yielding NaN where the math module rejects the domain."""
    try:
        return func(arg)
    except ValueError:
        return math.nan


def factorial(n: float) -> float:
    """Factorial of a non-negative integral value, as a float."""
    value = float(n)
    if value < 0 or not value.is_integer():
        raise EvaluationError("factorial is defined only for non-negative integers")
    result = 1.0
    for i in range(2, int(value) + 1):
        result *= i
        if math.isinf(result):
            break
    return result


def apply_operator(op: str, left: float, right: float) -> float:
    """Apply a binary operator."""
    head = op[:1]
    if head == "+":
        return left + right
    if head == "-":
        return left - right
    if head == "*":
        return left * right
    if head == "/":
        if _is_fuzzy_zero(right):
            raise EvaluationError("division by zero")
        return left / right
    if head == "%":
        if _is_fuzzy_zero(right):
            raise EvaluationError("division by zero in remainder")
        try:
            return math.fmod(left, right)
        except ValueError:
            return math.nan
    if head == "^":
        return _power(left, right)
    raise EvaluationError(f"unknown operator: {op}")


def apply_function(name: str, arg: float, degrees: bool = False) -> float:
    """Apply a named unary function; angles follow the degrees flag."""
    if name in ("sin", "cos", "tan"):
        func = {"sin": math.sin, "cos": math.cos, "tan": math.tan}[name]
        return _lenient(func, math.radians(arg) if degrees else arg)
    if name == "ln":
        if arg <= 0:
            raise EvaluationError("ln(x<=0)")
        return math.log(arg)
    if name == "log":
        if arg <= 0:
            raise EvaluationError("log(x<=0)")
        return math.log10(arg)
    if name == "sqrt":
        if arg < 0:
            raise EvaluationError("sqrt(x<0)")
        return math.sqrt(arg)
    if name == "abs":
        return abs(arg)
    if name in ("arctan", "arcsin", "arccos"):
        if name != "arctan" and (arg < -1 or arg > 1):
            raise EvaluationError(f"{name}(x<-1 || x>1)")
        func = {"arctan": math.atan, "arcsin": math.asin, "arccos": math.acos}[name]
        result = func(arg)
        return math.degrees(result) if degrees else result
    raise EvaluationError(f"unknown function: {name}")


def evaluate_postfix(
    tokens: Iterable[Token], x: float | None = None, degrees: bool = False
) -> float:
    """Compute a postfix token sequence; ``x`` of None forbids the variable."""
    stack: list[float] = []

    for token in tokens:
        kind = token.type
        if kind is TokenType.NUMBER:
            stack.append(token.num_value)
        elif kind is TokenType.VARIABLE:
            if x is None:
                raise EvaluationError("variable in arithmetic expression")
            stack.append(float(x))
        elif kind is TokenType.OPERATOR:
            if token.value == "!":
                if not stack:
                    raise EvaluationError("missing operand for '!'")
                stack.append(factorial(stack.pop()))
            else:
                if len(stack) < 2:
                    raise EvaluationError(f"missing operands for operator {token.value}")
                right = stack.pop()
                left = stack.pop()
                stack.append(apply_operator(token.value, left, right))
        elif kind is TokenType.FUNCTION:
            if not stack:
                raise EvaluationError(f"missing argument for function {token.value}")
            stack.append(apply_function(token.value, stack.pop(), degrees))
        else:
            raise EvaluationError("unexpected token in postfix expression")

    if len(stack) != 1:
        raise EvaluationError("invalid expression")
    return stack[0]


def evaluate_arithmetic(expression: str, degrees: bool = False) -> float:
    """Evaluate an expression that must not contain the variable x."""
    if not expression:
        raise EvaluationError("empty expression")
    tokens = tokenize(expression)
    if any(token.type is TokenType.VARIABLE for token in tokens):
        raise EvaluationError("variable in arithmetic expression")
    return evaluate_postfix(infix_to_postfix(tokens), None, degrees)


def evaluate_function(expression: str, x: float, degrees: bool = False) -> float:
    """Evaluate an expression of x at the given value."""
    if not expression:
        raise EvaluationError("empty expression")
    postfix = infix_to_postfix(tokenize(expression))
    return evaluate_postfix(postfix, x, degrees)


def contains_variable(expression: str) -> bool:
    """Whether the expression tokenizes and mentions x."""
    try:
        tokens = tokenize(expression)
    except ExpressionError:
        return False
    return any(token.type is TokenType.VARIABLE for token in tokens)


def generate_points(
    expression: str,
    x_min: float,
    x_max: float,
    num_points: int,
    degrees: bool = False,
) -> list[tuple[float, float]]:
    """Sample the function evenly over [x_min, x_max], skipping undefined points."""
    if num_points < 2 or x_min >= x_max:
        return []

    try:
        postfix = infix_to_postfix(tokenize(expression))
    except ExpressionError:
        return []

    step = (x_max - x_min) / (num_points - 1)
    points: list[tuple[float, float]] = []
    for i in range(num_points):
        x = x_min + i * step
        try:
            y = evaluate_postfix(postfix, x, degrees)
        except ExpressionError:
            continue
        if math.isfinite(y):
            points.append((x, y))
    return points