import math

import pytest

from scicalc.evaluator import (
    EvaluationError,
    apply_function,
    apply_operator,
    contains_variable,
    evaluate_arithmetic,
    evaluate_function,
    evaluate_postfix,
    factorial,
    generate_points,
)
from scicalc.parser import ExpressionError, infix_to_postfix, tokenize


def test_precedence_in_arithmetic():
    assert evaluate_arithmetic("2+3*4") == 2 + 3 * 4
    assert evaluate_arithmetic("(2+3)*4") == (2 + 3) * 4


def test_power_is_right_associative():
    assert evaluate_arithmetic("2^3^2") == 2 ** 3 ** 2


def test_negative_literal_binds_to_power_base():
    assert evaluate_arithmetic("-2^2") == (-2) ** 2


def test_remainder_and_factorial():
    assert evaluate_arithmetic("10%4") == math.fmod(10, 4)
    assert evaluate_arithmetic("5!") == math.factorial(5)


def test_constants_and_spaces():
    assert evaluate_arithmetic("2 * π") == 2 * math.pi
    assert evaluate_arithmetic("e") == math.e


def test_functions():
    assert evaluate_arithmetic("log(1000)") == math.log10(1000)
    assert evaluate_arithmetic("ln(e)") == pytest.approx(1.0)
    assert evaluate_arithmetic("abs(-3)") == abs(-3)
    assert evaluate_arithmetic("sqrt(16)") == math.sqrt(16)


def test_angle_modes():
    assert evaluate_arithmetic("sin(90)") == math.sin(90)
    assert evaluate_arithmetic("sin(90)", degrees=True) == pytest.approx(math.sin(math.radians(90)))
    assert evaluate_arithmetic("arcsin(1)", degrees=True) == pytest.approx(math.degrees(math.asin(1)))
    assert evaluate_arithmetic("arctan(1)") == math.atan(1)


@pytest.mark.parametrize(
    "expression",
    ["1/0", "5%0", "1/1e-13", "ln(0)", "log(-1)", "sqrt(-4)", "arcsin(2)", "arccos(-1.5)", "(-3)!", "2.5!"],
)
def test_domain_errors_raise(expression):
    with pytest.raises(EvaluationError):
        evaluate_arithmetic(expression)


def test_evaluation_error_is_expression_error():
    with pytest.raises(ExpressionError):
        evaluate_arithmetic("1/0")


@pytest.mark.parametrize("expression", ["", "x+1", "1+", "sin()", "()"])
def test_invalid_arithmetic_raises(expression):
    with pytest.raises(ExpressionError):
        evaluate_arithmetic(expression)


def test_parse_error_propagates():
    with pytest.raises(ExpressionError):
        evaluate_arithmetic("foo")


def test_power_overflow_and_domain():
    assert math.isinf(evaluate_arithmetic("10^400"))
    assert math.isnan(evaluate_arithmetic("(-8)^0.5"))
    result = evaluate_arithmetic("0^-1")
    assert math.isinf(result) and result > 0


def test_factorial_values():
    assert factorial(0) == 1
    assert factorial(1) == 1
    assert factorial(6) == math.factorial(6)
    assert math.isinf(factorial(200))


@pytest.mark.parametrize("value", [-1, 0.5, math.nan])
def test_factorial_rejects_non_natural(value):
    with pytest.raises(EvaluationError):
        factorial(value)


def test_apply_operator_errors():
    with pytest.raises(EvaluationError):
        apply_operator("?", 1.0, 2.0)
    with pytest.raises(EvaluationError):
        apply_operator("/", 1.0, 0.0)


def test_apply_operator_basic():
    assert apply_operator("-", 7.0, 2.0) == 7.0 - 2.0
    assert apply_operator("^", 2.0, 10.0) == 2.0 ** 10


def test_apply_function_unknown_and_infinite():
    with pytest.raises(EvaluationError):
        apply_function("foo", 1.0)
    assert math.isnan(apply_function("tan", math.inf))


def test_evaluate_postfix_variable_handling():
    postfix = infix_to_postfix(tokenize("x*2"))
    assert evaluate_postfix(postfix, 4.0) == 4.0 * 2
    with pytest.raises(EvaluationError):
        evaluate_postfix(postfix)


def test_evaluate_function():
    assert evaluate_function("x^2+1", 3) == 3 ** 2 + 1
    assert evaluate_function("cos(x)", 60, degrees=True) == pytest.approx(math.cos(math.radians(60)))
    assert evaluate_function("x!", 4) == math.factorial(4)


@pytest.mark.parametrize("expression", ["", "2x", "x/0"])
def test_evaluate_function_errors(expression):
    with pytest.raises(ExpressionError):
        evaluate_function(expression, 1.0)


def test_contains_variable():
    assert contains_variable("2*x") is True
    assert contains_variable("2+3") is False
    assert contains_variable("foo x") is False


def test_generate_points_identity():
    points = generate_points("x", 0.0, 1.0, 5)
    assert len(points) == 5
    assert points[0] == (0.0, 0.0)
    assert points[-1][0] == pytest.approx(1.0)
    assert all(x == y for x, y in points)
    xs = [x for x, _ in points]
    assert xs == sorted(xs)
    gaps = [b - a for a, b in zip(xs, xs[1:])]
    assert all(gap == pytest.approx(gaps[0]) for gap in gaps)


def test_generate_points_skips_undefined():
    assert [x for x, _ in generate_points("1/x", -1.0, 1.0, 3)] == [-1.0, 1.0]
    assert [x for x, _ in generate_points("sqrt(x)", -1.0, 1.0, 3)] == [0.0, 1.0]


def test_generate_points_skips_non_finite():
    assert generate_points("10^(x*400)", 0.0, 1.0, 2) == [(0.0, 1.0)]


@pytest.mark.parametrize(
    "args",
    [("x", 0.0, 1.0, 1), ("x", 1.0, 1.0, 10), ("x", 2.0, 1.0, 10), ("foo", 0.0, 1.0, 10), ("(x", 0.0, 1.0, 10)],
)
def test_generate_points_empty_cases(args):
    assert generate_points(*args) == []