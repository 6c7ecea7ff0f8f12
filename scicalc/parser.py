"""Tokenizer and shunting-yard conversion for calculator expressions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable

PI_SYMBOL = "\u03c0"

FUNCTIONS = frozenset(
    {"sin", "cos", "tan", "ln", "log", "sqrt", "abs", "arcsin", "arccos", "arctan"}
)

FUNCTION_PRECEDENCE = 4

_BINARY_OPERATORS = "+-*/^%"
_SIGN_CONTEXT = "(+-*/^%"


class ExpressionError(ValueError):
    """Raised when an expression cannot be parsed or evaluated."""


class TokenType(Enum):
    NUMBER = auto()
    OPERATOR = auto()
    FUNCTION = auto()
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    VARIABLE = auto()


@dataclass(frozen=True)
class Token:
    """A lexical unit of an expression."""

    type: TokenType
    value: str
    num_value: float = 0.0
    precedence: int = 0
    right_associative: bool = False


def operator_precedence(op: str) -> int:
    """Binding strength of an operator; 0 for anything unknown."""
    head = op[:1]
    if head in ("+", "-"):
        return 1
    if head in ("*", "/", "%"):
        return 2
    if head == "^":
        return 3
    if head == "!":
        return 4
    return 0


def is_right_associative(op: str) -> bool:
    """Only exponentiation groups to the right."""
    return op[:1] == "^"


def is_function(name: str) -> bool:
    """Whether ``name`` is one of the supported unary functions."""
    return name in FUNCTIONS


def _operator_token(op: str) -> Token:
    return Token(
        TokenType.OPERATOR,
        op,
        0.0,
        operator_precedence(op),
        is_right_associative(op),
    )


def _scan_number(text: str, start: int, sign: str, exponent_markers: str) -> tuple[Token, int]:
    """Read a numeric literal starting at ``start``; return the token and the next index."""
    size = len(text)
    i = start
    while i < size and (text[i].isdecimal() or text[i] == "."):
        i += 1

    if i < size and text[i] in exponent_markers:
        i += 1
        if i < size and text[i] in "+-":
            i += 1
        digits_start = i
        while i < size and text[i].isdecimal():
            i += 1
        if i == digits_start:
            raise ExpressionError(f"invalid exponent in number: {sign}{text[start:i]}")

    literal = sign + text[start:i]
    try:
        value = float(literal)
    except ValueError:
        raise ExpressionError(f"invalid number: {literal}") from None
    return Token(TokenType.NUMBER, literal, value), i


def tokenize(expression: str) -> list[Token]:
    """Split an expression into tokens. Spaces are ignored."""
    text = expression.replace(" ", "")
    size = len(text)
    tokens: list[Token] = []
    i = 0

    while i < size:
        c = text[i]

        if c == "-" and (i == 0 or text[i - 1] in _SIGN_CONTEXT) and i + 1 < size:
            nxt = text[i + 1]
            if nxt.isdecimal() or nxt == ".":
                token, i = _scan_number(text, i + 1, "-", "eE")
                tokens.append(token)
                continue
            if nxt == "(" or nxt.isalpha():
                tokens.append(Token(TokenType.NUMBER, "-1", -1.0))
                tokens.append(_operator_token("*"))
                i += 1
                continue

        if c == "(":
            tokens.append(Token(TokenType.LEFT_PAREN, "("))
            i += 1
        elif c == ")":
            tokens.append(Token(TokenType.RIGHT_PAREN, ")"))
            i += 1
        elif c in _BINARY_OPERATORS:
            tokens.append(_operator_token(c))
            i += 1
        elif c == "!":
            prev = text[i - 1] if i > 0 else ""
            if not prev or not (prev.isdecimal() or prev in ")x"):
                raise ExpressionError("missing operand for factorial")
            tokens.append(_operator_token("!"))
            i += 1
        elif c == PI_SYMBOL:
            tokens.append(Token(TokenType.NUMBER, PI_SYMBOL, math.pi))
            i += 1
        elif c == "e":
            tokens.append(Token(TokenType.NUMBER, "e", math.e))
            i += 1
        elif c.isdecimal() or c == ".":
            token, i = _scan_number(text, i, "", "e")
            tokens.append(token)
        elif c.isalpha():
            start = i
            while i < size and text[i].isalpha():
                i += 1
            word = text[start:i]
            if word == "x":
                tokens.append(Token(TokenType.VARIABLE, "x"))
            elif is_function(word):
                if start > 0:
                    prev = text[start - 1]
                    if prev.isdecimal() or prev in ").":
                        raise ExpressionError(f"operator required before function '{word}'")
                tokens.append(Token(TokenType.FUNCTION, word, 0.0, FUNCTION_PRECEDENCE))
            else:
                raise ExpressionError(f"unknown symbol in expression: {word}")
        else:
            raise ExpressionError(f"unknown symbol in expression: {c}")

    return tokens


def infix_to_postfix(tokens: Iterable[Token]) -> list[Token]:
    """Reorder infix tokens into postfix order (shunting-yard)."""
    output: list[Token] = []
    stack: list[Token] = []

    for token in tokens:
        kind = token.type
        if kind in (TokenType.NUMBER, TokenType.VARIABLE):
            output.append(token)
        elif kind in (TokenType.FUNCTION, TokenType.LEFT_PAREN):
            stack.append(token)
        elif kind is TokenType.OPERATOR:
            while stack and stack[-1].type is not TokenType.LEFT_PAREN:
                top = stack[-1]
                if (
                    top.type is TokenType.FUNCTION
                    or top.precedence > token.precedence
                    or (top.precedence == token.precedence and not token.right_associative)
                ):
                    output.append(stack.pop())
                else:
                    break
            stack.append(token)
        elif kind is TokenType.RIGHT_PAREN:
            while stack and stack[-1].type is not TokenType.LEFT_PAREN:
                output.append(stack.pop())
            if stack and stack[-1].type is TokenType.LEFT_PAREN:
                stack.pop()
            if stack and stack[-1].type is TokenType.FUNCTION:
                output.append(stack.pop())

    while stack:
        top = stack.pop()
        if top.type is TokenType.LEFT_PAREN:
            raise ExpressionError("unbalanced parentheses")
        output.append(top)

    return output