from __future__ import annotations

import logging
import re
from typing import Literal, TypeAlias

from .errors import InvalidDie, InvalidToken, OutOfRange
from .models import (
    DIVIDE,
    EXPONENT,
    INT32_MAX,
    LEFT_PAREN,
    MAX_DICE,
    MINUS,
    PLUS,
    TIMES,
    UINT32_MAX,
    Dice,
    Die,
    LeftParen,
    Operand,
    Operator,
    Program,
    Token,
    render_postfix,
)


logger = logging.getLogger(__name__)

_DIGITS = "0123456789"
_DICE_MARKER = "d"

_OPERATORS: dict[str, Operator] = {
    "+": PLUS,
    "-": MINUS,
    "*": TIMES,
    "/": DIVIDE,
    "^": EXPONENT,
}

_PRECEDENCE: dict[str, int] = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    "^": 3,
}

# Never popped by precedence; only a ')' removes it.
_LEFT_PAREN_PRECEDENCE = 4

_WHITESPACE_RE = re.compile(r"\s+")

_Scanned: TypeAlias = Literal["start", "operand", "dice", "open", "close", "operator"]


def strip_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub("", text)


def precedence(token: Token) -> int:
    if isinstance(token, LeftParen):
        return _LEFT_PAREN_PRECEDENCE
    if isinstance(token, Operator):
        return _PRECEDENCE[token.symbol]
    raise TypeError(f"Expected an operator, found {token!r}")


def _push_operator(operator: Operator, output: list[Token], operators: list[Token]) -> None:
    # Ties are popped too, so every operator (including '^') is left-associative.
    incoming = precedence(operator)
    while operators:
        top = operators[-1]
        if isinstance(top, LeftParen) or precedence(top) < incoming:
            break
        output.append(operators.pop())
    operators.append(operator)


def _accumulate(value: int, digit: int) -> int:
    value = value * 10 + digit
    if value > UINT32_MAX:
        raise OutOfRange(f"Number {value} is larger than {UINT32_MAX}")
    return value


def _close_dice(output: list[Token], sides_read: bool) -> None:
    last = output[-1]
    if not isinstance(last, Dice):
        return
    die = last.die
    if die.sides == 0:
        raise InvalidDie(die.number, 0 if sides_read else None)
    if die.number > MAX_DICE:
        raise OutOfRange(f"Dice term '{die}' rolls more than {MAX_DICE} dice")
    if die.number * die.sides > INT32_MAX:
        raise OutOfRange(f"Dice term '{die}' can total more than {INT32_MAX}")


def compile_expression(text: str) -> Program:
    """Compile an infix dice expression into a postfix program.

    Raises InvalidToken for characters outside the grammar, InvalidDie for a
    dice term without sides, and OutOfRange for literals above the unsigned
    32-bit range or dice terms too large to roll. No other structural checks
    happen here: unbalanced parentheses and dangling operators surface as
    MalformedExpression when the program is evaluated.
    """

    output: list[Token] = []
    operators: list[Token] = []

    # What the previous character completed; drives digit accumulation,
    # implicit '*' before '(' and unary '+'/'-'.
    previous: _Scanned = "start"
    sides_read = False

    for ch in strip_whitespace(text):
        if ch not in _DIGITS and ch not in _OPERATORS and ch not in "()" and ch != _DICE_MARKER:
            raise InvalidToken(ch)

        if ch in _DIGITS:
            digit = int(ch)
            last = output[-1] if output else None
            if previous == "operand" and isinstance(last, Operand):
                output[-1] = Operand(_accumulate(last.value, digit))
            elif previous == "dice" and isinstance(last, Dice):
                output[-1] = Dice(Die(last.die.number, _accumulate(last.die.sides, digit)))
                sides_read = True
            else:
                output.append(Operand(digit))
                previous = "operand"
            continue

        if previous == "dice":
            _close_dice(output, sides_read)

        if ch == _DICE_MARKER:
            last = output[-1] if output else None
            if previous == "operand" and isinstance(last, Operand):
                output[-1] = Dice(Die(last.value, 0))
            else:
                output.append(Dice(Die(1, 0)))
            previous = "dice"
            sides_read = False
        elif ch == "(":
            # Pushed straight onto the stack, so '6/2(3)' is '6/(2*3)'.
            if previous in ("operand", "dice"):
                operators.append(TIMES)
            operators.append(LEFT_PAREN)
            previous = "open"
        elif ch == ")":
            while operators:
                top = operators.pop()
                if isinstance(top, LeftParen):
                    break
                output.append(top)
            previous = "close"
        else:
            if ch in "+-" and previous not in ("operand", "dice", "close"):
                # Unary sign: '-x' compiles as '0 - x'.
                output.append(Operand(0))
            _push_operator(_OPERATORS[ch], output, operators)
            previous = "operator"

    if previous == "dice":
        _close_dice(output, sides_read)

    while operators:
        top = operators.pop()
        if isinstance(top, LeftParen):
            logger.debug("Dropping unmatched '(' in %r", text)
            continue
        output.append(top)

    program: Program = tuple(output)
    logger.debug("Compiled %r -> %s", text, render_postfix(program))
    return program
