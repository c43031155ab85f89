from __future__ import annotations

import logging
import random
import secrets

from .errors import DivideByZero, MalformedExpression, OutOfRange
from .models import INT32_MAX, INT32_MIN, ROLL_TYPES, Dice, Die, LeftParen, Operand, Operator, Program, RollType


logger = logging.getLogger(__name__)


def roll_die(die: Die, rng: random.Random) -> int:
    return sum(rng.randint(1, die.sides) for _ in range(die.number))


def resolve_die(die: Die, policy: RollType, rng: random.Random) -> int:
    if policy == "default":
        return roll_die(die, rng)
    if policy == "low":
        return die.number
    if policy == "high":
        return die.number * die.sides
    if policy == "average":
        # Rounds the half up for even-sided dice: 1d6 -> 3, 2d6 -> 7.
        return int(die.number * (die.sides / 2 + 0.5))
    raise ValueError(f"Unknown roll type: {policy!r}")


def _truncating_divide(lhs: int, rhs: int) -> int:
    quotient = abs(lhs) // abs(rhs)
    return quotient if (lhs < 0) == (rhs < 0) else -quotient


def _power(base: int, exponent: int) -> int:
    # Exponents below 1 multiply zero times.
    if exponent < 1:
        return 1
    if base in (0, 1):
        return base
    if base == -1:
        return 1 if exponent % 2 == 0 else -1
    # |base| >= 2, so 2**32 and up can never fit.
    if exponent >= 32:
        raise OutOfRange(f"{base}^{exponent} is outside the 32-bit range")
    return base**exponent


def _checked(value: int) -> int:
    if not INT32_MIN <= value <= INT32_MAX:
        raise OutOfRange(f"Result {value} is outside the 32-bit range {INT32_MIN}..{INT32_MAX}")
    return value


def _apply(operator: Operator, lhs: int, rhs: int) -> int:
    symbol = operator.symbol
    if symbol == "+":
        return lhs + rhs
    if symbol == "-":
        return lhs - rhs
    if symbol == "*":
        return lhs * rhs
    if symbol == "/":
        if rhs == 0:
            raise DivideByZero()
        return _truncating_divide(lhs, rhs)
    if symbol == "^":
        if rhs == 0:
            return 1
        if rhs == 1:
            return lhs
        return _power(lhs, rhs)
    raise ValueError(f"Unknown operator: {symbol!r}")


def _pop(stack: list[int], operator: Operator) -> int:
    if not stack:
        raise MalformedExpression(f"Operator '{operator.symbol}' is missing an operand")
    return stack.pop()


def evaluate(program: Program, policy: RollType = "default", rng: random.Random | None = None) -> int:
    """Run a compiled postfix program and return its integer result.

    `policy` decides how dice terms resolve: a random roll ("default"), the
    lowest or highest possible total ("low"/"high"), or the average ("average").
    Operators behave the same under every policy.
    """

    if policy not in ROLL_TYPES:
        raise ValueError(f"Unknown roll type: {policy!r}")
    if rng is None:
        rng = secrets.SystemRandom()

    stack: list[int] = []

    for token in program:
        if isinstance(token, Operand):
            stack.append(_checked(token.value))
        elif isinstance(token, Dice):
            stack.append(_checked(resolve_die(token.die, policy, rng)))
        elif isinstance(token, Operator):
            rhs = _pop(stack, token)
            lhs = _pop(stack, token)
            stack.append(_checked(_apply(token, lhs, rhs)))
        elif isinstance(token, LeftParen):
            continue
        else:
            raise TypeError(f"Unexpected token in program: {token!r}")

    if not stack:
        raise MalformedExpression("Expression is empty")
    if len(stack) > 1:
        raise MalformedExpression(f"Expression leaves {len(stack)} values where one was expected")

    result = stack[0]
    logger.debug("Evaluated %d tokens with policy=%s -> %d", len(program), policy, result)
    return result
