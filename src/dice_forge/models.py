from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias


RollType: TypeAlias = Literal["default", "average", "low", "high"]
OperatorSymbol: TypeAlias = Literal["+", "-", "*", "/", "^"]

ROLL_TYPES: tuple[RollType, ...] = ("default", "average", "low", "high")

# Literals and dice fields are unsigned 32-bit; every evaluated value is signed 32-bit.
UINT32_MAX = 2**32 - 1
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# Upper bound on dice in one term, so a roll stays a short loop.
MAX_DICE = 10_000


@dataclass(frozen=True)
class Die:
    number: int
    sides: int

    def __str__(self) -> str:
        return f"{self.number}d{self.sides}"


@dataclass(frozen=True)
class Operand:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Dice:
    die: Die

    def __str__(self) -> str:
        return str(self.die)


@dataclass(frozen=True)
class Operator:
    symbol: OperatorSymbol

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class LeftParen:
    def __str__(self) -> str:
        return "("


PLUS = Operator("+")
MINUS = Operator("-")
TIMES = Operator("*")
DIVIDE = Operator("/")
EXPONENT = Operator("^")
LEFT_PAREN = LeftParen()

Token: TypeAlias = Operand | Dice | Operator | LeftParen

# Compiled postfix program.
Program: TypeAlias = tuple[Token, ...]


def render_postfix(program: Program) -> str:
    return " ".join(str(token) for token in program)
