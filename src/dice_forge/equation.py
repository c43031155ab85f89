from __future__ import annotations

import random

from .compiler import compile_expression
from .evaluator import evaluate
from .models import Program, RollType, render_postfix


class Equation:
    """A dice expression compiled once and evaluated on demand.

    >>> attack = Equation("3d6+2")
    >>> attack.range()
    (5, 20)

    Supports `+ - * / ^`, parentheses, and `NdM` dice terms (`N` defaults to 1).
    A number or dice term directly before `(` multiplies it: `3(2d20)`.
    `low()` and `high()` use the lowest or highest roll of every die; they are
    not the bounds of the whole expression when it subtracts or divides dice.
    """

    def __init__(self, text: str, rng: random.Random | None = None) -> None:
        self.text = text
        self._program = compile_expression(text)
        self._rng = rng

    @property
    def program(self) -> Program:
        return self._program

    def __repr__(self) -> str:
        return f"Equation({self.text!r}, postfix={render_postfix(self._program)!r})"

    def evaluate(self, policy: RollType = "default") -> int:
        return evaluate(self._program, policy, self._rng)

    def roll(self) -> int:
        return self.evaluate("default")

    def average(self) -> int:
        return self.evaluate("average")

    def low(self) -> int:
        return self.evaluate("low")

    def high(self) -> int:
        return self.evaluate("high")

    def range(self) -> tuple[int, int]:
        return self.low(), self.high()

    def advantage(self) -> int:
        """Roll twice and keep the higher result."""
        return max(self.roll(), self.roll())

    def disadvantage(self) -> int:
        """Roll twice and keep the lower result."""
        return min(self.roll(), self.roll())
