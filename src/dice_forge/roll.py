"""One-shot helpers: compile, evaluate once, discard the compiled form."""

from __future__ import annotations

from .equation import Equation


def roll(text: str) -> int:
    return Equation(text).roll()


def advantage(text: str) -> int:
    return Equation(text).advantage()


def disadvantage(text: str) -> int:
    return Equation(text).disadvantage()
