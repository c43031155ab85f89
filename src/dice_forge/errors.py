from __future__ import annotations


class DiceError(ValueError):
    """User-facing errors. Messages start with a stable bracketed code."""


class InvalidToken(DiceError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(
            f"[INVALID_TOKEN] Unexpected token '{token}' found while parsing. Example: '3d6 + 2' or '2(1d8 + 3)'."
        )


class InvalidDie(DiceError):
    def __init__(self, number: int, sides: int | None = None) -> None:
        self.number = number
        self.sides = sides
        if sides is None:
            problem = f"Dice term '{number}d' is missing its number of sides"
        else:
            problem = f"Dice term '{number}d{sides}' must have at least 1 side"
        super().__init__(f"[INVALID_DIE] {problem}. Example: '{number}d6'.")


class OutOfRange(DiceError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"[OUT_OF_RANGE] {reason}.")


class DivideByZero(DiceError):
    def __init__(self) -> None:
        super().__init__("[DIVIDE_BY_ZERO] Attempted to divide by 0.")


class MalformedExpression(DiceError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(
            f"[MALFORMED_EXPRESSION] {reason}. Check for missing operands or parentheses. Example: '(2d6 + 3) * 2'."
        )
