from __future__ import annotations

import logging
from typing import Any, Literal

from mcp.server.fastmcp import FastMCP

from .config import Settings
from .equation import Equation
from .errors import DiceError
from .models import ROLL_TYPES, RollType, render_postfix


logger = logging.getLogger(__name__)

settings = Settings()

mcp = FastMCP(settings.server_name)


def _compile(expression: str) -> Equation:
    try:
        return Equation(expression)
    except DiceError as e:
        # Fail-fast: surface stable error codes in the message.
        raise ValueError(str(e)) from None


@mcp.tool()
def roll_dice(expression: str, policy: RollType = "default") -> dict[str, Any]:
    """Evaluate a dice expression such as '3d6+2' or '10+(3+2d6*2)+3(2d20)+d2'.

    policy: 'default' rolls the dice; 'low', 'high' and 'average' resolve every
    die to its lowest, highest or average value instead.

    Raises a hard error (exception) on invalid input.
    """

    if policy not in ROLL_TYPES:
        raise ValueError(f"Unknown policy '{policy}'. Use one of: {', '.join(ROLL_TYPES)}.")

    equation = _compile(expression)
    try:
        total = equation.evaluate(policy)
    except DiceError as e:
        raise ValueError(str(e)) from None

    logger.info("roll_dice %r policy=%s -> %d", expression, policy, total)
    return {
        "expression": expression,
        "postfix": render_postfix(equation.program),
        "policy": policy,
        "total": total,
    }


@mcp.tool()
def describe_expression(expression: str) -> dict[str, Any]:
    """Report the low, high and average outcome of a dice expression without rolling."""

    equation = _compile(expression)
    try:
        low, high = equation.range()
        average = equation.average()
    except DiceError as e:
        raise ValueError(str(e)) from None

    return {
        "expression": expression,
        "postfix": render_postfix(equation.program),
        "low": low,
        "high": high,
        "average": average,
        "range": [low, high],
    }


@mcp.tool()
def roll_with_advantage(
    expression: str, mode: Literal["advantage", "disadvantage"] = "advantage"
) -> dict[str, Any]:
    """Roll a dice expression twice and keep the higher (advantage) or lower (disadvantage) total."""

    if mode not in ("advantage", "disadvantage"):
        raise ValueError(f"Unknown mode '{mode}'. Use 'advantage' or 'disadvantage'.")

    equation = _compile(expression)
    try:
        rolls = [equation.roll(), equation.roll()]
    except DiceError as e:
        raise ValueError(str(e)) from None

    kept = max(rolls) if mode == "advantage" else min(rolls)
    logger.info("roll_with_advantage %r mode=%s rolls=%s -> %d", expression, mode, rolls, kept)
    return {
        "expression": expression,
        "mode": mode,
        "rolls": rolls,
        "kept": kept,
    }


def run() -> None:
    # stdout carries the stdio transport, so logs go to stderr.
    logging.basicConfig(
        level=settings.log_level,
        format="[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Starting MCP server %r", settings.server_name)
    mcp.run()


if __name__ == "__main__":
    run()
