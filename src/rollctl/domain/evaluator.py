"""Dice evaluation over an injectable random source.

The evaluator never reaches for the module-level ``random`` generator.
Callers pass a :class:`RandomSource`; ``random.Random`` satisfies it, and
tests pass seeded generators or stubs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from rollctl.domain.errors import TooManyDice
from rollctl.domain.terms import DiceThrow, Expression

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything producing uniform integers in an inclusive range."""

    def randint(self, a: int, b: int) -> int: ...


@dataclass(frozen=True)
class Throw:
    """One evaluation of a dice term."""

    term: DiceThrow
    rolls: tuple[int, ...]
    total: int

    def to_dict(self) -> dict[str, object]:
        return {"term": self.term.notation, "rolls": list(self.rolls), "result": self.total}


@dataclass(frozen=True)
class Evaluation:
    """Evaluated constants and throws of one expression."""

    constants: tuple[int, ...] = ()
    throws: tuple[Throw, ...] = ()

    @property
    def constant_total(self) -> int:
        return sum(self.constants)

    @property
    def dice_total(self) -> int:
        return sum(t.total for t in self.throws)

    @property
    def grand_total(self) -> int:
        return self.constant_total + self.dice_total


def roll_dice(count: int, sides: int, source: RandomSource) -> list[int]:
    """Draw *count* independent values in ``[1, sides]``.

    Returns an empty list when *count* or *sides* is 0.
    """
    if count == 0 or sides == 0:
        return []
    return [source.randint(1, sides) for _ in range(count)]


def evaluate(count: int, sides: int, source: RandomSource) -> int:
    """Sum of *count* draws of a *sides*-sided die; 0 for empty throws."""
    return sum(roll_dice(count, sides, source))


def throw(term: DiceThrow, source: RandomSource) -> Throw:
    """Roll *term*, negating the sum afterwards for negative terms."""
    rolls = roll_dice(term.count, term.sides, source)
    total = sum(rolls)
    if term.negative:
        total = -total
    logger.debug("Rolled %s -> %s", term.notation, total)
    return Throw(term=term, rolls=tuple(rolls), total=total)


def parse_constant(token: str) -> int:
    """Parse a signed integer literal such as ``"5"``, ``"+5"`` or ``"-5"``."""
    return int(token.strip())


def check_dice_limit(expression: Expression, max_dice: int | None) -> None:
    """Raise :class:`TooManyDice` for the first term above *max_dice*."""
    if max_dice is None:
        return
    for term in expression.dice:
        if term.count > max_dice:
            raise TooManyDice(
                f"Too many dice in {term.notation}: {term.count} (max {max_dice}).",
                column=term.column,
            )


def evaluate_expression(
    expression: Expression,
    source: RandomSource,
    *,
    max_dice: int | None = None,
) -> Evaluation:
    """Evaluate every term of *expression* in order.

    Raises:
        TooManyDice: If a dice term exceeds *max_dice*. Checked before any
            die is rolled.
    """
    check_dice_limit(expression, max_dice)
    constants = tuple(parse_constant(c.notation) for c in expression.constants)
    throws = tuple(throw(term, source) for term in expression.dice)
    return Evaluation(constants=constants, throws=throws)
