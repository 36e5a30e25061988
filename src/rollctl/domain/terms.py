"""Term and Expression types.

A Term is either a signed ``Constant`` or a ``DiceThrow``. An Expression
owns an ordered tuple of terms and nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Constant:
    """A signed integer term."""

    value: int
    column: int = field(default=0, compare=False)

    @property
    def notation(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class DiceThrow:
    """``count`` dice with ``sides`` faces each, optionally negated."""

    count: int
    sides: int
    negative: bool = False
    column: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        if self.count < 0 or self.sides < 0:
            raise ValueError("dice count and sides must be non-negative")

    @property
    def notation(self) -> str:
        sign = "-" if self.negative else ""
        return f"{sign}{self.count}d{self.sides}"

    @property
    def is_empty(self) -> bool:
        """True when the throw draws nothing and always totals 0."""
        return self.count == 0 or self.sides == 0


Term = Constant | DiceThrow


@dataclass(frozen=True)
class Expression:
    """Ordered sequence of terms parsed from one input string."""

    terms: tuple[Term, ...] = ()

    @property
    def constants(self) -> list[Constant]:
        return [t for t in self.terms if isinstance(t, Constant)]

    @property
    def dice(self) -> list[DiceThrow]:
        return [t for t in self.terms if isinstance(t, DiceThrow)]

    def __len__(self) -> int:
        return len(self.terms)
