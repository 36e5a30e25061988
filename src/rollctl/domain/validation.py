"""Character-level validation of raw dice expressions.

Runs before tokenizing. Catches the two input mistakes the tokenizer
cannot report precisely: stray characters and dice terms glued together
(``3d33d3``, ``3dd3``) whose boundaries cannot be recovered.
"""

from __future__ import annotations

import re

from rollctl.domain.errors import (
    AmbiguousTermSeparation,
    ExpressionError,
    ExpressionRejected,
    InvalidCharacter,
)

ACCEPTED_CHARACTERS = frozenset("0123456789 d+-")

_AMBIGUOUS = re.compile(r"d[0-9]+d|dd")


def _check_separation(text: str) -> AmbiguousTermSeparation | None:
    match = _AMBIGUOUS.search(text)
    if match is None:
        return None
    return AmbiguousTermSeparation(
        f"Lacking separation between dice throws near {match.group()!r}.",
        column=match.start(),
    )


def _check_characters(text: str) -> InvalidCharacter | None:
    bad = [(i, ch) for i, ch in enumerate(text) if ch not in ACCEPTED_CHARACTERS]
    if not bad:
        return None
    shown = ", ".join(repr(ch) for ch in dict.fromkeys(ch for _, ch in bad))
    return InvalidCharacter(
        f"Non-accepted characters in input: {shown}.",
        column=bad[0][0],
    )


def diagnose(text: str) -> list[ExpressionError]:
    """Return every reason *text* is rejected; an empty list means accepted.

    Examples:
        >>> [e.code for e in diagnose("3d33d3")]
        ['AMBIGUOUS_TERM_SEPARATION']
        >>> [e.code for e in diagnose("3dd3x")]
        ['AMBIGUOUS_TERM_SEPARATION', 'INVALID_CHARACTER']
        >>> diagnose("3d3 + 3d3")
        []
    """
    reasons: list[ExpressionError] = []
    for check in (_check_separation, _check_characters):
        reason = check(text)
        if reason is not None:
            reasons.append(reason)
    return reasons


def accepts(text: str) -> bool:
    """Check whether *text* passes character and separation validation."""
    return not diagnose(text)


def validate(text: str) -> None:
    """Raise :class:`ExpressionRejected` listing all reasons *text* fails."""
    reasons = diagnose(text)
    if reasons:
        raise ExpressionRejected(reasons)
