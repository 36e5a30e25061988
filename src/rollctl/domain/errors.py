"""Expression errors raised by the domain layer.

Every error carries a stable ``code`` so the service layer can map it onto
a :class:`~rollctl.services.result.ServiceError` without string matching.
"""

from __future__ import annotations


class ExpressionError(ValueError):
    """Base class for dice expressions that cannot be rolled."""

    code = "INVALID_EXPRESSION"

    def __init__(self, message: str, *, column: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.column = column

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"code": self.code, "message": self.message}
        if self.column is not None:
            payload["column"] = self.column
        return payload


class InvalidCharacter(ExpressionError):
    """Input contains a character outside the accepted set."""

    code = "INVALID_CHARACTER"


class AmbiguousTermSeparation(ExpressionError):
    """Adjacent dice terms cannot be split, e.g. ``3d33d3`` or ``3dd3``."""

    code = "AMBIGUOUS_TERM_SEPARATION"


class MalformedExpression(ExpressionError):
    """Accepted characters that do not form ``term (sign term)*``."""

    code = "MALFORMED_EXPRESSION"


class TooManyDice(ExpressionError):
    """A dice term asks for more dice than the configured limit."""

    code = "TOO_MANY_DICE"


class ExpressionRejected(ExpressionError):
    """Several rejection reasons found for one input."""

    def __init__(self, reasons: list[ExpressionError]) -> None:
        super().__init__("; ".join(r.message for r in reasons))
        self.reasons = reasons
