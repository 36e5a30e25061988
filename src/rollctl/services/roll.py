"""RollService: validate, tokenize, and evaluate one dice expression.

Pipeline: raw text -> validation -> tokenizer -> evaluator. Every stage
is pure; this service owns the random source and turns domain errors into
a failed :class:`ServiceResult`. No die is rolled for rejected input.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Any

from rollctl.domain.errors import ExpressionError, ExpressionRejected
from rollctl.domain.evaluator import Evaluation, evaluate_expression
from rollctl.domain.tokenizer import parse
from rollctl.domain.validation import validate
from rollctl.services.result import ServiceError, ServiceResult
from rollctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from rollctl.config.settings import RollSettings
    from rollctl.domain.evaluator import RandomSource
    from rollctl.domain.terms import Expression

logger = logging.getLogger(__name__)

OP_ROLL = "roll"


class RollService:
    """Roll dice expressions with a generator seeded once per service.

    Args:
        settings: Loaded settings; ``settings.roll`` supplies the seed and
            the per-term dice limit.
        source: Random source override. Defaults to ``random.Random``
            seeded from ``settings.roll.seed`` (OS entropy when unset).
    """

    def __init__(self, settings: RollSettings, source: RandomSource | None = None) -> None:
        self._settings = settings
        self._source: RandomSource = (
            source if source is not None else random.Random(settings.roll.seed)
        )

    @traced
    def roll(self, text: str) -> ServiceResult:
        """Evaluate *text* and return the restated terms, throws, and totals."""
        try:
            with trace_span("validate"):
                validate(text)
            with trace_span("tokenize") as span:
                expression = parse(text)
                if span:
                    span.annotate("terms", len(expression))
            with trace_span("evaluate"):
                evaluation = evaluate_expression(
                    expression,
                    self._source,
                    max_dice=self._settings.roll.max_dice,
                )
        except ExpressionRejected as exc:
            return self._rejected(text, exc.reasons)
        except ExpressionError as exc:
            return self._rejected(text, [exc])

        logger.debug("Rolled %r -> %d", text, evaluation.grand_total)
        return ServiceResult(ok=True, op=OP_ROLL, data=_payload(text, expression, evaluation))

    def _rejected(self, text: str, reasons: list[ExpressionError]) -> ServiceResult:
        logger.info("Rejected %r: %s", text, [r.code for r in reasons])
        return ServiceResult(
            ok=False,
            op=OP_ROLL,
            error=ServiceError(
                code=ExpressionError.code,
                message=f"Unacceptable argument {text!r}",
                detail={
                    "expression": text,
                    "reasons": [r.to_dict() for r in reasons],
                },
            ),
        )


def _payload(text: str, expression: Expression, evaluation: Evaluation) -> dict[str, Any]:
    return {
        "expression": text,
        "constants": [c.notation for c in expression.constants],
        "dice": [d.notation for d in expression.dice],
        "throws": [t.to_dict() for t in evaluation.throws],
        "const": evaluation.constant_total,
        "sum": evaluation.grand_total,
    }
