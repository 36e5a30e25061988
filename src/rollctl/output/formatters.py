"""Text/JSON output dispatch.

Successful and failed results are rendered for humans through Rich, or
dumped verbatim as JSON when ``json_output`` is set.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from rollctl.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Rendering switches derived from RollSettings."""

    model_config = {"frozen": True}

    json_output: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        settings: Output switches; defaults to human-readable, non-verbose.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    from rollctl.output.renderers import render_result

    return render_result(result, verbose=settings.verbose)
