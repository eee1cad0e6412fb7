"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich tables and panels) or
machines (``--json``). The formatter layer picks the mode; the
per-operation layouts live in :mod:`gavel.output.renderers`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from gavel.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from gavel.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output mode flags resolved from the global CLI options."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    ``--json`` wins over ``--quiet``; ``--verbose`` only affects the Rich
    renderers (error detail and telemetry).
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
