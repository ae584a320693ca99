"""Gate orchestration: produce, parse, filter, render, evaluate, report.

This is the only place that talks to collaborators; everything it calls
in :mod:`changecov.core` and :mod:`changecov.output` is pure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from changecov._meta import logger
from changecov.core.aggregate import displayable
from changecov.core.change_set import filter_report
from changecov.core.thresholds import evaluate
from changecov.errors import ToolUnavailableError
from changecov.inputs import load_report
from changecov.output.markdown import render

if TYPE_CHECKING:
    from pathlib import Path

    from changecov.adapters.base import ChangeSource, CoverageTool, ReviewChannel
    from changecov.core.config import GateConfig
    from changecov.core.model import CoverageReport
    from changecov.errors import ThresholdViolation


@dataclass(frozen=True, slots=True)
class GateResult:
    """What a gate run produced."""

    report: CoverageReport
    markdown: str
    failures: tuple[ThresholdViolation, ...]

    @property
    def passed(self) -> bool:
        return not self.failures


def produce_report(tool: CoverageTool, config: GateConfig) -> CoverageReport:
    """Run the coverage tool and parse what it wrote."""
    if not tool.is_available():
        msg = "coverage tool is not available on this machine"
        raise ToolUnavailableError(msg)
    path = tool.produce(config.tool_options)
    return load_report(path)


def describe(report: CoverageReport) -> None:
    """Log a one-line summary per target."""
    for target in report.targets:
        logger.info(
            "%s: %s across %d changed file(s)",
            target.name,
            displayable(target.coverage),
            len(target.files),
        )


def run_gate(
    config: GateConfig,
    *,
    tool: CoverageTool,
    changes: ChangeSource,
    channel: ReviewChannel,
    base: Path | None = None,
) -> GateResult:
    """Run the whole gate once.

    ``ToolUnavailableError`` and ``MalformedReportError`` abort the run.
    Threshold failures are all sent to ``channel.fail`` and returned.
    """
    report = produce_report(tool, config)
    changed = changes.paths(base)
    logger.debug("change set holds %d path(s)", len(changed))

    filtered = filter_report(report, changed)
    describe(filtered)

    text = render(filtered, config.display_mode, title=config.average_coverage_target_title)
    channel.markdown(text)

    result = evaluate(filtered, config.policy)
    for failure in result.failures:
        channel.fail(failure.message)

    return GateResult(report=filtered, markdown=text, failures=tuple(result.failures))


__all__ = ["GateResult", "describe", "produce_report", "run_gate"]
