from changecov.core.aggregate import aggregate, as_percent, displayable, target_coverage, truncate_percent
from changecov.core.change_set import filter_report, normalize_change_set
from changecov.core.config import LOG_FORMAT, GateConfig, load_pyproject_options
from changecov.core.model import CoverageFile, CoverageReport, Target
from changecov.core.thresholds import ThresholdPolicy, ThresholdsResult, evaluate
from changecov.core.types import CoveragePercent, DisplayMode

__all__ = [
    "LOG_FORMAT",
    "CoverageFile",
    "CoveragePercent",
    "CoverageReport",
    "DisplayMode",
    "GateConfig",
    "Target",
    "ThresholdPolicy",
    "ThresholdsResult",
    "aggregate",
    "as_percent",
    "displayable",
    "evaluate",
    "filter_report",
    "load_pyproject_options",
    "normalize_change_set",
    "target_coverage",
    "truncate_percent",
]
