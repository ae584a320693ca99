from changecov.adapters.base import ChangeSource, CoverageTool, ReviewChannel, change_set_paths
from changecov.adapters.channel import ConsoleChannel
from changecov.adapters.git import GitChangeSet, StaticChangeSet
from changecov.adapters.tool import CommandCoverageTool, ReportFileTool, option_flags

__all__ = [
    "ChangeSource",
    "CommandCoverageTool",
    "ConsoleChannel",
    "CoverageTool",
    "GitChangeSet",
    "ReportFileTool",
    "ReviewChannel",
    "StaticChangeSet",
    "change_set_paths",
    "option_flags",
]
