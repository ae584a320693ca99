from __future__ import annotations

import logging
from importlib.metadata import version

__version__ = version("changecov")

logger = logging.getLogger("changecov")

__all__ = ["__version__", "logger"]
