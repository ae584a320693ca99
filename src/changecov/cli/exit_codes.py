# mirror <sysexits.h>
EXIT_OK = 0  # Normal success
EXIT_GENERIC = 1  # Generic failure (fallback)
EXIT_THRESHOLD = 2  # One or more coverage thresholds not met
EXIT_DATAERR = 65  # Coverage report is malformed
EXIT_NOINPUT = 66  # Coverage report not found
EXIT_UNAVAILABLE = 69  # Coverage tool missing or failed to run
EXIT_SOFTWARE = 70  # Could not list changed files (git failure)
EXIT_CANTCREAT = 73  # Markdown summary could not be written
EXIT_CONFIG = 78  # Invalid configuration (e.g., bad pyproject.toml)
