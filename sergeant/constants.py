"""
Exit codes and rendering constants shared across the package.
"""

# Process exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1  # Command reported an error (errorf, uncaught exception)
EXIT_USAGE = 2  # Malformed invocation
EXIT_INTERRUPTED = 130  # SIGINT / Ctrl+C

# Reserved pseudo-command that renders usage and per-command help
HELP_COMMAND = "help"

# Width of the name column in the top-level command listing
NAME_COLUMN_WIDTH = 11
