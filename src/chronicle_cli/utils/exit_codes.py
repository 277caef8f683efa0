"""
Exit codes for Chronicle CLI.

Scripts that drive ``chronicle`` can branch on these instead of parsing
error text.
"""

SUCCESS = 0
ERROR_GENERAL = 1
# Bad option value, bad date, rejected focus durations or config values
ERROR_INVALID_ARGS = 2
# Snapshot or config file could not be read or written
ERROR_STORAGE = 3

_EXIT_CODES: dict[int, tuple[str, str]] = {
    SUCCESS: ("SUCCESS", "Command executed successfully"),
    ERROR_GENERAL: ("ERROR_GENERAL", "A general error occurred"),
    ERROR_INVALID_ARGS: ("ERROR_INVALID_ARGS", "Invalid arguments or validation error"),
    ERROR_STORAGE: ("ERROR_STORAGE", "Could not read or write local data"),
}


def get_exit_code_name(code: int) -> str:
    """Symbolic name of ``code``, e.g. ``ERROR_STORAGE``."""
    entry = _EXIT_CODES.get(code)
    return entry[0] if entry else f"UNKNOWN({code})"


def get_exit_code_description(code: int) -> str:
    entry = _EXIT_CODES.get(code)
    return entry[1] if entry else "Unknown error"
