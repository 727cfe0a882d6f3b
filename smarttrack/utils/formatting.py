"""
Display formatting helpers
"""

from urllib.parse import quote

SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def format_file_size(size: int) -> str:
    """
    Format a byte count for display.

    Example:
        format_file_size(2048576)  # "1.95 MB"
    """
    if size <= 0:
        return "0 Bytes"
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {SIZE_UNITS[unit]}"


def placeholder_url(file_name: str) -> str:
    """Placeholder preview URL used instead of real object storage"""
    return f"/placeholder.svg?height=400&width=600&text={quote(file_name)}"
