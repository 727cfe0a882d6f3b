"""
Utilities Package - Helper functions

This package contains:
- timestamps.py: UTC clock and strictly increasing update stamps
- formatting.py: File size labels and placeholder URLs
- search.py: In-memory list filters for the API
"""

from smarttrack.utils.timestamps import utcnow, next_timestamp
from smarttrack.utils.formatting import format_file_size, placeholder_url

__all__ = [
    "utcnow",
    "next_timestamp",
    "format_file_size",
    "placeholder_url",
]
