"""
SmartTrack - Faculty task tracking backend

Usage:
    from smarttrack.store import LocalStore
    from smarttrack.core.config import settings
"""

__version__ = "1.0.0"
