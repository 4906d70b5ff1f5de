# File: utils/__init__.py
"""Pure Python utilities for the ritual schedule engine.

Submodules:
    - dt_utils: Weekday codec, month arithmetic, iCalendar date parsing

Usage:
    from . import dt_utils
    from .dt_utils import parse_ical_date
"""

from . import dt_utils

__all__ = ["dt_utils"]
