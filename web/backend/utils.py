#!/usr/bin/env python3
"""
Conversion helpers for building API responses.
"""

from datetime import datetime
from typing import Optional


def safe_datetime_iso(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return dt.isoformat()
