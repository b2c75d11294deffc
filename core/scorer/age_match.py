"""
Course Age Match - percentage fit between a child's age and a course's
applicable age range.

Used by the course browsing path to order courses for display. This is
deliberately separate from the teacher match score.

Dirty data is tolerated: a missing age, a missing range or a range that is
not exactly two dash-separated integers yields the insufficient-data
default instead of an error.
"""

import logging
from typing import Optional, Tuple

from core.config_loader import AgeMatchConfig

logger = logging.getLogger(__name__)

FULL_MATCH = 100


def parse_age_range(age_range: Optional[str]) -> Optional[Tuple[int, int]]:
    """Parse "min-max" into a tuple, or None when absent or malformed.

    >>> parse_age_range("7-10")
    (7, 10)
    >>> parse_age_range("7 to 10") is None
    True
    """
    if age_range is None:
        return None

    parts = str(age_range).strip().split('-')
    if len(parts) != 2:
        return None

    try:
        low, high = int(parts[0].strip()), int(parts[1].strip())
    except ValueError:
        return None

    if low > high:
        return None

    return low, high


def age_distance(age: int, bounds: Tuple[int, int]) -> int:
    """Years outside the range, 0 when contained."""
    low, high = bounds
    if age < low:
        return low - age
    if age > high:
        return age - high
    return 0


def course_age_match(
    child_age: Optional[int],
    age_range: Optional[str],
    config: Optional[AgeMatchConfig] = None
) -> int:
    """
    Compute the age match percentage.

    - age inside [min, max] -> 100
    - outside by d <= grace_years -> 100 - penalty_per_year * d
    - further away -> 0
    - missing age or missing/malformed range -> insufficient_data_score

    Args:
        child_age: Child's age in years, or None
        age_range: Course age range string such as "7-10"
        config: AgeMatchConfig, defaults to grace 2 / penalty 15 / default 50

    Returns:
        Integer percentage in [0, 100]
    """
    config = config or AgeMatchConfig()

    if child_age is None:
        return config.insufficient_data_score

    bounds = parse_age_range(age_range)
    if bounds is None:
        if age_range:
            logger.debug(f"Malformed age range '{age_range}', using default score")
        return config.insufficient_data_score

    distance = age_distance(int(child_age), bounds)
    if distance == 0:
        return FULL_MATCH
    if distance <= config.grace_years:
        return max(0, FULL_MATCH - config.penalty_per_year * distance)
    return 0
