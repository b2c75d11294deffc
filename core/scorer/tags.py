"""
Tag handling for free-text interest / specialty fields.
"""

import re
from typing import FrozenSet, Optional

# ASCII comma, full-width comma, enumeration comma, semicolons
_TAG_SEPARATORS = re.compile(r"[,，、;；]")


def tokenize_tags(text: Optional[str]) -> FrozenSet[str]:
    """Split a comma-separated tag string into a set of lowercase tags.

    >>> sorted(tokenize_tags("Piano, drawing ,piano"))
    ['drawing', 'piano']
    """
    if not text:
        return frozenset()
    return frozenset(
        tag.strip().lower()
        for tag in _TAG_SEPARATORS.split(text)
        if tag.strip()
    )


def styles_match(child_style: Optional[str], teacher_style: Optional[str]) -> bool:
    """Binary learning-style match: equal after trimming and case-folding.

    Empty styles never match.
    """
    if not child_style or not teacher_style:
        return False
    left = child_style.strip().casefold()
    right = teacher_style.strip().casefold()
    return bool(left) and left == right
