"""Default system parameters seeded on first start."""

from typing import Dict, Tuple

from core.parameters.models import TYPE_WEIGHT, TYPE_PRICE, TYPE_LIMIT

# name -> (type, value)
DEFAULT_PARAMETERS: Dict[str, Tuple[str, str]] = {
    'teacher-rating-weight': (TYPE_WEIGHT, '60'),
    'interest-match-weight': (TYPE_WEIGHT, '30'),
    'learning-style-weight': (TYPE_WEIGHT, '10'),
    'academic-course-price': (TYPE_PRICE, '80'),
    'interest-course-price': (TYPE_PRICE, '60'),
    'sports-course-price': (TYPE_PRICE, '70'),
    'art-course-price': (TYPE_PRICE, '90'),
    'tech-course-price': (TYPE_PRICE, '100'),
    'refund-time-limit': (TYPE_LIMIT, '24'),
    'refund-review-time-limit': (TYPE_LIMIT, '24'),
    'refund-fee-price': (TYPE_PRICE, '0'),
    'teacher-weekly-limit': (TYPE_LIMIT, '15'),
    'course-capacity-limit': (TYPE_LIMIT, '20'),
}
