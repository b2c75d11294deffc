"""
Parameter Models - Typed views over string-encoded system parameters.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Tuple

from core.exceptions import InvalidWeightsError, ParameterValueError

TYPE_WEIGHT = 'weight'
TYPE_PRICE = 'price'
TYPE_LIMIT = 'limit'
TYPE_CONFIG = 'config'

PARAMETER_TYPES = (TYPE_WEIGHT, TYPE_PRICE, TYPE_LIMIT, TYPE_CONFIG)

TEACHER_RATING_WEIGHT = 'teacher-rating-weight'
INTEREST_MATCH_WEIGHT = 'interest-match-weight'
LEARNING_STYLE_WEIGHT = 'learning-style-weight'

WEIGHT_PARAMETER_NAMES = (
    TEACHER_RATING_WEIGHT,
    INTEREST_MATCH_WEIGHT,
    LEARNING_STYLE_WEIGHT,
)

WEIGHT_TOTAL = 100


def infer_type(name: str) -> str:
    """Infer the declared type from a parameter name suffix."""
    if name.endswith('-weight'):
        return TYPE_WEIGHT
    if name.endswith('-price'):
        return TYPE_PRICE
    if name.endswith('-limit'):
        return TYPE_LIMIT
    return TYPE_CONFIG


def parse_value(param_type: str, raw: str) -> Any:
    """
    Parse a stored string according to its declared type.

    Raises:
        ParameterValueError: If the string does not fit the type.
    """
    if param_type not in PARAMETER_TYPES:
        raise ParameterValueError(f"Unknown parameter type '{param_type}'")

    text = (raw or '').strip()

    if param_type == TYPE_CONFIG:
        return raw

    if param_type == TYPE_PRICE:
        try:
            price = Decimal(text)
        except InvalidOperation:
            raise ParameterValueError(f"Invalid price value '{raw}'")
        if not price.is_finite() or price < 0:
            raise ParameterValueError(f"Price must be a non-negative number, got '{raw}'")
        return price

    # weight and limit are integers; "60.0" from the admin UI is accepted
    try:
        number = Decimal(text)
    except InvalidOperation:
        raise ParameterValueError(f"Invalid {param_type} value '{raw}'")
    if not number.is_finite() or number != number.to_integral_value():
        raise ParameterValueError(f"{param_type} must be an integer, got '{raw}'")
    value = int(number)
    if value < 0:
        raise ParameterValueError(f"{param_type} must not be negative, got '{raw}'")
    return value


@dataclass(frozen=True)
class ParameterValue:
    """Detached snapshot of a stored parameter."""
    name: str
    type: str
    value: str
    scope: str
    version: int
    effective_time: Optional[datetime] = None

    def parsed(self) -> Any:
        return parse_value(self.type, self.value)


@dataclass(frozen=True)
class WeightSet:
    """
    Matching weight triple plus the version that produced it.

    The version is the newest version among the three weight parameters,
    0 when the configured defaults are in use.
    """
    teacher_rating: int
    interest_match: int
    learning_style: int
    version: int = 0

    @property
    def total(self) -> int:
        return self.teacher_rating + self.interest_match + self.learning_style

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.teacher_rating, self.interest_match, self.learning_style)

    def validate(self) -> 'WeightSet':
        """
        Raises:
            InvalidWeightsError: If any weight is negative or the sum is not 100.
        """
        if any(w < 0 for w in self.as_tuple()):
            raise InvalidWeightsError(f"Weights must not be negative, got {self.as_tuple()}")
        if self.total != WEIGHT_TOTAL:
            raise InvalidWeightsError(
                f"Matching weights must sum to {WEIGHT_TOTAL}, got {self.total} {self.as_tuple()}"
            )
        return self

    def to_parameters(self) -> dict:
        return {
            TEACHER_RATING_WEIGHT: str(self.teacher_rating),
            INTEREST_MATCH_WEIGHT: str(self.interest_match),
            LEARNING_STYLE_WEIGHT: str(self.learning_style),
        }
