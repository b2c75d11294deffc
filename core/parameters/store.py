"""
Parameter Store - Named, typed, versioned configuration values.

Values are persisted as strings and parsed by callers according to their
declared type. Writers are last-write-wins: weight edits are rare
administrative actions, so no optimistic locking is attempted.

The store does not enforce that the matching weights sum to 100. Callers
validate a WeightSet before persisting it, and the scorer validates again
before using it.
"""

import logging
from typing import Any, Dict, List, Optional

from core.config_loader import MatchingWeights
from core.exceptions import ParameterNotFoundError, ParameterValueError, InvalidWeightsError
from core.parameters.defaults import DEFAULT_PARAMETERS
from core.parameters.models import (
    ParameterValue,
    WeightSet,
    WEIGHT_PARAMETER_NAMES,
    TEACHER_RATING_WEIGHT,
    INTEREST_MATCH_WEIGHT,
    LEARNING_STYLE_WEIGHT,
    TYPE_WEIGHT,
    infer_type,
    parse_value,
)
from database.uow import care_uow

logger = logging.getLogger(__name__)


def _to_value(parameter) -> ParameterValue:
    return ParameterValue(
        name=parameter.name,
        type=parameter.type,
        value=parameter.value,
        scope=parameter.scope,
        version=parameter.version,
        effective_time=parameter.effective_time,
    )


class ParameterStore:
    """Read/write access to system parameters, one unit of work per call."""

    def __init__(
        self,
        session_factory=None,
        default_weights: Optional[MatchingWeights] = None
    ):
        self.session_factory = session_factory
        self.default_weights = default_weights or MatchingWeights()

    def get(self, name: str) -> ParameterValue:
        """
        Get a parameter by name.

        Raises:
            ParameterNotFoundError: If no parameter has this name.
        """
        with care_uow(self.session_factory) as repo:
            parameter = repo.parameters.get_by_name(name)
            if parameter is None:
                raise ParameterNotFoundError(f"Parameter '{name}' not found")
            return _to_value(parameter)

    def get_typed(self, name: str) -> Any:
        """Get a parameter parsed according to its declared type."""
        return self.get(name).parsed()

    def list_all(self, scope: Optional[str] = None) -> List[ParameterValue]:
        with care_uow(self.session_factory) as repo:
            return [_to_value(p) for p in repo.parameters.list_all(scope)]

    def set(
        self,
        name: str,
        value: Any,
        scope: str = 'system',
        param_type: Optional[str] = None
    ) -> ParameterValue:
        """
        Create or update a parameter, stamping a new version and effective time.

        The value is validated against its type before it is stored so a
        later reader never trips over an unparsable string.
        """
        return self.set_many({name: value}, scope=scope, param_types={name: param_type} if param_type else None)[0]

    def set_many(
        self,
        values: Dict[str, Any],
        scope: str = 'system',
        param_types: Optional[Dict[str, str]] = None
    ) -> List[ParameterValue]:
        """Write several parameters in one transaction under a single new version."""
        param_types = param_types or {}

        with care_uow(self.session_factory) as repo:
            version = repo.parameters.next_version()
            stored = []
            for name, value in values.items():
                existing = repo.parameters.get_by_name(name)
                param_type = param_types.get(name) or (existing.type if existing else infer_type(name))
                raw = str(value)
                parse_value(param_type, raw)
                parameter = repo.parameters.upsert(name, raw, param_type, scope=scope, version=version)
                stored.append(_to_value(parameter))

        logger.info(f"Stored parameters {sorted(values)} at version {version}")
        return stored

    def weights(self) -> WeightSet:
        """
        Snapshot of the three matching weights.

        Missing weight rows fall back to the configured defaults. Weight rows
        are always read as integers whatever type they were stored with. The
        sum is not validated here; the scorer does that before use.

        Raises:
            InvalidWeightsError: If a stored weight is not a non-negative integer
        """
        with care_uow(self.session_factory) as repo:
            rows = {
                p.name: _to_value(p)
                for p in repo.parameters.get_by_names(list(WEIGHT_PARAMETER_NAMES))
            }

        defaults = {
            TEACHER_RATING_WEIGHT: self.default_weights.teacher_rating,
            INTEREST_MATCH_WEIGHT: self.default_weights.interest_match,
            LEARNING_STYLE_WEIGHT: self.default_weights.learning_style,
        }
        if len(rows) < len(WEIGHT_PARAMETER_NAMES):
            missing = [n for n in WEIGHT_PARAMETER_NAMES if n not in rows]
            logger.info(f"Weight parameters {missing} not set, using configured defaults")

        resolved = {}
        for name in WEIGHT_PARAMETER_NAMES:
            row = rows.get(name)
            if row is None:
                resolved[name] = defaults[name]
                continue
            try:
                resolved[name] = parse_value(TYPE_WEIGHT, row.value)
            except ParameterValueError as e:
                raise InvalidWeightsError(f"Stored weight {name} is invalid: {e}") from e

        version = max((row.version for row in rows.values()), default=0)

        return WeightSet(
            teacher_rating=resolved[TEACHER_RATING_WEIGHT],
            interest_match=resolved[INTEREST_MATCH_WEIGHT],
            learning_style=resolved[LEARNING_STYLE_WEIGHT],
            version=version,
        )

    def seed_defaults(self) -> int:
        """Insert default parameters that do not exist yet. Returns the number inserted."""
        with care_uow(self.session_factory) as repo:
            existing = {p.name for p in repo.parameters.list_all()}
            missing = {name: spec for name, spec in DEFAULT_PARAMETERS.items() if name not in existing}
            if not missing:
                return 0
            version = repo.parameters.next_version()
            for name, (param_type, value) in missing.items():
                repo.parameters.upsert(name, value, param_type, version=version)

        logger.info(f"Seeded {len(missing)} default parameters")
        return len(missing)

    def reset_defaults(self) -> List[ParameterValue]:
        """Overwrite every default parameter with its default value."""
        values = {name: value for name, (_, value) in DEFAULT_PARAMETERS.items()}
        types = {name: param_type for name, (param_type, _) in DEFAULT_PARAMETERS.items()}
        return self.set_many(values, param_types=types)
