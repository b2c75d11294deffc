#!/usr/bin/env python3
"""
Parameter service - administrator edits to system parameters.

Weight edits go through update_weights only: the triple is validated,
written under one version and the matches computed under older weights
are marked stale.
"""

import logging
from typing import Any, List, Optional

from core.exceptions import InvalidWeightsError
from core.parameters import ParameterStore, ParameterValue, WeightSet, WEIGHT_PARAMETER_NAMES
from core.parameters.models import TYPE_WEIGHT
from core.recompute import RecomputeTrigger

logger = logging.getLogger(__name__)


class ParameterService:
    """Service for parameter administration."""

    def __init__(self, store: ParameterStore, trigger: RecomputeTrigger):
        self.store = store
        self.trigger = trigger

    def current_weights(self) -> WeightSet:
        return self.store.weights()

    def update_weights(
        self,
        teacher_rating: int,
        interest_match: int,
        learning_style: int
    ):
        """
        Replace the matching weights.

        Returns:
            Tuple of (stored WeightSet, number of matches marked stale)

        Raises:
            InvalidWeightsError: If the weights are negative or do not sum to 100.
        """
        proposed = WeightSet(teacher_rating, interest_match, learning_style).validate()

        stored = self.store.set_many(
            proposed.to_parameters(),
            param_types={name: TYPE_WEIGHT for name in WEIGHT_PARAMETER_NAMES}
        )
        version = max(p.version for p in stored)

        invalidated = self.trigger.on_weights_changed(version)
        logger.info(f"Matching weights set to {proposed.as_tuple()} (v{version}), {invalidated} matches stale")

        return WeightSet(teacher_rating, interest_match, learning_style, version=version), invalidated

    def update_parameter(
        self,
        name: str,
        value: Any,
        param_type: Optional[str] = None,
        scope: str = "system"
    ) -> ParameterValue:
        """
        Create or update a single non-weight parameter.

        Raises:
            InvalidWeightsError: For a matching weight, which must be set as a triple.
            ParameterValueError: If the value does not parse as its type.
        """
        if name in WEIGHT_PARAMETER_NAMES:
            raise InvalidWeightsError(
                f"'{name}' is a matching weight; update all three via /api/config/matching-weights"
            )
        return self.store.set(name, value, scope=scope, param_type=param_type)

    def reset_defaults(self) -> List[ParameterValue]:
        """Restore every default parameter. The weights get a new version, so current matches go stale."""
        restored = self.store.reset_defaults()
        version = max((p.version for p in restored), default=0)
        if version:
            self.trigger.on_weights_changed(version)
        return restored
