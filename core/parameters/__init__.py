"""
Parameter Store - typed, versioned system parameters.

Public API:
- ParameterStore: get/set/list parameters, weight snapshots
- ParameterValue: detached parameter snapshot
- WeightSet: validated matching weight triple
"""

from core.parameters.models import (
    ParameterValue,
    WeightSet,
    WEIGHT_PARAMETER_NAMES,
    infer_type,
    parse_value,
)
from core.parameters.store import ParameterStore

__all__ = [
    'ParameterStore',
    'ParameterValue',
    'WeightSet',
    'WEIGHT_PARAMETER_NAMES',
    'infer_type',
    'parse_value',
]
