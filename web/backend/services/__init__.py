"""Business logic services."""

from .parameter_service import ParameterService
