"""
Domain errors for admission control, matching and parameters.

Every error carries a stable ``code`` so callers can tell "course full"
apart from "already enrolled" without parsing messages.
"""


class CareError(Exception):
    """Base class for all domain errors."""
    code = "error"


class NotFoundError(CareError):
    """Referenced child, course, teacher or parameter does not exist."""
    code = "not_found"


class ParameterNotFoundError(NotFoundError):
    """Raised when a parameter name is not in the store."""
    pass


class CapacityExceededError(CareError):
    """Course has no free seat."""
    code = "capacity_exceeded"


class AlreadyEnrolledError(CareError):
    """Child already holds an active enrollment for the course."""
    code = "already_enrolled"


class NotEnrolledError(CareError):
    """No active enrollment exists to drop."""
    code = "not_enrolled"


class InvalidWeightsError(CareError):
    """Matching weights do not form a valid set (must sum to 100)."""
    code = "invalid_weights"


class ParameterValueError(CareError):
    """Parameter value cannot be parsed according to its declared type."""
    code = "invalid_parameter"


class BusyError(CareError):
    """Transient contention persisted after bounded retries."""
    code = "busy"


class AdmissionTimeoutError(CareError):
    """Caller-supplied deadline expired before the atomic unit committed."""
    code = "timeout"


class TransientStoreError(Exception):
    """
    Internal signal for retryable store contention (lock timeout,
    serialization failure). Never surfaced to callers; the admission
    controller converts it to BusyError once retries are exhausted.
    """
    pass
