"""API route handlers."""

from .enrollments import router as enrollments_router
from .matching import router as matching_router
from .parameters import router as parameters_router
