"""
Enrollment Admission Controller.

Public API:
- AdmissionController: enroll / drop / occupancy
- SeatStore, SeatTransaction: atomic-unit abstraction
- SqlSeatStore, InMemorySeatStore: backends
"""

from core.admission.controller import AdmissionController, Deadline
from core.admission.memory_store import InMemorySeatStore
from core.admission.models import ChildRef, CourseSeats, EnrollmentRecord, ENROLLED, DROPPED
from core.admission.sql_store import SqlSeatStore
from core.admission.store import SeatStore, SeatTransaction

__all__ = [
    'AdmissionController',
    'Deadline',
    'SeatStore',
    'SeatTransaction',
    'SqlSeatStore',
    'InMemorySeatStore',
    'ChildRef',
    'CourseSeats',
    'EnrollmentRecord',
    'ENROLLED',
    'DROPPED',
]
