import uuid

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, JSON, Index, func

from .base import Base

TARGET_TEACHER = 'teacher'
TARGET_COURSE = 'course'

STATUS_ACTIVE = 'active'
STATUS_STALE = 'stale'
STATUS_SUPERSEDED = 'superseded'


class MatchRecord(Base):
    """
    Stores a computed compatibility score between a youth and a teacher
    (or course).

    Tracks:
    - The score and its component breakdown (match_basis)
    - The weight version that produced it, for staleness detection
    - Lifecycle: active -> stale -> superseded

    Score fields are written once. A recompute supersedes the old row and
    inserts a new one so history stays auditable.
    """
    __tablename__ = 'match_record'

    match_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    youth_id = Column(String(20), nullable=False)
    target_type = Column(String(20), nullable=False, default=TARGET_TEACHER)
    target_id = Column(String(20), nullable=False)

    match_score = Column(Integer, nullable=False)
    weight_version = Column(Integer, nullable=False, default=0)
    algorithm_version = Column(String(20), nullable=False, default='1.0')
    match_basis = Column(JSON, default=dict)

    status = Column(String(20), nullable=False, default=STATUS_ACTIVE)
    invalidated_reason = Column(Text, nullable=True)

    match_time = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    superseded_at = Column(TIMESTAMP(timezone=True), nullable=True)

    __table_args__ = (
        Index('idx_match_record_youth_status', 'youth_id', 'status'),
        Index('idx_match_record_target', 'target_type', 'target_id'),
        Index('idx_match_record_weight_version', 'weight_version'),
    )
