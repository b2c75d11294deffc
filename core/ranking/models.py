"""Ranking results, detached from the ORM session."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class RankedTeacher:
    teacher_id: str
    score: int
    name: Optional[str] = None
    specialty: Optional[str] = None
    teaching_style: Optional[str] = None
    avg_score: Optional[float] = None
    weight_version: int = 0
    components: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RankedCourse:
    course_id: str
    match_percentage: int
    name: Optional[str] = None
    type: Optional[str] = None
    age_range: Optional[str] = None
    teacher_id: Optional[str] = None
    neighborhood_id: Optional[str] = None
    schedule: Optional[str] = None
    capacity: int = 0
    current_enrollment: int = 0

    @property
    def seats_left(self) -> int:
        return max(0, self.capacity - self.current_enrollment)


@dataclass
class MatchRecordView:
    match_id: str
    youth_id: str
    target_type: str
    target_id: str
    score: int
    weight_version: int
    algorithm_version: str
    status: str
    basis: Dict[str, Any] = field(default_factory=dict)
    invalidated_reason: Optional[str] = None
    match_time: Optional[datetime] = None
    superseded_at: Optional[datetime] = None
    youth_name: Optional[str] = None

    @classmethod
    def from_orm(cls, record, youth_name: Optional[str] = None) -> 'MatchRecordView':
        return cls(
            match_id=record.match_id,
            youth_id=record.youth_id,
            target_type=record.target_type,
            target_id=record.target_id,
            score=record.match_score,
            weight_version=record.weight_version,
            algorithm_version=record.algorithm_version,
            status=record.status,
            basis=dict(record.match_basis or {}),
            invalidated_reason=record.invalidated_reason,
            match_time=record.match_time,
            superseded_at=record.superseded_at,
            youth_name=youth_name,
        )
