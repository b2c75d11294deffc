#!/usr/bin/env python3
"""
Ranking Service - ranks teachers and courses for a child.

Teacher rankings are recomputed on every call from the current weight
snapshot. Persisted MatchRecords are then reconciled against the fresh
scores: a record that is stale, was computed under another weight version
or holds a different score is superseded and a new active record is
inserted. Records are never edited in place.

Course rankings use the age-match percentage only and persist nothing.
"""

import logging
from typing import Dict, List, Optional

from core.config_loader import MatchingConfig
from core.exceptions import NotFoundError
from core.parameters.models import WeightSet
from core.parameters.store import ParameterStore
from core.ranking.models import RankedTeacher, RankedCourse, MatchRecordView
from core.ranking.ranker import rank_candidates
from core.scorer.age_match import course_age_match
from core.scorer.match_score import compute_match_score
from core.scorer.models import ChildProfile, TargetProfile, MatchScore
from database.models import STATUS_ACTIVE, TARGET_TEACHER
from database.uow import care_uow

logger = logging.getLogger(__name__)


class RankingService:
    """
    Read path for parents and teachers.

    Designed to be stateless: each call opens its own unit of work, so a
    single instance can be shared across request threads.
    """

    def __init__(
        self,
        parameter_store: ParameterStore,
        config: Optional[MatchingConfig] = None,
        session_factory=None
    ):
        self.parameter_store = parameter_store
        self.config = config or MatchingConfig()
        self.session_factory = session_factory

    def ranked_teachers(self, child_id: str) -> List[RankedTeacher]:
        """
        Rank every teacher for a child and persist the resulting matches.

        Raises:
            NotFoundError: If the child does not exist
            InvalidWeightsError: If the stored weights do not sum to 100
        """
        weights = self.parameter_store.weights()
        weights.validate()

        with care_uow(self.session_factory) as repo:
            youth = repo.directory.get_youth(child_id)
            if youth is None:
                raise NotFoundError(f"Child {child_id} not found")

            child = ChildProfile.from_orm(youth)
            teachers = {t.teacher_id: t for t in repo.directory.list_teachers()}

            scores = [
                compute_match_score(
                    child,
                    TargetProfile.from_teacher(teacher),
                    weights,
                    rating_scale=self.config.rating_scale,
                    missing_rating=self.config.missing_rating,
                )
                for teacher in teachers.values()
            ]
            ranked = list(rank_candidates(scores, lambda s: s.score, lambda s: s.target_id))

            written = self._reconcile(repo, child_id, ranked, weights)
            if written:
                logger.info(f"Recorded {written} new teacher matches for child {child_id} (weights v{weights.version})")

            return [self._to_ranked_teacher(s, teachers[s.target_id]) for s in ranked]

    def ranked_courses(
        self,
        child_id: str,
        course_type: Optional[str] = None,
        neighborhood_id: Optional[str] = None,
        open_only: bool = False
    ) -> List[RankedCourse]:
        """Rank courses by age-match percentage for a child."""
        with care_uow(self.session_factory) as repo:
            youth = repo.directory.get_youth(child_id)
            if youth is None:
                raise NotFoundError(f"Child {child_id} not found")

            courses = repo.directory.list_courses(
                course_type=course_type,
                neighborhood_id=neighborhood_id,
                open_only=open_only,
            )

            results = [
                RankedCourse(
                    course_id=course.course_id,
                    match_percentage=course_age_match(youth.age, course.age_range, self.config.age_match),
                    name=course.name,
                    type=course.type,
                    age_range=course.age_range,
                    teacher_id=course.teacher_id,
                    neighborhood_id=course.neighborhood_id,
                    schedule=course.schedule,
                    capacity=course.capacity,
                    current_enrollment=course.current_enrollment,
                )
                for course in courses
            ]

        return list(rank_candidates(results, lambda c: c.match_percentage, lambda c: c.course_id))

    def match_history(self, child_id: str, include_history: bool = False) -> List[MatchRecordView]:
        """Current (active or stale) teacher matches, optionally with superseded ones."""
        with care_uow(self.session_factory) as repo:
            youth = repo.directory.get_youth(child_id)
            if youth is None:
                raise NotFoundError(f"Child {child_id} not found")

            records = repo.matches.get_history_for_youth(
                child_id,
                include_superseded=include_history,
            )
            return [MatchRecordView.from_orm(r, youth_name=youth.name) for r in records]

    def student_matches(self, teacher_id: str) -> List[MatchRecordView]:
        """Active matches pointing at a teacher, best score first."""
        with care_uow(self.session_factory) as repo:
            if repo.directory.get_teacher(teacher_id) is None:
                raise NotFoundError(f"Teacher {teacher_id} not found")

            views = []
            for record in repo.matches.get_active_for_target(teacher_id):
                youth = repo.directory.get_youth(record.youth_id)
                views.append(MatchRecordView.from_orm(record, youth_name=youth.name if youth else None))
            return views

    def refresh_stale(self, limit: Optional[int] = None) -> int:
        """
        Recompute children owning stale records, one batch.

        Children that no longer exist get their leftover records superseded
        so the sweep does not pick them up again.

        Returns:
            Number of children processed
        """
        limit = limit or self.config.refresh_batch_size

        with care_uow(self.session_factory) as repo:
            child_ids = repo.matches.get_youth_ids_with_stale_matches(limit)

        processed = 0
        for child_id in child_ids:
            try:
                self.ranked_teachers(child_id)
            except NotFoundError:
                logger.warning(f"Child {child_id} no longer exists, retiring its match records")
                self._retire_records(child_id)
            processed += 1

        if processed:
            logger.info(f"Refreshed stale matches for {processed} children")
        return processed

    def _reconcile(self, repo, child_id: str, ranked: List[MatchScore], weights: WeightSet) -> int:
        current = repo.matches.get_current_for_youth(child_id, TARGET_TEACHER)
        algorithm_version = self.config.algorithm_version

        written = 0
        for score in ranked:
            records = current.get(score.target_id, [])
            keep = None
            for record in records:
                if keep is None and self._is_current(record, score, weights.version, algorithm_version):
                    keep = record
                else:
                    repo.matches.supersede(record, reason=self._supersede_reason(record, score, weights.version))

            if keep is None:
                repo.matches.record_match(
                    youth_id=child_id,
                    target_id=score.target_id,
                    score=score.score,
                    weight_version=weights.version,
                    algorithm_version=algorithm_version,
                    basis=score.basis(),
                    target_type=TARGET_TEACHER,
                )
                written += 1

        scored_ids = {score.target_id for score in ranked}
        for target_id, records in current.items():
            if target_id not in scored_ids:
                for record in records:
                    repo.matches.supersede(record, reason="teacher removed")

        return written

    @staticmethod
    def _is_current(record, score: MatchScore, weight_version: int, algorithm_version: str) -> bool:
        return (
            record.status == STATUS_ACTIVE
            and record.weight_version == weight_version
            and record.algorithm_version == algorithm_version
            and record.match_score == score.score
        )

    @staticmethod
    def _supersede_reason(record, score: MatchScore, weight_version: int) -> str:
        if record.invalidated_reason:
            return record.invalidated_reason
        if record.weight_version != weight_version:
            return f"weight version {record.weight_version} -> {weight_version}"
        if record.match_score != score.score:
            return f"score {record.match_score} -> {score.score}"
        return "duplicate record"

    def _retire_records(self, child_id: str) -> None:
        with care_uow(self.session_factory) as repo:
            for records in repo.matches.get_current_for_youth(child_id, TARGET_TEACHER).values():
                for record in records:
                    repo.matches.supersede(record, reason="child removed")

    def _to_ranked_teacher(self, score: MatchScore, teacher) -> RankedTeacher:
        return RankedTeacher(
            teacher_id=score.target_id,
            score=score.score,
            name=teacher.name,
            specialty=teacher.specialty,
            teaching_style=teacher.teaching_style,
            avg_score=float(teacher.avg_score) if teacher.avg_score is not None else None,
            weight_version=score.weight_version,
            components=score.basis(),
        )
