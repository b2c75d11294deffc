"""
Recompute Trigger - invalidates persisted matches when their inputs change.

Nothing is recomputed here. Records are only marked stale; the Ranking
Service replaces them the next time the child's ranking is read (or the
maintenance sweep runs).
"""

import logging
from typing import Optional

from core.config_loader import MatchingConfig
from core.scorer.match_score import normalize_rating
from database.models import TARGET_TEACHER
from database.uow import care_uow

logger = logging.getLogger(__name__)


class RecomputeTrigger:
    def __init__(self, config: Optional[MatchingConfig] = None, session_factory=None):
        self.config = config or MatchingConfig()
        self.session_factory = session_factory

    def on_weights_changed(self, weight_version: int) -> int:
        """Mark active records computed under an older weight version stale."""
        with care_uow(self.session_factory) as repo:
            count = repo.matches.mark_stale_before_version(
                weight_version,
                reason=f"weights changed to version {weight_version}",
            )
        return count

    def on_teacher_rating_changed(self, teacher_id: str, previous, current) -> int:
        """
        Mark a teacher's active records stale if the rating moved materially.

        Ratings are compared after normalization to 0-100, against
        rating_change_threshold. Smaller moves are ignored.

        Returns:
            Number of records marked stale (0 when the change is immaterial)
        """
        before = normalize_rating(previous, self.config.rating_scale, self.config.missing_rating)
        after = normalize_rating(current, self.config.rating_scale, self.config.missing_rating)
        delta = abs(after - before)

        if float(delta) < self.config.rating_change_threshold:
            logger.debug(f"Rating change for teacher {teacher_id} ({previous} -> {current}) below threshold")
            return 0

        with care_uow(self.session_factory) as repo:
            return repo.matches.mark_stale_for_target(
                teacher_id,
                reason=f"teacher rating changed {previous} -> {current}",
                target_type=TARGET_TEACHER,
            )

    def on_child_profile_changed(self, child_id: str) -> int:
        with care_uow(self.session_factory) as repo:
            return repo.matches.mark_stale_for_youth(child_id, reason="child profile changed")

    def on_teacher_profile_changed(self, teacher_id: str) -> int:
        with care_uow(self.session_factory) as repo:
            return repo.matches.mark_stale_for_target(
                teacher_id,
                reason="teacher profile changed",
                target_type=TARGET_TEACHER,
            )
