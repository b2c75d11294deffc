import logging
from datetime import datetime, timezone
from typing import List, Optional, Dict, Any

from sqlalchemy import select, update

from database.models import (
    MatchRecord,
    TARGET_TEACHER,
    STATUS_ACTIVE,
    STATUS_STALE,
    STATUS_SUPERSEDED,
)
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

CURRENT_STATUSES = (STATUS_ACTIVE, STATUS_STALE)


class MatchRepository(BaseRepository):
    def get_current_for_youth(
        self,
        youth_id: str,
        target_type: str = TARGET_TEACHER
    ) -> Dict[str, List[MatchRecord]]:
        """Return the non-superseded records per target for a youth, oldest first.

        Normally one per target. Two rankings racing can leave more, the
        caller supersedes the extras.
        """
        stmt = select(MatchRecord).where(
            MatchRecord.youth_id == youth_id,
            MatchRecord.target_type == target_type,
            MatchRecord.status.in_(CURRENT_STATUSES)
        ).order_by(MatchRecord.match_time)
        records = self.db.execute(stmt).scalars().all()

        grouped: Dict[str, List[MatchRecord]] = {}
        for record in records:
            grouped.setdefault(record.target_id, []).append(record)
        return grouped

    def get_history_for_youth(
        self,
        youth_id: str,
        target_type: str = TARGET_TEACHER,
        include_superseded: bool = False
    ) -> List[MatchRecord]:
        stmt = select(MatchRecord).where(
            MatchRecord.youth_id == youth_id,
            MatchRecord.target_type == target_type
        )

        if not include_superseded:
            stmt = stmt.where(MatchRecord.status.in_(CURRENT_STATUSES))

        stmt = stmt.order_by(MatchRecord.target_id, MatchRecord.match_time)
        return self.db.execute(stmt).scalars().all()

    def get_active_for_target(
        self,
        target_id: str,
        target_type: str = TARGET_TEACHER
    ) -> List[MatchRecord]:
        stmt = select(MatchRecord).where(
            MatchRecord.target_type == target_type,
            MatchRecord.target_id == target_id,
            MatchRecord.status == STATUS_ACTIVE
        ).order_by(MatchRecord.match_score.desc(), MatchRecord.youth_id)
        return self.db.execute(stmt).scalars().all()

    def record_match(
        self,
        youth_id: str,
        target_id: str,
        score: int,
        weight_version: int,
        algorithm_version: str,
        basis: Dict[str, Any],
        target_type: str = TARGET_TEACHER
    ) -> MatchRecord:
        record = MatchRecord(
            youth_id=youth_id,
            target_type=target_type,
            target_id=target_id,
            match_score=score,
            weight_version=weight_version,
            algorithm_version=algorithm_version,
            match_basis=basis,
            status=STATUS_ACTIVE,
            match_time=datetime.now(timezone.utc)
        )
        return self.add(record)

    def supersede(self, record: MatchRecord, reason: Optional[str] = None) -> None:
        record.status = STATUS_SUPERSEDED
        record.superseded_at = datetime.now(timezone.utc)
        if reason and not record.invalidated_reason:
            record.invalidated_reason = reason

    def mark_stale_before_version(self, weight_version: int, reason: str) -> int:
        """Mark every active record computed with an older weight version as stale."""
        stmt = (
            update(MatchRecord)
            .where(
                MatchRecord.status == STATUS_ACTIVE,
                MatchRecord.weight_version < weight_version
            )
            .values(status=STATUS_STALE, invalidated_reason=reason)
            .execution_options(synchronize_session=False)
        )
        count = self.db.execute(stmt).rowcount

        if count > 0:
            logger.info(f"Marked {count} matches stale below weight version {weight_version}: {reason}")

        return count

    def mark_stale_for_target(
        self,
        target_id: str,
        reason: str,
        target_type: str = TARGET_TEACHER
    ) -> int:
        matches = self.get_active_for_target(target_id, target_type)

        count = 0
        for match in matches:
            match.status = STATUS_STALE
            match.invalidated_reason = reason
            count += 1

        if count > 0:
            logger.info(f"Marked {count} matches stale for {target_type} {target_id}: {reason}")

        return count

    def mark_stale_for_youth(self, youth_id: str, reason: str) -> int:
        stmt = select(MatchRecord).where(
            MatchRecord.youth_id == youth_id,
            MatchRecord.status == STATUS_ACTIVE
        )
        matches = self.db.execute(stmt).scalars().all()

        count = 0
        for match in matches:
            match.status = STATUS_STALE
            match.invalidated_reason = reason
            count += 1

        if count > 0:
            logger.info(f"Marked {count} matches stale for youth {youth_id}: {reason}")

        return count

    def get_youth_ids_with_stale_matches(self, limit: int = 100) -> List[str]:
        stmt = (
            select(MatchRecord.youth_id)
            .where(MatchRecord.status == STATUS_STALE)
            .distinct()
            .order_by(MatchRecord.youth_id)
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all())
