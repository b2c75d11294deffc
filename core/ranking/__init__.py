"""
Ranking Service - orders candidate teachers and courses for a child.

Public API:
- rank_candidates: pure, deterministic ordering
- RankingService: scoring + MatchRecord reconciliation
"""

from core.ranking.models import RankedTeacher, RankedCourse, MatchRecordView
from core.ranking.ranker import rank_candidates
from core.ranking.service import RankingService

__all__ = [
    'RankingService',
    'RankedTeacher',
    'RankedCourse',
    'MatchRecordView',
    'rank_candidates',
]
