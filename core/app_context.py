from dataclasses import dataclass
from typing import Optional

from core.admission import AdmissionController, SeatStore, SqlSeatStore
from core.config_loader import AppConfig
from core.parameters import ParameterStore
from core.ranking import RankingService
from core.recompute import RecomputeTrigger


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    This eliminates duplicate wiring code and provides a single source
    of truth for service instantiation. Services open their own units of
    work via care_uow(), so the context itself holds no session.
    """
    config: AppConfig
    parameter_store: ParameterStore
    ranking_service: RankingService
    admission_controller: AdmissionController
    recompute_trigger: RecomputeTrigger

    @classmethod
    def build(
        cls,
        config: AppConfig,
        session_factory=None,
        seat_store: Optional[SeatStore] = None
    ) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration
            session_factory: Session factory for every service; defaults
                to the process-wide SessionLocal
            seat_store: Admission backend. Defaults to a SqlSeatStore over
                session_factory, which shares the child and course
                directory with ranking. A caller passing another store
                (e.g. InMemorySeatStore) must fill it with its own children
                and courses.

        Returns:
            Fully wired AppContext instance
        """
        parameter_store = ParameterStore(
            session_factory=session_factory,
            default_weights=config.matching.default_weights
        )

        ranking_service = RankingService(
            parameter_store,
            config=config.matching,
            session_factory=session_factory
        )

        if seat_store is None:
            seat_store = SqlSeatStore(session_factory=session_factory)
        admission_controller = AdmissionController(seat_store, config=config.admission)

        recompute_trigger = RecomputeTrigger(config=config.matching, session_factory=session_factory)

        return cls(
            config=config,
            parameter_store=parameter_store,
            ranking_service=ranking_service,
            admission_controller=admission_controller,
            recompute_trigger=recompute_trigger
        )
