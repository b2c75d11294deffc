import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select, func

from database.models import SystemParameter
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ParameterRepository(BaseRepository):
    def get_by_name(self, name: str) -> Optional[SystemParameter]:
        stmt = select(SystemParameter).where(SystemParameter.name == name)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_names(self, names: List[str]) -> List[SystemParameter]:
        if not names:
            return []
        stmt = select(SystemParameter).where(SystemParameter.name.in_(names))
        return self.db.execute(stmt).scalars().all()

    def list_all(self, scope: Optional[str] = None) -> List[SystemParameter]:
        stmt = select(SystemParameter)
        if scope is not None:
            stmt = stmt.where(SystemParameter.scope == scope)
        stmt = stmt.order_by(SystemParameter.name)
        return self.db.execute(stmt).scalars().all()

    def next_version(self) -> int:
        current = self.db.execute(select(func.max(SystemParameter.version))).scalar()
        return (current or 0) + 1

    def upsert(
        self,
        name: str,
        value: str,
        param_type: str,
        scope: str = 'system',
        version: Optional[int] = None
    ) -> SystemParameter:
        """Create or update a parameter, stamping a new version and effective time."""
        if version is None:
            version = self.next_version()
        now = datetime.now(timezone.utc)

        parameter = self.get_by_name(name)
        if parameter is None:
            parameter = SystemParameter(
                name=name,
                type=param_type,
                value=value,
                scope=scope,
                version=version,
                effective_time=now
            )
            self.db.add(parameter)
        else:
            parameter.type = param_type
            parameter.value = value
            parameter.scope = scope
            parameter.version = version
            parameter.effective_time = now

        self.db.flush()
        logger.debug(f"Stored parameter {name}={value} (v{version})")
        return parameter
