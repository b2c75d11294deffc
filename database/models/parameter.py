import uuid

from sqlalchemy import Column, Integer, String, TIMESTAMP, func

from .base import Base


class SystemParameter(Base):
    """
    Named, typed, versioned configuration value (weights, prices, limits).

    The value is always stored as a string and parsed by callers according
    to ``type``. ``version`` is store-wide and increases on every write.
    """
    __tablename__ = 'system_parameter'

    parameter_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), unique=True, nullable=False, index=True)
    type = Column(String(50), nullable=False)  # weight|price|limit|config
    value = Column(String(255), nullable=False)
    scope = Column(String(50), nullable=False, default='system')
    version = Column(Integer, nullable=False, default=1)
    effective_time = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
