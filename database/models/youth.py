from sqlalchemy import Column, Integer, String, Text, Index

from .base import Base


class Youth(Base):
    """
    A child enrolled on the platform, owned by a family.

    Profile fields (interest, learning_style) feed the match scorer.
    """
    __tablename__ = 'youth'

    youth_id = Column(String(20), primary_key=True)
    family_id = Column(String(20), nullable=False)
    name = Column(String(50), nullable=False)
    age = Column(Integer, nullable=True)
    health_note = Column(Text)
    interest = Column(Text)  # comma-separated tags
    learning_style = Column(String(50))

    __table_args__ = (
        Index('idx_youth_family', 'family_id'),
    )
