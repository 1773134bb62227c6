"""
SQLAlchemy models for the roll history.
"""

from datetime import datetime
from sqlalchemy import Boolean, Column, String, DateTime, Integer, Text

from .database import Base


class Roll(Base):
    __tablename__ = "rolls"

    id = Column(String(36), primary_key=True)  # uuid
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    roller = Column(String(128), nullable=False, index=True)  # character name
    stat = Column(String(16), nullable=False)  # stat key, e.g. "bra"
    flavor = Column(String(255), nullable=True)
    is_private = Column(Boolean, nullable=False, default=False)
    grade = Column(String(16), nullable=False)  # disaster | grim | messy | perfect | crit
    boons = Column(Integer, nullable=False, default=0)
    action_dice = Column(Text, nullable=False)  # JSON array of faces
    danger_dice = Column(Text, nullable=False)  # JSON array of faces
    assists = Column(Text, nullable=False)  # JSON object { name: dice }, declaration order
    outcome = Column(Text, nullable=False)  # JSON of Outcome.to_dict()
