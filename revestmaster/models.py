from sqlalchemy import Column, String, DateTime, Text
from datetime import datetime
from .database import Base
import enum


class Theme(str, enum.Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class StateRecord(Base):
    """Durable key-value slot. One row holds the whole serialized store."""
    __tablename__ = "state_records"

    key = Column(String, primary_key=True)
    payload = Column(Text, nullable=False)  # JSON text, parsed by persistence.decode_state
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
