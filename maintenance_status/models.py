from sqlalchemy import Column, Integer, DateTime, Text
from datetime import datetime, timezone
from .database import Base

# ============= MAINTENANCE STATUS MODEL =============

#the whole status record lives in a single row
STATUS_ROW_ID = 1


def utcnow():
    return datetime.now(timezone.utc)


class MaintenanceModeRecord(Base):
    __tablename__ = "maintenance_mode_status"

    id = Column(Integer, primary_key=True, default=STATUS_ROW_ID)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
