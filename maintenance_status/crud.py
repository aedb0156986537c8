from sqlalchemy.orm import Session
from typing import Optional
from . import models

# ============= MAINTENANCE STATUS CRUD =============

def get_status_record(db: Session) -> Optional[models.MaintenanceModeRecord]:
    return db.get(models.MaintenanceModeRecord, models.STATUS_ROW_ID)

def upsert_status_record(db: Session, value: str) -> models.MaintenanceModeRecord:
    db_record = get_status_record(db)
    if db_record is None:
        db_record = models.MaintenanceModeRecord(id=models.STATUS_ROW_ID, value=value)
        db.add(db_record)
    else:
        db_record.value = value
    db.commit()
    db.refresh(db_record)
    return db_record
