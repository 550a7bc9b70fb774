from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime
from enum import Enum

from .leave import LeaveResponse

class ArchiveStatusFilter(str, Enum):
    APPROVED = "approved"
    PENDING = "pending"
    ALL = "all"

class ArchiveWindow(BaseModel):
    """Result of the Friday window check, range bounds in UTC"""
    eligible: bool
    iso_date: str
    range_start_utc: datetime
    range_end_utc: datetime

class SweepResult(BaseModel):
    archived: int = 0
    archive_date: Optional[str] = None
    skipped: bool = False

class ArchiveBatch(BaseModel):
    label: str
    archive_date: date = Field(..., alias="archiveDate")
    total: int
    approved: int
    pending: int
    items: List[LeaveResponse]

    class Config:
        populate_by_name = True
