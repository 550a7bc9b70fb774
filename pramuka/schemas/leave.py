from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime
from enum import Enum

class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"

class Kelas(str, Enum):
    X1 = "X1"
    X2 = "X2"
    X3 = "X3"
    X4 = "X4"
    X5 = "X5"
    X6 = "X6"
    X7 = "X7"
    X8 = "X8"

class LeaveBase(BaseModel):
    nama: str
    absen: int
    kelas: Kelas
    alasan: str

class LeaveCreate(LeaveBase):
    nama: str = Field(..., min_length=1, max_length=100)
    absen: int = Field(..., ge=1, le=99)
    alasan: str = Field(..., min_length=1, max_length=1000)

class LeaveResponse(LeaveBase):
    id: int
    status: LeaveStatus
    is_archived: bool = False
    archive_date: Optional[date] = None
    archived_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True

class DashboardSummary(BaseModel):
    total: int
    pending: int
    approved: int
    archived: int
    approval_rate: float
    class_distribution: dict
    recent: List[LeaveResponse]
    sweep: Optional[dict] = None
