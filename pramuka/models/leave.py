from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, Text, CheckConstraint, func
from pramuka.database import Base
from pramuka.utils.datetime_utils import utc_now

class LeaveRequest(Base):
    __tablename__ = "izin"
    __table_args__ = (
        CheckConstraint("status IN ('pending', 'approved')", name="ck_izin_status"),
        # archive_date and archived_at are set iff is_archived
        CheckConstraint(
            "(is_archived AND archive_date IS NOT NULL AND archived_at IS NOT NULL) OR "
            "(NOT is_archived AND archive_date IS NULL AND archived_at IS NULL)",
            name="ck_izin_archive_fields",
        ),
    )
    
    id = Column(Integer, primary_key=True, index=True)
    nama = Column(String(100), nullable=False)
    absen = Column(Integer, nullable=False)  # roll number
    kelas = Column(String(4), nullable=False)  # 'X1' .. 'X8'
    alasan = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # 'pending', 'approved'
    is_archived = Column(Boolean, nullable=False, default=False, index=True)
    archive_date = Column(Date, index=True)
    archived_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, server_default=func.now())
