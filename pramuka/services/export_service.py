"""
Spreadsheet export of archived leave requests.
"""

import io
import logging
from datetime import date, datetime
from typing import Callable, List, Optional, Tuple
from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from sqlalchemy.orm import Session

from pramuka.config import settings
from pramuka.models.leave import LeaveRequest
from pramuka.schemas.archive import ArchiveStatusFilter
from pramuka.schemas.leave import LeaveStatus
from pramuka.services.archive_service import ArchiveService
from pramuka.utils.datetime_utils import (
    format_archive_full_label,
    format_date,
    format_timestamp_label,
    to_reference_timezone,
    utc_now,
)

logger = logging.getLogger(__name__)

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# (header, column width)
EXPORT_COLUMNS = [
    ("No", 6),
    ("Tanggal Arsip", 28),
    ("Nama", 24),
    ("Absen", 8),
    ("Kelas", 8),
    ("Status", 18),
    ("Alasan", 45),
    ("Dibuat Pada", 26),
    ("Diarsipkan Pada", 26),
]

STATUS_LABELS = {
    LeaveStatus.APPROVED.value: "Diizinkan",
    LeaveStatus.PENDING.value: "Pending",
}


def build_sheet_name(archive_date: Optional[date]) -> str:
    """Sheet title, limited to the xlsx maximum of 31 characters"""
    base_name = format_archive_full_label(archive_date) if archive_date else "Arsip"
    return base_name[:settings.EXPORT_SHEET_NAME_LIMIT] or "Arsip"


def build_export_filename(archive_date: Optional[date], status_filter: ArchiveStatusFilter,
                          today: date) -> str:
    status_suffix = "semua-status" if status_filter == ArchiveStatusFilter.ALL else status_filter.value
    if archive_date:
        return f"arsip-izin-{format_date(archive_date)}-{status_suffix}.xlsx"
    return f"arsip-izin-{status_suffix}-{format_date(today)}.xlsx"


def build_export_rows(records: List[LeaveRequest]) -> List[list]:
    """One spreadsheet row per archived request, numbered from 1"""
    rows = []
    for index, record in enumerate(records, start=1):
        rows.append([
            index,
            format_archive_full_label(record.archive_date),
            record.nama,
            record.absen,
            record.kelas,
            STATUS_LABELS.get(record.status, record.status),
            record.alasan,
            format_timestamp_label(record.created_at),
            format_timestamp_label(record.archived_at),
        ])
    return rows


class ArchiveExportService:
    """Builds xlsx downloads from the archive read-model"""

    def __init__(self, db: Session, clock: Callable[[], datetime] = utc_now):
        self.db = db
        self.clock = clock
        self.archive_service = ArchiveService(db, clock=clock)

    def export_archive(
        self,
        archive_date: Optional[date] = None,
        status_filter: ArchiveStatusFilter = ArchiveStatusFilter.APPROVED
    ) -> Tuple[bytes, str, str]:
        """
        Export archived leave requests as an xlsx workbook.

        Args:
            archive_date: only this archive batch when given
            status_filter: approved, pending or all

        Returns:
            (file content, filename, content type)

        Raises:
            ArchiveNotFoundError: when no archived row matches
        """
        records = self.archive_service.get_export_records(archive_date, status_filter)

        content = self._export_to_xlsx(build_export_rows(records), build_sheet_name(archive_date))
        today = to_reference_timezone(self.clock()).date()
        filename = build_export_filename(archive_date, status_filter, today)

        logger.info(f"Exported {len(records)} archived leave requests to {filename}")
        return content, filename, XLSX_CONTENT_TYPE

    def _export_to_xlsx(self, rows: List[list], sheet_name: str) -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_name

        ws.append([header for header, _ in EXPORT_COLUMNS])
        for cell in ws[1]:
            cell.font = Font(bold=True)

        for row in rows:
            ws.append(row)

        for col_idx, (_, width) in enumerate(EXPORT_COLUMNS, start=1):
            ws.column_dimensions[get_column_letter(col_idx)].width = width

        output = io.BytesIO()
        wb.save(output)
        return output.getvalue()
