import re
from datetime import date
from typing import Optional

from pramuka.schemas.archive import ArchiveStatusFilter
from pramuka.schemas.profile import DashboardRole, Tingkatan, Jabatan
from pramuka.utils.datetime_utils import parse_iso_date


class ValidationError(Exception):
    """Input rejected before touching the database"""

    def __init__(self, message: str, field: str = None):
        self.message = message
        self.field = field
        super().__init__(self.message)


def validate_archive_date(date_str: Optional[str]) -> Optional[date]:
    """Validate an optional archive date (zero-padded YYYY-MM-DD)"""
    if date_str is None or date_str == "":
        return None

    parsed = parse_iso_date(date_str)
    if parsed is None:
        raise ValidationError("Parameter tanggal tidak valid.", "archiveDate")
    return parsed


def validate_archive_status(status: Optional[str]) -> ArchiveStatusFilter:
    """Validate the export status filter, defaulting to approved"""
    value = (status or ArchiveStatusFilter.APPROVED.value).lower()
    try:
        return ArchiveStatusFilter(value)
    except ValueError:
        raise ValidationError("Parameter status tidak valid.", "status")


def validate_role(role: str) -> bool:
    return role in [r.value for r in DashboardRole]


def validate_tingkatan(tingkatan: str) -> bool:
    return tingkatan in [t.value for t in Tingkatan]


def validate_jabatan(jabatan: str) -> bool:
    return jabatan in [j.value for j in Jabatan]


def sanitize_input(text: Optional[str]) -> str:
    """Strip and collapse whitespace"""
    if not text:
        return ""

    text = text.strip()
    text = re.sub(r'\s+', ' ', text)

    return text


def clip_optional_text(text: Optional[str], max_length: int) -> Optional[str]:
    """Strip and truncate optional free text, empty values become None"""
    if text is None:
        return None

    text = text.strip()[:max_length]
    return text or None
