"""
Archive API routes: weekly sweep trigger, grouped archive and xlsx export.
"""

import io
import logging
from datetime import datetime
from typing import Callable, List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from pramuka.database import get_db
from pramuka.schemas.archive import ArchiveBatch, ArchiveStatusFilter
from pramuka.services.archive_service import ArchiveService, ArchiveError, ArchiveNotFoundError
from pramuka.services.export_service import ArchiveExportService
from pramuka.utils.datetime_utils import get_clock
from pramuka.utils.validators import ValidationError, validate_archive_date, validate_archive_status

logger = logging.getLogger(__name__)

router = APIRouter(tags=["archive"])


@router.post("/archive", summary="Run the weekly archive sweep")
async def run_archive_sweep(
    db: Session = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    """
    Archive today's leave requests when it is Friday from 15:00 (UTC+7).

    Safe to call any number of times; outside the window nothing happens.
    """
    try:
        result = ArchiveService(db, clock=clock).run_sweep()
    except ArchiveError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Gagal memindahkan izin ke arsip"
        )

    if result.skipped:
        return {"archived": 0, "skipped": True}

    return {"archived": result.archived, "archiveDate": result.archive_date}


@router.get("/arsip", response_model=List[ArchiveBatch], summary="List archive batches")
async def get_archive_batches(
    status_filter: ArchiveStatusFilter = Query(ArchiveStatusFilter.ALL, alias="status"),
    db: Session = Depends(get_db)
):
    """Archived leave requests grouped by archive date, most recent first."""
    try:
        return ArchiveService(db).get_batches(status_filter)
    except ArchiveError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Gagal memuat arsip Jumat"
        )


@router.get("/arsip/export", summary="Download archive as xlsx")
async def export_archive(
    archive_date: Optional[str] = Query(None, alias="archiveDate", description="YYYY-MM-DD"),
    status_param: Optional[str] = Query(None, alias="status", description="approved, pending or all"),
    db: Session = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    """
    Export archived leave requests.

    - status defaults to approved
    - 400 for a malformed date or status, checked before any query
    - 404 when nothing matches
    """
    try:
        status_filter = validate_archive_status(status_param)
        parsed_date = validate_archive_date(archive_date)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    try:
        content, filename, content_type = ArchiveExportService(db, clock=clock).export_archive(
            parsed_date, status_filter
        )
    except ArchiveNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ArchiveError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Gagal menghasilkan arsip XLSX."
        )

    return StreamingResponse(
        io.BytesIO(content),
        media_type=content_type,
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "Content-Length": str(len(content)),
        }
    )
