"""
Dashboard summary route.
"""

import logging
from datetime import datetime
from typing import Callable
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pramuka.database import get_db
from pramuka.schemas.leave import DashboardSummary
from pramuka.services.archive_service import ArchiveService, ArchiveError
from pramuka.services.leave_service import LeaveService
from pramuka.utils.datetime_utils import get_clock

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardSummary, summary="Dashboard summary")
async def get_dashboard(
    db: Session = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    """
    Leave request counters for the dashboard.

    The weekly archive sweep runs first on every load; its failures are
    logged and the summary is still returned.
    """
    sweep = None
    try:
        sweep = ArchiveService(db, clock=clock).run_sweep().model_dump()
    except ArchiveError as e:
        logger.warning(f"Opportunistic archive sweep failed: {e}")

    summary = LeaveService(db).get_summary()
    summary["sweep"] = sweep
    return summary
