"""
Archive service for the weekly Friday sweep of leave requests and the
grouped archive read-model.
"""

import logging
from collections import OrderedDict
from datetime import date, datetime, timedelta
from typing import Callable, Iterable, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from pramuka.models.leave import LeaveRequest
from pramuka.schemas.archive import ArchiveBatch, ArchiveStatusFilter, ArchiveWindow, SweepResult
from pramuka.schemas.leave import LeaveResponse, LeaveStatus
from pramuka.utils.datetime_utils import (
    REFERENCE_UTC_OFFSET,
    format_archive_compact_label,
    get_friday_archive_window,
    parse_iso_date,
    to_utc,
    utc_now,
)

logger = logging.getLogger(__name__)


class ArchiveError(Exception):
    """The sweep or an archive query failed in the database"""
    pass


class ArchiveNotFoundError(Exception):
    """No archived rows match an export request"""

    def __init__(self, message: str, archive_date: Optional[date] = None):
        self.message = message
        self.archive_date = archive_date
        super().__init__(self.message)


def sort_batch_items(items: Iterable[LeaveRequest],
                     status_filter: ArchiveStatusFilter = ArchiveStatusFilter.ALL) -> List[LeaveRequest]:
    """
    Order the rows of one batch for display.

    Without a status filter approved rows come before pending ones, newest
    first within each status. With a filter only matching rows are kept,
    newest first.
    """
    newest_first = sorted(items, key=lambda item: item.created_at, reverse=True)

    if status_filter == ArchiveStatusFilter.ALL:
        # sorted() is stable, created_at order survives within each status
        return sorted(newest_first, key=lambda item: 0 if item.status == LeaveStatus.APPROVED.value else 1)

    return [item for item in newest_first if item.status == status_filter.value]


def group_archive_batches(rows: Iterable[LeaveRequest],
                          status_filter: ArchiveStatusFilter = ArchiveStatusFilter.ALL) -> List[ArchiveBatch]:
    """
    Group archived rows into batches keyed by archive_date.

    Rows without an archive_date are skipped. Counts cover every row of a
    batch regardless of ``status_filter``, which only affects ``items``.
    Batches are returned most recent first.
    """
    grouped = OrderedDict()
    for row in rows:
        if not row.archive_date:
            continue
        grouped.setdefault(row.archive_date, []).append(row)

    batches = []
    for archive_date in sorted(grouped.keys(), reverse=True):
        items = grouped[archive_date]
        approved = sum(1 for item in items if item.status == LeaveStatus.APPROVED.value)
        pending = sum(1 for item in items if item.status == LeaveStatus.PENDING.value)

        batches.append(ArchiveBatch(
            label=f"Arsip {format_archive_compact_label(archive_date)}",
            archive_date=archive_date,
            total=len(items),
            approved=approved,
            pending=pending,
            items=[LeaveResponse.model_validate(item) for item in sort_batch_items(items, status_filter)],
        ))

    return batches


class ArchiveService:
    """Weekly archive business logic"""

    def __init__(self, db: Session, clock: Callable[[], datetime] = utc_now,
                 offset: timedelta = REFERENCE_UTC_OFFSET):
        self.db = db
        self.clock = clock
        self.offset = offset

    def get_window(self, now: Optional[datetime] = None) -> ArchiveWindow:
        """Archive window for ``now`` (defaults to the service clock)"""
        return get_friday_archive_window(now or self.clock(), self.offset)

    def run_sweep(self, now: Optional[datetime] = None) -> SweepResult:
        """
        Flag today's active leave requests as archived.

        Outside the Friday window this is a no-op reporting ``skipped``.
        Inside it a single conditional UPDATE marks every row created during
        the local day that is not archived yet, so repeated calls never
        archive a row twice.

        Returns:
            SweepResult with the number of rows archived

        Raises:
            ArchiveError: if the update fails; the transaction is rolled back
        """
        now = now or self.clock()
        window = self.get_window(now)

        if not window.eligible:
            return SweepResult(archived=0, skipped=True)

        try:
            archived = self.db.query(LeaveRequest).filter(
                LeaveRequest.created_at >= window.range_start_utc,
                LeaveRequest.created_at <= window.range_end_utc,
                LeaveRequest.is_archived == False,
            ).update(
                {
                    LeaveRequest.is_archived: True,
                    LeaveRequest.archive_date: parse_iso_date(window.iso_date),
                    LeaveRequest.archived_at: to_utc(now),
                },
                synchronize_session=False,
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Archive sweep for {window.iso_date} failed: {e}")
            raise ArchiveError(f"Archive sweep failed: {e}")

        if archived:
            logger.info(f"Archived {archived} leave requests for {window.iso_date}")

        return SweepResult(archived=archived, archive_date=window.iso_date)

    def get_archived_records(self, archive_date: Optional[date] = None,
                             status_filter: ArchiveStatusFilter = ArchiveStatusFilter.ALL) -> List[LeaveRequest]:
        """Archived rows, most recent archive date first"""
        try:
            query = self.db.query(LeaveRequest).filter(
                LeaveRequest.is_archived == True,
                LeaveRequest.archive_date.isnot(None),
            )

            if archive_date:
                query = query.filter(LeaveRequest.archive_date == archive_date)

            if status_filter != ArchiveStatusFilter.ALL:
                query = query.filter(LeaveRequest.status == status_filter.value)

            return query.order_by(
                LeaveRequest.archive_date.desc(),
                LeaveRequest.created_at.desc(),
            ).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load archived leave requests: {e}")
            raise ArchiveError(f"Failed to load archive: {e}")

    def get_batches(self, status_filter: ArchiveStatusFilter = ArchiveStatusFilter.ALL) -> List[ArchiveBatch]:
        """Grouped archive read-model"""
        return group_archive_batches(self.get_archived_records(), status_filter)

    def get_export_records(self, archive_date: Optional[date] = None,
                           status_filter: ArchiveStatusFilter = ArchiveStatusFilter.APPROVED) -> List[LeaveRequest]:
        """
        Archived rows for a spreadsheet export, in display order.

        Raises:
            ArchiveNotFoundError: when nothing matches; the message tells a
                missing date apart from an empty archive
        """
        records = self.get_archived_records(archive_date, status_filter)

        if not records:
            if archive_date:
                raise ArchiveNotFoundError("Arsip untuk tanggal tersebut tidak ditemukan.", archive_date)
            raise ArchiveNotFoundError("Belum ada data arsip untuk diunduh.")

        ordered = []
        for batch_date in sorted({record.archive_date for record in records}, reverse=True):
            ordered.extend(sort_batch_items(
                [record for record in records if record.archive_date == batch_date],
                status_filter,
            ))
        return ordered
