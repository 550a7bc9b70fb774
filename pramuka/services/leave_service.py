"""
Leave request (izin) service layer.
"""

import logging
from typing import Dict, List, Any
from sqlalchemy.orm import Session
from sqlalchemy import func

from pramuka.config import settings
from pramuka.models.leave import LeaveRequest
from pramuka.schemas.leave import Kelas, LeaveCreate, LeaveResponse, LeaveStatus
from pramuka.utils.validators import sanitize_input

logger = logging.getLogger(__name__)


class LeaveNotFoundError(Exception):
    """Leave request does not exist"""
    pass


class LeaveService:
    """Leave request business logic"""

    def __init__(self, db: Session):
        self.db = db

    def list_active(self) -> List[LeaveRequest]:
        """Requests not archived yet, newest first"""
        return self.db.query(LeaveRequest).filter(
            LeaveRequest.is_archived == False
        ).order_by(LeaveRequest.created_at.desc()).all()

    def create_request(self, leave_data: LeaveCreate) -> LeaveRequest:
        """Store a public submission as a pending, active request"""
        try:
            new_request = LeaveRequest(
                nama=sanitize_input(leave_data.nama),
                absen=leave_data.absen,
                kelas=leave_data.kelas.value,
                alasan=leave_data.alasan.strip(),
                status=LeaveStatus.PENDING.value,
                is_archived=False,
            )

            self.db.add(new_request)
            self.db.commit()
            self.db.refresh(new_request)

            return new_request

        except Exception:
            self.db.rollback()
            raise

    def _get_request(self, request_id: int) -> LeaveRequest:
        leave_request = self.db.query(LeaveRequest).filter(LeaveRequest.id == request_id).first()
        if not leave_request:
            raise LeaveNotFoundError(f"Leave request {request_id} not found")
        return leave_request

    def approve(self, request_id: int) -> LeaveRequest:
        leave_request = self._get_request(request_id)

        try:
            leave_request.status = LeaveStatus.APPROVED.value
            self.db.commit()
            self.db.refresh(leave_request)
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Leave request {request_id} approved")
        return leave_request

    def delete(self, request_id: int) -> None:
        leave_request = self._get_request(request_id)

        try:
            self.db.delete(leave_request)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Leave request {request_id} deleted")

    def get_summary(self) -> Dict[str, Any]:
        """
        Dashboard counters over active requests.

        Returns:
            dict with total, pending, approved, archived, approval_rate,
            class_distribution (every class, zero included) and recent
        """
        status_counts = dict(
            self.db.query(LeaveRequest.status, func.count(LeaveRequest.id))
            .filter(LeaveRequest.is_archived == False)
            .group_by(LeaveRequest.status)
            .all()
        )
        pending = status_counts.get(LeaveStatus.PENDING.value, 0)
        approved = status_counts.get(LeaveStatus.APPROVED.value, 0)

        archived = self.db.query(LeaveRequest).filter(LeaveRequest.is_archived == True).count()

        class_distribution = {kelas.value: 0 for kelas in Kelas}
        class_counts = (
            self.db.query(LeaveRequest.kelas, func.count(LeaveRequest.id))
            .filter(LeaveRequest.is_archived == False)
            .group_by(LeaveRequest.kelas)
            .all()
        )
        for kelas, count in class_counts:
            class_distribution[kelas] = count

        total = pending + approved
        approval_rate = round(approved / total * 100, 1) if total else 0.0

        recent = self.db.query(LeaveRequest).filter(
            LeaveRequest.is_archived == False
        ).order_by(LeaveRequest.created_at.desc()).limit(settings.DASHBOARD_RECENT_LIMIT).all()

        return {
            "total": total,
            "pending": pending,
            "approved": approved,
            "archived": archived,
            "approval_rate": approval_rate,
            "class_distribution": class_distribution,
            "recent": [LeaveResponse.model_validate(item) for item in recent],
        }
