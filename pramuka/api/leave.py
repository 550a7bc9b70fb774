"""
Leave request (izin) API routes and admin action-token check.
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from pramuka.database import get_db
from pramuka.schemas.leave import LeaveCreate, LeaveResponse
from pramuka.services.leave_service import LeaveService, LeaveNotFoundError
from pramuka.utils.auth import check_action_token, require_action_token
from pramuka.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["izin"])


class TokenVerifyRequest(BaseModel):
    token: Optional[str] = None


@router.get("/izin", response_model=List[LeaveResponse], summary="List active leave requests")
async def list_leave_requests(db: Session = Depends(get_db)):
    """Leave requests that are not archived yet, newest first."""
    try:
        return LeaveService(db).list_active()
    except SQLAlchemyError as e:
        logger.error(f"GET /izin failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Gagal mengambil data izin"
        )


@router.post("/izin", response_model=LeaveResponse, status_code=status.HTTP_201_CREATED,
             summary="Submit a leave request")
async def create_leave_request(leave_data: LeaveCreate, db: Session = Depends(get_db)):
    """Public submission; new requests start as pending."""
    try:
        return LeaveService(db).create_request(leave_data)
    except SQLAlchemyError as e:
        logger.error(f"POST /izin failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Gagal menyimpan izin"
        )


@router.patch("/izin/{request_id}", response_model=LeaveResponse,
              dependencies=[Depends(require_action_token)], summary="Approve a leave request")
async def approve_leave_request(request_id: int, db: Session = Depends(get_db)):
    try:
        return LeaveService(db).approve(request_id)
    except LeaveNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Izin tidak ditemukan")
    except SQLAlchemyError as e:
        logger.error(f"PATCH /izin/{request_id} failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Gagal mengubah status izin"
        )


@router.delete("/izin/{request_id}", dependencies=[Depends(require_action_token)],
               summary="Delete a leave request")
async def delete_leave_request(request_id: int, db: Session = Depends(get_db)):
    try:
        LeaveService(db).delete(request_id)
    except LeaveNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Izin tidak ditemukan")
    except SQLAlchemyError as e:
        logger.error(f"DELETE /izin/{request_id} failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Gagal menghapus izin"
        )

    return {"success": True}


@router.post("/token/verify", summary="Check an admin action token")
async def verify_action_token(payload: Optional[TokenVerifyRequest] = None):
    configured_token = settings.get_action_token()
    if not configured_token:
        logger.error("ADMIN_ACTION_TOKEN is not configured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Konfigurasi server belum lengkap. Hubungi administrator."
        )

    token = (payload.token or "").strip() if payload else ""
    if not token:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Token diperlukan.")

    check_action_token(token)

    return {"valid": True}
