"""
Member roster and own-profile API routes.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from pramuka.database import get_db
from pramuka.models.profile import Profile
from pramuka.schemas.profile import DashboardRole, MemberUpdate, ProfileResponse, ProfileUpdate
from pramuka.services.member_service import MemberService, MemberNotFoundError
from pramuka.utils.auth import get_optional_profile, get_token_claims, require_roles
from pramuka.utils.validators import ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["members"])

require_roster_viewer = require_roles(
    DashboardRole.ADMIN.value, DashboardRole.BPH.value,
    detail="Akses ditolak. Hanya admin atau BPH yang bisa melihat daftar anggota."
)
require_admin = require_roles(
    DashboardRole.ADMIN.value,
    detail="Akses ditolak. Hanya admin yang bisa mengedit anggota."
)


@router.get("/members", summary="List members")
async def list_members(
    current_profile: Profile = Depends(require_roster_viewer),
    db: Session = Depends(get_db)
):
    try:
        members = MemberService(db).list_members()
    except SQLAlchemyError as e:
        logger.error(f"Fetch members error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Gagal memuat daftar anggota."
        )

    return {"members": [ProfileResponse.model_validate(member) for member in members]}


@router.patch("/members", summary="Update a member's role")
async def update_member(
    update_data: MemberUpdate,
    current_profile: Profile = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Change role, tingkatan or jabatan of another member (admin only)."""
    try:
        member = MemberService(db).update_member(update_data)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except MemberNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Anggota tidak ditemukan.")
    except SQLAlchemyError as e:
        logger.error(f"Update member error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Gagal memperbarui anggota."
        )

    return {"member": ProfileResponse.model_validate(member)}


@router.get("/profile", response_model=Optional[ProfileResponse], summary="Own profile")
async def get_profile(current_profile: Optional[Profile] = Depends(get_optional_profile)):
    """Own profile, null until it is saved for the first time."""
    return current_profile


@router.put("/profile", response_model=ProfileResponse, summary="Create or update own profile")
async def update_profile(
    update_data: ProfileUpdate,
    claims: dict = Depends(get_token_claims),
    db: Session = Depends(get_db)
):
    try:
        return MemberService(db).upsert_profile(claims["sub"], update_data, email=claims.get("email"))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except SQLAlchemyError as e:
        logger.error(f"Profile update error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Gagal memperbarui profil."
        )
