"""
Member roster and profile service layer.
"""

import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from pramuka.models.profile import Profile
from pramuka.schemas.profile import MemberUpdate, ProfileUpdate
from pramuka.utils.datetime_utils import utc_now
from pramuka.utils.validators import (
    ValidationError,
    clip_optional_text,
    validate_jabatan,
    validate_role,
    validate_tingkatan,
)

logger = logging.getLogger(__name__)


class MemberNotFoundError(Exception):
    """Profile does not exist"""
    pass


class MemberService:
    """Member and profile business logic"""

    def __init__(self, db: Session):
        self.db = db

    def list_members(self) -> List[Profile]:
        """All profiles, newest first"""
        return self.db.query(Profile).order_by(Profile.created_at.desc()).all()

    def update_member(self, update_data: MemberUpdate) -> Profile:
        """
        Change role, tingkatan or jabatan of a member.

        Raises:
            ValidationError: missing id, unknown value or nothing to update
            MemberNotFoundError: unknown member id
        """
        if not update_data.id:
            raise ValidationError("ID anggota wajib diberikan.", "id")

        updates = {}

        if update_data.role:
            if not validate_role(update_data.role):
                raise ValidationError("Role tidak valid.", "role")
            updates["role"] = update_data.role

        if update_data.tingkatan:
            if not validate_tingkatan(update_data.tingkatan):
                raise ValidationError("Tingkatan tidak valid.", "tingkatan")
            updates["tingkatan"] = update_data.tingkatan

        if update_data.jabatan:
            if not validate_jabatan(update_data.jabatan):
                raise ValidationError("Jabatan tidak valid.", "jabatan")
            updates["jabatan"] = update_data.jabatan

        if not updates:
            raise ValidationError("Tidak ada data yang diperbarui.")

        member = self.db.query(Profile).filter(Profile.id == update_data.id).first()
        if not member:
            raise MemberNotFoundError(f"Member {update_data.id} not found")

        try:
            for field, value in updates.items():
                setattr(member, field, value)
            member.updated_at = utc_now()
            self.db.commit()
            self.db.refresh(member)
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Member {member.id} updated: {', '.join(updates.keys())}")
        return member

    def upsert_profile(self, user_id: str, update_data: ProfileUpdate,
                       email: Optional[str] = None) -> Profile:
        """
        Create or update the caller's own profile.

        Optional free-text fields are trimmed and truncated; a field left
        out of the request is cleared.

        Raises:
            ValidationError: empty name or invalid tingkatan/jabatan
        """
        full_name = (update_data.full_name or "").strip()
        if not full_name:
            raise ValidationError("Nama lengkap wajib diisi.", "fullName")

        if not update_data.tingkatan or not validate_tingkatan(update_data.tingkatan):
            raise ValidationError("Tingkatan tidak valid. Pilih Bantara atau Laksana.", "tingkatan")

        if not update_data.jabatan or not validate_jabatan(update_data.jabatan):
            raise ValidationError("Jabatan tidak valid.", "jabatan")

        profile = self.db.query(Profile).filter(Profile.id == user_id).first()

        try:
            if profile is None:
                profile = Profile(id=user_id, email=email)
                self.db.add(profile)
                logger.info(f"Profile created for {user_id}")

            profile.full_name = full_name
            profile.tingkatan = update_data.tingkatan
            profile.jabatan = update_data.jabatan
            profile.bio = clip_optional_text(update_data.bio, 1000)
            profile.instagram = clip_optional_text(update_data.instagram, 100)
            profile.motto = clip_optional_text(update_data.motto, 200)
            profile.updated_at = utc_now()

            self.db.commit()
            self.db.refresh(profile)
        except Exception:
            self.db.rollback()
            raise

        return profile
