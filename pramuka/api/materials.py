"""
Learning materials (materi) API routes.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from pramuka.database import get_db
from pramuka.models.profile import Profile
from pramuka.schemas.material import MaterialCreate, MaterialUpdate
from pramuka.schemas.profile import DashboardRole
from pramuka.services.material_service import MaterialService, MaterialNotFoundError
from pramuka.utils.auth import get_current_user_id, require_roles
from pramuka.utils.validators import ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/materi", tags=["materi"])

require_material_editor = require_roles(
    DashboardRole.MATERI.value, DashboardRole.ADMIN.value,
    detail="Hanya tim materi atau admin yang dapat mengunggah."
)
require_material_remover = require_roles(
    DashboardRole.MATERI.value, DashboardRole.BPH.value, DashboardRole.ADMIN.value,
    detail="Tidak memiliki akses untuk menghapus."
)


@router.get("", summary="List materials")
async def list_materials(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    try:
        materials = MaterialService(db).list_materials()
    except SQLAlchemyError as e:
        logger.error(f"Fetch materials error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Gagal memuat data materi."
        )

    return {"data": materials}


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create a material")
async def create_material(
    material_data: MaterialCreate,
    current_profile: Profile = Depends(require_material_editor),
    db: Session = Depends(get_db)
):
    """
    Create a text material.

    - Only the materi team and admins
    - title and content are required
    """
    try:
        material = MaterialService(db).create_material(material_data, current_profile)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except SQLAlchemyError as e:
        logger.error(f"Insert materi error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Gagal menyimpan data materi."
        )

    return {"data": material}


@router.put("/{material_id}", summary="Edit a material")
async def update_material(
    material_id: int,
    material_data: MaterialUpdate,
    current_profile: Profile = Depends(require_material_editor),
    db: Session = Depends(get_db)
):
    try:
        material = MaterialService(db).update_material(material_id, material_data)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except MaterialNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Materi tidak ditemukan.")
    except SQLAlchemyError as e:
        logger.error(f"Update materi error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Gagal menyimpan data materi."
        )

    return {"data": material}


@router.delete("/{material_id}", summary="Delete a material")
async def delete_material(
    material_id: int,
    current_profile: Profile = Depends(require_material_remover),
    db: Session = Depends(get_db)
):
    try:
        MaterialService(db).delete_material(material_id)
    except MaterialNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Materi tidak ditemukan.")
    except SQLAlchemyError as e:
        logger.error(f"Delete materi error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Gagal menghapus materi."
        )

    return {"success": True}
