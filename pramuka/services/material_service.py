"""
Learning materials (materi) service layer.
"""

import logging
from typing import List
from sqlalchemy.orm import Session, joinedload

from pramuka.models.material import Material
from pramuka.models.profile import Profile
from pramuka.schemas.material import MaterialBase, MaterialResponse
from pramuka.utils.validators import ValidationError, clip_optional_text

logger = logging.getLogger(__name__)


class MaterialNotFoundError(Exception):
    """Material does not exist"""
    pass


def to_material_response(material: Material) -> MaterialResponse:
    response = MaterialResponse.model_validate(material)
    if material.uploader is not None and material.uploader.full_name:
        response.uploaded_by = material.uploader.full_name
    else:
        response.uploaded_by = "Unknown"
    return response


class MaterialService:
    """Materials business logic"""

    def __init__(self, db: Session):
        self.db = db

    def list_materials(self) -> List[MaterialResponse]:
        """All materials, newest first"""
        materials = self.db.query(Material).options(
            joinedload(Material.uploader)
        ).order_by(Material.created_at.desc(), Material.id.desc()).all()

        return [to_material_response(material) for material in materials]

    def _validate(self, material_data: MaterialBase):
        title = (material_data.title or "").strip()
        if not title:
            raise ValidationError("Judul wajib diisi.", "title")

        content = (material_data.content or "").strip()
        if not content:
            raise ValidationError("Konten materi wajib diisi.", "content")

        return title, content

    def _get_material(self, material_id: int) -> Material:
        material = self.db.query(Material).filter(Material.id == material_id).first()
        if not material:
            raise MaterialNotFoundError(f"Material {material_id} not found")
        return material

    def create_material(self, material_data: MaterialBase, author: Profile) -> MaterialResponse:
        """
        Create a text material.

        Raises:
            ValidationError: missing title or content
        """
        title, content = self._validate(material_data)

        material = Material(
            title=title,
            description=clip_optional_text(material_data.description, 5000),
            content=content,
            uploaded_by=author.id,
        )

        try:
            self.db.add(material)
            self.db.commit()
            self.db.refresh(material)
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Material {material.id} created by {author.id}")
        return to_material_response(material)

    def update_material(self, material_id: int, material_data: MaterialBase) -> MaterialResponse:
        """
        Replace title, description and content; attachment fields are kept.

        Raises:
            ValidationError: missing title or content
            MaterialNotFoundError: unknown material id
        """
        title, content = self._validate(material_data)
        material = self._get_material(material_id)

        try:
            material.title = title
            material.description = clip_optional_text(material_data.description, 5000)
            material.content = content
            self.db.commit()
            self.db.refresh(material)
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Material {material_id} updated")
        return to_material_response(material)

    def delete_material(self, material_id: int) -> None:
        material = self._get_material(material_id)

        try:
            self.db.delete(material)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Material {material_id} deleted")
