"""
Agenda API routes.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from pramuka.database import get_db
from pramuka.models.profile import Profile
from pramuka.schemas.agenda import AgendaCreate, AgendaResponse
from pramuka.schemas.profile import DashboardRole
from pramuka.services.agenda_service import AgendaService
from pramuka.utils.auth import get_current_user_id, require_roles
from pramuka.utils.validators import ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/agenda", tags=["agenda"])

require_agenda_editor = require_roles(
    DashboardRole.BPH.value, DashboardRole.ADMIN.value,
    detail="Hanya BPH atau admin yang dapat membuat agenda."
)


@router.get("", response_model=List[AgendaResponse], summary="List agendas")
async def list_agendas(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    try:
        return AgendaService(db).list_agendas()
    except SQLAlchemyError as e:
        logger.error(f"Fetch agenda error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Gagal memuat agenda."
        )


@router.post("", response_model=AgendaResponse, status_code=status.HTTP_201_CREATED,
             summary="Create an agenda")
async def create_agenda(
    agenda_data: AgendaCreate,
    current_profile: Profile = Depends(require_agenda_editor),
    db: Session = Depends(get_db)
):
    """
    Create an agenda.

    - Only BPH (and admin) members
    - startDate is required, times are local (UTC+7)
    """
    try:
        return AgendaService(db).create_agenda(agenda_data, current_profile)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except SQLAlchemyError as e:
        logger.error(f"Insert agenda error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Gagal menyimpan agenda."
        )
