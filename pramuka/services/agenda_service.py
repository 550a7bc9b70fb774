"""
Agenda service layer.
"""

import logging
from typing import List
from sqlalchemy.orm import Session, joinedload

from pramuka.models.agenda import Agenda
from pramuka.models.profile import Profile
from pramuka.schemas.agenda import AgendaAuthor, AgendaCreate, AgendaResponse
from pramuka.utils.datetime_utils import parse_local_datetime
from pramuka.utils.validators import ValidationError, clip_optional_text

logger = logging.getLogger(__name__)


def to_agenda_response(agenda: Agenda) -> AgendaResponse:
    author = None
    if agenda.author is not None:
        author = AgendaAuthor(name=agenda.author.full_name, role=agenda.author.role)

    return AgendaResponse(
        id=agenda.id,
        title=agenda.title,
        description=agenda.description,
        location=agenda.location,
        starts_at=agenda.starts_at,
        ends_at=agenda.ends_at,
        created_at=agenda.created_at,
        author=author,
    )


class AgendaService:
    """Agenda business logic"""

    def __init__(self, db: Session):
        self.db = db

    def list_agendas(self) -> List[AgendaResponse]:
        """Agendas by start time, earliest first"""
        agendas = self.db.query(Agenda).options(
            joinedload(Agenda.author)
        ).order_by(Agenda.starts_at.asc()).all()

        return [to_agenda_response(agenda) for agenda in agendas]

    def create_agenda(self, agenda_data: AgendaCreate, author: Profile) -> AgendaResponse:
        """
        Create an agenda; dates and times are local to the reference timezone.

        Raises:
            ValidationError: missing title or invalid start date
        """
        title = (agenda_data.title or "").strip()
        if not title:
            raise ValidationError("Judul agenda wajib diisi.", "title")

        starts_at = parse_local_datetime(agenda_data.start_date, agenda_data.start_time)
        if starts_at is None:
            raise ValidationError("Tanggal mulai tidak valid.", "startDate")

        ends_at = None
        if agenda_data.end_date:
            ends_at = parse_local_datetime(agenda_data.end_date, agenda_data.end_time)

        agenda = Agenda(
            title=title,
            description=clip_optional_text(agenda_data.description, 5000),
            location=clip_optional_text(agenda_data.location, 200),
            starts_at=starts_at,
            ends_at=ends_at,
            created_by=author.id,
        )

        try:
            self.db.add(agenda)
            self.db.commit()
            self.db.refresh(agenda)
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Agenda {agenda.id} created by {author.id}")
        return to_agenda_response(agenda)
