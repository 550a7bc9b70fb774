from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from pramuka.database import Base
from pramuka.utils.datetime_utils import utc_now

class Agenda(Base):
    __tablename__ = "agendas"
    
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    location = Column(String(200))
    starts_at = Column(DateTime(timezone=True), nullable=False)
    ends_at = Column(DateTime(timezone=True))
    created_by = Column(String(64), ForeignKey("profiles.id"))
    created_at = Column(DateTime(timezone=True), default=utc_now, server_default=func.now())
    
    author = relationship("Profile", backref="agendas")
