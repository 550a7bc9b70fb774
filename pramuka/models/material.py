from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from pramuka.database import Base
from pramuka.utils.datetime_utils import utc_now

class Material(Base):
    __tablename__ = "materials"
    
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    content = Column(Text, nullable=False)
    # Attachment metadata; uploads live in external storage and are not handled here
    file_url = Column(String(500))
    file_name = Column(String(255))
    file_type = Column(String(100))
    file_size = Column(Integer)
    file_path = Column(String(500))
    uploaded_by = Column(String(64), ForeignKey("profiles.id"))
    created_at = Column(DateTime(timezone=True), default=utc_now, server_default=func.now())
    
    uploader = relationship("Profile", backref="materials")
