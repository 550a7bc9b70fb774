from sqlalchemy import Column, String, Text, DateTime, func
from pramuka.database import Base
from pramuka.utils.datetime_utils import utc_now

class Profile(Base):
    __tablename__ = "profiles"
    
    id = Column(String(64), primary_key=True)  # user id from the auth provider
    email = Column(String(120))
    full_name = Column(String(100))
    role = Column(String(20), nullable=False, default="anggota")  # 'admin', 'bph', 'materi', 'media', 'anggota'
    tingkatan = Column(String(20))  # 'bantara', 'laksana'
    jabatan = Column(String(20))
    bio = Column(Text)
    instagram = Column(String(100))
    motto = Column(String(200))
    avatar_url = Column(String(500))
    created_at = Column(DateTime(timezone=True), default=utc_now, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utc_now, server_default=func.now(), onupdate=utc_now)
