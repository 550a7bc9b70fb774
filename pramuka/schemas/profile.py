from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from enum import Enum

class DashboardRole(str, Enum):
    ADMIN = "admin"
    BPH = "bph"
    MATERI = "materi"
    MEDIA = "media"
    ANGGOTA = "anggota"

class Tingkatan(str, Enum):
    BANTARA = "bantara"
    LAKSANA = "laksana"

class Jabatan(str, Enum):
    ANGGOTA = "anggota"
    PRADANA = "pradana"
    KERANI = "kerani"
    HARTOKO = "hartoko"
    JUDAT = "judat"

class ProfileResponse(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    role: str
    tingkatan: Optional[str] = None
    jabatan: Optional[str] = None
    bio: Optional[str] = None
    instagram: Optional[str] = None
    motto: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(None, alias="fullName")
    tingkatan: Optional[str] = None
    jabatan: Optional[str] = None
    bio: Optional[str] = None
    instagram: Optional[str] = None
    motto: Optional[str] = None

    class Config:
        populate_by_name = True

class MemberUpdate(BaseModel):
    id: Optional[str] = None
    role: Optional[str] = None
    tingkatan: Optional[str] = None
    jabatan: Optional[str] = None
