from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class AgendaCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = Field(None, alias="startDate")
    start_time: Optional[str] = Field(None, alias="startTime")
    end_date: Optional[str] = Field(None, alias="endDate")
    end_time: Optional[str] = Field(None, alias="endTime")

    class Config:
        populate_by_name = True

class AgendaAuthor(BaseModel):
    name: Optional[str] = None
    role: Optional[str] = None

class AgendaResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    starts_at: datetime = Field(..., alias="startsAt")
    ends_at: Optional[datetime] = Field(None, alias="endsAt")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    author: Optional[AgendaAuthor] = None

    class Config:
        populate_by_name = True
