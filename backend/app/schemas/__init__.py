from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional

# -------------------- Health --------------------


class HealthOut(BaseModel):
    status: str


# -------------------- Applications / Attachments --------------------


class MessageOut(BaseModel):
    message: str


class AttachmentOut(BaseModel):
    url: str


# -------------------- Internship Schemas --------------------


class InternshipCreate(BaseModel):
    company_name: str
    internship_title: str
    location: Optional[str] = None
    start_date: Optional[str] = None
    duration: Optional[str] = None
    stipend: Optional[str | int | float] = None
    description: Optional[str] = None


class InternshipOut(BaseModel):
    """Public listing shape (stored names are mapped in internship_service)."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    company: Optional[str] = None
    role: Optional[str] = None
    location: Optional[str] = None
    startDate: Optional[Any] = None
    duration: Optional[Any] = None
    stipend: Optional[Any] = None
