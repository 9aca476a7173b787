from beanie import Document
from typing import Any, Optional


class Internship(Document):
    """Internship listing as stored by the admin tooling.

    Records are written by more than one tool, so every field is optional and
    date/money fields keep whatever type was stored.
    """
    company_name: Optional[str] = None
    internship_title: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[Any] = None
    duration: Optional[Any] = None
    stipend: Optional[Any] = None
    description: Optional[str] = None

    class Settings:
        name = "internships"
