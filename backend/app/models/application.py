from beanie import Document, Indexed
from pydantic import Field
from datetime import datetime, timezone
from typing import Optional


class JobApplication(Document):
    """Job application submitted through the public form."""
    name: str
    email: Indexed(str)
    resumeLink: Optional[str] = None
    coverLetter: Optional[str] = None
    # Stored file name under UPLOAD_DIR, or None when only a link was given
    resumeFile: Optional[str] = None
    createdAt: Indexed(datetime) = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Settings:
        name = "jobapplications"
