from typing import Optional

from app.errors import PersistenceError
from app.models import JobApplication
from app.utils.logger import get_logger

logger = get_logger("applications")


def missing_required(name: Optional[str], email: Optional[str], resume_link: Optional[str], has_resume_file: bool) -> bool:
    """name, email and either a résumé link or a résumé file are required."""
    return not name or not email or (not resume_link and not has_resume_file)


async def submit_application(
    *,
    name: str,
    email: str,
    resume_link: Optional[str] = None,
    cover_letter: Optional[str] = None,
    resume_file: Optional[str] = None,
) -> JobApplication:
    application = JobApplication(
        name=name,
        email=email,
        resumeLink=resume_link or None,
        coverLetter=cover_letter or None,
        resumeFile=resume_file,
    )
    try:
        await application.insert()
    except Exception as e:
        raise PersistenceError(log_message=f"Failed to store application for {email}: {e}") from e

    logger.info(f"Application stored: {application.id} ({email})")
    return application
