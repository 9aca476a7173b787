from typing import List

from app.errors import PersistenceError
from app.models import Internship
from app.schemas import InternshipCreate, InternshipOut
from app.utils.logger import get_logger

logger = get_logger("internships")


def to_public(internship: Internship) -> InternshipOut:
    """Map stored field names to the public listing shape."""
    return InternshipOut(
        id=str(internship.id),
        company=internship.company_name,
        role=internship.internship_title,
        location=internship.location,
        startDate=internship.start_date,
        duration=internship.duration,
        stipend=internship.stipend,
    )


async def list_internships() -> List[InternshipOut]:
    """All internships in store order."""
    try:
        internships = await Internship.find_all().to_list()
    except Exception as e:
        raise PersistenceError(detail_key="error", log_message=f"Failed to list internships: {e}") from e
    return [to_public(i) for i in internships]


async def create_internship(data: InternshipCreate) -> InternshipOut:
    internship = Internship(**data.model_dump())
    try:
        await internship.insert()
    except Exception as e:
        raise PersistenceError(detail_key="error", log_message=f"Failed to store internship: {e}") from e
    logger.info(f"Internship stored: {internship.id} ({internship.company_name})")
    return to_public(internship)
