from fastapi import APIRouter, File, Form, Request, UploadFile, status
from typing import Optional

from app.config import get_settings
from app.errors import ValidationError
from app.rate_limit import limiter
from app.schemas import MessageOut
from app.services import application_service
from app.utils.uploads import has_file, save_upload

settings = get_settings()

router = APIRouter(tags=["applications"])


@router.post("/apply", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
@router.post("/api/apply", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.UPLOAD_RATE_LIMIT)
async def apply(
    request: Request,
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    resumeLink: Optional[str] = Form(None),
    coverLetter: Optional[str] = Form(None),
    resumeFile: Optional[UploadFile] = File(None),
):
    """Submit a job application with a résumé link and/or a résumé file."""
    file_present = has_file(resumeFile)
    if application_service.missing_required(name, email, resumeLink, file_present):
        raise ValidationError()

    stored_file = await save_upload(resumeFile) if file_present else None

    await application_service.submit_application(
        name=name,
        email=email,
        resume_link=resumeLink,
        cover_letter=coverLetter,
        resume_file=stored_file,
    )
    return MessageOut(message="Application submitted successfully!")
