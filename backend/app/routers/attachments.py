from fastapi import APIRouter, File, Form, Request, UploadFile
from typing import Optional

from app.config import get_settings
from app.errors import ValidationError
from app.rate_limit import limiter
from app.schemas import AttachmentOut
from app.services import attachment_service
from app.utils.logger import get_logger
from app.utils.uploads import has_file, save_upload, upload_reference

settings = get_settings()
logger = get_logger("routers.attachments")

router = APIRouter(tags=["attachments"])


@router.post("/uploadAttachment", response_model=AttachmentOut)
@limiter.limit(settings.UPLOAD_RATE_LIMIT)
async def upload_attachment(
    request: Request,
    userId: Optional[str] = Form(None),
    attachment: Optional[UploadFile] = File(None),
):
    """Store a chat attachment and relay the URL issued by the attachment service."""
    if not has_file(attachment):
        raise ValidationError("No file uploaded", detail_key="error")

    file_name = await save_upload(attachment, detail_key="error")
    url = await attachment_service.forward_attachment(
        user_id=userId,
        attachment_path=upload_reference(file_name),
    )
    logger.info(f"Attachment for {userId} registered: {url}")
    return AttachmentOut(url=url)
