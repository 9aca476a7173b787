import time
from pathlib import Path

from fastapi import UploadFile

from app.config import get_settings
from app.errors import PersistenceError
from app.utils.logger import get_logger

logger = get_logger("uploads")


def has_file(upload: UploadFile | None) -> bool:
    return upload is not None and bool(upload.filename)


def upload_reference(file_name: str) -> str:
    """Path of a stored upload as handed to the attachment service, e.g. ``uploads/<name>``."""
    return (Path(get_settings().UPLOAD_DIR) / file_name).as_posix()


def stored_name(original_name: str) -> str:
    """``<epoch_ms>-<original name>``, directory parts stripped."""
    base = Path(original_name or "file").name or "file"
    return f"{int(time.time() * 1000)}-{base}"


async def save_upload(upload: UploadFile, detail_key: str = "message") -> str:
    """Write an uploaded file to UPLOAD_DIR and return its stored file name."""
    settings = get_settings()
    upload_dir = Path(settings.UPLOAD_DIR)
    file_name = stored_name(upload.filename)
    local_file_path = upload_dir / file_name

    try:
        upload_dir.mkdir(parents=True, exist_ok=True)
        file_bytes = await upload.read()
        with open(local_file_path, "wb") as f:
            f.write(file_bytes)
    except OSError as e:
        logger.error(f"Failed to save upload locally: {e}", exc_info=True)
        raise PersistenceError(detail_key=detail_key, log_message=f"Failed to save upload {file_name}")

    logger.info(f"Saved upload to: {local_file_path}")
    return file_name
