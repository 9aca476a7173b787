import httpx

from app.config import get_settings
from app.errors import UpstreamCallError


async def forward_attachment(*, user_id: str | None, attachment_path: str) -> str:
    """
    Register a stored attachment with the attachment service.
    - Returns the URL the service hands back.
    """
    settings = get_settings()
    url = f"{settings.API_URL.rstrip('/')}/api/uploadAttachment"
    payload = {"userId": user_id, "attachment": attachment_path}

    try:
        async with httpx.AsyncClient(timeout=settings.API_TIMEOUT_SECONDS) as client:
            resp = await client.post(url, json=payload)
    except httpx.HTTPError as e:
        raise UpstreamCallError(detail_key="error", log_message=f"Upload failed: {e}") from e

    if resp.status_code >= 400:
        raise UpstreamCallError(detail_key="error", log_message=f"Upload failed {resp.status_code}: {resp.text}")

    try:
        return resp.json()["url"]
    except (ValueError, KeyError, TypeError) as e:
        raise UpstreamCallError(detail_key="error", log_message=f"Upload failed: bad response {resp.text!r}") from e
