from typing import Any, Optional

import httpx

from app.errors import UpstreamCallError
from app.utils.logger import get_logger

logger = get_logger("chat.forwarder")


class MessageForwarder:
    """Stores chat messages through the external persistence service."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        retries: int = 0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.retries = max(0, retries)
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def forward(self, user_id: Any, mentor_id: Any, text: Any) -> None:
        """POST the message to ``/api/storeMessage``.

        Raises ``UpstreamCallError`` once every attempt has failed.
        """
        url = f"{self.base_url}/api/storeMessage"
        payload = {"userId": user_id, "mentorId": mentor_id, "text": text}

        last_error = ""
        for attempt in range(1, self.retries + 2):
            try:
                resp = await self._client.post(url, json=payload)
            except httpx.HTTPError as e:
                last_error = f"{type(e).__name__}: {e}"
            else:
                if resp.status_code < 400:
                    return
                last_error = f"status {resp.status_code}: {resp.text}"
            if attempt <= self.retries:
                logger.debug(f"Store message attempt {attempt} failed ({last_error}); retrying")

        raise UpstreamCallError(log_message=f"Error saving message: {last_error}")

    async def aclose(self) -> None:
        await self._client.aclose()
