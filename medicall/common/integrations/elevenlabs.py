# medicall/common/integrations/elevenlabs.py
"""Client for the ElevenLabs instant voice-cloning API."""

import logging
from typing import Optional

import httpx

from medicall.common.config import settings
from medicall.common.utils.exceptions import UpstreamError
from medicall.common.utils.global_messages import GlobalMessages

logger = logging.getLogger(__name__)


class ElevenLabsClient:

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.ELEVENLABS_API_KEY
        self.base_url = (base_url or settings.ELEVENLABS_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.EXTERNAL_TIMEOUT_SECONDS

    @property
    def headers(self) -> dict:
        return {"xi-api-key": self.api_key}

    async def clone_voice(
        self,
        filename: str,
        content: bytes,
        content_type: Optional[str],
        name: str,
        description: Optional[str] = None,
    ) -> str:
        """
        Create a voice from one audio sample.

        Returns:
            The provider's voice id
        """
        data = {"name": name}
        if description:
            data["description"] = description
        files = {"files": (filename, content, content_type or "application/octet-stream")}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/voices/add",
                    data=data,
                    files=files,
                    headers=self.headers,
                )
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("ElevenLabs rejected voice clone: %s %s", e.response.status_code, e.response.text)
            raise UpstreamError(GlobalMessages.VOICE_CLONE_FAILED)
        except httpx.HTTPError as e:
            logger.error("ElevenLabs voice clone request failed: %s", e)
            raise UpstreamError(GlobalMessages.VOICE_CLONE_FAILED)
        except ValueError as e:
            logger.error("ElevenLabs returned an unreadable voice clone body: %s", e)
            raise UpstreamError(GlobalMessages.VOICE_CLONE_FAILED)

        voice_id = body.get("voice_id") if isinstance(body, dict) else None
        if not voice_id:
            logger.error("ElevenLabs response carried no voice_id: %s", body)
            raise UpstreamError(GlobalMessages.VOICE_CLONE_FAILED)
        return voice_id

    async def delete_voice(self, voice_id: str) -> None:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.delete(f"{self.base_url}/voices/{voice_id}", headers=self.headers)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("ElevenLabs voice delete failed for %s: %s", voice_id, e)
            raise UpstreamError(GlobalMessages.VOICE_REMOVE_FAILED)


elevenlabs_client = ElevenLabsClient()
