# medicall/common/integrations/bland_ai.py
"""Client for the Bland AI outbound voice-call API."""

import logging
from typing import Any, Dict, Optional

import httpx

from medicall.common.config import settings
from medicall.common.utils.exceptions import UpstreamError
from medicall.common.utils.global_messages import GlobalMessages

logger = logging.getLogger(__name__)


class BlandAIClient:
    """Places reminder calls. Call outcomes come back through the webhook."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        voice: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.BLAND_AI_API_KEY
        self.base_url = (base_url or settings.BLAND_AI_BASE_URL).rstrip("/")
        self.voice = voice or settings.BLAND_AI_VOICE
        self.timeout = timeout or settings.EXTERNAL_TIMEOUT_SECONDS

    @property
    def webhook_url(self) -> str:
        return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/bland-ai/webhook"

    async def make_call(self, phone_number: str, script: str, metadata: Dict[str, Any]) -> str:
        """
        Start an outbound call.

        Args:
            phone_number: Number to dial
            script: Task text the voice agent reads
            metadata: Returned verbatim in the webhook so the outcome can be
                matched back to a patient and agent

        Returns:
            The provider's call id
        """
        payload = {
            "phone_number": phone_number,
            "task": script,
            "voice": self.voice,
            "reduce_latency": True,
            "webhook": self.webhook_url,
            "metadata": metadata,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/calls",
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException:
            logger.error("Bland AI call to %s timed out", phone_number)
            raise UpstreamError(GlobalMessages.CALL_DISPATCH_FAILED)
        except httpx.HTTPStatusError as e:
            logger.error("Bland AI rejected call: %s %s", e.response.status_code, e.response.text)
            raise UpstreamError(GlobalMessages.CALL_DISPATCH_FAILED)
        except httpx.HTTPError as e:
            logger.error("Bland AI request failed: %s", e)
            raise UpstreamError(GlobalMessages.CALL_DISPATCH_FAILED)
        except ValueError as e:
            logger.error("Bland AI returned an unreadable call body: %s", e)
            raise UpstreamError(GlobalMessages.CALL_DISPATCH_FAILED)

        call_id = data.get("call_id") if isinstance(data, dict) else None
        if not call_id:
            logger.error("Bland AI response carried no call_id: %s", data)
            raise UpstreamError(GlobalMessages.CALL_DISPATCH_FAILED)
        return call_id


def generate_medication_reminder_script(
    patient_name: str,
    medication_name: str,
    dosage: str,
    time: str,
) -> str:
    return (
        f"Hello {patient_name}, this is a friendly reminder from your healthcare provider. "
        f"It's time to take your {medication_name} medication, {dosage}. "
        f"The scheduled time is {time}. "
        "Please take your medication as prescribed by your doctor. "
        "If you have any questions or concerns, please contact your healthcare provider. "
        "If this is an emergency, please hang up and dial 911 immediately. "
        "Thank you and have a great day!"
    )


def generate_appointment_reminder_script(
    patient_name: str,
    doctor_name: str,
    appointment_date: str,
    appointment_time: str,
) -> str:
    return (
        f"Hello {patient_name}, this is a reminder about your upcoming appointment with Dr. {doctor_name} "
        f"scheduled for {appointment_date} at {appointment_time}. "
        "Please make sure to arrive 15 minutes early and bring your insurance card and ID. "
        "If you need to reschedule or cancel, please call our office as soon as possible. "
        "If this is an emergency, please hang up and dial 911 immediately. "
        "Thank you!"
    )


bland_ai_client = BlandAIClient()
