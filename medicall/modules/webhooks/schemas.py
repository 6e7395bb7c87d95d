# medicall/modules/webhooks/schemas.py
"""Payloads posted by the voice-call provider. Field names are the provider's (snake_case)."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class BlandAIWebhookPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    call_id: str
    status: Optional[str] = None
    transcript: Optional[str] = None
    duration: Optional[float] = None
    metadata: Optional[Dict[str, Any]] = None
