# medicall/modules/webhooks/webhooks_controller.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from medicall.common.database.database import get_db_session
from medicall.common.schemas import MessageResponse
from medicall.common.utils.global_messages import GlobalMessages
from medicall.modules.webhooks import webhooks_service, schemas

router = APIRouter(prefix="/bland-ai", tags=["webhooks"])


@router.post("/webhook", response_model=MessageResponse)
async def bland_ai_webhook(
    payload: schemas.BlandAIWebhookPayload,
    db: AsyncSession = Depends(get_db_session)
):
    """
    Receive a call result from Bland AI.

    Public: the provider calls this without a token. Payloads that match
    no call log and carry no patient/agent metadata are acknowledged and
    ignored.
    """
    await webhooks_service.process_bland_ai_webhook(db, payload)
    return MessageResponse(message=GlobalMessages.WEBHOOK_PROCESSED)
