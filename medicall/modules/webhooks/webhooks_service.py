# medicall/modules/webhooks/webhooks_service.py
"""Reconciles provider call results with call logs."""

import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession

from medicall.models.models import CallLog, CallOutcome, CallType, Patient, User
from medicall.modules.webhooks.schemas import BlandAIWebhookPayload

logger = logging.getLogger(__name__)

# Provider statuses that map onto a call outcome
OUTCOME_BY_STATUS = {
    "completed": CallOutcome.COMPLETED,
    "no-answer": CallOutcome.NO_ANSWER,
    "busy": CallOutcome.BUSY,
}


def _as_uuid(value) -> Optional[UUID]:
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None


def _call_type(value) -> CallType:
    try:
        return CallType(value)
    except ValueError:
        return CallType.REMINDER


async def process_bland_ai_webhook(db: AsyncSession, payload: BlandAIWebhookPayload) -> Optional[CallLog]:
    """
    Upsert the call log for a finished provider call.

    An existing log with the same provider call id is updated. Otherwise a
    log is created when the metadata names an existing patient and agent.
    Anything else is ignored.

    Returns:
        The updated or created call log, or None when nothing changed
    """
    result = await db.execute(select(CallLog).where(CallLog.bland_ai_call_id == payload.call_id))
    call_log = result.scalars().first()

    if call_log:
        if payload.transcript is not None:
            call_log.transcript = payload.transcript
        if payload.duration is not None:
            call_log.duration = payload.duration
        if payload.status in OUTCOME_BY_STATUS:
            call_log.outcome = OUTCOME_BY_STATUS[payload.status]
        await db.commit()
        logger.info("Updated call log %s from provider call %s", call_log.id, payload.call_id)
        return call_log

    metadata = payload.metadata or {}
    patient_id = _as_uuid(metadata.get("patient_id"))
    agent_id = _as_uuid(metadata.get("agent_id"))
    if not patient_id or not agent_id:
        logger.info("Ignoring provider call %s with no patient/agent metadata", payload.call_id)
        return None

    if not await db.get(Patient, patient_id) or not await db.get(User, agent_id):
        logger.warning("Ignoring provider call %s: unknown patient or agent in metadata", payload.call_id)
        return None

    call_log = CallLog(
        patient_id=patient_id,
        agent_id=agent_id,
        call_type=_call_type(metadata.get("call_type")),
        outcome=CallOutcome.COMPLETED if payload.status == "completed" else CallOutcome.NO_ANSWER,
        duration=payload.duration,
        transcript=payload.transcript,
        bland_ai_call_id=payload.call_id,
        call_date_time=datetime.now(timezone.utc),
    )
    db.add(call_log)
    await db.commit()
    logger.info("Created call log %s from provider call %s", call_log.id, payload.call_id)
    return call_log
