# medicall/modules/call_logs/call_logs_service.py
"""Call history and outbound reminder call dispatch."""

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import desc
from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from medicall.common.integrations import bland_ai_client
from medicall.common.integrations.bland_ai import (
    generate_appointment_reminder_script, generate_medication_reminder_script,
)
from medicall.common.utils.exceptions import NotFoundError, ValidationError
from medicall.common.utils.global_messages import GlobalMessages
from medicall.models.models import (
    Booking, CallLog, CallOutcome, CallType, Patient, PatientStatus, User,
)
from medicall.modules.call_logs.schemas import (
    CallLogCreateRequest, CallLogUpdateRequest, DispatchCallRequest,
)

logger = logging.getLogger(__name__)

JSON_FIELDS = {"emergency_transfer_details", "appointment_details", "reminder_details"}
NON_NULLABLE_FIELDS = {"call_type", "outcome", "call_date_time", "follow_up_required"}


def _call_log_query():
    return select(CallLog).options(
        selectinload(CallLog.patient),
        selectinload(CallLog.agent),
    )


def _to_columns(data, **dump_kwargs) -> dict:
    values = data.model_dump(**dump_kwargs)
    values.update(data.model_dump(mode="json", include=JSON_FIELDS, **dump_kwargs))
    return values


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def _parse_enum(enum_cls, value: str, field: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(details=[{"field": field, "message": f"Invalid {field} '{value}'"}])


async def _require_patient(db: AsyncSession, patient_id: UUID) -> Patient:
    patient = await db.get(Patient, patient_id)
    if not patient:
        raise NotFoundError(GlobalMessages.PATIENT_NOT_FOUND)
    return patient


async def get_call_log(db: AsyncSession, call_log_id: UUID) -> CallLog:
    result = await db.execute(
        _call_log_query()
        .where(CallLog.id == call_log_id)
        .execution_options(populate_existing=True)
    )
    call_log = result.scalars().first()
    if not call_log:
        raise NotFoundError(GlobalMessages.CALL_LOG_NOT_FOUND)
    return call_log


async def list_call_logs(
    db: AsyncSession,
    outcome: Optional[str] = None,
    call_type: Optional[str] = None,
    patient_id: Optional[UUID] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[CallLog]:
    """
    List calls, most recent first.

    ``start_date`` and ``end_date`` are whole days, both inclusive, and
    each applies on its own.
    """
    query = _call_log_query()

    if outcome and outcome != "all":
        query = query.where(CallLog.outcome == _parse_enum(CallOutcome, outcome, "outcome"))
    if call_type and call_type != "all":
        query = query.where(CallLog.call_type == _parse_enum(CallType, call_type, "callType"))
    if patient_id:
        query = query.where(CallLog.patient_id == patient_id)
    if start_date:
        query = query.where(CallLog.call_date_time >= _start_of_day(start_date))
    if end_date:
        query = query.where(CallLog.call_date_time < _start_of_day(end_date + timedelta(days=1)))

    result = await db.execute(query.order_by(desc(CallLog.call_date_time)))
    return list(result.scalars().all())


async def create_call_log(db: AsyncSession, current_user: User, data: CallLogCreateRequest) -> CallLog:
    """Record a call handled by the current agent."""
    await _require_patient(db, data.patient_id)

    values = _to_columns(data)
    if values["call_date_time"] is None:
        values["call_date_time"] = datetime.now(timezone.utc)

    call_log = CallLog(**values, agent_id=current_user.id)
    db.add(call_log)
    await db.commit()

    logger.info("Call log %s recorded by %s", call_log.id, current_user.id)
    return await get_call_log(db, call_log.id)


async def update_call_log(db: AsyncSession, call_log_id: UUID, data: CallLogUpdateRequest) -> CallLog:
    call_log = await get_call_log(db, call_log_id)

    for key, value in _to_columns(data, exclude_unset=True).items():
        if value is None and key in NON_NULLABLE_FIELDS:
            continue
        setattr(call_log, key, value)

    await db.commit()
    return await get_call_log(db, call_log_id)


async def delete_call_log(db: AsyncSession, call_log_id: UUID) -> None:
    call_log = await get_call_log(db, call_log_id)
    await db.delete(call_log)
    await db.commit()


async def dispatch_call(db: AsyncSession, current_user: User, data: DispatchCallRequest) -> str:
    """
    Place an outbound reminder call through the voice provider.

    The call's outcome arrives later on the webhook, which files the call
    log using the metadata sent here. Returns the provider call id.
    """
    patient = await _require_patient(db, data.patient_id)

    if patient.status != PatientStatus.ACTIVE:
        raise ValidationError(GlobalMessages.PATIENT_NOT_ACTIVE)
    if not (patient.reminder_preferences or {}).get("voice_call", True):
        raise ValidationError(GlobalMessages.VOICE_CALLS_DISABLED)

    booking = None
    if data.call_type == CallType.APPOINTMENT:
        if not data.booking_id:
            raise ValidationError(details=[{"field": "bookingId", "message": GlobalMessages.BOOKING_REQUIRED}])
        result = await db.execute(
            select(Booking).options(selectinload(Booking.doctor)).where(Booking.id == data.booking_id)
        )
        booking = result.scalars().first()
        if not booking:
            raise NotFoundError(GlobalMessages.BOOKING_NOT_FOUND)
        if booking.patient_id != patient.id:
            raise ValidationError(GlobalMessages.BOOKING_PATIENT_MISMATCH)

        doctor_name = booking.doctor.name if booking.doctor else "your doctor"
        script = generate_appointment_reminder_script(
            patient.name,
            doctor_name,
            booking.appointment_date.strftime("%B %d, %Y"),
            booking.appointment_time,
        )
    else:
        medications = patient.medications or []
        if data.medication_index >= len(medications):
            raise ValidationError(
                details=[{"field": "medicationIndex", "message": GlobalMessages.MEDICATION_NOT_FOUND}]
            )
        medication = medications[data.medication_index]
        times = medication.get("times") or [""]
        script = generate_medication_reminder_script(
            patient.name, medication["name"], medication["dosage"], times[0]
        )

    metadata = {
        "patient_id": str(patient.id),
        "agent_id": str(current_user.id),
        "call_type": data.call_type.value,
        "patient_name": patient.name,
    }
    call_id = await bland_ai_client.make_call(patient.mobile_number, script, metadata)

    if booking is not None:
        booking.reminder_sent = True
    else:
        patient.last_reminder_sent = datetime.now(timezone.utc)
    await db.commit()

    logger.info("Dispatched %s call %s to patient %s", data.call_type.value, call_id, patient.id)
    return call_id
