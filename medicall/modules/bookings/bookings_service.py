# medicall/modules/bookings/bookings_service.py
"""Appointment bookings between patients and doctors."""

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from medicall.common.utils.exceptions import NotFoundError, ValidationError
from medicall.common.utils.global_messages import GlobalMessages
from medicall.models.models import (
    Booking, BookingStatus, Doctor, Patient, PaymentStatus, User,
)
from medicall.modules.bookings.schemas import BookingCreateRequest, BookingUpdateRequest

logger = logging.getLogger(__name__)

NON_NULLABLE_FIELDS = {
    "appointment_date", "appointment_time", "duration", "status",
    "consultation_type", "payment_status", "reminder_sent",
}


def _booking_query():
    return select(Booking).options(
        selectinload(Booking.patient),
        selectinload(Booking.doctor),
        selectinload(Booking.created_by),
    )


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


async def _require_active_doctor(db: AsyncSession, doctor_id: UUID) -> Doctor:
    doctor = await db.get(Doctor, doctor_id)
    if not doctor or not doctor.is_active:
        raise NotFoundError(GlobalMessages.DOCTOR_NOT_FOUND)
    return doctor


async def get_booking(db: AsyncSession, booking_id: UUID) -> Booking:
    result = await db.execute(
        _booking_query()
        .where(Booking.id == booking_id)
        .execution_options(populate_existing=True)
    )
    booking = result.scalars().first()
    if not booking:
        raise NotFoundError(GlobalMessages.BOOKING_NOT_FOUND)
    return booking


async def list_bookings(
    db: AsyncSession,
    status: Optional[str] = None,
    payment_status: Optional[str] = None,
    appointment_date: Optional[date] = None,
    doctor_id: Optional[UUID] = None,
    patient_id: Optional[UUID] = None,
) -> List[Booking]:
    """List bookings in calendar order (date, then time)."""
    query = _booking_query()

    if status and status != "all":
        query = query.where(Booking.status == _parse_enum(BookingStatus, status, "status"))
    if payment_status and payment_status != "all":
        query = query.where(
            Booking.payment_status == _parse_enum(PaymentStatus, payment_status, "paymentStatus")
        )
    if appointment_date:
        query = query.where(Booking.appointment_date == appointment_date)
    if doctor_id:
        query = query.where(Booking.doctor_id == doctor_id)
    if patient_id:
        query = query.where(Booking.patient_id == patient_id)

    result = await db.execute(query.order_by(Booking.appointment_date, Booking.appointment_time))
    return list(result.scalars().all())


async def create_booking(db: AsyncSession, current_user: User, data: BookingCreateRequest) -> Booking:
    """Book a patient with an active doctor. The fee falls back to the doctor's fee."""
    await _require_patient(db, data.patient_id)
    doctor = await _require_active_doctor(db, data.doctor_id)

    values = data.model_dump()
    if values["fee"] is None:
        values["fee"] = doctor.consultation_fee

    booking = Booking(**values, created_by_id=current_user.id)
    db.add(booking)
    await db.commit()

    logger.info("Booking %s created for patient %s with doctor %s", booking.id, data.patient_id, doctor.id)
    return await get_booking(db, booking.id)


async def update_booking(db: AsyncSession, booking_id: UUID, data: BookingUpdateRequest) -> Booking:
    booking = await get_booking(db, booking_id)
    update_data = data.model_dump(exclude_unset=True)

    if update_data.get("patient_id"):
        await _require_patient(db, update_data["patient_id"])
    if update_data.get("doctor_id") and update_data["doctor_id"] != booking.doctor_id:
        await _require_active_doctor(db, update_data["doctor_id"])

    for key, value in update_data.items():
        if value is None and (key in NON_NULLABLE_FIELDS or key in ("patient_id", "doctor_id")):
            continue
        setattr(booking, key, value)

    await db.commit()
    return await get_booking(db, booking_id)


async def update_booking_status(
    db: AsyncSession,
    booking_id: UUID,
    status: BookingStatus,
    cancel_reason: Optional[str] = None,
) -> Booking:
    """Move a booking to a new status; a cancel reason is kept only for cancellations."""
    booking = await get_booking(db, booking_id)
    booking.status = status
    booking.cancel_reason = cancel_reason if status == BookingStatus.CANCELLED else None
    await db.commit()
    logger.info("Booking %s status set to %s", booking_id, status.value)
    return await get_booking(db, booking_id)


async def update_payment_status(db: AsyncSession, booking_id: UUID, payment_status: PaymentStatus) -> Booking:
    booking = await get_booking(db, booking_id)
    booking.payment_status = payment_status
    await db.commit()
    return await get_booking(db, booking_id)


async def delete_booking(db: AsyncSession, booking_id: UUID) -> None:
    booking = await get_booking(db, booking_id)
    await db.delete(booking)
    await db.commit()
    logger.info("Booking %s deleted", booking_id)
