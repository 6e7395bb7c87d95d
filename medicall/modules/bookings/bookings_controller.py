# medicall/modules/bookings/bookings_controller.py

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from medicall.auth.dependencies import get_current_user
from medicall.common.database.database import get_db_session
from medicall.common.schemas import MessageResponse
from medicall.common.utils.global_messages import GlobalMessages
from medicall.models.models import User
from medicall.modules.bookings import bookings_service, schemas

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("", response_model=schemas.BookingListResponse)
async def list_bookings(
    status: Optional[str] = Query(None, description="scheduled, completed, cancelled, no-show or all"),
    payment_status: Optional[str] = Query(None, alias="paymentStatus"),
    appointment_date: Optional[date] = Query(None, alias="date", description="Exact day, YYYY-MM-DD"),
    doctor_id: Optional[UUID] = Query(None, alias="doctorId"),
    patient_id: Optional[UUID] = Query(None, alias="patientId"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """List bookings ordered by appointment date and time."""
    bookings = await bookings_service.list_bookings(
        db, status, payment_status, appointment_date, doctor_id, patient_id
    )
    return schemas.BookingListResponse(bookings=bookings)


@router.post("", response_model=schemas.BookingEnvelope, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_data: schemas.BookingCreateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """
    Book an appointment.

    The patient must exist and the doctor must exist and be active.
    When **fee** is omitted the doctor's consultation fee is used.
    """
    booking = await bookings_service.create_booking(db, current_user, booking_data)
    return schemas.BookingEnvelope(booking=booking)


@router.get("/{booking_id}", response_model=schemas.BookingEnvelope)
async def get_booking(
    booking_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    booking = await bookings_service.get_booking(db, booking_id)
    return schemas.BookingEnvelope(booking=booking)


@router.put("/{booking_id}", response_model=schemas.BookingEnvelope)
async def update_booking(
    booking_id: UUID,
    booking_data: schemas.BookingUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    booking = await bookings_service.update_booking(db, booking_id, booking_data)
    return schemas.BookingEnvelope(booking=booking)


@router.patch("/{booking_id}/status", response_model=schemas.BookingEnvelope)
async def update_booking_status(
    booking_id: UUID,
    status_data: schemas.BookingStatusRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    booking = await bookings_service.update_booking_status(
        db, booking_id, status_data.status, status_data.cancel_reason
    )
    return schemas.BookingEnvelope(booking=booking)


@router.patch("/{booking_id}/payment-status", response_model=schemas.BookingEnvelope)
async def update_payment_status(
    booking_id: UUID,
    payment_data: schemas.PaymentStatusRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    booking = await bookings_service.update_payment_status(db, booking_id, payment_data.payment_status)
    return schemas.BookingEnvelope(booking=booking)


@router.delete("/{booking_id}", response_model=MessageResponse)
async def delete_booking(
    booking_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    await bookings_service.delete_booking(db, booking_id)
    return MessageResponse(message=GlobalMessages.BOOKING_DELETED)
