# medicall/modules/bookings/schemas.py
"""Bookings module Pydantic schemas."""

from typing import List, Optional
from datetime import date, datetime
from uuid import UUID

from pydantic import Field, field_validator

from medicall.common.schemas import (
    CamelModel, DoctorSummary, PatientSummary, UserSummary, blank_to_none,
)
from medicall.models.models import BookingStatus, ConsultationType, PaymentStatus
from medicall.modules.doctors.schemas import TIME_PATTERN


class _BookingRules(CamelModel):

    @field_validator("appointment_time", check_fields=False)
    @classmethod
    def check_time_format(cls, value):
        if value is not None and not TIME_PATTERN.match(value):
            raise ValueError("Time must be in HH:MM format")
        return value

    @field_validator("fee", "symptoms", "notes", "cancel_reason", mode="before", check_fields=False)
    @classmethod
    def empty_to_none(cls, value):
        return blank_to_none(value)


class BookingCreateRequest(_BookingRules):
    patient_id: UUID
    doctor_id: UUID
    appointment_date: date
    appointment_time: str
    duration: int = Field(30, ge=15)
    status: BookingStatus = BookingStatus.SCHEDULED
    consultation_type: ConsultationType = ConsultationType.IN_PERSON
    symptoms: Optional[str] = None
    notes: Optional[str] = None
    fee: Optional[float] = Field(None, ge=0)
    payment_status: PaymentStatus = PaymentStatus.PENDING


class BookingUpdateRequest(_BookingRules):
    """Partial update: only the fields present in the body are applied."""
    patient_id: Optional[UUID] = None
    doctor_id: Optional[UUID] = None
    appointment_date: Optional[date] = None
    appointment_time: Optional[str] = None
    duration: Optional[int] = Field(None, ge=15)
    status: Optional[BookingStatus] = None
    consultation_type: Optional[ConsultationType] = None
    symptoms: Optional[str] = None
    notes: Optional[str] = None
    fee: Optional[float] = Field(None, ge=0)
    payment_status: Optional[PaymentStatus] = None
    reminder_sent: Optional[bool] = None
    cancel_reason: Optional[str] = None


class BookingStatusRequest(_BookingRules):
    status: BookingStatus
    cancel_reason: Optional[str] = None


class PaymentStatusRequest(CamelModel):
    payment_status: PaymentStatus


class BookingResponse(CamelModel):
    id: UUID
    patient_id: Optional[UUID] = None
    doctor_id: Optional[UUID] = None
    patient: Optional[PatientSummary] = None
    doctor: Optional[DoctorSummary] = None
    appointment_date: date
    appointment_time: str
    duration: int
    status: BookingStatus
    consultation_type: ConsultationType
    symptoms: Optional[str] = None
    notes: Optional[str] = None
    fee: Optional[float] = None
    payment_status: PaymentStatus
    reminder_sent: bool
    cancel_reason: Optional[str] = None
    created_by: Optional[UserSummary] = None
    created_at: datetime
    updated_at: datetime


class BookingEnvelope(CamelModel):
    booking: BookingResponse


class BookingListResponse(CamelModel):
    bookings: List[BookingResponse]
