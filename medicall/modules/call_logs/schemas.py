# medicall/modules/call_logs/schemas.py
"""Call logs module Pydantic schemas."""

from enum import Enum
from typing import List, Optional
from datetime import date, datetime
from uuid import UUID

from pydantic import Field, field_validator

from medicall.common.schemas import (
    AgentSummary, CamelModel, PatientSummary, blank_to_none,
)
from medicall.models.models import CallOutcome, CallType


class TransferStatus(str, Enum):
    PENDING = "pending"
    CONNECTED = "connected"
    COMPLETED = "completed"


class EmergencyTransferDetails(CamelModel):
    transferred_at: Optional[datetime] = None
    emergency_number: Optional[str] = None
    status: TransferStatus = TransferStatus.PENDING


class AppointmentDetails(CamelModel):
    requested_date: Optional[date] = None
    requested_time: Optional[str] = None
    symptoms: Optional[str] = None
    booking: Optional[UUID] = None


class ReminderDetails(CamelModel):
    medication_name: Optional[str] = None
    dosage: Optional[str] = None
    next_due: Optional[datetime] = None


class _CallLogRules(CamelModel):

    @field_validator(
        "duration", "transcript", "audio_recording", "bland_ai_call_id", "remarks",
        "follow_up_date", "call_date_time",
        mode="before", check_fields=False,
    )
    @classmethod
    def empty_to_none(cls, value):
        return blank_to_none(value)


class CallLogCreateRequest(_CallLogRules):
    """The agent is always the caller and is not accepted from the body."""
    patient_id: UUID
    call_type: CallType
    outcome: CallOutcome
    duration: Optional[float] = Field(None, ge=0)
    transcript: Optional[str] = None
    audio_recording: Optional[str] = None
    call_date_time: Optional[datetime] = None
    bland_ai_call_id: Optional[str] = None
    emergency_transfer_details: Optional[EmergencyTransferDetails] = None
    appointment_details: Optional[AppointmentDetails] = None
    reminder_details: Optional[ReminderDetails] = None
    remarks: Optional[str] = None
    follow_up_required: bool = False
    follow_up_date: Optional[datetime] = None


class CallLogUpdateRequest(_CallLogRules):
    call_type: Optional[CallType] = None
    outcome: Optional[CallOutcome] = None
    duration: Optional[float] = Field(None, ge=0)
    transcript: Optional[str] = None
    audio_recording: Optional[str] = None
    call_date_time: Optional[datetime] = None
    emergency_transfer_details: Optional[EmergencyTransferDetails] = None
    appointment_details: Optional[AppointmentDetails] = None
    reminder_details: Optional[ReminderDetails] = None
    remarks: Optional[str] = None
    follow_up_required: Optional[bool] = None
    follow_up_date: Optional[datetime] = None


class CallLogResponse(CamelModel):
    id: UUID
    patient_id: Optional[UUID] = None
    agent_id: Optional[UUID] = None
    patient: Optional[PatientSummary] = None
    agent: Optional[AgentSummary] = None
    call_type: CallType
    outcome: CallOutcome
    duration: Optional[float] = None
    transcript: Optional[str] = None
    audio_recording: Optional[str] = None
    call_date_time: datetime
    bland_ai_call_id: Optional[str] = None
    emergency_transfer_details: Optional[EmergencyTransferDetails] = None
    appointment_details: Optional[AppointmentDetails] = None
    reminder_details: Optional[ReminderDetails] = None
    remarks: Optional[str] = None
    follow_up_required: bool
    follow_up_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class CallLogEnvelope(CamelModel):
    call_log: CallLogResponse


class CallLogListResponse(CamelModel):
    call_logs: List[CallLogResponse]


# ============================================================================
# DISPATCH
# ============================================================================

class DispatchCallRequest(CamelModel):
    patient_id: UUID
    call_type: CallType = CallType.REMINDER
    booking_id: Optional[UUID] = None
    medication_index: int = Field(0, ge=0)

    @field_validator("call_type")
    @classmethod
    def only_reminders(cls, value: CallType) -> CallType:
        if value not in (CallType.REMINDER, CallType.APPOINTMENT):
            raise ValueError("Only reminder and appointment calls can be dispatched")
        return value


class DispatchCallResponse(CamelModel):
    call_id: str
    message: str
