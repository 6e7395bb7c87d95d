# medicall/modules/doctors/schemas.py
"""Doctors module Pydantic schemas."""

import re
from enum import Enum
from typing import Dict, List, Optional
from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field, field_validator, model_validator

from medicall.common.schemas import CamelModel, UserSummary, blank_to_none, clean_string_list
from medicall.models.models import AvailabilityStatus, VoiceCloneStatus

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class DayOfWeek(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class TimeSlot(CamelModel):
    """A working window on one day, ``HH:MM`` 24-hour times."""
    start: str
    end: str
    is_available: bool = True

    @field_validator("start", "end")
    @classmethod
    def check_time_format(cls, value: str) -> str:
        if not TIME_PATTERN.match(value):
            raise ValueError("Time must be in HH:MM format")
        return value

    @model_validator(mode="after")
    def check_order(self):
        # zero-padded HH:MM compares correctly as text
        if self.start >= self.end:
            raise ValueError("Slot start must be before its end")
        return self


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================

class _DoctorRules(CamelModel):
    """Field rules shared by the create and update schemas."""

    @field_validator("email", check_fields=False)
    @classmethod
    def lowercase_email(cls, value):
        return value.lower() if value else value

    @field_validator("bio", "consultation_fee", mode="before", check_fields=False)
    @classmethod
    def empty_to_none(cls, value):
        return blank_to_none(value)

    @field_validator("experience", mode="before", check_fields=False)
    @classmethod
    def empty_experience(cls, value):
        if isinstance(value, str) and not value.strip():
            return 0
        return value

    @field_validator("qualifications", check_fields=False)
    @classmethod
    def require_a_qualification(cls, value):
        if value is None:
            return value
        qualifications = clean_string_list(value)
        if not qualifications:
            raise ValueError("At least one qualification is required")
        return qualifications


class DoctorCreateRequest(_DoctorRules):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone_number: str = Field(..., min_length=10)
    specialty: str = Field(..., min_length=1)
    department: str = Field(..., min_length=1)
    license_number: str = Field(..., min_length=1)
    bio: Optional[str] = None
    avatar: str = ""
    availability_status: AvailabilityStatus = AvailabilityStatus.OFFLINE
    schedule: Dict[DayOfWeek, List[TimeSlot]] = {}
    consultation_fee: Optional[float] = Field(None, ge=0)
    experience: int = Field(0, ge=0)
    qualifications: List[str]


class DoctorUpdateRequest(_DoctorRules):
    """Partial update: only the fields present in the body are applied."""
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(None, min_length=10)
    specialty: Optional[str] = Field(None, min_length=1)
    department: Optional[str] = Field(None, min_length=1)
    license_number: Optional[str] = Field(None, min_length=1)
    bio: Optional[str] = None
    avatar: Optional[str] = None
    availability_status: Optional[AvailabilityStatus] = None
    schedule: Optional[Dict[DayOfWeek, List[TimeSlot]]] = None
    consultation_fee: Optional[float] = Field(None, ge=0)
    experience: Optional[int] = Field(None, ge=0)
    qualifications: Optional[List[str]] = None
    is_active: Optional[bool] = None


class DoctorStatusRequest(CamelModel):
    availability_status: AvailabilityStatus


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class DoctorResponse(CamelModel):
    id: UUID
    name: str
    email: str
    phone_number: str
    specialty: str
    department: str
    license_number: str
    bio: Optional[str] = None
    avatar: str = ""
    availability_status: AvailabilityStatus
    schedule: Dict[DayOfWeek, List[TimeSlot]] = {}
    consultation_fee: Optional[float] = None
    experience: int = 0
    qualifications: List[str] = []
    voice_id: Optional[str] = None
    voice_clone_status: Optional[VoiceCloneStatus] = None
    is_active: bool
    created_by: Optional[UserSummary] = None
    created_at: datetime
    updated_at: datetime


class DoctorEnvelope(CamelModel):
    doctor: DoctorResponse


class DoctorListResponse(CamelModel):
    doctors: List[DoctorResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class DoctorMessageResponse(CamelModel):
    """Action acknowledgement carrying the doctor's new state."""
    message: str
    doctor: DoctorResponse
