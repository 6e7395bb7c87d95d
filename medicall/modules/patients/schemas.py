# medicall/modules/patients/schemas.py
"""Patients module Pydantic schemas."""

from typing import List, Optional
from datetime import date, datetime
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from medicall.common.schemas import CamelModel, UserSummary, blank_to_none, clean_string_list
from medicall.models.models import PatientStatus


# ============================================================================
# EMBEDDED DOCUMENTS
# ============================================================================

class Medication(CamelModel):
    """One prescribed medication. Lives only inside its patient."""
    name: str = Field(..., min_length=1)
    dosage: str = Field(..., min_length=1)
    times: List[str]
    notes: Optional[str] = None
    prescribing_doctor: Optional[str] = None
    pharmacy: Optional[str] = None
    prescription_number: Optional[str] = None
    refill_date: Optional[date] = None
    side_effects: List[str] = []
    drug_interactions: List[str] = []
    instructions: Optional[str] = None
    is_active: bool = True

    @field_validator("times")
    @classmethod
    def require_a_time(cls, value: List[str]) -> List[str]:
        times = clean_string_list(value)
        if not times:
            raise ValueError("At least one medication time is required")
        return times

    @field_validator("side_effects", "drug_interactions")
    @classmethod
    def drop_blank_entries(cls, value: List[str]) -> List[str]:
        return clean_string_list(value)

    @field_validator("refill_date", mode="before")
    @classmethod
    def empty_date_is_none(cls, value):
        return blank_to_none(value)


class EmergencyContact(CamelModel):
    name: str = Field(..., min_length=1)
    relationship: str = Field(..., min_length=1)
    phone_number: str = Field(..., min_length=1)


class InsuranceInfo(CamelModel):
    provider: str = Field(..., min_length=1)
    policy_number: str = Field(..., min_length=1)
    group_number: Optional[str] = None


class PrimaryCarePhysician(CamelModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_is_none(cls, value):
        return blank_to_none(value)


class ReminderPreferences(CamelModel):
    sms: bool = True
    voice_call: bool = True
    email: bool = False


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================

class _PatientRules(CamelModel):
    """Field rules shared by the create/replace and the patch schemas."""

    @field_validator("email", check_fields=False)
    @classmethod
    def lowercase_email(cls, value):
        return value.lower() if value else value

    @field_validator(
        "parent_guardian_number", "address", "notes", "medical_history", "date_of_birth",
        mode="before", check_fields=False,
    )
    @classmethod
    def empty_to_none(cls, value):
        return blank_to_none(value)

    @field_validator("date_of_birth", check_fields=False)
    @classmethod
    def not_in_future(cls, value: Optional[date]) -> Optional[date]:
        if value and value > date.today():
            raise ValueError("Date of birth cannot be in the future")
        return value

    @field_validator(
        "emergency_contact", "insurance_info", "primary_care_physician",
        mode="before", check_fields=False,
    )
    @classmethod
    def untouched_group_is_absent(cls, value):
        # A form section left entirely blank means "not provided"; a partly
        # filled one is validated (and rejected) by its own schema.
        if isinstance(value, dict) and all(blank_to_none(v) is None for v in value.values()):
            return None
        return value

    @field_validator("medications", check_fields=False)
    @classmethod
    def require_a_medication(cls, value):
        if value is not None and len(value) == 0:
            raise ValueError("At least one medication is required")
        return value

    @field_validator("prescription_images", "allergies", check_fields=False)
    @classmethod
    def drop_blank_entries(cls, value):
        return clean_string_list(value)


class PatientCreateRequest(_PatientRules):
    """Full patient document, used for create and for full replace (PUT)."""
    name: str = Field(..., min_length=2)
    email: EmailStr
    mobile_number: str = Field(..., min_length=10)
    parent_guardian_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
    emergency_contact: Optional[EmergencyContact] = None
    medications: List[Medication]
    reminder_preferences: ReminderPreferences = Field(default_factory=ReminderPreferences)
    status: PatientStatus = PatientStatus.ACTIVE
    avatar: str = ""
    notes: Optional[str] = None
    prescription_images: List[str] = []
    last_reminder_sent: Optional[datetime] = None
    next_reminder_due: Optional[datetime] = None
    allergies: List[str] = []
    medical_history: Optional[str] = None
    insurance_info: Optional[InsuranceInfo] = None
    primary_care_physician: Optional[PrimaryCarePhysician] = None


class PatientUpdateRequest(_PatientRules):
    """Field patch: only the fields present in the body are applied."""
    name: Optional[str] = Field(None, min_length=2)
    email: Optional[EmailStr] = None
    mobile_number: Optional[str] = Field(None, min_length=10)
    parent_guardian_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
    emergency_contact: Optional[EmergencyContact] = None
    medications: Optional[List[Medication]] = None
    reminder_preferences: Optional[ReminderPreferences] = None
    status: Optional[PatientStatus] = None
    avatar: Optional[str] = None
    notes: Optional[str] = None
    prescription_images: Optional[List[str]] = None
    last_reminder_sent: Optional[datetime] = None
    next_reminder_due: Optional[datetime] = None
    allergies: Optional[List[str]] = None
    medical_history: Optional[str] = None
    insurance_info: Optional[InsuranceInfo] = None
    primary_care_physician: Optional[PrimaryCarePhysician] = None


class PatientStatusRequest(CamelModel):
    status: PatientStatus


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class PatientResponse(CamelModel):
    """Full patient document with its creator expanded."""
    id: UUID
    name: str
    email: str
    mobile_number: str
    parent_guardian_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
    emergency_contact: Optional[EmergencyContact] = None
    medications: List[Medication]
    reminder_preferences: ReminderPreferences
    status: PatientStatus
    avatar: str = ""
    notes: Optional[str] = None
    prescription_images: List[str] = []
    last_reminder_sent: Optional[datetime] = None
    next_reminder_due: Optional[datetime] = None
    allergies: List[str] = []
    medical_history: Optional[str] = None
    insurance_info: Optional[InsuranceInfo] = None
    primary_care_physician: Optional[PrimaryCarePhysician] = None
    created_by: Optional[UserSummary] = None
    created_at: datetime
    updated_at: datetime


class PatientEnvelope(CamelModel):
    patient: PatientResponse


class PatientListResponse(CamelModel):
    patients: List[PatientResponse]
