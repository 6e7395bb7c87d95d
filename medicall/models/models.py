# medicall/models/models.py

import uuid
import enum

from sqlalchemy import (
    JSON, Boolean, Column, Date, Float, ForeignKey, Integer, String, Text,
    DateTime, Uuid, Enum as SAEnum, func,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


# ============================================================================
# ENUMS
# ============================================================================

class UserRole(str, enum.Enum):
    AGENT = "agent"
    ADMIN = "admin"
    SUPERVISOR = "supervisor"


class PatientStatus(str, enum.Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class AvailabilityStatus(str, enum.Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    ON_LEAVE = "on-leave"


class VoiceCloneStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class BookingStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


class ConsultationType(str, enum.Enum):
    IN_PERSON = "in-person"
    VIDEO = "video"
    PHONE = "phone"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class CallType(str, enum.Enum):
    REMINDER = "reminder"
    APPOINTMENT = "appointment"
    EMERGENCY = "emergency"
    FOLLOW_UP = "follow-up"


class CallOutcome(str, enum.Enum):
    COMPLETED = "completed"
    NO_ANSWER = "no-answer"
    BUSY = "busy"
    TRANSFERRED_EMERGENCY = "transferred-emergency"
    APPOINTMENT_REQUESTED = "appointment-requested"


# ============================================================================
# USER MODELS
# ============================================================================

class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    name = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(SAEnum(UserRole), nullable=False, default=UserRole.AGENT)
    avatar = Column(String(500), nullable=False, default="")
    department = Column(String(100), nullable=False, default="General")
    phone_number = Column(String(30), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role.value})>"


# ============================================================================
# PATIENT MODELS
# ============================================================================

class Patient(Base):
    __tablename__ = "patients"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    name = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    mobile_number = Column(String(30), nullable=False, index=True)
    parent_guardian_number = Column(String(30), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    address = Column(Text, nullable=True)
    # {name, relationship, phone_number}
    emergency_contact = Column(JSON, nullable=True)
    # list of medication sub-documents, see patients.schemas.Medication
    medications = Column(JSON, nullable=False, default=list)
    reminder_preferences = Column(
        JSON,
        nullable=False,
        default=lambda: {"sms": True, "voice_call": True, "email": False},
    )
    status = Column(SAEnum(PatientStatus), nullable=False, default=PatientStatus.ACTIVE, index=True)
    avatar = Column(String(500), nullable=False, default="")
    notes = Column(Text, nullable=True)
    prescription_images = Column(JSON, nullable=False, default=list)
    last_reminder_sent = Column(DateTime(timezone=True), nullable=True)
    next_reminder_due = Column(DateTime(timezone=True), nullable=True)
    allergies = Column(JSON, nullable=False, default=list)
    medical_history = Column(Text, nullable=True)
    # {provider, policy_number, group_number}
    insurance_info = Column(JSON, nullable=True)
    # {name, phone, email}
    primary_care_physician = Column(JSON, nullable=True)
    created_by_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    created_by = relationship("User")

    def __repr__(self):
        return f"<Patient(id={self.id}, email={self.email}, status={self.status.value})>"


# ============================================================================
# DOCTOR MODELS
# ============================================================================

class Doctor(Base):
    __tablename__ = "doctors"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    name = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone_number = Column(String(30), nullable=False)
    specialty = Column(String(100), nullable=False, index=True)
    department = Column(String(100), nullable=False)
    license_number = Column(String(100), unique=True, nullable=False)
    bio = Column(Text, nullable=True)
    avatar = Column(String(500), nullable=False, default="")
    availability_status = Column(
        SAEnum(AvailabilityStatus), nullable=False, default=AvailabilityStatus.OFFLINE
    )
    # {day_of_week: [{start, end, is_available}]}
    schedule = Column(JSON, nullable=False, default=dict)
    consultation_fee = Column(Float, nullable=True)
    experience = Column(Integer, nullable=False, default=0)
    qualifications = Column(JSON, nullable=False, default=list)
    voice_id = Column(String(100), nullable=True)
    voice_clone_status = Column(SAEnum(VoiceCloneStatus), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_by_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    created_by = relationship("User")

    def __repr__(self):
        return f"<Doctor(id={self.id}, license={self.license_number})>"


# ============================================================================
# BOOKING MODELS
# ============================================================================

class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    patient_id = Column(Uuid, ForeignKey("patients.id", ondelete="SET NULL"), nullable=True, index=True)
    doctor_id = Column(Uuid, ForeignKey("doctors.id", ondelete="SET NULL"), nullable=True, index=True)
    appointment_date = Column(Date, nullable=False, index=True)
    appointment_time = Column(String(5), nullable=False)
    duration = Column(Integer, nullable=False, default=30)
    status = Column(SAEnum(BookingStatus), nullable=False, default=BookingStatus.SCHEDULED)
    consultation_type = Column(
        SAEnum(ConsultationType), nullable=False, default=ConsultationType.IN_PERSON
    )
    symptoms = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    fee = Column(Float, nullable=True)
    payment_status = Column(SAEnum(PaymentStatus), nullable=False, default=PaymentStatus.PENDING)
    reminder_sent = Column(Boolean, default=False, nullable=False)
    cancel_reason = Column(Text, nullable=True)
    created_by_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    patient = relationship("Patient")
    doctor = relationship("Doctor")
    created_by = relationship("User")

    def __repr__(self):
        return f"<Booking(id={self.id}, date={self.appointment_date}, time={self.appointment_time})>"


# ============================================================================
# CALL LOG MODELS
# ============================================================================

class CallLog(Base):
    __tablename__ = "call_logs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    patient_id = Column(Uuid, ForeignKey("patients.id", ondelete="SET NULL"), nullable=True, index=True)
    agent_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    call_type = Column(SAEnum(CallType), nullable=False)
    outcome = Column(SAEnum(CallOutcome), nullable=False)
    duration = Column(Float, nullable=True)
    transcript = Column(Text, nullable=True)
    audio_recording = Column(String(500), nullable=True)
    call_date_time = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)
    bland_ai_call_id = Column(String(100), nullable=True, index=True)
    # {transferred_at, emergency_number, status}
    emergency_transfer_details = Column(JSON, nullable=True)
    # {requested_date, requested_time, symptoms, booking}
    appointment_details = Column(JSON, nullable=True)
    # {medication_name, dosage, next_due}
    reminder_details = Column(JSON, nullable=True)
    remarks = Column(Text, nullable=True)
    follow_up_required = Column(Boolean, default=False, nullable=False)
    follow_up_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    patient = relationship("Patient")
    agent = relationship("User")

    def __repr__(self):
        return f"<CallLog(id={self.id}, type={self.call_type.value}, outcome={self.outcome.value})>"
