# medicall/modules/patients/patients_service.py
"""Patient registry: CRUD, status changes and search."""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import desc, or_
from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from medicall.common.database.database import contains_pattern
from medicall.common.utils.exceptions import ConflictError, NotFoundError, ValidationError
from medicall.common.utils.global_messages import GlobalMessages
from medicall.models.models import Patient, PatientStatus, User
from medicall.modules.patients.schemas import (
    PatientCreateRequest, PatientUpdateRequest,
)

logger = logging.getLogger(__name__)

# Columns holding embedded documents; stored as plain JSON
JSON_FIELDS = {
    "emergency_contact", "medications", "reminder_preferences",
    "insurance_info", "primary_care_physician",
}
# Columns a patch may not clear
NON_NULLABLE_FIELDS = {
    "name", "email", "mobile_number", "medications", "reminder_preferences",
    "status", "avatar", "prescription_images", "allergies",
}


def _patient_query():
    return select(Patient).options(selectinload(Patient.created_by))


def _to_columns(data, **dump_kwargs) -> dict:
    """Dump a request model into column values, JSON-encoding embedded documents."""
    values = data.model_dump(**dump_kwargs)
    values.update(data.model_dump(mode="json", include=JSON_FIELDS, **dump_kwargs))
    return values


async def _ensure_email_free(db: AsyncSession, email: str, patient_id: Optional[UUID] = None) -> None:
    query = select(Patient.id).where(Patient.email == email)
    if patient_id is not None:
        query = query.where(Patient.id != patient_id)
    result = await db.execute(query)
    if result.first():
        raise ConflictError(GlobalMessages.PATIENT_EMAIL_EXISTS)


async def get_patient(db: AsyncSession, patient_id: UUID) -> Patient:
    result = await db.execute(
        _patient_query()
        .where(Patient.id == patient_id)
        .execution_options(populate_existing=True)
    )
    patient = result.scalars().first()
    if not patient:
        raise NotFoundError(GlobalMessages.PATIENT_NOT_FOUND)
    return patient


async def list_patients(
    db: AsyncSession,
    status: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Patient]:
    """
    List patients, newest first.

    ``status`` narrows to one lifecycle state ("all" or empty means no
    filter). ``search`` is a case-insensitive substring match over name,
    email and mobile number. Both filters combine.
    """
    query = _patient_query()

    if status and status != "all":
        try:
            query = query.where(Patient.status == PatientStatus(status))
        except ValueError:
            raise ValidationError(details=[{"field": "status", "message": f"Invalid status '{status}'"}])

    if search and search.strip():
        pattern = contains_pattern(search)
        query = query.where(or_(
            Patient.name.ilike(pattern, escape="\\"),
            Patient.email.ilike(pattern, escape="\\"),
            Patient.mobile_number.ilike(pattern, escape="\\"),
        ))

    result = await db.execute(query.order_by(desc(Patient.created_at)))
    return list(result.scalars().all())


async def create_patient(db: AsyncSession, current_user: User, data: PatientCreateRequest) -> Patient:
    """Register a patient. The creator is always the caller."""
    await _ensure_email_free(db, data.email)

    patient = Patient(**_to_columns(data), created_by_id=current_user.id)
    db.add(patient)
    await db.commit()

    logger.info("Patient %s registered by %s", patient.id, current_user.id)
    return await get_patient(db, patient.id)


async def replace_patient(db: AsyncSession, patient_id: UUID, data: PatientCreateRequest) -> Patient:
    """Full replace: every editable field takes the request's value (or its default)."""
    patient = await get_patient(db, patient_id)
    await _ensure_email_free(db, data.email, patient_id)

    for key, value in _to_columns(data).items():
        setattr(patient, key, value)

    await db.commit()
    return await get_patient(db, patient_id)


async def patch_patient(db: AsyncSession, patient_id: UUID, data: PatientUpdateRequest) -> Patient:
    """Apply only the fields present in the request."""
    patient = await get_patient(db, patient_id)
    update_data = _to_columns(data, exclude_unset=True)

    if update_data.get("email"):
        await _ensure_email_free(db, update_data["email"], patient_id)

    for key, value in update_data.items():
        if value is None and key in NON_NULLABLE_FIELDS:
            continue
        setattr(patient, key, value)

    await db.commit()
    return await get_patient(db, patient_id)


async def update_patient_status(db: AsyncSession, patient_id: UUID, status: PatientStatus) -> Patient:
    patient = await get_patient(db, patient_id)
    patient.status = status
    await db.commit()
    logger.info("Patient %s status set to %s", patient_id, status.value)
    return await get_patient(db, patient_id)


async def delete_patient(db: AsyncSession, patient_id: UUID) -> None:
    """Hard delete. Bookings and call logs keep a dangling (nulled) reference."""
    patient = await get_patient(db, patient_id)
    await db.delete(patient)
    await db.commit()
    logger.info("Patient %s deleted", patient_id)
