# medicall/modules/doctors/doctors_service.py
"""Doctor directory: CRUD, availability, activation and voice cloning."""

import logging
import math
from typing import List, Optional, Tuple
from uuid import UUID

from fastapi import UploadFile
from sqlalchemy import desc, func, or_
from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from medicall.common.database.database import contains_pattern
from medicall.common.integrations import elevenlabs_client
from medicall.common.utils.exceptions import (
    ConflictError, NotFoundError, ValidationError,
)
from medicall.common.utils.global_messages import GlobalMessages
from medicall.models.models import (
    AvailabilityStatus, Doctor, User, VoiceCloneStatus,
)
from medicall.modules.doctors.schemas import DoctorCreateRequest, DoctorUpdateRequest

logger = logging.getLogger(__name__)

NON_NULLABLE_FIELDS = {
    "name", "email", "phone_number", "specialty", "department", "license_number",
    "avatar", "availability_status", "schedule", "experience", "qualifications", "is_active",
}


def _doctor_query():
    return select(Doctor).options(selectinload(Doctor.created_by))


def _to_columns(data, **dump_kwargs) -> dict:
    values = data.model_dump(**dump_kwargs)
    if "schedule" in values:
        values.update(data.model_dump(mode="json", include={"schedule"}, **dump_kwargs))
    return values


async def _ensure_unique(
    db: AsyncSession,
    email: Optional[str],
    license_number: Optional[str],
    doctor_id: Optional[UUID] = None,
) -> None:
    """409 when the email or the license number belongs to another doctor."""
    clauses = []
    if email:
        clauses.append(Doctor.email == email)
    if license_number:
        clauses.append(Doctor.license_number == license_number)
    if not clauses:
        return

    query = select(Doctor.id).where(or_(*clauses))
    if doctor_id is not None:
        query = query.where(Doctor.id != doctor_id)
    result = await db.execute(query)
    if result.first():
        raise ConflictError(GlobalMessages.DOCTOR_CONFLICT)


async def get_doctor(db: AsyncSession, doctor_id: UUID) -> Doctor:
    result = await db.execute(
        _doctor_query()
        .where(Doctor.id == doctor_id)
        .execution_options(populate_existing=True)
    )
    doctor = result.scalars().first()
    if not doctor:
        raise NotFoundError(GlobalMessages.DOCTOR_NOT_FOUND)
    return doctor


async def list_doctors(
    db: AsyncSession,
    specialty: Optional[str] = None,
    department: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
    include_inactive: bool = False,
    page: int = 1,
    limit: int = 10,
) -> Tuple[List[Doctor], int, int]:
    """
    List doctors, newest first, one page at a time.

    Returns:
        (doctors on the page, total matching, total pages)
    """
    filters = []
    if not include_inactive:
        filters.append(Doctor.is_active.is_(True))
    if specialty and specialty != "all":
        filters.append(Doctor.specialty == specialty)
    if department and department != "all":
        filters.append(Doctor.department == department)
    if status and status != "all":
        try:
            filters.append(Doctor.availability_status == AvailabilityStatus(status))
        except ValueError:
            raise ValidationError(details=[{"field": "status", "message": f"Invalid status '{status}'"}])
    if search and search.strip():
        pattern = contains_pattern(search)
        filters.append(or_(
            Doctor.name.ilike(pattern, escape="\\"),
            Doctor.specialty.ilike(pattern, escape="\\"),
            Doctor.department.ilike(pattern, escape="\\"),
        ))

    total = await db.scalar(select(func.count(Doctor.id)).where(*filters))
    result = await db.execute(
        _doctor_query()
        .where(*filters)
        .order_by(desc(Doctor.created_at))
        .offset((page - 1) * limit)
        .limit(limit)
    )
    total = total or 0
    return list(result.scalars().all()), total, math.ceil(total / limit)


async def create_doctor(db: AsyncSession, current_user: User, data: DoctorCreateRequest) -> Doctor:
    await _ensure_unique(db, data.email, data.license_number)

    doctor = Doctor(**_to_columns(data), created_by_id=current_user.id)
    db.add(doctor)
    await db.commit()

    logger.info("Doctor %s added by %s", doctor.id, current_user.id)
    return await get_doctor(db, doctor.id)


async def update_doctor(db: AsyncSession, doctor_id: UUID, data: DoctorUpdateRequest) -> Doctor:
    """Apply only the provided fields."""
    doctor = await get_doctor(db, doctor_id)
    update_data = _to_columns(data, exclude_unset=True)

    await _ensure_unique(db, update_data.get("email"), update_data.get("license_number"), doctor_id)

    for key, value in update_data.items():
        if value is None and key in NON_NULLABLE_FIELDS:
            continue
        setattr(doctor, key, value)

    await db.commit()
    return await get_doctor(db, doctor_id)


async def update_availability(db: AsyncSession, doctor_id: UUID, status: AvailabilityStatus) -> Doctor:
    doctor = await get_doctor(db, doctor_id)
    doctor.availability_status = status
    await db.commit()
    return await get_doctor(db, doctor_id)


async def set_active(db: AsyncSession, doctor_id: UUID, is_active: bool) -> Doctor:
    """Soft delete (``False``) or restore (``True``) a doctor."""
    doctor = await get_doctor(db, doctor_id)
    doctor.is_active = is_active
    await db.commit()
    logger.info("Doctor %s %s", doctor_id, "activated" if is_active else "deactivated")
    return await get_doctor(db, doctor_id)


async def delete_doctor(db: AsyncSession, doctor_id: UUID) -> None:
    doctor = await get_doctor(db, doctor_id)
    await db.delete(doctor)
    await db.commit()
    logger.info("Doctor %s permanently deleted", doctor_id)


async def clone_voice(
    db: AsyncSession,
    doctor_id: UUID,
    audio: UploadFile,
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> Doctor:
    """
    Clone a doctor's voice from an audio sample.

    The doctor is marked ``pending`` and committed before the provider is
    called, then moved to ``completed`` or ``failed``. A doctor left in
    ``pending`` by a crash is recovered by posting the sample again.
    """
    doctor = await get_doctor(db, doctor_id)
    content = await audio.read()
    if not content:
        raise ValidationError(GlobalMessages.AUDIO_REQUIRED)

    doctor.voice_clone_status = VoiceCloneStatus.PENDING
    await db.commit()

    try:
        voice_id = await elevenlabs_client.clone_voice(
            filename=audio.filename or "sample",
            content=content,
            content_type=audio.content_type,
            name=name or f"Dr. {doctor.name}",
            description=description or f"Voice clone for Dr. {doctor.name} - {doctor.specialty}",
        )
    except Exception:
        doctor.voice_clone_status = VoiceCloneStatus.FAILED
        await db.commit()
        logger.warning("Voice clone failed for doctor %s", doctor_id)
        raise

    doctor.voice_id = voice_id
    doctor.voice_clone_status = VoiceCloneStatus.COMPLETED
    await db.commit()
    logger.info("Voice %s cloned for doctor %s", voice_id, doctor_id)
    return await get_doctor(db, doctor_id)


async def remove_voice(db: AsyncSession, doctor_id: UUID) -> Doctor:
    doctor = await get_doctor(db, doctor_id)
    if doctor.voice_id:
        await elevenlabs_client.delete_voice(doctor.voice_id)

    doctor.voice_id = None
    doctor.voice_clone_status = None
    await db.commit()
    return await get_doctor(db, doctor_id)
