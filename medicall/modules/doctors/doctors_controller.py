# medicall/modules/doctors/doctors_controller.py

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from medicall.auth.dependencies import get_current_user
from medicall.common.database.database import get_db_session
from medicall.common.schemas import MessageResponse
from medicall.common.utils.global_messages import GlobalMessages
from medicall.models.models import User
from medicall.modules.doctors import doctors_service, schemas

router = APIRouter(prefix="/doctors", tags=["doctors"])


@router.get("", response_model=schemas.DoctorListResponse)
async def list_doctors(
    specialty: Optional[str] = Query(None),
    department: Optional[str] = Query(None),
    status: Optional[str] = Query(None, description="online, offline, on-leave or all"),
    search: Optional[str] = Query(None, description="Matches name, specialty or department"),
    include_inactive: bool = Query(False, alias="includeInactive"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """
    List doctors, newest first.

    Deactivated doctors are hidden unless **includeInactive** is true.
    """
    doctors, total, total_pages = await doctors_service.list_doctors(
        db, specialty, department, status, search, include_inactive, page, limit
    )
    return schemas.DoctorListResponse(
        doctors=doctors, total=total, page=page, limit=limit, total_pages=total_pages
    )


@router.post("", response_model=schemas.DoctorEnvelope, status_code=status.HTTP_201_CREATED)
async def create_doctor(
    doctor_data: schemas.DoctorCreateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Add a doctor. Email and license number must both be unused."""
    doctor = await doctors_service.create_doctor(db, current_user, doctor_data)
    return schemas.DoctorEnvelope(doctor=doctor)


@router.get("/{doctor_id}", response_model=schemas.DoctorEnvelope)
async def get_doctor(
    doctor_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    doctor = await doctors_service.get_doctor(db, doctor_id)
    return schemas.DoctorEnvelope(doctor=doctor)


@router.put("/{doctor_id}", response_model=schemas.DoctorEnvelope)
async def update_doctor(
    doctor_id: UUID,
    doctor_data: schemas.DoctorUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    doctor = await doctors_service.update_doctor(db, doctor_id, doctor_data)
    return schemas.DoctorEnvelope(doctor=doctor)


@router.patch("/{doctor_id}/status", response_model=schemas.DoctorEnvelope)
async def update_availability(
    doctor_id: UUID,
    status_data: schemas.DoctorStatusRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    doctor = await doctors_service.update_availability(db, doctor_id, status_data.availability_status)
    return schemas.DoctorEnvelope(doctor=doctor)


@router.post("/{doctor_id}/deactivate", response_model=schemas.DoctorMessageResponse)
async def deactivate_doctor(
    doctor_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Soft delete. This is what the admin screen's remove action calls."""
    doctor = await doctors_service.set_active(db, doctor_id, False)
    return schemas.DoctorMessageResponse(message=GlobalMessages.DOCTOR_DEACTIVATED, doctor=doctor)


@router.post("/{doctor_id}/activate", response_model=schemas.DoctorMessageResponse)
async def activate_doctor(
    doctor_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    doctor = await doctors_service.set_active(db, doctor_id, True)
    return schemas.DoctorMessageResponse(message=GlobalMessages.DOCTOR_ACTIVATED, doctor=doctor)


@router.delete("/{doctor_id}", response_model=MessageResponse)
async def delete_doctor(
    doctor_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Permanently remove a doctor."""
    await doctors_service.delete_doctor(db, doctor_id)
    return MessageResponse(message=GlobalMessages.DOCTOR_DELETED)


@router.post("/{doctor_id}/voice-clone", response_model=schemas.DoctorMessageResponse)
async def clone_voice(
    doctor_id: UUID,
    audio: UploadFile = File(...),
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """
    Clone the doctor's voice from an audio sample.

    Responds 502 when the provider fails; the doctor is then left with
    voiceCloneStatus "failed" and can be retried by posting again.
    """
    doctor = await doctors_service.clone_voice(db, doctor_id, audio, name, description)
    return schemas.DoctorMessageResponse(message=GlobalMessages.VOICE_CLONED, doctor=doctor)


@router.delete("/{doctor_id}/voice-clone", response_model=schemas.DoctorMessageResponse)
async def remove_voice(
    doctor_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    doctor = await doctors_service.remove_voice(db, doctor_id)
    return schemas.DoctorMessageResponse(message=GlobalMessages.VOICE_REMOVED, doctor=doctor)
