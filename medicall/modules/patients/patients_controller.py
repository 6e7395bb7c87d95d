# medicall/modules/patients/patients_controller.py

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from medicall.auth.dependencies import get_current_user
from medicall.common.database.database import get_db_session
from medicall.common.schemas import MessageResponse
from medicall.common.utils.global_messages import GlobalMessages
from medicall.models.models import User
from medicall.modules.patients import patients_service, schemas

router = APIRouter(prefix="/patients", tags=["patients"])


@router.get("", response_model=schemas.PatientListResponse)
async def list_patients(
    status: Optional[str] = Query(None, description="active, paused, completed or all"),
    search: Optional[str] = Query(None, description="Matches name, email or mobile number"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """List patients, newest first."""
    patients = await patients_service.list_patients(db, status, search)
    return schemas.PatientListResponse(patients=patients)


@router.post("", response_model=schemas.PatientEnvelope, status_code=status.HTTP_201_CREATED)
async def create_patient(
    patient_data: schemas.PatientCreateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """
    Register a patient.

    At least one medication with at least one reminder time is required.
    The creator is recorded as the authenticated user.
    """
    patient = await patients_service.create_patient(db, current_user, patient_data)
    return schemas.PatientEnvelope(patient=patient)


@router.get("/{patient_id}", response_model=schemas.PatientEnvelope)
async def get_patient(
    patient_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    patient = await patients_service.get_patient(db, patient_id)
    return schemas.PatientEnvelope(patient=patient)


@router.put("/{patient_id}", response_model=schemas.PatientEnvelope)
async def replace_patient(
    patient_id: UUID,
    patient_data: schemas.PatientCreateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Replace a patient's document."""
    patient = await patients_service.replace_patient(db, patient_id, patient_data)
    return schemas.PatientEnvelope(patient=patient)


@router.patch("/{patient_id}", response_model=schemas.PatientEnvelope)
async def patch_patient(
    patient_id: UUID,
    patient_data: schemas.PatientUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Update only the provided fields."""
    patient = await patients_service.patch_patient(db, patient_id, patient_data)
    return schemas.PatientEnvelope(patient=patient)


@router.patch("/{patient_id}/status", response_model=schemas.PatientEnvelope)
async def update_patient_status(
    patient_id: UUID,
    status_data: schemas.PatientStatusRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    patient = await patients_service.update_patient_status(db, patient_id, status_data.status)
    return schemas.PatientEnvelope(patient=patient)


@router.delete("/{patient_id}", response_model=MessageResponse)
async def delete_patient(
    patient_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    await patients_service.delete_patient(db, patient_id)
    return MessageResponse(message=GlobalMessages.PATIENT_DELETED)
