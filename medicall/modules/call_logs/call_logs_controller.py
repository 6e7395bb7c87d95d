# medicall/modules/call_logs/call_logs_controller.py

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
from medicall.modules.call_logs import call_logs_service, schemas

router = APIRouter(prefix="/call-logs", tags=["call-logs"])


@router.get("", response_model=schemas.CallLogListResponse)
async def list_call_logs(
    outcome: Optional[str] = Query(None),
    call_type: Optional[str] = Query(None, alias="callType"),
    patient_id: Optional[UUID] = Query(None, alias="patientId"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """List calls, most recent first."""
    call_logs = await call_logs_service.list_call_logs(
        db, outcome, call_type, patient_id, start_date, end_date
    )
    return schemas.CallLogListResponse(call_logs=call_logs)


@router.post("", response_model=schemas.CallLogEnvelope, status_code=status.HTTP_201_CREATED)
async def create_call_log(
    call_data: schemas.CallLogCreateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    call_log = await call_logs_service.create_call_log(db, current_user, call_data)
    return schemas.CallLogEnvelope(call_log=call_log)


@router.post("/dispatch", response_model=schemas.DispatchCallResponse)
async def dispatch_call(
    dispatch_data: schemas.DispatchCallRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """
    Place a medication or appointment reminder call.

    - **patientId**: Patient to call (must be active and accept voice calls)
    - **callType**: reminder or appointment
    - **bookingId**: Required for appointment calls
    - **medicationIndex**: Which medication to remind about, defaults to the first
    """
    call_id = await call_logs_service.dispatch_call(db, current_user, dispatch_data)
    return schemas.DispatchCallResponse(call_id=call_id, message=GlobalMessages.CALL_DISPATCHED)


@router.get("/{call_log_id}", response_model=schemas.CallLogEnvelope)
async def get_call_log(
    call_log_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    call_log = await call_logs_service.get_call_log(db, call_log_id)
    return schemas.CallLogEnvelope(call_log=call_log)


@router.put("/{call_log_id}", response_model=schemas.CallLogEnvelope)
async def update_call_log(
    call_log_id: UUID,
    call_data: schemas.CallLogUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    call_log = await call_logs_service.update_call_log(db, call_log_id, call_data)
    return schemas.CallLogEnvelope(call_log=call_log)


@router.delete("/{call_log_id}", response_model=MessageResponse)
async def delete_call_log(
    call_log_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    await call_logs_service.delete_call_log(db, call_log_id)
    return MessageResponse(message=GlobalMessages.CALL_LOG_DELETED)
