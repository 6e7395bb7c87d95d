# medicall/modules/dashboard/dashboard_service.py
"""Dashboard service for the overview cards."""

from datetime import datetime, time, timedelta, timezone

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from medicall.models.models import (
    AvailabilityStatus, Booking, BookingStatus, CallLog, CallOutcome, Doctor, Patient,
)

from .schemas import BookingCounts, CallCounts, DashboardStats, DoctorCounts, PatientCounts


async def get_stats(session: AsyncSession) -> DashboardStats:
    """Count patients by status, active doctors, and today's bookings and calls (UTC day)."""

    # Patients by status
    result = await session.execute(
        select(Patient.status, func.count(Patient.id)).group_by(Patient.status)
    )
    by_status = {row[0].value: row[1] for row in result.all()}
    patients = PatientCounts(total=sum(by_status.values()), **by_status)

    # Doctors
    active_doctors = await session.scalar(
        select(func.count(Doctor.id)).where(Doctor.is_active.is_(True))
    )
    online_doctors = await session.scalar(
        select(func.count(Doctor.id)).where(
            Doctor.is_active.is_(True),
            Doctor.availability_status == AvailabilityStatus.ONLINE,
        )
    )

    # Bookings
    today = datetime.now(timezone.utc).date()
    bookings_today = await session.scalar(
        select(func.count(Booking.id)).where(Booking.appointment_date == today)
    )
    scheduled = await session.scalar(
        select(func.count(Booking.id)).where(
            Booking.status == BookingStatus.SCHEDULED,
            Booking.appointment_date >= today,
        )
    )

    # Calls
    day_start = datetime.combine(today, time.min, tzinfo=timezone.utc)
    day_end = day_start + timedelta(days=1)
    in_today = (CallLog.call_date_time >= day_start, CallLog.call_date_time < day_end)
    calls_today = await session.scalar(select(func.count(CallLog.id)).where(*in_today))
    completed_today = await session.scalar(
        select(func.count(CallLog.id)).where(*in_today, CallLog.outcome == CallOutcome.COMPLETED)
    )

    return DashboardStats(
        patients=patients,
        doctors=DoctorCounts(active=active_doctors or 0, online=online_doctors or 0),
        bookings=BookingCounts(today=bookings_today or 0, scheduled=scheduled or 0),
        calls=CallCounts(today=calls_today or 0, completed_today=completed_today or 0),
    )
