# medicall/modules/dashboard/schemas.py
"""Dashboard module schemas."""

from medicall.common.schemas import CamelModel


class PatientCounts(CamelModel):
    total: int = 0
    active: int = 0
    paused: int = 0
    completed: int = 0


class DoctorCounts(CamelModel):
    active: int = 0
    online: int = 0


class BookingCounts(CamelModel):
    today: int = 0
    scheduled: int = 0


class CallCounts(CamelModel):
    today: int = 0
    completed_today: int = 0


class DashboardStats(CamelModel):
    """Figures behind the overview cards."""
    patients: PatientCounts
    doctors: DoctorCounts
    bookings: BookingCounts
    calls: CallCounts


class DashboardStatsResponse(CamelModel):
    stats: DashboardStats
