"""Staff account seeding."""
from sqlalchemy import select

from medicall.auth.auth_service import verify_password
from medicall.models.models import User, UserRole
from scripts.seed_users import seed_users


async def test_seed_creates_staff_once(db_session):
    first = await seed_users(db_session)
    second = await seed_users(db_session)

    assert first == 3
    assert second == 0
    result = await db_session.execute(select(User).where(User.email == "admin@medicall.com"))
    admin = result.scalars().one()
    assert admin.role == UserRole.ADMIN
    assert verify_password("Admin123!", admin.password_hash)
