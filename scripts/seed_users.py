# scripts/seed_users.py
"""
Seed the call-center staff accounts.

Creates an administrator, a supervisor and an agent. Accounts whose email
already exists are left untouched, so the script can be re-run safely.

Run: python -m scripts.seed_users
"""

import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medicall.common.database.database import async_session, connect_to_db, close_db_connection
from medicall.auth.auth_service import hash_password
from medicall.models.models import User, UserRole


# =============================================================================
# ACCOUNTS
# =============================================================================

SEED_USERS = [
    {
        "name": "System Administrator",
        "email": "admin@medicall.com",
        "password": "Admin123!",
        "role": UserRole.ADMIN,
        "department": "IT",
        "phone_number": "+1234567890",
    },
    {
        "name": "Call Center Supervisor",
        "email": "supervisor@medicall.com",
        "password": "Supervisor123!",
        "role": UserRole.SUPERVISOR,
        "department": "Call Center",
        "phone_number": "+1234567891",
    },
    {
        "name": "Call Center Agent",
        "email": "agent@medicall.com",
        "password": "Agent123!",
        "role": UserRole.AGENT,
        "department": "Call Center",
        "phone_number": "+1234567892",
    },
]


async def seed_users(db: AsyncSession) -> int:
    """Create the missing seed accounts. Returns how many were created."""
    created = 0
    for account in SEED_USERS:
        result = await db.execute(select(User).where(User.email == account["email"]))
        if result.scalars().first():
            print(f"   {account['email']} already exists, skipping")
            continue

        db.add(User(
            name=account["name"],
            email=account["email"],
            password_hash=hash_password(account["password"]),
            role=account["role"],
            department=account["department"],
            phone_number=account["phone_number"],
            is_active=True,
        ))
        created += 1
        print(f"✅ Created {account['role'].value}: {account['email']}")

    await db.commit()
    return created


async def main():
    """Run the seed script."""
    await connect_to_db()
    try:
        async with async_session() as db:
            try:
                created = await seed_users(db)
            except Exception as e:
                await db.rollback()
                print(f"\n❌ Error during seeding: {e}")
                raise
    finally:
        await close_db_connection()

    print("\n" + "=" * 50)
    print(f"Seed complete, {created} account(s) created. Credentials:")
    for account in SEED_USERS:
        print(f"   {account['role'].value:<10} {account['email']} / {account['password']}")
    print("=" * 50 + "\n")


if __name__ == "__main__":
    asyncio.run(main())
