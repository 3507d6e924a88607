"""
Create the first admin account, or reset an existing admin's password.

Usage:
    python scripts/create_admin.py
    python scripts/create_admin.py --email ops@ecodeli.fr --password 'long-secret'
    python scripts/create_admin.py --reset --email ops@ecodeli.fr --password 'new-secret'

Without --reset the script refuses to touch an existing user.
"""

import argparse
import asyncio
import sys

from sqlalchemy import func, select

from ecodeli_admin.core.security import hash_password
from ecodeli_admin.database import engine, session_scope
from ecodeli_admin.models import Role, User, UserType

DEFAULT_EMAIL = "admin@ecodeli.pro"
DEFAULT_PASSWORD = "admin123"


async def create_admin(email: str, password: str, reset: bool) -> int:
    async with session_scope() as session:
        result = await session.execute(select(User).where(func.lower(User.email) == email.lower()))
        user = result.scalar_one_or_none()

        if user is not None and not reset:
            print(f"  A user with email {email} already exists (role {user.role.value}).")
            print("  Pass --reset to set a new password on an admin account.")
            return 1

        if user is not None:
            if user.role != Role.ADMIN:
                print(f"  {email} is not an admin, refusing to reset its password.")
                return 1
            user.password = hash_password(password)
            print(f"  Password reset for admin {email}")
            return 0

        admin = User(
            email=email,
            password=hash_password(password),
            name="Admin Ecodeli",
            first_name="Admin",
            last_name="Ecodeli",
            role=Role.ADMIN,
            user_type=UserType.PROFESSIONAL,
            is_verified=True,
        )
        session.add(admin)
        await session.flush()

        print("  Admin created")
        print(f"  Email: {email}")
        print(f"  ID:    {admin.id}")
        return 0


async def main() -> int:
    parser = argparse.ArgumentParser(description="Create or reset an Ecodeli admin account.")
    parser.add_argument("--email", default=DEFAULT_EMAIL)
    parser.add_argument("--password", default=DEFAULT_PASSWORD)
    parser.add_argument("--reset", action="store_true", help="reset the password of an existing admin")
    args = parser.parse_args()

    try:
        return await create_admin(args.email, args.password, args.reset)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
