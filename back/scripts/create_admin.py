#!/usr/bin/env python
"""
Provision an administrator from the command line.

    python scripts/create_admin.py +17742769594 "Super Admin" --role super_admin
    python scripts/create_admin.py 9876543210 "Melur Leader" --role panchayat_leader \
        --district madurai --panchayat-union melur
"""

# Standard library imports
import argparse
import asyncio
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Third-party imports
from pydantic import ValidationError

# Local application imports
from app.core.db import AsyncSessionLocal, async_engine
from app.models.admin.admin_user import AdminRole
from app.schemas.admin.admin_user_schemas import AdminUserCreate, AssignedArea
from app.services.admin.admin_user_services import create_admin_user
from app.services.exceptions import AdminUserAlreadyExistsError, InvalidAssignedAreaError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create an administrator")
    parser.add_argument("phone", help="Phone number, E.164 or local")
    parser.add_argument("name", help="Display name")
    parser.add_argument("--role", choices=[role.value for role in AdminRole], default=AdminRole.SUPER_ADMIN.value)
    parser.add_argument("--district", default=None, help="District id (district and panchayat leaders)")
    parser.add_argument("--panchayat-union", default=None, help="Panchayat union id (panchayat leaders)")
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        payload = AdminUserCreate(
            phone=args.phone,
            name=args.name,
            role=AdminRole(args.role),
            assigned_area=AssignedArea(district=args.district, panchayat_union=args.panchayat_union),
        )
    except ValidationError as e:
        print(f"❌ Invalid input: {e}")
        return 1

    try:
        async with AsyncSessionLocal() as db:
            admin = await create_admin_user(db, payload)
    except (AdminUserAlreadyExistsError, InvalidAssignedAreaError) as e:
        print(f"❌ {e}")
        return 1
    finally:
        await async_engine.dispose()

    print("✅ Admin user created successfully!")
    print(f"Phone: {admin.phone}")
    print(f"ID: {admin.id}")
    print(f"Role: {admin.role.value}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
