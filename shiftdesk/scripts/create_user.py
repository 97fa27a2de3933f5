"""사용자 생성 스크립트 — 명령줄에서 직원 계정을 만듭니다.

Create-user script — Create a staff account from the command line, with
the same validation as the admin API.

Usage:
    python -m shiftdesk.scripts.create_user EMAIL PASSWORD [ROLE] [NAME]
"""

import argparse
import asyncio
import sys

from shiftdesk.database import async_session
from shiftdesk.models.user import ACTIVE_ROLES, ROLE_ADMIN
from shiftdesk.schemas.staff import StaffCreate
from shiftdesk.services.staff_service import staff_service
from shiftdesk.utils.exceptions import AppError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a ShiftDesk staff account.")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("role", nargs="?", default=ROLE_ADMIN, help=f"one of {', '.join(ACTIVE_ROLES)}")
    parser.add_argument("name", nargs="?", default="Admin User")
    return parser


async def create_user(data: StaffCreate) -> None:
    async with async_session() as db:
        user = await staff_service.create_staff(db, data)
        await db.commit()

    print("User created")
    print(f"  Email: {user.email}")
    print(f"  Role:  {user.role}")
    print(f"  Name:  {user.name}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    data = StaffCreate(name=args.name, email=args.email, role=args.role, password=args.password)
    try:
        asyncio.run(create_user(data))
    except AppError as exc:
        print(f"Error creating user: {exc.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
