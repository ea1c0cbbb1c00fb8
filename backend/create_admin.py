#!/usr/bin/env python
"""
Admin account script

Usage:
    python create_admin.py create <email> <password> [--name NAME]
    python create_admin.py list
"""
import argparse
import sys

from app.database import SessionLocal, init_db
from app.errors import AppError
from app.models.user import AdminUser
from app.services.auth_service import AuthService


def create_admin(email: str, password: str, name: str = None) -> bool:
    db = SessionLocal()
    try:
        existing = db.query(AdminUser).filter(AdminUser.email == email.strip().lower()).first()
        if existing:
            print(f"Admin '{existing.email}' already exists (created {existing.created_at})")
            return False

        user = AuthService.create_admin(db, email, password, name)
        print(f"Admin '{user.email}' created (id {user.id})")
        return True
    except AppError as exc:
        print(f"Error: {exc.message}")
        return False
    finally:
        db.close()


def list_admins() -> None:
    db = SessionLocal()
    try:
        admins = db.query(AdminUser).order_by(AdminUser.id.asc()).all()
        if not admins:
            print("No admin users.")
            return
        for admin in admins:
            state = "active" if admin.is_active else "disabled"
            print(f"{admin.id:>4}  {admin.email:<40} {state:<8} last login: {admin.last_login_at or '-'}")
    finally:
        db.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Manage payments dashboard admins")
    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", help="Create an admin user")
    create.add_argument("email")
    create.add_argument("password")
    create.add_argument("--name", default=None)

    sub.add_parser("list", help="List admin users")

    args = parser.parse_args(argv)
    init_db()

    if args.command == "create":
        return 0 if create_admin(args.email, args.password, args.name) else 1
    list_admins()
    return 0


if __name__ == "__main__":
    sys.exit(main())
