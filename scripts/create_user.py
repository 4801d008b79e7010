"""Utility script to create a local user and print an access token for it."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from app.domain.entities import User
from app.infrastructure.database import SessionLocal, initialize_database
from app.infrastructure.repositories import CompanyFollowRepository, UserRepository
from app.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create a user for local messaging tests and print a bearer token.",
    )
    parser.add_argument("--name", default="Local User", help="Full name shown in chats")
    parser.add_argument("--email", required=True, help="Unique email address")
    parser.add_argument("--avatar", default=None, help="Avatar URL (optional)")
    parser.add_argument(
        "--company",
        default=None,
        help="Create a company with this name and attach the user to it",
    )
    parser.add_argument(
        "--follow",
        type=int,
        action="append",
        default=[],
        metavar="COMPANY_ID",
        help="Follow the company with this id (repeatable)",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        users = UserRepository(session)
        if users.get_by_email(args.email) is not None:
            raise SystemExit(f"A user with email {args.email} already exists")

        follows = CompanyFollowRepository(session)
        company_id = follows.create_company(args.company) if args.company else None
        user = users.create(
            User(
                id=None,
                full_name=args.name,
                email=args.email,
                avatar_url=args.avatar,
                company_id=company_id,
                company_name=args.company,
                is_active=True,
            )
        )
        for followed_company_id in args.follow:
            follows.follow(user.id, followed_company_id)
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not store the user: {exc}") from exc
    finally:
        session.close()

    print(
        "User created:\n"
        f"  ID: {user.id}\n"
        f"  Name: {user.full_name}\n"
        f"  Email: {user.email}\n"
        f"  Company: {company_id or '-'}\n"
        f"  Token: {create_access_token(user.id)}"
    )


if __name__ == "__main__":
    main()
