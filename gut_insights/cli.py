"""CLI commands for Gut Insights."""

import argparse
import asyncio
import getpass
import json
import logging
import sys

from sqlalchemy.orm import Session

from gut_insights.api.analysis import analyze_lookback, parse_lookback_days
from gut_insights.database import SessionLocal
from gut_insights.models.user import User
from gut_insights.services.analysis import get_report_assembler
from gut_insights.services.auth.local_provider import local_auth_provider
from gut_insights.services.digestive_data_service import DigestiveDataService


def create_user(email: str, password: str | None = None, is_admin: bool = False) -> None:
    """Create a user account."""
    db: Session = SessionLocal()

    try:
        # Check if email already exists
        existing = db.query(User).filter(User.email == email.lower()).first()
        if existing:
            print(f"Error: User with email '{email}' already exists.")
            sys.exit(1)

        # Get password if not provided
        if not password:
            password = getpass.getpass("Password: ")
            password_confirm = getpass.getpass("Confirm password: ")
            if password != password_confirm:
                print("Error: Passwords do not match.")
                sys.exit(1)

        if len(password) < 8:
            print("Error: Password must be at least 8 characters.")
            sys.exit(1)

        asyncio.run(local_auth_provider.create_user(db, email, password, is_admin=is_admin))

        print(f"User created successfully: {email}")

    finally:
        db.close()


def analyze(email: str, days: int | None = None) -> dict:
    """Run the digestive analysis for a user and print the response body."""
    db: Session = SessionLocal()

    try:
        user = db.query(User).filter(User.email == email.lower()).first()
        if not user:
            print(f"Error: No user with email '{email}'.")
            sys.exit(1)
        user_id = user.id
    finally:
        db.close()

    outcome = asyncio.run(
        analyze_lookback(
            user_id,
            parse_lookback_days({"days": days}),
            DigestiveDataService(SessionLocal),
            get_report_assembler(),
        )
    )
    payload = outcome.as_payload()
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return payload


def main():
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    parser = argparse.ArgumentParser(description="Gut Insights CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # create-user command
    create_user_parser = subparsers.add_parser("create-user", help="Create a user")
    create_user_parser.add_argument("--email", required=True, help="User email address")
    create_user_parser.add_argument(
        "--password", help="Password (will prompt if not provided)"
    )
    create_user_parser.add_argument(
        "--admin", action="store_true", help="Grant admin rights"
    )

    # analyze command
    analyze_parser = subparsers.add_parser(
        "analyze", help="Run the digestive analysis for a user"
    )
    analyze_parser.add_argument("--email", required=True, help="User email address")
    analyze_parser.add_argument("--days", type=int, help="Lookback window in days")

    args = parser.parse_args()

    if args.command == "create-user":
        create_user(args.email, args.password, args.admin)
    elif args.command == "analyze":
        analyze(args.email, args.days)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
