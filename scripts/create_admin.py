#!/usr/bin/env python3
"""Create or promote an admin account.

Admins are regular users with the admin flag set. Provisioned accounts are
marked verified, so they can log in to the API and the /admin panel right
away.

Usage:
    python scripts/create_admin.py --email admin@example.com --password 'S3cure!pass'
    python scripts/create_admin.py --email existing@example.com  # promote only
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlmodel import Session  # noqa: E402

from linkboard.auth.service import check_password_policy, upsert_user  # noqa: E402
from linkboard.core.exceptions import AppException  # noqa: E402
from linkboard.core.logging import configure_logging  # noqa: E402
from linkboard.core.settings import get_settings  # noqa: E402
from linkboard.db.engine import engine  # noqa: E402

logger = logging.getLogger("linkboard.scripts.create_admin")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create or promote a LinkBoard admin.")
    parser.add_argument("--email", required=True, help="Account email (case-insensitive).")
    parser.add_argument(
        "--password",
        default=None,
        help="Password to set. Omit to keep the existing password when promoting.",
    )
    parser.add_argument("--first-name", default=None)
    parser.add_argument("--last-name", default=None)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = parse_args(argv)

    try:
        if args.password is not None:
            check_password_policy(args.password, get_settings())
        with Session(engine) as session:
            user = upsert_user(
                session,
                email=args.email,
                first_name=args.first_name,
                last_name=args.last_name,
                password=args.password,
                is_admin=True,
            )
    except AppException as e:
        logger.error("Could not create admin: %s", e.message)
        return 1

    logger.info("Admin ready", extra={"user_id": str(user.id)})
    print(f"Admin ready: {user.email} ({user.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
