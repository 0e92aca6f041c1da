#!/usr/bin/env python3
"""
Create or promote the operator (admin) account.

Usage:
    python scripts/seed_admin.py --email ops@example.com [--display-name Ops]

The password is read from --password, then SEED_ADMIN_PASSWORD, then prompted.
Running it again is safe: an existing account is promoted and its password reset.
"""

import argparse
import getpass
import os
import sys

from mukha.database.config.config import settings
from mukha.database.config.connection_engine import create_tables
from mukha.database.core.funcs import seed_admin


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed the Mukha operator account")
    parser.add_argument("--email", default=settings.SEED_ADMIN_EMAIL)
    parser.add_argument("--password", default=None)
    parser.add_argument("--display-name", default=settings.SEED_ADMIN_DISPLAY_NAME)
    args = parser.parse_args(argv)

    if not args.email:
        print("Error: an email is required (--email or SEED_ADMIN_EMAIL)")
        return 1

    password = args.password or os.environ.get("SEED_ADMIN_PASSWORD") or settings.SEED_ADMIN_PASSWORD
    if not password:
        password = getpass.getpass("Password: ")
        if password != getpass.getpass("Confirm password: "):
            print("Error: Passwords don't match!")
            return 1

    if not create_tables():
        print("Error: DATABASE_URL is not configured")
        return 1

    try:
        result = seed_admin(email=args.email, password=password, display_name=args.display_name)
    except Exception as e:
        print(f"✗ Error seeding admin: {e}")
        return 1

    user = result["user"]
    if result["created"]:
        print("✓ Admin user created successfully!")
    else:
        print("✓ Admin user already existed, admin status updated.")
    print(f"  User ID: {user['id']}")
    print(f"  Email:   {user['email']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
