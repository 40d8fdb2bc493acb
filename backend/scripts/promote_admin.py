"""Promote an existing account to administrator.

Usage: python scripts/promote_admin.py --email someone@example.com
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from petadopt.db.session import dispose_engine, session_scope
from petadopt.models import AccountRole
from petadopt.services import account_service


async def main(email: str) -> int:
    try:
        async with session_scope() as session:
            account = await account_service.get_account_by_email(session, email)
            if account is None:
                print(f"No account found for {email}", file=sys.stderr)
                return 1
            if account.role == AccountRole.ADMINISTRATOR:
                print(f"{account.email} is already an administrator")
                return 0
            await account_service.promote_to_administrator(session, account)
            print(f"Promoted {account.email} to administrator")
            return 0
    finally:
        await dispose_engine()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--email", required=True, help="account email address")
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.email)))
