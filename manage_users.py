#!/usr/bin/env python3
"""
User administration CLI for Folio.
Run this script to inspect users and clean up accounts or sessions.

Usage:
    python manage_users.py list
    python manage_users.py delete <username>
    python manage_users.py logout <username>   - drop every session of a user
"""

import asyncio
import sys

from folio.config import DATABASE_PATH
from folio.infrastructure.database import Database
from folio.infrastructure.repositories import Repositories


def print_usage():
    print(__doc__)


async def cmd_list(repos: Repositories, args) -> int:
    users = await repos.users.list_all()
    if not users:
        print("No users found.")
        return 0

    print(f"{'ID':<6} {'Username':<24} {'Favorite book'}")
    print("-" * 70)
    for user in users:
        book = user.favorite_book.title if user.favorite_book else ""
        print(f"{user.id:<6} {user.username:<24} {book}")
    return 0


async def cmd_delete(repos: Repositories, args) -> int:
    if len(args) < 1:
        print("Error: delete requires <username>")
        return 1

    username = args[0]
    user = await repos.users.find_by_username(username)
    if not user:
        print(f"Error: User '{username}' not found")
        return 1

    confirm = input(f"Delete user '{username}' and all their posts? [y/N]: ")
    if confirm.lower() != 'y':
        print("Cancelled")
        return 0

    await repos.users.delete(user.id)
    print(f"User '{username}' deleted")
    return 0


async def cmd_logout(repos: Repositories, args) -> int:
    if len(args) < 1:
        print("Error: logout requires <username>")
        return 1

    username = args[0]
    user = await repos.users.find_by_username(username)
    if not user:
        print(f"Error: User '{username}' not found")
        return 1

    count = await repos.sessions.delete_for_user(user.id)
    print(f"Removed {count} session(s) for '{username}'")
    return 0


COMMANDS = {
    'list': cmd_list,
    'delete': cmd_delete,
    'logout': cmd_logout,
}


async def run(command, args, database_path=DATABASE_PATH) -> int:
    db = Database(database_path)
    await db.connect()
    try:
        await db.init_schema()
        return await command(Repositories.from_gateway(db), args)
    finally:
        await db.close()


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv or argv[0] not in COMMANDS:
        print_usage()
        return 1
    return asyncio.run(run(COMMANDS[argv[0]], argv[1:]))


if __name__ == '__main__':
    sys.exit(main())
