"""User management CLI commands.

Users are created out-of-band; the HTTP API only reads them.

Usage:
    python -m app.cli.user init-db
    python -m app.cli.user create alice --password secret
    python -m app.cli.user reset-password alice
    python -m app.cli.user list
"""

import argparse
import asyncio
import getpass
import sys
from collections.abc import Awaitable, Callable

from sqlalchemy import select

from app.core.config import get_settings
from app.core.security import hash_password
from app.db import User, close_db, get_session_factory, init_db


async def _with_db(action: Callable[[], Awaitable[None]], create_tables: bool) -> None:
    """Run ``action`` with the database initialised from settings."""
    settings = get_settings()
    await init_db(settings.database.url, settings.database.echo, create_tables)
    try:
        await action()
    finally:
        await close_db()


async def create_user(username: str, password: str) -> None:
    """Create a new user."""
    async with get_session_factory()() as session:
        result = await session.execute(
            select(User).where(User.username == username)  # type: ignore[arg-type]
        )
        if result.scalar_one_or_none():
            print(f"Error: User '{username}' already exists")
            sys.exit(1)

        session.add(User(username=username, password_hash=hash_password(password)))
        await session.commit()
        print(f"User '{username}' created successfully")


async def reset_password(username: str, password: str) -> None:
    """Reset user password."""
    async with get_session_factory()() as session:
        result = await session.execute(
            select(User).where(User.username == username)  # type: ignore[arg-type]
        )
        user = result.scalar_one_or_none()

        if not user:
            print(f"Error: User '{username}' not found")
            sys.exit(1)

        user.password_hash = hash_password(password)
        await session.commit()
        print(f"Password reset for '{username}'")


async def list_users() -> None:
    """List all users."""
    async with get_session_factory()() as session:
        result = await session.execute(select(User).order_by(User.id))
        users = result.scalars().all()

        if not users:
            print("No users found")
            return

        print(f"{'ID':<8} {'Username':<20}")
        print("-" * 28)
        for user in users:
            print(f"{user.id:<8} {user.username:<20}")


async def _noop() -> None:
    print("Tables created")


def get_password_interactive(confirm: bool = True) -> str:
    """Get password interactively with optional confirmation."""
    password = getpass.getpass("Password: ")
    if not password:
        print("Error: Password cannot be empty")
        sys.exit(1)

    if confirm:
        password_confirm = getpass.getpass("Confirm password: ")
        if password != password_confirm:
            print("Error: Passwords do not match")
            sys.exit(1)

    return password


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="model-viewer user management",
        prog="model-viewer-user",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create missing tables")

    create_parser = subparsers.add_parser("create", help="Create a new user")
    create_parser.add_argument("username", help="Username to create")
    create_parser.add_argument(
        "--password", "-p",
        help="Password (will prompt if not provided)",
    )

    reset_parser = subparsers.add_parser("reset-password", help="Reset user password")
    reset_parser.add_argument("username", help="Username to reset password")
    reset_parser.add_argument(
        "--password", "-p",
        help="New password (will prompt if not provided)",
    )

    subparsers.add_parser("list", help="List all users")

    args = parser.parse_args(argv)
    create_tables = get_settings().database.create_tables

    if args.command == "init-db":
        asyncio.run(_with_db(_noop, create_tables=True))

    elif args.command == "create":
        password = args.password or get_password_interactive()
        asyncio.run(
            _with_db(lambda: create_user(args.username, password), create_tables)
        )

    elif args.command == "reset-password":
        password = args.password or get_password_interactive()
        asyncio.run(
            _with_db(lambda: reset_password(args.username, password), create_tables)
        )

    elif args.command == "list":
        asyncio.run(_with_db(list_users, create_tables))


if __name__ == "__main__":
    main()
