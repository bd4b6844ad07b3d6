"""Seed the configured roles and permissions into the database."""
from __future__ import annotations

import argparse
import sys

from sqlalchemy.exc import SQLAlchemyError

from inkwell.core.roles import load_role_config
from inkwell.core.settings import settings
from inkwell.db.session import SessionLocal, create_tables
from inkwell.services.role_seeder import seed_roles


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Seed roles and permissions")
    parser.add_argument(
        "--config",
        default=None,
        help="JSON role structure (defaults to ROLE_CONFIG_FILE or the built-in roles)",
    )
    parser.add_argument(
        "--no-truncate",
        action="store_true",
        help="Keep existing roles, permissions and assignments instead of emptying them first.",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before seeding.",
    )
    args = parser.parse_args(argv)

    try:
        config = load_role_config(args.config or settings.role_config_file)
    except (OSError, ValueError, KeyError) as exc:
        print(f"[seed_roles] ERROR: invalid role configuration: {exc}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.create_tables:
            create_tables()
        with SessionLocal() as db:
            roles = seed_roles(db, config, truncate=False if args.no_truncate else None)
            for role in roles:
                print(f"[seed_roles] {role.hierarchy}: {role.name}")
    except SQLAlchemyError as exc:
        print(f"[seed_roles] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
