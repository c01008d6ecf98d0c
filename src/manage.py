"""Order Editing database management CLI.

Creates and drops the database schema of the order_editing domain using
the setup_db/drop_db utilities in order_editing.utils.db.

Usage:
    PROTEAN_ENV=production python src/manage.py setup-db   # Create all tables
    PROTEAN_ENV=production python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    from order_editing.domain import order_editing
    from order_editing.utils.db import setup_db

    print("Initializing order_editing domain...")
    order_editing.init()
    print("Creating order_editing database schema...")
    setup_db(order_editing)
    print("Done.")


def drop_database():
    from order_editing.domain import order_editing
    from order_editing.utils.db import drop_db

    print("Initializing order_editing domain...")
    order_editing.init()
    print("Dropping order_editing database schema...")
    drop_db(order_editing)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Order Editing database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
