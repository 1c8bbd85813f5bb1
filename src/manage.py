"""WheelTrust Reviews database management CLI.

Creates or drops the SQL schema of the Reviews domain. Which database is
used follows PROTEAN_ENV (``production`` reads DATABASE_URL); with the default
memory provider there is nothing to do.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_databases():
    """Create the Reviews domain's database schema."""
    from reviews.domain import reviews
    from reviews.utils.db import setup_db

    print("Initializing reviews domain...")
    reviews.init()
    print("Creating reviews database schema...")
    touched = setup_db(reviews)
    if touched:
        print(f"  schema ready on: {', '.join(touched)}")
    else:
        print("  no SQL database configured, nothing to create.")

    print("Done.")


def drop_databases():
    """Drop the Reviews domain's database schema."""
    from reviews.domain import reviews
    from reviews.utils.db import drop_db

    print("Initializing reviews domain...")
    reviews.init()
    print("Dropping reviews database schema...")
    touched = drop_db(reviews)
    if touched:
        print(f"  schema dropped on: {', '.join(touched)}")
    else:
        print("  no SQL database configured, nothing to drop.")

    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="WheelTrust Reviews database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
