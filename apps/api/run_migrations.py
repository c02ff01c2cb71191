#!/usr/bin/env python3
"""Database bootstrap: wait for the database, then run Alembic migrations.

Run before starting the API (container entrypoint or by hand). If the
database never becomes reachable or a migration fails, exit non-zero so the
service does not start against an unknown schema.
"""

import os
import sys
import time
from dotenv import load_dotenv

load_dotenv()

HERE = os.path.dirname(os.path.abspath(__file__))


def check_db_ready() -> bool:
    """True once a connection to the configured database succeeds."""
    from core.database import check_db_connection

    return check_db_connection()


def get_alembic_config():
    """Load Alembic config for programmatic migrations."""
    from alembic.config import Config

    cfg = Config(os.path.join(HERE, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(HERE, "alembic"))
    return cfg


def alembic_upgrade_head() -> None:
    """Apply all pending migrations."""
    from alembic import command

    command.upgrade(get_alembic_config(), "head")


def main() -> None:
    print("Waiting for database to be ready...")
    max_retries = int(os.getenv("DB_READY_MAX_RETRIES", "30"))

    for attempt in range(1, max_retries + 1):
        if check_db_ready():
            print("Database is ready!")
            break
        print(f"Database is unavailable - sleeping (attempt {attempt}/{max_retries})")
        time.sleep(1)
    else:
        print("ERROR: Database is not ready after maximum retries")
        sys.exit(1)

    try:
        alembic_upgrade_head()
    except Exception as e:
        print(f"ERROR: Alembic upgrade failed: {e}")
        sys.exit(1)
    print("Migrations completed successfully!")


if __name__ == '__main__':
    main()
