"""
Migration: Add kv_store table.

Settings and saved day-off items are each kept as one JSON text value
under a fixed key (dayoff_settings_v1, dayoff_saved_v1).
Safe to run repeatedly.
"""
from sqlalchemy import create_engine, inspect, text
import os

# Use same DB URL pattern as main app
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./dayoff.db")


def table_exists(engine, table_name: str) -> bool:
    """Check if a table exists in the database."""
    return inspect(engine).has_table(table_name)


def run_migration():
    """Create the kv_store table if missing."""
    engine = create_engine(DATABASE_URL)

    if table_exists(engine, "kv_store"):
        print("kv_store already exists")
        return

    with engine.connect() as conn:
        conn.execute(text("""
            CREATE TABLE kv_store (
                key VARCHAR(128) PRIMARY KEY,
                value TEXT NOT NULL,
                created_at TIMESTAMP,
                updated_at TIMESTAMP
            )
        """))
        conn.commit()
        print("Created kv_store")


if __name__ == "__main__":
    run_migration()
