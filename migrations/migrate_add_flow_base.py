#!/usr/bin/env python3
"""Migration script to add flow base and sensitive field columns to accounts.

This migration adds three columns to the accounts table:
- entradas_base (NUMERIC(15, 2), nullable): inflow not covered by itemized inflows
- saidas_base (NUMERIC(15, 2), nullable): outflow not covered by itemized outflows
- campos_sensiveis (TEXT, nullable): JSON list of fields masked in private output

Existing rows get their bases back-filled:
- no itemized transactions → base = total
- itemized transactions present → base = 0

Usage:
    python migrations/migrate_add_flow_base.py [--db-path PATH]
"""

import sys
from pathlib import Path

# Add src to path so we can import dailyledger modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy import text, inspect
from dailyledger.database.factories import create_sqlite_database
from dailyledger.database.mappers import transactions_from_json
from dailyledger.database.models import AccountEntry
from dailyledger.domain.itemized import infer_base

NEW_COLUMNS = (
    ("entradas_base", "NUMERIC(15, 2)"),
    ("saidas_base", "NUMERIC(15, 2)"),
    ("campos_sensiveis", "TEXT"),
)


def column_exists(engine, table_name: str, column_name: str) -> bool:
    """Check if a column exists in a table.

    Args:
        engine: SQLAlchemy engine
        table_name: Name of the table
        column_name: Name of the column

    Returns:
        True if column exists, False otherwise
    """
    inspector = inspect(engine)
    columns = [col["name"] for col in inspector.get_columns(table_name)]
    return column_name in columns


def backfill_bases(session) -> int:
    """Set missing bases from the stored totals and itemized lists.

    Returns:
        Number of account rows updated
    """
    updated = 0
    for entry in session.query(AccountEntry).all():
        changed = False
        if entry.entradas_base is None:
            entry.entradas_base = infer_base(
                entry.entradas or 0, transactions_from_json(entry.entradas_detalhadas), None
            )
            changed = True
        if entry.saidas_base is None:
            entry.saidas_base = infer_base(
                entry.saidas or 0, transactions_from_json(entry.saidas_detalhadas), None
            )
            changed = True
        if changed:
            updated += 1
    return updated


def migrate_database(database_path: str | None = None) -> None:
    """Migrate database to add base/sensitivity columns and back-fill bases.

    Args:
        database_path: Path to database file. If None, uses default location.

    Raises:
        Exception: If migration fails
    """
    db = create_sqlite_database(database_path=database_path)
    db.connect()

    try:
        session = db.session_factory()
        try:
            engine = session.bind
            if engine is None:
                raise Exception("Could not get database engine from session")
        finally:
            session.close()

        inspector = inspect(engine)
        if "accounts" not in inspector.get_table_names():
            raise Exception("Table 'accounts' does not exist. Please initialize the database schema first.")

        missing = [
            (name, sql_type)
            for name, sql_type in NEW_COLUMNS
            if not column_exists(engine, "accounts", name)
        ]
        if missing:
            print("Starting migration: adding flow base columns...")
            with engine.begin() as conn:
                for name, sql_type in missing:
                    conn.execute(text(f"ALTER TABLE accounts ADD COLUMN {name} {sql_type}"))
                    print(f"  Added column: {name}")
        else:
            print("Columns already present: entradas_base, saidas_base, campos_sensiveis")

        print("Back-filling bases for existing accounts...")
        session = db.session_factory()
        try:
            updated = backfill_bases(session)
            session.commit()
            print(f"  Set bases on {updated} account row(s)")
        finally:
            session.close()

        print("Migration completed successfully!")

    except Exception as e:
        print(f"Migration failed: {e}")
        raise
    finally:
        db.disconnect()


def main():
    """Main entry point for migration script."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Migrate database to add flow base and sensitive field columns"
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="Path to database file (overrides DAILYLEDGER_DB_PATH environment variable)",
    )
    args = parser.parse_args()

    try:
        migrate_database(database_path=args.db_path)
        return 0
    except Exception as e:
        print(f"\nMigration failed: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
