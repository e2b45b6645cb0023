"""Shared pytest fixtures for dailyledger tests."""

import tempfile
import os
from dataclasses import replace
from datetime import date
from decimal import Decimal
import pytest

from dailyledger.database.factories import create_sqlite_database
from dailyledger.domain.audit import AuditService
from dailyledger.domain.entities import AccountSnapshot, DailySnapshot
from dailyledger.domain.ledger import LedgerService
from dailyledger.domain.snapshot import new_account
from dailyledger.domain.totals import rollup


def make_account(name: str, opening="0", inflow="0", outflow="0", fees="0", closing=None, **kwargs) -> AccountSnapshot:
    """Build an account without items; closing is computed unless given."""
    account = new_account(
        name=name,
        opening_balance=Decimal(opening),
        inflow_total=Decimal(inflow),
        outflow_total=Decimal(outflow),
        fees=Decimal(fees),
        closing_balance=None if closing is None else Decimal(closing),
    )
    if kwargs:
        account = replace(account, **kwargs)
    return account


def make_day(day: date, *accounts: AccountSnapshot) -> DailySnapshot:
    """Build an explicit snapshot with rolled-up totals."""
    return DailySnapshot(date=day, accounts=tuple(accounts), totals=rollup(accounts))


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def audit_service(temp_db):
    """Create an AuditService with a temporary database."""
    return AuditService(temp_db)


@pytest.fixture
def ledger_service(temp_db, audit_service):
    """Create a LedgerService with a temporary database and audit log."""
    return LedgerService(temp_db, audit=audit_service, user="tester")


@pytest.fixture
def sample_day(ledger_service):
    """Record 16/01/2026 with two accounts and return the day."""
    day = date(2026, 1, 16)
    ledger_service.add_account(day, make_account("Caixa", opening="100", inflow="50", outflow="20"))
    ledger_service.add_account(day, make_account("Banco", opening="1000", outflow="200", fees="5"))
    return day


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
