"""Tests for account commands."""

import pytest
from datetime import date
from decimal import Decimal
from dailyledger.cli.main import cli


def test_account_add(cli_runner, temp_db, ledger_service):
    """Test adding an account computes the closing balance."""
    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "account", "add", "16/01/2026", "Caixa",
            "--opening", "100", "--inflow", "50", "--outflow", "20",
        ],
    )

    assert result.exit_code == 0
    assert "Added account 'Caixa' on 16/01/2026" in result.output
    assert "Closing balance: R$ 130,00" in result.output

    account = ledger_service.get_snapshot_for_date(date(2026, 1, 16)).accounts[0]
    assert account.closing_balance == Decimal("130")


def test_account_add_comma_amounts(cli_runner, temp_db, ledger_service):
    """Test amounts written with a decimal comma."""
    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "account", "add", "16/01/2026", "Brasil C&Z",
            "--opening", "339.199,79",
        ],
    )

    assert result.exit_code == 0
    assert "R$ 339.199,79" in result.output
    account = ledger_service.get_snapshot_for_date(date(2026, 1, 16)).accounts[0]
    assert account.opening_balance == Decimal("339199.79")


def test_account_add_explicit_closing_warns(cli_runner, temp_db):
    """Test that a closing balance off the formula is saved with a warning."""
    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "account", "add", "16/01/2026", "Caixa",
            "--opening", "100", "--closing", "90",
        ],
    )

    assert result.exit_code == 0
    assert "differs from the formula by R$ 10,00" in result.output


def test_account_add_duplicate(cli_runner, temp_db, sample_day):
    """Test adding a duplicate account name fails."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "add", "16/01/2026", "Caixa"]
    )

    assert result.exit_code == 1
    assert "already exists" in result.output.lower()


def test_account_add_invalid_amount(cli_runner, temp_db):
    """Test that unparseable amounts fail."""
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "account", "add", "16/01/2026", "Caixa", "--opening", "abc"],
    )

    assert result.exit_code == 1
    assert "Could not parse amount" in result.output


def test_account_add_invalid_date(cli_runner, temp_db):
    """Test that unparseable dates fail."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "add", "someday", "Caixa"]
    )

    assert result.exit_code == 1
    assert "Invalid date" in result.output


def test_account_set_inflow(cli_runner, temp_db, ledger_service, sample_day):
    """Test editing a flow recomputes the closing balance."""
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "account", "set", "16/01/2026", "Caixa", "--inflow", "75"],
    )

    assert result.exit_code == 0
    assert "Updated account 'Caixa'" in result.output
    assert "R$ 155,00" in result.output
    caixa = ledger_service.get_snapshot_for_date(sample_day).accounts[0]
    assert caixa.inflow_total == Decimal("75")


def test_account_set_closing_override(cli_runner, temp_db, ledger_service, sample_day):
    """Test that --closing wins over the other edits of the same command."""
    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "account", "set", "16/01/2026", "Caixa",
            "--closing", "200", "--fees", "1",
        ],
    )

    assert result.exit_code == 0
    caixa = ledger_service.get_snapshot_for_date(sample_day).accounts[0]
    assert caixa.fees == Decimal("1")
    assert caixa.closing_balance == Decimal("200")


def test_account_set_rename_and_note(cli_runner, temp_db, ledger_service, sample_day):
    """Test renaming an account and setting its note."""
    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "account", "set", "16/01/2026", "Caixa",
            "--rename", "Cofre", "--note", "conferido",
        ],
    )

    assert result.exit_code == 0
    account = ledger_service.get_snapshot_for_date(sample_day).accounts[0]
    assert account.name == "Cofre"
    assert account.note == "conferido"


def test_account_set_nothing(cli_runner, temp_db, sample_day):
    """Test that set without options fails."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "set", "16/01/2026", "Caixa"]
    )

    assert result.exit_code == 1
    assert "Nothing to change" in result.output


def test_account_set_unknown_account(cli_runner, temp_db, sample_day):
    """Test editing a missing account fails."""
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "account", "set", "16/01/2026", "Outro", "--fees", "1"],
    )

    assert result.exit_code == 1
    assert "Account 'Outro' not found on 16/01/2026" in result.output


def test_account_remove(cli_runner, temp_db, ledger_service, sample_day):
    """Test removing an account."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "remove", "16/01/2026", "Banco"]
    )

    assert result.exit_code == 0
    assert "Removed account 'Banco'" in result.output
    snapshot = ledger_service.get_snapshot_for_date(sample_day)
    assert [account.name for account in snapshot.accounts] == ["Caixa"]


def test_account_hide(cli_runner, temp_db, ledger_service, sample_day):
    """Test toggling a field's private-mode masking."""
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "account", "hide", "16/01/2026", "Caixa", "closing_balance"],
    )

    assert result.exit_code == 0
    assert "now hidden" in result.output
    caixa = ledger_service.get_snapshot_for_date(sample_day).accounts[0]
    assert caixa.sensitive_flags == {"closing_balance"}

    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "account", "hide", "16/01/2026", "Caixa", "closing_balance"],
    )
    assert "now visible" in result.output


def test_account_hide_rejects_fees(cli_runner, temp_db, sample_day):
    """Test that fees cannot be hidden."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "hide", "16/01/2026", "Caixa", "fees"]
    )

    assert result.exit_code == 2
