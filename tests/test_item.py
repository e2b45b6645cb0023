"""Tests for itemized transaction commands."""

import pytest
from decimal import Decimal
from dailyledger.cli.main import cli
from dailyledger.domain.entities import FlowKind


def test_item_add(cli_runner, temp_db, ledger_service, sample_day):
    """Test adding an inflow item."""
    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "item", "add", "16/01/2026", "Caixa", "inflow", "Venda balcão", "25,00",
        ],
    )

    assert result.exit_code == 0
    assert "Added inflow 'Venda balcão' (R$ 25,00) to 'Caixa'" in result.output
    assert "ID:" in result.output

    caixa = ledger_service.get_snapshot_for_date(sample_day).accounts[0]
    assert caixa.inflow_total == Decimal("75")
    assert caixa.inflow_base == Decimal("50")
    assert caixa.closing_balance == Decimal("155")


def test_item_add_kind_case_insensitive(cli_runner, temp_db, ledger_service, sample_day):
    """Test that the flow kind ignores case."""
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "item", "add", "16/01/2026", "Caixa", "OUTFLOW", "Aluguel", "30"],
    )

    assert result.exit_code == 0
    caixa = ledger_service.get_snapshot_for_date(sample_day).accounts[0]
    assert caixa.outflow_total == Decimal("50")


def test_item_add_unknown_kind(cli_runner, temp_db, sample_day):
    """Test that kinds other than inflow/outflow are rejected."""
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "item", "add", "16/01/2026", "Caixa", "fee", "x", "1"],
    )

    assert result.exit_code == 2


def test_item_remove(cli_runner, temp_db, ledger_service, sample_day):
    """Test removing an item by ID."""
    transaction = ledger_service.add_item(sample_day, "Caixa", FlowKind.INFLOW, "Venda", Decimal("25"))

    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "item", "remove", "16/01/2026", "Caixa", "inflow", transaction.id],
    )

    assert result.exit_code == 0
    assert "inflow total is now R$ 50,00" in result.output
    caixa = ledger_service.get_snapshot_for_date(sample_day).accounts[0]
    assert caixa.inflow_items == ()


def test_item_list(cli_runner, temp_db, ledger_service, sample_day):
    """Test listing items with bases and totals."""
    transaction = ledger_service.add_item(sample_day, "Caixa", FlowKind.OUTFLOW, "Fornecedor", Decimal("1200"))

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "item", "list", "16/01/2026", "Caixa"]
    )

    assert result.exit_code == 0
    assert "Inflow (base R$ 50,00)" in result.output
    assert "(no items)" in result.output
    assert "Outflow (base R$ 20,00)" in result.output
    assert transaction.id in result.output
    assert "R$ 1.220,00" in result.output


def test_item_list_unknown_account(cli_runner, temp_db, sample_day):
    """Test listing items of a missing account."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "item", "list", "16/01/2026", "Outro"]
    )

    assert result.exit_code == 1
    assert "not found" in result.output
