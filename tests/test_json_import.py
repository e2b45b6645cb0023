"""Tests for the legacy JSON import."""

import json
import pytest
from datetime import date
from decimal import Decimal

from dailyledger.domain.errors import ConflictError, ValidationError
from dailyledger.domain.json_import import JSONImportService, parse_legacy_days

LEGACY_DAYS = [
    {
        "date": "31/01/2026",
        "accounts": [
            {
                "name": "Caixa",
                "saldo_anterior": 100,
                "entradas": 60.5,
                "saidas": 20,
                "taxas": 0,
                "saldo_atual": 140.5,
                "nota": "",
                "entradas_detalhadas": [{"id": "x1", "description": "Venda", "value": 10.5}],
                "entradas_base": 50,
            },
            {"name": "Banco", "saldo_anterior": 1000, "saldo_atual": 1000},
        ],
    },
    {"date": "01/02/2026", "accounts": []},
]


def test_parse_legacy_days():
    """Test converting decoded JSON into days and accounts."""
    days = parse_legacy_days(LEGACY_DAYS)
    assert [day for day, _ in days] == [date(2026, 1, 31), date(2026, 2, 1)]

    caixa = days[0][1][0]
    assert caixa.inflow_total == Decimal("60.5")
    assert caixa.inflow_base == Decimal("50")
    assert caixa.inflow_items[0].id == "x1"
    assert days[1][1] == []


@pytest.mark.parametrize(
    "data, message",
    [
        ({"date": "01/01/2026"}, "list of days"),
        ([{"accounts": []}], "no 'date'"),
        ([{"date": "2026-01-01", "accounts": []}], "dd/mm/yyyy"),
        ([{"date": "01/01/2026", "accounts": {}}], "must be a list"),
        ([{"date": "01/01/2026", "accounts": [{"saldo_anterior": 1}]}], "missing 'name'"),
    ],
)
def test_parse_legacy_days_invalid(data, message):
    """Test that structural problems raise ValidationError."""
    with pytest.raises(ValidationError, match=message):
        parse_legacy_days(data)


def test_import_file(tmp_path, ledger_service, audit_service):
    """Test importing a file saves every day and audits it."""
    path = tmp_path / "legacy.json"
    path.write_text(json.dumps(LEGACY_DAYS), encoding="utf-8")

    count = JSONImportService(ledger_service).import_file(str(path))

    assert count == 2
    snapshot = ledger_service.get_snapshot_for_date(date(2026, 1, 31))
    assert [account.name for account in snapshot.accounts] == ["Caixa", "Banco"]
    # saved empty day is explicit, not carried
    assert ledger_service.get_snapshot_for_date(date(2026, 2, 1)).accounts == ()
    assert [entry.action for entry in audit_service.list_entries()] == ["import", "import"]


def test_import_invalid_json(tmp_path, ledger_service):
    """Test that malformed files raise ValidationError before saving."""
    path = tmp_path / "broken.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(ValidationError, match="Invalid JSON"):
        JSONImportService(ledger_service).import_file(str(path))
    assert ledger_service.load_snapshots() == []


def test_parse_legacy_days_null_accounts():
    """Test that a missing or null account list is an empty day."""
    days = parse_legacy_days([{"date": "01/01/2026", "accounts": None}, {"date": "02/01/2026"}])
    assert days == [(date(2026, 1, 1), []), (date(2026, 1, 2), [])]


def test_import_file_with_duplicate_names_saves_nothing(tmp_path, ledger_service):
    """Test that a bad later day stops the whole file before any day is saved."""
    path = tmp_path / "legacy.json"
    path.write_text(
        json.dumps(
            [
                {"date": "01/01/2026", "accounts": [{"name": "Caixa", "saldo_anterior": 1}]},
                {"date": "02/01/2026", "accounts": [{"name": "X"}, {"name": "X"}]},
            ]
        ),
        encoding="utf-8",
    )
    with pytest.raises(ConflictError, match="'X' already exists on 02/01/2026"):
        JSONImportService(ledger_service).import_file(str(path))
    assert ledger_service.load_snapshots() == []
