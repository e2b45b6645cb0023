"""Tests for AuditService."""

import pytest

from dailyledger.domain.errors import ValidationError


def test_log_and_list(audit_service):
    """Test recording entries and listing them newest first."""
    audit_service.log_action("create", "account", "Created account Caixa", "ana")
    audit_service.log_action("import", "account", "Imported 2 account(s)", "bia")

    entries = audit_service.list_entries()
    assert [entry.action for entry in entries] == ["import", "create"]
    assert entries[1].user == "ana"
    assert entries[1].entity == "account"


def test_list_with_limit(audit_service):
    """Test limiting the number of listed entries."""
    for i in range(3):
        audit_service.log_action("update", "account", f"edit {i}", "ana")
    entries = audit_service.list_entries(limit=2)
    assert [entry.description for entry in entries] == ["edit 2", "edit 1"]


def test_unknown_action(audit_service):
    """Test that unknown actions are rejected."""
    with pytest.raises(ValidationError, match="Unknown audit action"):
        audit_service.log_action("explode", "account", "boom", "ana")


def test_clear(audit_service):
    """Test clearing the audit trail."""
    audit_service.log_action("create", "account", "x", "ana")
    assert audit_service.clear() == 1
    assert audit_service.list_entries() == []
    assert audit_service.clear() == 0
