"""Audit log domain service."""

import logging
from typing import Optional

from dailyledger.database.base import Database
from dailyledger.domain.entities import AuditEntry
from dailyledger.domain.errors import ValidationError

logger = logging.getLogger(__name__)

AUDIT_ACTIONS = ("create", "update", "delete", "import")


class AuditService:
    """Service for recording and reading the audit trail."""

    def __init__(self, db: Database):
        """Initialize audit service.

        Args:
            db: Database instance
        """
        self.db = db

    def log_action(self, action: str, entity: str, description: str, user: str) -> int:
        """Record an action.

        Args:
            action: One of create, update, delete, import
            entity: What was touched, e.g. "account"
            description: Human readable summary
            user: Acting user

        Returns:
            Audit entry ID

        Raises:
            ValidationError: If the action is unknown
        """
        if action not in AUDIT_ACTIONS:
            raise ValidationError(
                f"Unknown audit action '{action}'. Valid actions: {', '.join(AUDIT_ACTIONS)}"
            )
        entry_id = self.db.create_audit_log(
            action=action, entity=entity, description=description, user=user
        )
        logger.info("Audit %s %s by %s: %s", action, entity, user, description)
        return entry_id

    def list_entries(self, limit: Optional[int] = None) -> list[AuditEntry]:
        """List audit entries, newest first."""
        return self.db.list_audit_logs(limit=limit)

    def clear(self) -> int:
        """Delete the whole audit trail. Returns the number of entries removed."""
        count = self.db.clear_audit_logs()
        logger.info("Cleared %d audit entr%s", count, "y" if count == 1 else "ies")
        return count
