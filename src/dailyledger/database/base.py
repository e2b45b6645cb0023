"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date

# Import entities directly to avoid circular import through domain/__init__.py
from dailyledger.domain.entities import AccountSnapshot, AuditEntry, DailySnapshot


class Database(ABC):
    """Abstract storage collaborator for the daily ledger."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Daily snapshot operations
    @abstractmethod
    def load_all(self) -> list[DailySnapshot]:
        """Load every explicitly saved day. Order is not significant."""
        pass

    @abstractmethod
    def get_snapshot(self, day: date) -> Optional[DailySnapshot]:
        """Get the explicitly saved snapshot for a day, if any."""
        pass

    @abstractmethod
    def save(self, day: date, accounts: Sequence[AccountSnapshot]) -> None:
        """Replace the full account list of a day, creating the day on first save.

        Raises:
            PersistenceError: If the write fails
        """
        pass

    # Audit log operations
    @abstractmethod
    def create_audit_log(self, action: str, entity: str, description: str, user: str) -> int:
        """Create an audit log entry. Returns entry ID."""
        pass

    @abstractmethod
    def list_audit_logs(self, limit: Optional[int] = None) -> list[AuditEntry]:
        """List audit log entries, newest first."""
        pass

    @abstractmethod
    def clear_audit_logs(self) -> int:
        """Delete every audit log entry. Returns the number removed."""
        pass
