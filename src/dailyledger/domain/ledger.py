"""Ledger domain service: the read and write surface over daily snapshots."""

import logging
from datetime import date
from typing import Any, Iterable, Optional, Sequence

from dailyledger.database.base import Database
from dailyledger.domain.aggregation import aggregate_range
from dailyledger.domain.audit import AuditService
from dailyledger.domain.carry_forward import resolve_snapshot
from dailyledger.domain.consistency import check_consistency
from dailyledger.domain.entities import (
    AccountSnapshot,
    BalancePoint,
    ConsistencyResult,
    DailySnapshot,
    FlowKind,
    RangeView,
    Totals,
    Transaction,
)
from dailyledger.domain.errors import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    account_index_out_of_range,
    account_not_found,
    duplicate_account_name,
)
from dailyledger.domain.itemized import add_transaction, remove_transaction
from dailyledger.domain.snapshot import apply_edits, toggle_sensitive
from dailyledger.domain.totals import rollup
from dailyledger.utils.date_parser import format_ledger_date

logger = logging.getLogger(__name__)

DEFAULT_USER = "system"


class LedgerService:
    """Service for reading, editing and aggregating daily snapshots.

    Every read goes back to storage, and every write re-fetches the saved day
    before returning, so callers never hold totals that storage does not have.
    Concurrent writers to the same day are last-write-wins.
    """

    def __init__(
        self,
        db: Database,
        audit: Optional[AuditService] = None,
        user: str = DEFAULT_USER,
    ):
        """Initialize ledger service.

        Args:
            db: Database instance
            audit: Optional audit service; writes are logged when provided
            user: Acting user recorded in the audit log
        """
        self.db = db
        self.audit = audit
        self.user = user

    # Reads
    def load_snapshots(self) -> list[DailySnapshot]:
        """Load every explicitly saved day, oldest first."""
        return sorted(self.db.load_all(), key=lambda snapshot: snapshot.date)

    def get_snapshot_for_date(self, day: date) -> DailySnapshot:
        """Get a day's snapshot, carrying the closest prior day forward when missing."""
        return resolve_snapshot(day, self.db.load_all())

    def get_range_view(self, start: date, end: date) -> RangeView:
        """Get the consolidated view between two days (inclusive)."""
        return aggregate_range(start, end, self.db.load_all())

    def check_consistency(self, account: AccountSnapshot) -> ConsistencyResult:
        """Check an account's stated closing balance against the formula."""
        return check_consistency(account)

    def find_account(self, day: date, name: str) -> tuple[DailySnapshot, int]:
        """Locate an account by name on a resolved day.

        Returns:
            Tuple of (resolved snapshot, account index)

        Raises:
            NotFoundError: If the day has no account with that name
        """
        snapshot = self.get_snapshot_for_date(day)
        index = snapshot.find_account(name)
        if index is None:
            raise NotFoundError(account_not_found(name, format_ledger_date(day)))
        return snapshot, index

    def balance_history(
        self, start: Optional[date] = None, end: Optional[date] = None
    ) -> list[BalancePoint]:
        """Totals of every explicitly saved day within the optional bounds, oldest first."""
        points = []
        for snapshot in self.load_snapshots():
            if start is not None and snapshot.date < start:
                continue
            if end is not None and snapshot.date > end:
                continue
            points.append(BalancePoint(date=snapshot.date, totals=snapshot.totals))
        return points

    # Writes by index
    def update_account(self, day: date, index: int, account: AccountSnapshot) -> Totals:
        """Replace the account at ``index`` on ``day`` and save the whole day.

        Args:
            day: Day being edited
            index: Position of the account in the resolved day
            account: New account data, already recomputed by the caller

        Returns:
            Totals of the day as re-read from storage

        Raises:
            NotFoundError: If ``index`` is out of range
            ConflictError: If the new name is used by another account of the day
            PersistenceError: If storage rejects the write
        """
        snapshot = self.get_snapshot_for_date(day)
        self._check_index(snapshot, index)
        self._check_unique_name(snapshot, account.name, skip_index=index)
        self._warn_if_inconsistent(day, account)

        accounts = list(snapshot.accounts)
        accounts[index] = account
        return self._save(
            day, accounts, "update", f"Updated account {account.name} on {format_ledger_date(day)}"
        )

    def add_account(self, day: date, account: AccountSnapshot) -> Totals:
        """Append a new account to ``day`` and save the whole day.

        Raises:
            ConflictError: If the day already has an account with that name
            PersistenceError: If storage rejects the write
        """
        snapshot = self.get_snapshot_for_date(day)
        self._check_unique_name(snapshot, account.name)
        self._warn_if_inconsistent(day, account)
        accounts = list(snapshot.accounts) + [account]
        return self._save(
            day, accounts, "create", f"Created account {account.name} on {format_ledger_date(day)}"
        )

    def remove_account(self, day: date, index: int) -> Totals:
        """Remove the account at ``index`` from ``day`` and save the whole day.

        Raises:
            NotFoundError: If ``index`` is out of range
            PersistenceError: If storage rejects the write
        """
        snapshot = self.get_snapshot_for_date(day)
        self._check_index(snapshot, index)
        accounts = list(snapshot.accounts)
        removed = accounts.pop(index)
        return self._save(
            day, accounts, "delete", f"Deleted account {removed.name} on {format_ledger_date(day)}"
        )

    # Writes by account name
    def edit_account(
        self, day: date, name: str, edits: Iterable[tuple[str, Any]]
    ) -> AccountSnapshot:
        """Apply field edits to the named account and save the day.

        Edits are applied in order; see ``dailyledger.domain.snapshot.set_field``.

        Returns:
            The edited account as saved
        """
        snapshot, index = self.find_account(day, name)
        account = apply_edits(snapshot.accounts[index], edits)
        self.update_account(day, index, account)
        return account

    def add_item(
        self, day: date, name: str, kind: FlowKind, description: str, value: Any
    ) -> Transaction:
        """Add an itemized transaction to the named account and save the day."""
        snapshot, index = self.find_account(day, name)
        account, transaction = add_transaction(snapshot.accounts[index], kind, description, value)
        self.update_account(day, index, account)
        return transaction

    def remove_item(self, day: date, name: str, kind: FlowKind, transaction_id: str) -> AccountSnapshot:
        """Remove an itemized transaction from the named account and save the day."""
        snapshot, index = self.find_account(day, name)
        account = remove_transaction(snapshot.accounts[index], kind, transaction_id)
        self.update_account(day, index, account)
        return account

    def toggle_sensitive(self, day: date, name: str, field: str) -> AccountSnapshot:
        """Flip the display-masking flag of a field on the named account and save the day."""
        snapshot, index = self.find_account(day, name)
        account = toggle_sensitive(snapshot.accounts[index], field)
        self.update_account(day, index, account)
        return account

    def import_days(self, days: Iterable[tuple[date, Sequence[AccountSnapshot]]]) -> int:
        """Save whole days as given, replacing any existing data for those days.

        Every day is checked before the first one is saved, so a rejected
        import leaves storage untouched.

        Returns:
            Number of days saved

        Raises:
            ConflictError: If a day lists two accounts with the same name
            PersistenceError: If storage rejects a write
        """
        days = [(day, list(accounts)) for day, accounts in days]
        for day, accounts in days:
            names = set()
            for account in accounts:
                if account.name in names:
                    raise ConflictError(duplicate_account_name(account.name, format_ledger_date(day)))
                names.add(account.name)

        count = 0
        for day, accounts in days:
            self._save(
                day,
                accounts,
                "import",
                f"Imported {len(accounts)} account(s) for {format_ledger_date(day)}",
            )
            count += 1
        return count

    # Helpers
    def _save(self, day: date, accounts: Sequence[AccountSnapshot], action: str, description: str) -> Totals:
        self.db.save(day, accounts)
        saved = self.db.get_snapshot(day)
        if saved is None:
            raise NotFoundError(f"Saved day {format_ledger_date(day)} could not be read back")
        logger.info("%s (user: %s)", description, self.user)
        if self.audit is not None:
            try:
                self.audit.log_action(action, "account", description, self.user)
            except PersistenceError as e:
                # the day is already committed; report it as saved
                logger.warning("Saved %s but could not write the audit entry: %s", format_ledger_date(day), e)
        return rollup(saved.accounts)

    def _check_index(self, snapshot: DailySnapshot, index: int) -> None:
        if not 0 <= index < len(snapshot.accounts):
            raise NotFoundError(
                account_index_out_of_range(
                    index, format_ledger_date(snapshot.date), len(snapshot.accounts)
                )
            )

    def _check_unique_name(
        self, snapshot: DailySnapshot, name: str, skip_index: Optional[int] = None
    ) -> None:
        for index, other in enumerate(snapshot.accounts):
            if index != skip_index and other.name == name:
                raise ConflictError(duplicate_account_name(name, format_ledger_date(snapshot.date)))

    def _warn_if_inconsistent(self, day: date, account: AccountSnapshot) -> None:
        result = check_consistency(account)
        if not result.is_consistent:
            logger.warning(
                "Account %s on %s closes %s away from opening + inflow - outflow - fees",
                account.name,
                format_ledger_date(day),
                result.diff,
            )
