"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested account or record does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as two accounts with the same name on one day."""


class PersistenceError(DomainError):
    """The storage collaborator failed to load or save data."""


def account_not_found(name: str, day: str) -> str:
    """Return message for an account missing from a day."""
    return f"Account '{name}' not found on {day}"


def account_index_out_of_range(index: int, day: str, count: int) -> str:
    """Return message for an account position outside a day's list."""
    return f"No account at position {index} on {day} (day has {count} account{'s' if count != 1 else ''})"


def duplicate_account_name(name: str, day: str) -> str:
    """Return message for two accounts sharing a name on one day."""
    return f"Account '{name}' already exists on {day}"


def read_only_total(field: str) -> str:
    """Return message for editing a total that is derived from itemized transactions."""
    return f"'{field}' is computed from itemized transactions; edit the base or the items instead"


def unknown_field(field: str) -> str:
    """Return message for an edit naming a field that does not exist."""
    return f"Unknown account field '{field}'"
