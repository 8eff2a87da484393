"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested guid or account path did not resolve to any row."""


class TransactionNotFoundError(NotFoundError):
    """Requested transaction does not exist."""


class AmbiguousPathError(DomainError):
    """Account path resolved incompletely, ambiguously, or through a cycle."""


class AlreadyExistsError(DomainError):
    """An account with the proposed name already exists under the same parent."""


class ConfigError(DomainError):
    """Configuration could not be loaded."""


class StorageError(DomainError):
    """Underlying query or I/O failure not otherwise classified."""


class RollbackError(StorageError):
    """A transaction body failed and rolling it back failed too."""

    def __init__(self, original: BaseException, rollback_error: BaseException):
        super().__init__(f"{original} (rollback also failed: {rollback_error})")
        self.original = original
        self.rollback_error = rollback_error


def account_not_found(guid: str) -> str:
    """Return message for missing account by guid."""
    return f"Account {guid} not found"


def account_path_not_found(path: str) -> str:
    """Return message for missing account by path."""
    return f"Account '{path}' not found"


def account_path_ambiguous(path: str, segment: str) -> str:
    """Return message when a path segment matches more than one child."""
    return f"Account path '{path}' is ambiguous at '{segment}'"


def account_path_incomplete(path: str, resolved: int, requested: int) -> str:
    """Return message when fewer segments resolved than were requested."""
    return f"Account path '{path}' resolved {resolved} of {requested} segments"


def account_parent_cycle(guid: str) -> str:
    """Return message when walking an account's parents loops or runs too deep."""
    return f"Parent chain of account {guid} is cyclic or too deep"


def root_account_not_found() -> str:
    """Return message when the ledger has no root account."""
    return "Root account not found"


def account_already_exists(name: str, parent_name: str) -> str:
    """Return message when a sibling already uses the name."""
    return f"Account '{name}' already exists under '{parent_name}'"


def transaction_not_found(guid: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {guid} not found"


def split_not_found(guid: str) -> str:
    """Return message for missing split."""
    return f"Split {guid} not found"


def database_not_found(path: str) -> str:
    """Return message for a missing ledger file."""
    return f"Database file '{path}' does not exist"
