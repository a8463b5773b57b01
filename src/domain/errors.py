"""Error taxonomy for ledger mutations.

Derivations (balances, billing windows, summaries) never raise these: a
missing rate or a dangling account reference degrades to a default instead.
"""


class LedgerError(Exception):
    """Base class for errors reported to the user at a mutation call site."""


class LedgerValidationError(LedgerError, ValueError):
    """Input rejected before any write (e.g. transfer to the same account)."""


class MissingReferenceError(LedgerError, LookupError):
    """A mutation references an account, card or document that is gone."""


class StoreError(LedgerError, RuntimeError):
    """The document store failed (connection, permission, conflict)."""


__all__ = [
    "LedgerError",
    "LedgerValidationError",
    "MissingReferenceError",
    "StoreError",
]
