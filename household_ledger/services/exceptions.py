"""
Ledger service errors.

Validation errors subclass ValueError so the API layer can
keep treating "bad input" as one family. WritesDisabled and
PersistenceFailed are not client errors and must never be
confused with validation failures.
"""


class LedgerError(Exception):
    """Base exception for all ledger core failures."""


class ValidationFailed(LedgerError, ValueError):
    """A proposed transaction is not well-formed."""


class EmptyTransaction(ValidationFailed):
    def __init__(self):
        super().__init__("Transaction must contain at least one entry")


class InvalidAmount(ValidationFailed):
    """An entry's amount_minor is not a positive integer."""

    def __init__(self, index: int, amount):
        self.index = index
        self.amount = amount
        super().__init__(
            f"amount_minor must be positive "
            f"(entry {index}: {amount!r})"
        )


class CurrencyMismatch(ValidationFailed):
    """Entries of one transaction use more than one currency."""

    def __init__(self, currencies: set[str]):
        self.currencies = currencies
        super().__init__(
            f"All entries must share one currency, "
            f"got {', '.join(sorted(currencies))}"
        )


class Unbalanced(ValidationFailed):
    """Debits minus credits is not zero."""

    def __init__(self, residual: int):
        self.residual = residual
        super().__init__(
            f"Transaction entries must balance "
            f"(debits = credits), got {residual}"
        )


class ExternalRefConflict(ValidationFailed):
    """An external_ref was already posted with different entries."""

    def __init__(self, external_ref: str, existing_id):
        self.external_ref = external_ref
        self.existing_id = existing_id
        super().__init__(
            f"external_ref {external_ref!r} was already posted as "
            f"{existing_id} with different entries"
        )


class WritesDisabled(LedgerError):
    """The ledger write gate is closed."""

    def __init__(self, reason: str = "LEDGER_WRITE_ENABLED is false"):
        self.reason = reason
        super().__init__(f"Writing to the ledger is currently disabled: {reason}")


class PersistenceFailed(LedgerError):
    """The atomic storage operation could not complete."""
