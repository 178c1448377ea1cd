import base64
import hashlib

from nordigen_lunchmoney_connect.models.nordigen_transaction import (
    NordigenTransaction,
)


def build_external_id(transaction: NordigenTransaction, notes: str) -> str:
    """Build an external id for a transaction without a transaction id.

    Lunchmoney uses the external id to skip duplicates. The id is the url-safe base64
    encoded sha256 hash of the value date, amount, currency, counterparties and
    notes. Hence re-syncing the same transaction results in the same id.

    The value date is hashed as YYYY-MM-DD. Ids built by the Go version of this
    tool hashed the full Go timestamp string instead, so transactions without a
    transaction id that were synced by that tool get a new id here, and are
    inserted again once.
    """
    value_date = transaction.value_date.isoformat() if transaction.value_date else ""
    key = "|".join(
        [
            value_date,
            f"{transaction.amount:.2f}{transaction.currency}",
            transaction.creditor_name or "",
            transaction.debtor_name or "",
            notes,
        ]
    )
    digest = hashlib.sha256(key.encode()).digest()
    return base64.urlsafe_b64encode(digest).decode()
