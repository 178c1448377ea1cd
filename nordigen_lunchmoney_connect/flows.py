from kink import di
from prefect import flow

from nordigen_lunchmoney_connect.helpers.config import (
    BALANCES_MAPPING_INDEX,
    TRANSACTIONS_MAPPING_INDEX,
)
from nordigen_lunchmoney_connect.helpers.errors import SyncError
from nordigen_lunchmoney_connect.sync_nordigen_to_lunchmoney.account_lister import (
    AccountLister,
)
from nordigen_lunchmoney_connect.sync_nordigen_to_lunchmoney.balance_syncer import (
    BalanceSyncer,
)
from nordigen_lunchmoney_connect.sync_nordigen_to_lunchmoney.transaction_syncer import (  # noqa: E501
    TransactionSyncer,
)


def _raise_if_failed(failed: list[str]) -> None:
    if failed:
        msg = f"Sync failed for accounts: {', '.join(failed)}"
        raise SyncError(msg)


@flow
def list_accounts() -> None:
    """List Nordigen accounts and Lunchmoney assets."""
    AccountLister().list_accounts()


@flow
def sync_transactions() -> None:
    """Sync the transactions of all mapped accounts."""
    _raise_if_failed(TransactionSyncer().sync())


@flow
def sync_balances() -> None:
    """Sync the balances of all mapped accounts."""
    _raise_if_failed(BalanceSyncer().sync())


@flow
def sync() -> None:
    """Sync transactions and balances.

    If no account is mapped, list the accounts instead.
    """
    if not di[TRANSACTIONS_MAPPING_INDEX] and not di[BALANCES_MAPPING_INDEX]:
        list_accounts()
        return
    failed = TransactionSyncer().sync()
    failed.extend(BalanceSyncer().sync())
    _raise_if_failed(failed)
