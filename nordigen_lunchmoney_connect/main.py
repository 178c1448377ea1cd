import click
from kink import di

from nordigen_lunchmoney_connect.helpers.config import (
    BALANCES_MAPPING_INDEX,
    TRANSACTIONS_MAPPING_INDEX,
)
from nordigen_lunchmoney_connect.sync_nordigen_to_lunchmoney.abstract_syncer import (
    AbstractSyncer,
)
from nordigen_lunchmoney_connect.sync_nordigen_to_lunchmoney.account_lister import (
    AccountLister,
)
from nordigen_lunchmoney_connect.sync_nordigen_to_lunchmoney.balance_syncer import (
    BalanceSyncer,
)
from nordigen_lunchmoney_connect.sync_nordigen_to_lunchmoney.transaction_syncer import (  # noqa: E501
    TransactionSyncer,
)


def _run_syncers(*syncers: AbstractSyncer) -> None:
    """Run the syncers, and exit with an error if any account failed."""
    failed = [account_id for syncer in syncers for account_id in syncer.sync()]
    if failed:
        msg = f"Sync failed for accounts: {', '.join(failed)}"
        raise click.ClickException(msg)


@click.group
def cli() -> None:
    """Provide the cli."""


@cli.command()
@click.argument("requisition_ids", nargs=-1)
def list_accounts(requisition_ids: tuple[str, ...]) -> None:
    """List Nordigen accounts and Lunchmoney assets, to configure the mappings."""
    AccountLister().list_accounts(list(requisition_ids) or None)


@cli.command()
def sync_transactions() -> None:
    """Sync transactions of all accounts in TRANSACTIONS_MAPPING."""
    _run_syncers(TransactionSyncer())


@cli.command()
def sync_balances() -> None:
    """Sync balances of all accounts in BALANCES_MAPPING."""
    _run_syncers(BalanceSyncer())


@cli.command()
def sync() -> None:
    """Sync transactions and balances. List the accounts if nothing is mapped."""
    if not di[TRANSACTIONS_MAPPING_INDEX] and not di[BALANCES_MAPPING_INDEX]:
        click.echo("No mapping found, listing accounts")
        AccountLister().list_accounts()
        return
    _run_syncers(TransactionSyncer(), BalanceSyncer())


@cli.command()
@click.argument("account_id")
@click.argument("asset_id", type=int)
def sync_account(account_id: str, asset_id: int) -> None:
    """Sync the transactions of a single Nordigen account to a Lunchmoney asset."""
    inserted = TransactionSyncer().sync_account(account_id, asset_id)
    click.echo(f"Inserted {inserted} transactions")


@cli.command()
@click.argument("account_id")
@click.argument("asset_id", type=int)
def sync_balance(account_id: str, asset_id: int) -> None:
    """Sync the balance of a single Nordigen account to a Lunchmoney asset."""
    balance = BalanceSyncer().sync_account(account_id, asset_id)
    click.echo(f"Synced balance {balance}")


if __name__ == "__main__":
    cli()
