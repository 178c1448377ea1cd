from logging import LoggerAdapter

from kink import inject

from nordigen_lunchmoney_connect.clients.lunchmoney_client import LunchmoneyClient
from nordigen_lunchmoney_connect.clients.nordigen_client import NordigenClient
from nordigen_lunchmoney_connect.data.nordigen_transaction_to_lunchmoney_transaction_mapper import (  # noqa: E501
    NordigenTransactionToLunchmoneyTransactionMapper,
)
from nordigen_lunchmoney_connect.helpers.config import TRANSACTIONS_CHUNK_SIZE
from nordigen_lunchmoney_connect.helpers.general import chunk
from nordigen_lunchmoney_connect.models.lunchmoney_transaction import (
    LunchmoneyTransaction,
    LunchmoneyTransactionStatus,
)
from nordigen_lunchmoney_connect.models.nordigen_account import NordigenAccount
from nordigen_lunchmoney_connect.models.nordigen_transaction import (
    NordigenTransactions,
)
from nordigen_lunchmoney_connect.sync_nordigen_to_lunchmoney.abstract_syncer import (
    AbstractSyncer,
)


class TransactionSyncer(AbstractSyncer):
    """Class that syncs the transactions of Nordigen accounts to Lunchmoney assets.

    Booked transactions are inserted as cleared, pending transactions as uncleared.
    Lunchmoney skips transactions of which the external id already exists, hence
    syncing an account twice does not create duplicates.

    Attributes
    ----------
        nordigen_client: The client to load accounts and transactions with
        lunchmoney_client: The client to insert transactions with
        mapper: Converts Nordigen transactions into Lunchmoney transactions
        CHUNK_SIZE: The maximum number of transactions per insert request

    """

    CHUNK_SIZE = TRANSACTIONS_CHUNK_SIZE

    nordigen_client: NordigenClient
    lunchmoney_client: LunchmoneyClient
    mapper: NordigenTransactionToLunchmoneyTransactionMapper

    @inject
    def __init__(
        self,
        logger: LoggerAdapter,
        nordigen_client: NordigenClient,
        lunchmoney_client: LunchmoneyClient,
        mapper: NordigenTransactionToLunchmoneyTransactionMapper,
        transactions_mapping: dict[str, int],
    ) -> None:
        super().__init__("transactions", logger, transactions_mapping)
        self.nordigen_client = nordigen_client
        self.lunchmoney_client = lunchmoney_client
        self.mapper = mapper

    def prepare_transactions(
        self,
        transactions: NordigenTransactions,
        account: NordigenAccount,
        asset_id: int,
    ) -> list[LunchmoneyTransaction]:
        """Convert all transactions. A single invalid transaction raises.

        Nothing is inserted for the account in that case.
        """
        prepared = [
            self.mapper.map(t, account, asset_id, LunchmoneyTransactionStatus.CLEARED)
            for t in transactions.booked
        ]
        prepared.extend(
            self.mapper.map(
                t, account, asset_id, LunchmoneyTransactionStatus.UNCLEARED
            )
            for t in transactions.pending
        )
        for transaction in prepared:
            self.logger.debug("Prepared transaction %s", transaction.to_request())
        return prepared

    def sync_account(self, account_id: str, asset_id: int) -> int:
        """Sync the transactions of an account to an asset.

        - Load the account details, its owner name is used as payee fallback
        - Load the booked and pending transactions
        - Convert them to Lunchmoney transactions
        - Insert them in chunks, one chunk at a time

        Returns
        -------
            The number of inserted transactions. Skipped duplicates are not counted.

        """
        with self.account_context(account_id, asset_id):
            account = self.nordigen_client.get_account_details(account_id)
            transactions = self.nordigen_client.get_transactions(account_id)
            self.logger.info(
                "Fetched %s transactions for account %s",
                len(transactions.booked) + len(transactions.pending),
                account_id,
            )
            prepared = self.prepare_transactions(transactions, account, asset_id)
            return self.insert_transactions(prepared, account_id, asset_id)

    def insert_transactions(
        self,
        transactions: list[LunchmoneyTransaction],
        account_id: str,
        asset_id: int,
    ) -> int:
        """Insert the transactions chunk by chunk. Return the number inserted."""
        inserted = 0
        for transactions_chunk in chunk(transactions, self.CHUNK_SIZE):
            inserted_count = self.lunchmoney_client.insert_transactions(
                transactions_chunk
            )
            inserted += inserted_count
            self.logger.info(
                "Inserted %s of %s transactions of account %s into asset %s",
                inserted_count,
                len(transactions_chunk),
                account_id,
                asset_id,
            )
            if inserted_count < len(transactions_chunk):
                self.logger.info(
                    "Skipped %s duplicate transactions",
                    len(transactions_chunk) - inserted_count,
                )
        return inserted
