from decimal import Decimal
from logging import LoggerAdapter

from kink import inject

from nordigen_lunchmoney_connect.clients.lunchmoney_client import LunchmoneyClient
from nordigen_lunchmoney_connect.clients.nordigen_client import NordigenClient
from nordigen_lunchmoney_connect.helpers.errors import NotFoundError
from nordigen_lunchmoney_connect.models.lunchmoney_asset import (
    LunchmoneyAsset,
    LunchmoneyAssetUpdate,
)
from nordigen_lunchmoney_connect.models.nordigen_account import NordigenBalance
from nordigen_lunchmoney_connect.sync_nordigen_to_lunchmoney.abstract_syncer import (
    AbstractSyncer,
)


class BalanceSyncer(AbstractSyncer):
    """Class that syncs the balance of Nordigen accounts to Lunchmoney assets.

    Uses the "expected" balance in the currency of the asset. A balance in another
    currency is never synced.
    """

    BALANCE_TYPE = "expected"

    nordigen_client: NordigenClient
    lunchmoney_client: LunchmoneyClient

    @inject
    def __init__(
        self,
        logger: LoggerAdapter,
        nordigen_client: NordigenClient,
        lunchmoney_client: LunchmoneyClient,
        balances_mapping: dict[str, int],
    ) -> None:
        super().__init__("balance", logger, balances_mapping)
        self.nordigen_client = nordigen_client
        self.lunchmoney_client = lunchmoney_client

    def find_asset(self, asset_id: int) -> LunchmoneyAsset:
        for asset in self.lunchmoney_client.get_assets():
            if asset.id == asset_id:
                return asset
        msg = f"Could not find Lunchmoney asset {asset_id}"
        raise NotFoundError(msg)

    @classmethod
    def select_balance(
        cls, balances: list[NordigenBalance], currency: str | None
    ) -> NordigenBalance:
        """Select the first expected balance in the currency (case insensitive)."""
        for balance in balances:
            if (
                balance.balance_type == cls.BALANCE_TYPE
                and currency
                and (balance.currency or "").lower() == currency.lower()
            ):
                return balance
        msg = f"Could not find an {cls.BALANCE_TYPE} balance in currency {currency}"
        raise NotFoundError(msg)

    def sync_account(self, account_id: str, asset_id: int) -> Decimal:
        """Set the balance of the asset to the balance of the account.

        Returns
        -------
            The synced balance.

        """
        with self.account_context(account_id, asset_id):
            asset = self.find_asset(asset_id)
            balances = self.nordigen_client.get_account_balances(account_id)
            balance = self.select_balance(balances, asset.currency)
            self.lunchmoney_client.update_asset(
                asset_id, LunchmoneyAssetUpdate(balance=balance.amount)
            )
        self.logger.info(
            "Synced balance %s of account %s to asset %s",
            balance.amount,
            account_id,
            asset_id,
        )
        return balance.amount
