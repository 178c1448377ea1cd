from logging import LoggerAdapter

from kink import inject
from requests import Session

from nordigen_lunchmoney_connect.clients.base_client import BaseClient, to_error_list
from nordigen_lunchmoney_connect.helpers.config import LUNCHMONEY_BASE_URL
from nordigen_lunchmoney_connect.helpers.errors import RemoteError
from nordigen_lunchmoney_connect.models.lunchmoney_asset import (
    LunchmoneyAsset,
    LunchmoneyAssetUpdate,
)
from nordigen_lunchmoney_connect.models.lunchmoney_transaction import (
    LunchmoneyTransaction,
)


class LunchmoneyClient(BaseClient):
    """Client for the Lunchmoney API.

    Attributes
    ----------
        INSERT_OPTIONS (dict): The fixed flags of each transactions insert.
            Duplicates (by external id) are skipped silently.

    """

    BASE_URL = LUNCHMONEY_BASE_URL
    INSERT_OPTIONS = {  # noqa: RUF012
        "apply_rules": True,
        "skip_duplicates": True,
        "check_for_recurring": True,
        "debit_as_negative": True,
        "skip_balance_update": False,
    }

    @inject
    def __init__(
        self,
        session: Session,
        logger: LoggerAdapter,
        request_timeout: int,
        lunchmoney_access_token: str | None,
    ) -> None:
        super().__init__(session, logger, request_timeout)
        if not lunchmoney_access_token:
            msg = "Please set your lunchmoney token as LUNCHMONEY_ACCESS_TOKEN"
            self.logger.error(msg)
            raise ValueError(msg)
        self._token = lunchmoney_access_token

    @property
    def access_token(self) -> str:
        return self._token

    def get_assets(self) -> list[LunchmoneyAsset]:
        response = self.get(endpoint="/v1/assets", operation="fetch assets")
        assets = [
            self.to_model(LunchmoneyAsset, a, f"asset {a.get('id')}")
            for a in response.get("assets") or []
        ]
        self.logger.info("Loaded %s lunchmoney assets", len(assets))
        return assets

    def update_asset(self, asset_id: int, update: LunchmoneyAssetUpdate) -> None:
        """Update the fields of the asset that are set in the update."""
        operation = f"update asset {asset_id}"
        response = self.put(
            endpoint="/v1/assets/{asset_id}",
            operation=operation,
            data=update.to_request(),
            asset_id=asset_id,
        )
        errors = to_error_list(response.get("errors") or response.get("error"))
        if errors:
            raise RemoteError(
                operation, f"received {len(errors)} errors", errors=errors
            )

    def insert_transactions(self, transactions: list[LunchmoneyTransaction]) -> int:
        """Insert transactions, and return the number of inserted transactions.

        The number can be lower than the number of transactions, since duplicates
        are skipped. That is not an error. Errors reported by the API are raised.
        """
        operation = f"insert {len(transactions)} transactions"
        response = self.post(
            endpoint="/v1/transactions",
            operation=operation,
            data={
                "transactions": [t.to_request() for t in transactions],
                **self.INSERT_OPTIONS,
            },
        )
        errors = to_error_list(response.get("error"))
        if errors:
            raise RemoteError(
                operation, f"received {len(errors)} errors", errors=errors
            )
        return len(response.get("ids") or [])
