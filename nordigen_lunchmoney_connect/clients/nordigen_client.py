from logging import LoggerAdapter

from kink import inject
from requests import Session

from nordigen_lunchmoney_connect.clients.base_client import BaseClient
from nordigen_lunchmoney_connect.helpers.config import NORDIGEN_BASE_URL
from nordigen_lunchmoney_connect.helpers.errors import RemoteError
from nordigen_lunchmoney_connect.models.nordigen_account import (
    NordigenAccount,
    NordigenBalance,
    NordigenRequisition,
)
from nordigen_lunchmoney_connect.models.nordigen_transaction import (
    NordigenTransaction,
    NordigenTransactions,
)


class NordigenClient(BaseClient):
    """Client for the Nordigen (GoCardless Bank Account Data) API.

    Authenticates with the secret id and key on the first request. The access token
    is reused for all following requests.

    Attributes
    ----------
        secret_id (str): The Nordigen secret id.
        secret_key (str): The Nordigen secret key.

    """

    BASE_URL = NORDIGEN_BASE_URL
    secret_id: str
    secret_key: str
    _access_token: str | None

    @inject
    def __init__(  # noqa: PLR0913
        self,
        session: Session,
        logger: LoggerAdapter,
        request_timeout: int,
        nordigen_secret_id: str | None,
        nordigen_secret_key: str | None,
    ) -> None:
        super().__init__(session, logger, request_timeout)
        if not nordigen_secret_id or not nordigen_secret_key:
            msg = "Please set NORDIGEN_SECRET_ID and NORDIGEN_SECRET_KEY"
            self.logger.error(msg)
            raise ValueError(msg)
        self.secret_id = nordigen_secret_id
        self.secret_key = nordigen_secret_key
        self._access_token = None

    @property
    def access_token(self) -> str:
        if self._access_token is None:
            self._access_token = self.authenticate()
        return self._access_token

    def authenticate(self) -> str:
        """Trade the secret id and key for an access token."""
        response = self.post(
            endpoint="/token/new/",
            operation="authenticate with Nordigen",
            data={"secret_id": self.secret_id, "secret_key": self.secret_key},
            authenticated=False,
        )
        if not response.get("access"):
            raise RemoteError("authenticate with Nordigen", "no access token received")
        self.logger.debug("Authenticated with Nordigen")
        return response["access"]

    def get_account_details(self, account_id: str) -> NordigenAccount:
        response = self.get(
            endpoint="/accounts/{account_id}/details/",
            operation=f"fetch details of account {account_id}",
            account_id=account_id,
        )
        return self.to_model(
            NordigenAccount,
            response.get("account"),
            f"details of account {account_id}",
        )

    def get_account_balances(self, account_id: str) -> list[NordigenBalance]:
        response = self.get(
            endpoint="/accounts/{account_id}/balances/",
            operation=f"fetch balances of account {account_id}",
            account_id=account_id,
        )
        balances = [
            self.to_model(NordigenBalance, b, f"balance of account {account_id}")
            for b in response.get("balances") or []
        ]
        self.logger.info(
            "Loaded %s balances for account %s", len(balances), account_id
        )
        return balances

    def get_transactions(self, account_id: str) -> NordigenTransactions:
        """Get the booked and pending transactions of an account.

        Transactions are parsed one by one, such that a parse error names the
        offending transaction.
        """
        response = self.get(
            endpoint="/accounts/{account_id}/transactions/",
            operation=f"fetch transactions of account {account_id}",
            account_id=account_id,
        )
        transactions = response.get("transactions") or {}
        return NordigenTransactions(
            booked=self._parse_transactions(transactions.get("booked"), account_id),
            pending=self._parse_transactions(transactions.get("pending"), account_id),
        )

    def _parse_transactions(
        self, transactions: list[dict] | None, account_id: str
    ) -> list[NordigenTransaction]:
        return [
            self.to_model(
                NordigenTransaction,
                t,
                f"transaction {t.get('transactionId')} of account {account_id}",
            )
            for t in transactions or []
        ]

    def list_accounts(self, requisition_id: str) -> NordigenRequisition:
        """Get the requisition, which holds the ids of its accounts."""
        response = self.get(
            endpoint="/requisitions/{requisition_id}/",
            operation=f"fetch accounts of requisition {requisition_id}",
            requisition_id=requisition_id,
        )
        requisition = self.to_model(
            NordigenRequisition, response, f"requisition {requisition_id}"
        )
        self.logger.info(
            "Loaded %s accounts for requisition %s",
            len(requisition.accounts),
            requisition_id,
        )
        return requisition
