from logging import LoggerAdapter

from kink import inject

from nordigen_lunchmoney_connect.clients.lunchmoney_client import LunchmoneyClient
from nordigen_lunchmoney_connect.clients.nordigen_client import NordigenClient
from nordigen_lunchmoney_connect.helpers.errors import SyncError
from nordigen_lunchmoney_connect.models.account_report import (
    AccountReport,
    NordigenAccountSummary,
)
from nordigen_lunchmoney_connect.models.nordigen_account import NordigenBalance


class AccountLister:
    """List the Nordigen accounts and the Lunchmoney assets.

    Used to find the ids for the transactions and balances mappings.
    """

    logger: LoggerAdapter
    nordigen_client: NordigenClient
    lunchmoney_client: LunchmoneyClient
    requisition_ids: list[str]

    @inject
    def __init__(
        self,
        logger: LoggerAdapter,
        nordigen_client: NordigenClient,
        lunchmoney_client: LunchmoneyClient,
        requisition_ids: list[str],
    ) -> None:
        self.logger = logger
        self.nordigen_client = nordigen_client
        self.lunchmoney_client = lunchmoney_client
        self.requisition_ids = requisition_ids

    @staticmethod
    def format_balances(balances: list[NordigenBalance]) -> dict[str, str]:
        return {
            b.balance_type: f"{b.amount:.2f} {b.currency}" for b in balances
        }

    def summarize_account(
        self, requisition_id: str, account_id: str
    ) -> NordigenAccountSummary | None:
        """Summarize an account. Return None if it cannot be loaded."""
        try:
            details = self.nordigen_client.get_account_details(account_id)
            balances = self.nordigen_client.get_account_balances(account_id)
        except SyncError:
            self.logger.warning(
                "Could not load account %s, skipping", account_id, exc_info=True
            )
            return None
        summary = NordigenAccountSummary(
            id=account_id,
            requisition_id=requisition_id,
            name=details.name,
            product=details.product,
            status=details.status,
            balances=self.format_balances(balances),
        )
        self.logger.info("Nordigen account: %s", summary.model_dump())
        return summary

    def list_accounts(self, requisition_ids: list[str] | None = None) -> AccountReport:
        """List the accounts of the requisitions, and all Lunchmoney assets.

        Parameters
        ----------
            requisition_ids: The requisitions to list the accounts of.
                Defaults to the configured requisitions.

        """
        report = AccountReport()
        for requisition_id in requisition_ids or self.requisition_ids:
            requisition = self.nordigen_client.list_accounts(requisition_id)
            for account_id in requisition.accounts:
                if summary := self.summarize_account(requisition_id, account_id):
                    report.nordigen_accounts.append(summary)
        report.lunchmoney_assets = self.lunchmoney_client.get_assets()
        for asset in report.lunchmoney_assets:
            self.logger.info(
                "Lunchmoney asset: %s",
                asset.model_dump(
                    include={
                        "id",
                        "name",
                        "institution_name",
                        "type_name",
                        "subtype_name",
                        "balance",
                        "currency",
                    }
                ),
            )
        return report
