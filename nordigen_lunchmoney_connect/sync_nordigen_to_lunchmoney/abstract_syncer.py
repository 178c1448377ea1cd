from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from logging import LoggerAdapter
from typing import Any

from nordigen_lunchmoney_connect.helpers.errors import SyncError


class AbstractSyncer(ABC):
    """Abstract class for syncing Nordigen accounts to Lunchmoney assets.

    Accounts are synced one by one. Accounts are independent: if the sync of one
    account fails, the failure is logged and the next account is synced.

    Attributes
    ----------
        purpose: What is synced, used for logging
        logger: The logger to log to
        mapping: Map from Nordigen account id to Lunchmoney asset id

    """

    purpose: str
    logger: LoggerAdapter
    mapping: dict[str, int]

    def __init__(
        self, purpose: str, logger: LoggerAdapter, mapping: dict[str, int]
    ) -> None:
        self.purpose = purpose
        self.logger = logger
        self.mapping = mapping

    @abstractmethod
    def sync_account(self, account_id: str, asset_id: int) -> Any:  # noqa: ANN401
        """Sync a single Nordigen account to a Lunchmoney asset."""
        raise NotImplementedError

    @staticmethod
    @contextmanager
    def account_context(account_id: str, asset_id: int) -> Iterator[None]:
        """Attach the account and asset to sync errors raised in the block."""
        try:
            yield
        except SyncError as e:
            e.set_account(account_id, asset_id)
            raise

    def sync(self) -> list[str]:
        """Sync all accounts in the mapping.

        Returns
        -------
            The ids of the accounts that failed to sync.

        """
        failed = []
        for account_id, asset_id in self.mapping.items():
            try:
                self.sync_account(account_id, asset_id)
            except SyncError:
                self.logger.exception(
                    "Could not sync %s of account %s to asset %s",
                    self.purpose,
                    account_id,
                    asset_id,
                )
                failed.append(account_id)
        self.logger.info(
            "Synced %s of %s accounts, %s failed",
            self.purpose,
            len(self.mapping) - len(failed),
            len(failed),
        )
        return failed
