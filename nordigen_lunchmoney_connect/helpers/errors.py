"""Errors raised while syncing Nordigen accounts to Lunchmoney.

All of them derive from SyncError, such that a failing account can be reported
without stopping the sync of the other accounts.
"""


class SyncError(Exception):
    """Base class for all errors raised during a sync.

    Attributes
    ----------
        account_id: The Nordigen account that was synced, once known
        asset_id: The Lunchmoney asset that was synced to, once known

    """

    account_id: str | None = None
    asset_id: int | None = None

    def set_account(self, account_id: str, asset_id: int) -> None:
        """Attach the account and asset that were being synced."""
        self.account_id = account_id
        self.asset_id = asset_id

    def __str__(self) -> str:
        msg = super().__str__()
        if self.account_id is None:
            return msg
        return f"Syncing account {self.account_id} to asset {self.asset_id}: {msg}"


class ParseError(SyncError, ValueError):
    """A numeric or date field from an API could not be parsed."""


class ValidationError(SyncError):
    """A converted transaction does not satisfy the Lunchmoney requirements.

    Attributes
    ----------
        field: The Lunchmoney transaction field that is invalid
        transaction_id: The id of the Nordigen transaction that was converted

    """

    field: str
    transaction_id: str | None

    def __init__(self, field: str, transaction_id: str | None) -> None:
        self.field = field
        self.transaction_id = transaction_id
        problem = "cannot be 0" if field == "amount" else "cannot be empty"
        super().__init__(
            f"Converting transaction {transaction_id}: "
            f"lunchmoney transaction {field.replace('_', ' ')} {problem}"
        )


class NotFoundError(SyncError, LookupError):
    """A required asset or balance does not exist."""


class RemoteError(SyncError):
    """An API call failed, or the API reported errors in its response.

    Attributes
    ----------
        operation: Description of the call that failed
        status_code: The http status code, if a response was received
        errors: The error messages reported by the API, if any

    """

    operation: str
    status_code: int | None
    errors: list[str]

    def __init__(
        self,
        operation: str,
        reason: str,
        status_code: int | None = None,
        errors: list[str] | None = None,
    ) -> None:
        self.operation = operation
        self.status_code = status_code
        self.errors = errors or []
        msg = f"Could not {operation}: {reason}"
        if self.errors:
            msg += f" ({'; '.join(self.errors)})"
        super().__init__(msg)
