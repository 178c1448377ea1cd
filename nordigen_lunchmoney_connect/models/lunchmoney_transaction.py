from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LunchmoneyTransactionStatus(str, Enum):  # noqa: D101
    CLEARED = "cleared"
    UNCLEARED = "uncleared"


class LunchmoneyTransaction(BaseModel):
    """Represents a transaction to insert into a Lunchmoney asset.

    Amounts are positive for credit. Debits are negative, the insert request sets
    debit_as_negative accordingly.
    """

    model_config = ConfigDict(frozen=True)

    asset_id: int
    amount: Decimal
    currency: str
    date: date
    payee: str
    notes: str | None = None
    status: LunchmoneyTransactionStatus
    external_id: str
    tags: list[str] = Field(default_factory=list)

    def to_request(self) -> dict:
        """Convert to the json body of the transactions endpoint."""
        return self.model_dump(mode="json", exclude_none=True)
