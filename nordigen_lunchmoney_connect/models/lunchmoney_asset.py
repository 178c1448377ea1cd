from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, field_serializer, field_validator

from nordigen_lunchmoney_connect.helpers.parsing import parse_amount


class LunchmoneyAsset(BaseModel):
    """Represents a manually managed asset (account) in Lunchmoney.

    The balance is only changed by an explicit update, never by inserting
    transactions.
    """

    id: int
    type_name: str | None = None
    subtype_name: str | None = None
    name: str | None = None
    display_name: str | None = None
    balance: Decimal | None = None
    balance_as_of: datetime | None = None
    currency: str | None = None
    institution_name: str | None = None
    created_at: datetime | None = None

    @field_validator("balance", mode="before")
    @classmethod
    def validate_balance(cls, value: Any) -> Decimal | None:  # noqa: ANN401
        return None if value is None else parse_amount(value)


class LunchmoneyAssetUpdate(BaseModel):
    """Partial update of an asset. Only the fields that are set are sent."""

    name: str | None = None
    display_name: str | None = None
    balance: Decimal | None = None
    balance_as_of: datetime | None = None
    currency: str | None = None
    institution_name: str | None = None

    @field_serializer("balance")
    def serialize_balance(self, balance: Decimal | None) -> str | None:
        return None if balance is None else f"{balance:.2f}"

    def to_request(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)
