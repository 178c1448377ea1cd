from datetime import date, datetime
from decimal import Decimal
from typing import Any

from dateutil.parser import parse
from pydantic import BaseModel, ConfigDict, field_validator

from nordigen_lunchmoney_connect.helpers.parsing import parse_amount, parse_date
from nordigen_lunchmoney_connect.models.schema import Schema


class NordigenAmount(Schema):
    """An amount in a currency, as used in transactions and balances."""

    amount: Decimal
    currency: str | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, value: Any) -> Decimal:  # noqa: ANN401
        return parse_amount(value)


class NordigenAccount(Schema):
    """Represent the details of an account in Nordigen.

    The owner name is used as payee for transfers to and from wallets.
    """

    resource_id: str | None = None
    currency: str | None = None
    name: str | None = None
    owner_name: str | None = None
    product: str | None = None
    cash_account_type: str | None = None
    status: str | None = None
    iban: str | None = None
    bic: str | None = None
    usage: str | None = None


class NordigenBalance(Schema):
    """Represent one of the balances of an account.

    An account has multiple balances, one per balance type
    (e.g. "expected", "interimAvailable").
    """

    balance_amount: NordigenAmount
    balance_type: str
    reference_date: date | None = None
    last_change_date_time: datetime | None = None

    @field_validator("reference_date", mode="before")
    @classmethod
    def validate_reference_date(cls, value: Any) -> date | None:  # noqa: ANN401
        return parse_date(value)

    @field_validator("last_change_date_time", mode="before")
    @classmethod
    def validate_last_change(cls, value: str | datetime | None) -> datetime | None:
        if isinstance(value, str):
            return parse(value) if value else None
        return value

    @property
    def amount(self) -> Decimal:
        return self.balance_amount.amount

    @property
    def currency(self) -> str | None:
        return self.balance_amount.currency


class NordigenRequisition(BaseModel):
    """A requisition links the accounts of one bank, under one end-user agreement.

    The requisition endpoint uses snake_case keys, unlike the account endpoints.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    status: str | None = None
    institution_id: str | None = None
    agreement: str | None = None
    reference: str | None = None
    accounts: list[str] = []
    link: str | None = None
