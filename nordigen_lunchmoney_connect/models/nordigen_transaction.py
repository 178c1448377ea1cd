from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import field_validator

from nordigen_lunchmoney_connect.helpers.parsing import parse_amount, parse_date
from nordigen_lunchmoney_connect.models.nordigen_account import NordigenAmount
from nordigen_lunchmoney_connect.models.schema import Schema


class IbanAccount(Schema):
    iban: str | None = None


class CurrencyExchange(Schema):
    """Exchange rate details of a transaction in a foreign currency."""

    source_currency: str | None = None
    exchange_rate: Decimal | None = None
    unit_currency: str | None = None
    target_currency: str | None = None
    quotation_date: date | None = None

    @field_validator("exchange_rate", mode="before")
    @classmethod
    def validate_exchange_rate(cls, value: Any) -> Decimal | None:  # noqa: ANN401
        return None if value in (None, "") else parse_amount(value)

    @field_validator("quotation_date", mode="before")
    @classmethod
    def validate_quotation_date(cls, value: Any) -> date | None:  # noqa: ANN401
        return parse_date(value)


class NordigenTransaction(Schema):
    """Represents a booked or pending transaction of a Nordigen account.

    Banks fill different subsets of the fields. Only the amount is required.
    """

    transaction_id: str | None = None
    internal_transaction_id: str | None = None
    entry_reference: str | None = None
    transaction_amount: NordigenAmount
    currency_exchange: list[CurrencyExchange] = []
    booking_date: date | None = None
    value_date: date | None = None
    creditor_name: str | None = None
    creditor_account: IbanAccount | None = None
    debtor_name: str | None = None
    debtor_account: IbanAccount | None = None
    remittance_information_unstructured: str | None = None
    remittance_information_unstructured_array: list[str] = []
    bank_transaction_code: str | None = None
    proprietary_bank_transaction_code: str | None = None
    additional_information: str | None = None

    @field_validator("booking_date", "value_date", mode="before")
    @classmethod
    def validate_dates(cls, value: Any) -> date | None:  # noqa: ANN401
        return parse_date(value)

    @field_validator("currency_exchange", mode="before")
    @classmethod
    def validate_currency_exchange(cls, value: Any) -> list:  # noqa: ANN401
        """Some banks send a single exchange object, others a list of them."""
        if value is None:
            return []
        if isinstance(value, dict):
            return [value]
        return value

    @field_validator("remittance_information_unstructured_array", mode="before")
    @classmethod
    def validate_remittance_array(cls, value: Any) -> list:  # noqa: ANN401
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @property
    def amount(self) -> Decimal:
        return self.transaction_amount.amount

    @property
    def currency(self) -> str:
        return self.transaction_amount.currency or ""


class NordigenTransactions(Schema):
    """The booked and pending transactions of an account."""

    booked: list[NordigenTransaction] = []
    pending: list[NordigenTransaction] = []
