from collections.abc import Callable
from datetime import date
from typing import NamedTuple

from nordigen_lunchmoney_connect.data.external_id import build_external_id
from nordigen_lunchmoney_connect.helpers.config import TRANSACTION_TAG
from nordigen_lunchmoney_connect.helpers.errors import ValidationError
from nordigen_lunchmoney_connect.models.lunchmoney_transaction import (
    LunchmoneyTransaction,
    LunchmoneyTransactionStatus,
)
from nordigen_lunchmoney_connect.models.nordigen_account import NordigenAccount
from nordigen_lunchmoney_connect.models.nordigen_transaction import (
    NordigenTransaction,
)

WALLET_TRANSFER_INFORMATION = "MONEY_TRANSFER"
WALLET_TRANSFER_CODES = ("TOPUP",)
CODES_AS_PAYEE = ("EXCHANGE", "TRANSFER")


class PayeeRule(NamedTuple):
    """Rule that provides the payee, if it applies to a transaction."""

    name: str
    applies: Callable[[NordigenTransaction, NordigenAccount], bool]
    payee: Callable[[NordigenTransaction, NordigenAccount], str | None]


def is_wallet_transfer(transaction: NordigenTransaction, _: NordigenAccount) -> bool:
    """Transfers between the account and a wallet of the owner (e.g. PayPal)."""
    return (
        transaction.additional_information == WALLET_TRANSFER_INFORMATION
        or transaction.proprietary_bank_transaction_code in WALLET_TRANSFER_CODES
    )


def has_code_as_payee(transaction: NordigenTransaction, _: NordigenAccount) -> bool:
    return transaction.proprietary_bank_transaction_code in CODES_AS_PAYEE


def _always(*_: object) -> bool:
    return True


PAYEE_RULES: tuple[PayeeRule, ...] = (
    PayeeRule("creditor", _always, lambda t, _: t.creditor_name),
    PayeeRule("debtor", _always, lambda t, _: t.debtor_name),
    PayeeRule("owner", is_wallet_transfer, lambda _, a: a.owner_name),
    PayeeRule(
        "bank_code",
        has_code_as_payee,
        lambda t, _: t.proprietary_bank_transaction_code.lower().title(),
    ),
)


class NordigenTransactionToLunchmoneyTransactionMapper:
    """Converts a Nordigen transaction into a Lunchmoney transaction.

    The conversion never guesses values. It only decides which source field to use.
    If the result is not a valid Lunchmoney transaction, a ValidationError is raised
    instead of sending it.

    Attributes
    ----------
        payee_rules: The rules to decide the payee, in order of priority
        tags: The tags to add to each transaction

    """

    payee_rules: tuple[PayeeRule, ...]
    tags: list[str]

    def __init__(
        self,
        payee_rules: tuple[PayeeRule, ...] = PAYEE_RULES,
        tags: list[str] | None = None,
    ) -> None:
        self.payee_rules = payee_rules
        self.tags = [TRANSACTION_TAG] if tags is None else tags

    def map(
        self,
        transaction: NordigenTransaction,
        account: NordigenAccount,
        asset_id: int,
        status: LunchmoneyTransactionStatus,
    ) -> LunchmoneyTransaction:
        """Convert the transaction of the account into a transaction of the asset.

        Raises
        ------
            ValidationError: If the converted transaction is invalid.

        """
        notes = self.decide_notes(transaction)
        external_id = transaction.transaction_id or build_external_id(
            transaction, notes
        )
        values = {
            "asset_id": asset_id,
            "amount": transaction.amount,
            "currency": transaction.currency.lower(),
            "date": self.decide_date(transaction),
            "payee": self.decide_payee(transaction, account),
            "external_id": external_id,
        }
        self.validate(values, transaction.transaction_id or external_id)
        return LunchmoneyTransaction(
            **values, notes=notes, status=status, tags=list(self.tags)
        )

    def decide_payee(
        self, transaction: NordigenTransaction, account: NordigenAccount
    ) -> str | None:
        """Use the first rule that applies and provides a non-empty payee."""
        for rule in self.payee_rules:
            if not rule.applies(transaction, account):
                continue
            if payee := rule.payee(transaction, account):
                return payee
        return None

    @staticmethod
    def decide_date(transaction: NordigenTransaction) -> date | None:
        return transaction.value_date or transaction.booking_date

    @staticmethod
    def decide_notes(transaction: NordigenTransaction) -> str:
        if transaction.remittance_information_unstructured:
            return transaction.remittance_information_unstructured
        return "; ".join(transaction.remittance_information_unstructured_array)

    @staticmethod
    def validate(values: dict, transaction_id: str | None) -> None:
        """Raise for the first required field that is not set.

        - The asset id should be positive
        - The amount should not be zero
        - The currency, date, payee and external id should not be empty
        """
        if values["asset_id"] <= 0:
            raise ValidationError("asset_id", transaction_id)
        for field in ("amount", "currency", "date", "payee", "external_id"):
            if not values[field]:
                raise ValidationError(field, transaction_id)
