from datetime import date
from decimal import Decimal

import pydantic
import pytest

from nordigen_lunchmoney_connect.models.nordigen_account import NordigenBalance
from nordigen_lunchmoney_connect.models.nordigen_transaction import (
    NordigenTransaction,
    NordigenTransactions,
)


def test_transaction_is_parsed_from_api_response() -> None:
    # Arrange
    data = {
        "transactionId": "trx-1",
        "transactionAmount": {"amount": "-42.50", "currency": "EUR"},
        "bookingDate": "2024-01-06",
        "valueDate": "2024-01-05",
        "debtorName": "Acme",
        "debtorAccount": {"iban": "NL00BANK0123456789"},
        "remittanceInformationUnstructuredArray": ["a", "b"],
        "proprietaryBankTransactionCode": "CARD_PAYMENT",
        "unknownField": "ignored",
    }
    # Act
    transaction = NordigenTransaction.model_validate(data)
    # Assert
    assert transaction.transaction_id == "trx-1"
    assert transaction.amount == Decimal("-42.50")
    assert transaction.currency == "EUR"
    assert transaction.value_date == date(2024, 1, 5)
    assert transaction.booking_date == date(2024, 1, 6)
    assert transaction.debtor_account.iban == "NL00BANK0123456789"
    assert transaction.remittance_information_unstructured_array == ["a", "b"]
    assert transaction.creditor_name is None


def test_bare_numeric_amount_is_accepted() -> None:
    transaction = NordigenTransaction.model_validate(
        {"transactionAmount": {"amount": 10.25, "currency": "EUR"}}
    )
    assert transaction.amount == Decimal("10.25")


def test_single_currency_exchange_object_is_normalized_to_list() -> None:
    # Arrange
    exchange = {
        "sourceCurrency": "USD",
        "exchangeRate": "1.0852",
        "targetCurrency": "EUR",
    }
    # Act
    single = NordigenTransaction.model_validate(
        {"transactionAmount": {"amount": "1", "currency": "EUR"}, "currencyExchange": exchange}
    )
    multiple = NordigenTransaction.model_validate(
        {"transactionAmount": {"amount": "1", "currency": "EUR"}, "currencyExchange": [exchange]}
    )
    # Assert
    assert single.currency_exchange == multiple.currency_exchange
    assert len(single.currency_exchange) == 1
    assert single.currency_exchange[0].exchange_rate == Decimal("1.0852")
    assert single.currency_exchange[0].source_currency == "USD"


def test_missing_currency_exchange_is_empty_list() -> None:
    transaction = NordigenTransaction.model_validate(
        {"transactionAmount": {"amount": "1", "currency": "EUR"}}
    )
    assert transaction.currency_exchange == []


def test_scalar_remittance_array_is_wrapped() -> None:
    transaction = NordigenTransaction.model_validate(
        {
            "transactionAmount": {"amount": "1", "currency": "EUR"},
            "remittanceInformationUnstructuredArray": "single line",
        }
    )
    assert transaction.remittance_information_unstructured_array == ["single line"]


@pytest.mark.parametrize(
    "data",
    [
        {"transactionAmount": {"amount": "twelve", "currency": "EUR"}},
        {"transactionAmount": {"amount": "1", "currency": "EUR"}, "valueDate": "05/01/2024"},
        {"valueDate": "2024-01-05"},
    ],
)
def test_malformed_transaction_is_rejected(data: dict) -> None:
    with pytest.raises(pydantic.ValidationError):
        NordigenTransaction.model_validate(data)


def test_transaction_is_immutable() -> None:
    transaction = NordigenTransaction.model_validate(
        {"transactionAmount": {"amount": "1", "currency": "EUR"}}
    )
    with pytest.raises(pydantic.ValidationError):
        transaction.creditor_name = "Someone"


def test_transactions_default_to_empty_lists() -> None:
    transactions = NordigenTransactions.model_validate({"booked": []})
    assert transactions.booked == []
    assert transactions.pending == []


def test_balance_is_parsed_from_api_response() -> None:
    # Act
    balance = NordigenBalance.model_validate(
        {
            "balanceAmount": {"amount": "12.00", "currency": "EUR"},
            "balanceType": "expected",
            "referenceDate": "2024-01-05",
            "lastChangeDateTime": "2024-01-05T10:15:30.123Z",
        }
    )
    # Assert
    assert balance.amount == Decimal("12.00")
    assert balance.currency == "EUR"
    assert balance.reference_date == date(2024, 1, 5)
    assert balance.last_change_date_time.hour == 10  # noqa: PLR2004
