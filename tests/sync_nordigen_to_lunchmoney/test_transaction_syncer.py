from unittest.mock import Mock

import pytest

from nordigen_lunchmoney_connect.clients.lunchmoney_client import LunchmoneyClient
from nordigen_lunchmoney_connect.clients.nordigen_client import NordigenClient
from nordigen_lunchmoney_connect.data.nordigen_transaction_to_lunchmoney_transaction_mapper import (  # noqa: E501
    NordigenTransactionToLunchmoneyTransactionMapper,
)
from nordigen_lunchmoney_connect.helpers.errors import (
    RemoteError,
    ValidationError,
)
from nordigen_lunchmoney_connect.models.lunchmoney_transaction import (
    LunchmoneyTransactionStatus,
)
from nordigen_lunchmoney_connect.models.nordigen_account import NordigenAccount
from nordigen_lunchmoney_connect.models.nordigen_transaction import (
    NordigenTransaction,
    NordigenTransactions,
)
from nordigen_lunchmoney_connect.sync_nordigen_to_lunchmoney.transaction_syncer import (  # noqa: E501
    TransactionSyncer,
)


def _transaction(transaction_id: str, amount: str = "-1.00") -> NordigenTransaction:
    return NordigenTransaction.model_validate(
        {
            "transactionId": transaction_id,
            "transactionAmount": {"amount": amount, "currency": "EUR"},
            "creditorName": "Shop",
            "valueDate": "2024-01-05",
        }
    )


@pytest.fixture
def nordigen_client() -> Mock:
    client = Mock(spec=NordigenClient)
    client.get_account_details.return_value = NordigenAccount(owner_name="Jane")
    return client


@pytest.fixture
def lunchmoney_client() -> Mock:
    client = Mock(spec=LunchmoneyClient)
    client.insert_transactions.side_effect = len
    return client


@pytest.fixture
def syncer(nordigen_client: Mock, lunchmoney_client: Mock) -> TransactionSyncer:
    return TransactionSyncer(
        logger=Mock(),
        nordigen_client=nordigen_client,
        lunchmoney_client=lunchmoney_client,
        mapper=NordigenTransactionToLunchmoneyTransactionMapper(),
        transactions_mapping={"acc-1": 7, "acc-2": 8},
    )


def test_booked_are_cleared_and_pending_are_uncleared(
    syncer: TransactionSyncer, nordigen_client: Mock, lunchmoney_client: Mock
) -> None:
    # Arrange
    nordigen_client.get_transactions.return_value = NordigenTransactions(
        booked=[_transaction("b-1")], pending=[_transaction("p-1")]
    )
    # Act
    inserted = syncer.sync_account("acc-1", 7)
    # Assert
    assert inserted == 2  # noqa: PLR2004
    (submitted,) = lunchmoney_client.insert_transactions.call_args.args
    assert [(t.external_id, t.status) for t in submitted] == [
        ("b-1", LunchmoneyTransactionStatus.CLEARED),
        ("p-1", LunchmoneyTransactionStatus.UNCLEARED),
    ]
    assert all(t.asset_id == 7 for t in submitted)  # noqa: PLR2004


def test_transactions_are_inserted_in_chunks(
    syncer: TransactionSyncer, nordigen_client: Mock, lunchmoney_client: Mock
) -> None:
    # Arrange
    nordigen_client.get_transactions.return_value = NordigenTransactions(
        booked=[_transaction(f"b-{i}") for i in range(120)]
    )
    # Act
    syncer.sync_account("acc-1", 7)
    # Assert
    chunks = [c.args[0] for c in lunchmoney_client.insert_transactions.call_args_list]
    assert [len(c) for c in chunks] == [50, 50, 20]
    assert [t.external_id for c in chunks for t in c] == [
        f"b-{i}" for i in range(120)
    ]


def test_no_transactions_means_no_insert(
    syncer: TransactionSyncer, nordigen_client: Mock, lunchmoney_client: Mock
) -> None:
    nordigen_client.get_transactions.return_value = NordigenTransactions()
    assert syncer.sync_account("acc-1", 7) == 0
    lunchmoney_client.insert_transactions.assert_not_called()


def test_skipped_duplicates_are_not_an_error(
    syncer: TransactionSyncer, nordigen_client: Mock, lunchmoney_client: Mock
) -> None:
    # Arrange
    nordigen_client.get_transactions.return_value = NordigenTransactions(
        booked=[_transaction(f"b-{i}") for i in range(60)]
    )
    lunchmoney_client.insert_transactions.side_effect = [0, 4]
    # Act
    inserted = syncer.sync_account("acc-1", 7)
    # Assert
    assert inserted == 4  # noqa: PLR2004
    assert lunchmoney_client.insert_transactions.call_count == 2  # noqa: PLR2004


def test_invalid_transaction_aborts_before_insert(
    syncer: TransactionSyncer, nordigen_client: Mock, lunchmoney_client: Mock
) -> None:
    # Arrange
    nordigen_client.get_transactions.return_value = NordigenTransactions(
        booked=[_transaction("b-1")], pending=[_transaction("p-0", amount="0")]
    )
    # Act
    with pytest.raises(ValidationError) as e:
        syncer.sync_account("acc-1", 7)
    # Assert
    assert e.value.transaction_id == "p-0"
    lunchmoney_client.insert_transactions.assert_not_called()


def test_insert_error_aborts_remaining_chunks(
    syncer: TransactionSyncer, nordigen_client: Mock, lunchmoney_client: Mock
) -> None:
    nordigen_client.get_transactions.return_value = NordigenTransactions(
        booked=[_transaction(f"b-{i}") for i in range(120)]
    )
    lunchmoney_client.insert_transactions.side_effect = RemoteError(
        "insert 50 transactions", "received 1 errors", errors=["bad"]
    )
    with pytest.raises(RemoteError):
        syncer.sync_account("acc-1", 7)
    assert lunchmoney_client.insert_transactions.call_count == 1


def test_owner_name_is_used_as_payee(
    syncer: TransactionSyncer, nordigen_client: Mock, lunchmoney_client: Mock
) -> None:
    # Arrange
    topup = NordigenTransaction.model_validate(
        {
            "transactionId": "t-1",
            "transactionAmount": {"amount": "20", "currency": "EUR"},
            "valueDate": "2024-01-05",
            "proprietaryBankTransactionCode": "TOPUP",
        }
    )
    nordigen_client.get_transactions.return_value = NordigenTransactions(
        booked=[topup]
    )
    # Act
    syncer.sync_account("acc-1", 7)
    # Assert
    nordigen_client.get_account_details.assert_called_once_with("acc-1")
    (submitted,) = lunchmoney_client.insert_transactions.call_args.args
    assert submitted[0].payee == "Jane"


def test_sync_continues_after_failing_account(
    syncer: TransactionSyncer, nordigen_client: Mock, lunchmoney_client: Mock
) -> None:
    # Arrange
    nordigen_client.get_transactions.side_effect = [
        RemoteError("fetch transactions of account acc-1", "timed out"),
        NordigenTransactions(booked=[_transaction("b-1")]),
    ]
    # Act
    failed = syncer.sync()
    # Assert
    assert failed == ["acc-1"]
    (submitted,) = lunchmoney_client.insert_transactions.call_args.args
    assert submitted[0].asset_id == 8  # noqa: PLR2004
    syncer.logger.exception.assert_called_once()


def test_sync_does_not_catch_unexpected_errors(
    syncer: TransactionSyncer, nordigen_client: Mock
) -> None:
    nordigen_client.get_account_details.side_effect = KeyError("account")
    with pytest.raises(KeyError):
        syncer.sync()


def test_error_names_the_account_and_asset(
    syncer: TransactionSyncer, nordigen_client: Mock
) -> None:
    # Arrange
    nordigen_client.get_transactions.return_value = NordigenTransactions(
        booked=[_transaction("t-9", amount="0")]
    )
    # Act
    with pytest.raises(ValidationError) as e:
        syncer.sync_account("acc-XYZ", 7)
    # Assert
    assert e.value.account_id == "acc-XYZ"
    assert e.value.asset_id == 7  # noqa: PLR2004
    assert "acc-XYZ" in str(e.value)
    assert "t-9" in str(e.value)
