from unittest.mock import Mock

import pytest
from click.testing import CliRunner

from nordigen_lunchmoney_connect import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_sync_transactions_succeeds(runner: CliRunner, monkeypatch) -> None:  # noqa: ANN001
    # Arrange
    syncer = Mock()
    syncer.sync.return_value = []
    monkeypatch.setattr(main, "TransactionSyncer", Mock(return_value=syncer))
    # Act
    result = runner.invoke(main.cli, ["sync-transactions"])
    # Assert
    assert result.exit_code == 0
    syncer.sync.assert_called_once_with()


def test_sync_balances_fails_if_an_account_failed(
    runner: CliRunner,
    monkeypatch,  # noqa: ANN001
) -> None:
    # Arrange
    syncer = Mock()
    syncer.sync.return_value = ["acc-1"]
    monkeypatch.setattr(main, "BalanceSyncer", Mock(return_value=syncer))
    # Act
    result = runner.invoke(main.cli, ["sync-balances"])
    # Assert
    assert result.exit_code == 1
    assert "acc-1" in result.output


def test_sync_account(runner: CliRunner, monkeypatch) -> None:  # noqa: ANN001
    # Arrange
    syncer = Mock()
    syncer.sync_account.return_value = 3
    monkeypatch.setattr(main, "TransactionSyncer", Mock(return_value=syncer))
    # Act
    result = runner.invoke(main.cli, ["sync-account", "acc-1", "7"])
    # Assert
    assert result.exit_code == 0
    syncer.sync_account.assert_called_once_with("acc-1", 7)
    assert "Inserted 3 transactions" in result.output


def test_list_accounts_of_given_requisitions(runner: CliRunner, monkeypatch) -> None:  # noqa: ANN001
    lister = Mock()
    monkeypatch.setattr(main, "AccountLister", Mock(return_value=lister))
    result = runner.invoke(main.cli, ["list-accounts", "req-1", "req-2"])
    assert result.exit_code == 0
    lister.list_accounts.assert_called_once_with(["req-1", "req-2"])
