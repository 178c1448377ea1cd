from .account_report import AccountReport, NordigenAccountSummary
from .lunchmoney_asset import LunchmoneyAsset, LunchmoneyAssetUpdate
from .lunchmoney_transaction import LunchmoneyTransaction, LunchmoneyTransactionStatus
from .nordigen_account import (
    NordigenAccount,
    NordigenAmount,
    NordigenBalance,
    NordigenRequisition,
)
from .nordigen_transaction import (
    CurrencyExchange,
    IbanAccount,
    NordigenTransaction,
    NordigenTransactions,
)

__all__ = [
    "AccountReport",
    "CurrencyExchange",
    "IbanAccount",
    "LunchmoneyAsset",
    "LunchmoneyAssetUpdate",
    "LunchmoneyTransaction",
    "LunchmoneyTransactionStatus",
    "NordigenAccount",
    "NordigenAccountSummary",
    "NordigenAmount",
    "NordigenBalance",
    "NordigenRequisition",
    "NordigenTransaction",
    "NordigenTransactions",
]
