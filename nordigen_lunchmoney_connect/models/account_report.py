from pydantic import BaseModel

from nordigen_lunchmoney_connect.models.lunchmoney_asset import LunchmoneyAsset


class NordigenAccountSummary(BaseModel):
    """Summary of a Nordigen account, used to configure the mappings.

    Balances are formatted as "<amount> <currency>", keyed by balance type.
    """

    id: str
    requisition_id: str
    name: str | None = None
    product: str | None = None
    status: str | None = None
    balances: dict[str, str] = {}


class AccountReport(BaseModel):
    """All Nordigen accounts of the requisitions, and all Lunchmoney assets."""

    nordigen_accounts: list[NordigenAccountSummary] = []
    lunchmoney_assets: list[LunchmoneyAsset] = []
