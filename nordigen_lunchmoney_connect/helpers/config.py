"""Define the configuration variables for the project.

Values that differ per installation are read from the environment in bootstrap.py,
and registered in the di container under the indices below.
"""

NORDIGEN_BASE_URL = "https://ob.nordigen.com/api/v2"
LUNCHMONEY_BASE_URL = "https://dev.lunchmoney.app"

# Lunchmoney accepts at most this many transactions per insert request
TRANSACTIONS_CHUNK_SIZE = 50
TRANSACTION_TAG = "nordigen-lunchmoney-sync"
DEFAULT_REQUEST_TIMEOUT = 60

NORDIGEN_SECRET_ID_INDEX = "nordigen_secret_id"
NORDIGEN_SECRET_KEY_INDEX = "nordigen_secret_key"  # noqa: S105
NORDIGEN_REQUISITION_IDS_INDEX = "requisition_ids"
LUNCHMONEY_ACCESS_TOKEN_INDEX = "lunchmoney_access_token"  # noqa: S105
TRANSACTIONS_MAPPING_INDEX = "transactions_mapping"
BALANCES_MAPPING_INDEX = "balances_mapping"
REQUEST_TIMEOUT_INDEX = "request_timeout"
