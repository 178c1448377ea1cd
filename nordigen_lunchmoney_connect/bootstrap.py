"""Initialize the dependency injection container and inject dependencies."""

import logging
import os

from dotenv import find_dotenv, load_dotenv
from kink import di
from prefect.exceptions import MissingContextError
from prefect.logging import get_logger, get_run_logger
from requests import Session

from nordigen_lunchmoney_connect.clients.lunchmoney_client import LunchmoneyClient
from nordigen_lunchmoney_connect.clients.nordigen_client import NordigenClient
from nordigen_lunchmoney_connect.data.nordigen_transaction_to_lunchmoney_transaction_mapper import (  # noqa: E501
    NordigenTransactionToLunchmoneyTransactionMapper,
)
from nordigen_lunchmoney_connect.helpers.config import (
    BALANCES_MAPPING_INDEX,
    DEFAULT_REQUEST_TIMEOUT,
    LUNCHMONEY_ACCESS_TOKEN_INDEX,
    NORDIGEN_REQUISITION_IDS_INDEX,
    NORDIGEN_SECRET_ID_INDEX,
    NORDIGEN_SECRET_KEY_INDEX,
    REQUEST_TIMEOUT_INDEX,
    TRANSACTIONS_MAPPING_INDEX,
)
from nordigen_lunchmoney_connect.helpers.general import parse_list, parse_mapping


def _load_env() -> None:
    load_dotenv(find_dotenv())


def _get_logger(name: str) -> logging.LoggerAdapter:
    """Get the logger.

    If we can get the prefect logger (we are running in a prefect flow), use it
    If not, create a new logger.
    """
    try:
        logger = get_run_logger()
    except MissingContextError:
        logger = get_logger(name)
    logger.setLevel(logging.DEBUG)
    return logger


def bootstrap_di() -> None:
    """Inject dependencies into the dependency injection container."""
    # Env
    _load_env()

    # Logging
    # Use factory, to retry getting the prefect logger each time
    di.factories[logging.LoggerAdapter] = lambda _: _get_logger("logger")

    # Config
    di[NORDIGEN_SECRET_ID_INDEX] = os.getenv("NORDIGEN_SECRET_ID")
    di[NORDIGEN_SECRET_KEY_INDEX] = os.getenv("NORDIGEN_SECRET_KEY")
    di[NORDIGEN_REQUISITION_IDS_INDEX] = parse_list(
        os.getenv("NORDIGEN_REQUISITION_IDS")
    )
    di[LUNCHMONEY_ACCESS_TOKEN_INDEX] = os.getenv("LUNCHMONEY_ACCESS_TOKEN")
    di[TRANSACTIONS_MAPPING_INDEX] = parse_mapping(os.getenv("TRANSACTIONS_MAPPING"))
    di[BALANCES_MAPPING_INDEX] = parse_mapping(os.getenv("BALANCES_MAPPING"))
    di[REQUEST_TIMEOUT_INDEX] = int(
        os.getenv("REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))
    )

    # Clients share one http session. Created lazily, since they validate the
    # credentials upon creation.
    di[Session] = lambda _: Session()
    di[NordigenClient] = lambda _: NordigenClient()
    di[LunchmoneyClient] = lambda _: LunchmoneyClient()
    di[NordigenTransactionToLunchmoneyTransactionMapper] = (
        lambda _: NordigenTransactionToLunchmoneyTransactionMapper()
    )
