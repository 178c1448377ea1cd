from abc import ABC, abstractmethod
from logging import LoggerAdapter
from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel
from requests import RequestException, Response, Session

from nordigen_lunchmoney_connect.helpers.errors import ParseError, RemoteError

M = TypeVar("M", bound=BaseModel)


class BaseClient(ABC):
    """Base client for the json APIs. Exposes get, post and put requests.

    Every request uses the bearer token of the implementation and the configured
    timeout. Failures are raised as RemoteError, with the errors reported by the
    API if the response contains them.

    Attributes
    ----------
        BASE_URL (str): The url to prepend to all endpoints.
        session (Session): The requests session, shared between clients.
        logger (LoggerAdapter): The logger.
        timeout (int): Timeout of each request, in seconds.

    """

    BASE_URL: str
    session: Session
    logger: LoggerAdapter
    timeout: int

    def __init__(self, session: Session, logger: LoggerAdapter, timeout: int) -> None:
        self.session = session
        self.logger = logger
        self.timeout = timeout

    @property
    @abstractmethod
    def access_token(self) -> str:
        """The token to use in the Authorization header."""
        raise NotImplementedError

    def get(
        self,
        *,
        endpoint: str,
        operation: str,
        **endpoint_variables: Any,  # noqa: ANN401
    ) -> Any:  # noqa: ANN401
        """Make a GET request.

        Parameters
        ----------
        endpoint : str
            The endpoint to call.
        operation : str
            Description of the request, used in errors.
        endpoint_variables : Any
            The variables to format the endpoint url with.

        """
        return self._request("GET", endpoint, operation, None, endpoint_variables)

    def post(
        self,
        *,
        endpoint: str,
        operation: str,
        data: dict | None = None,
        authenticated: bool = True,
        **endpoint_variables: Any,  # noqa: ANN401
    ) -> Any:  # noqa: ANN401
        """Make a POST request with a json body.

        Parameters
        ----------
        endpoint : str
            The endpoint to call.
        operation : str
            Description of the request, used in errors.
        data : dict, optional
            The data to POST, by default an empty object.
        authenticated : bool
            Whether to add the Authorization header, by default True.
        endpoint_variables : Any
            The variables to format the endpoint url with.

        """
        return self._request(
            "POST",
            endpoint,
            operation,
            data or {},
            endpoint_variables,
            authenticated=authenticated,
        )

    def put(
        self,
        *,
        endpoint: str,
        operation: str,
        data: dict | None = None,
        **endpoint_variables: Any,  # noqa: ANN401
    ) -> Any:  # noqa: ANN401
        """Make a PUT request with a json body."""
        return self._request("PUT", endpoint, operation, data or {}, endpoint_variables)

    def _request(  # noqa: PLR0913
        self,
        method: str,
        endpoint: str,
        operation: str,
        data: dict | None,
        endpoint_variables: dict,
        *,
        authenticated: bool = True,
    ) -> Any:  # noqa: ANN401
        url = self._format_endpoint(endpoint, **endpoint_variables)
        headers = self._default_headers(authenticated=authenticated)
        try:
            response = self.session.request(
                method, url, json=data, headers=headers, timeout=self.timeout
            )
        except RequestException as e:
            self.logger.exception("Error in API request %s %s", method, url)
            raise RemoteError(operation, str(e)) from e
        return self._handle_response(response, operation)

    def _default_headers(self, *, authenticated: bool) -> dict:
        headers = {"Content-Type": "application/json; charset=utf-8"}
        if authenticated:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _format_endpoint(self, endpoint: str, **params: Any) -> str:  # noqa: ANN401
        return f"{self.BASE_URL}/{endpoint.format(**params).lstrip('/')}"

    def _handle_response(self, response: Response, operation: str) -> Any:  # noqa: ANN401
        """Raise if the status is not ok, else return the decoded body."""
        if not response.ok:
            self.logger.error("Error in API request: %s", response.text)
            raise RemoteError(
                operation,
                f"received unexpected status code {response.status_code}",
                status_code=response.status_code,
                errors=self._extract_errors(response),
            )
        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(operation, "could not decode response body") from e

    @staticmethod
    def _extract_errors(response: Response) -> list[str]:
        """Extract the errors of an error response, if it has any.

        Nordigen sends {"summary", "detail"}, Lunchmoney sends "error" or "errors"
        as a string or a list of strings.
        """
        try:
            body = response.json()
        except ValueError:
            return []
        if not isinstance(body, dict):
            return []
        if body.get("summary") and body.get("detail"):
            return [f"{body['summary']}: {body['detail']}"]
        return to_error_list(body.get("error") or body.get("errors"))

    @staticmethod
    def to_model(model: type[M], data: Any, description: str) -> M:  # noqa: ANN401
        """Validate API data into a model. Raise a ParseError if it is invalid."""
        try:
            return model.model_validate(data)
        except pydantic.ValidationError as e:
            msg = f"Could not parse {description}: {e}"
            raise ParseError(msg) from e


def to_error_list(errors: Any) -> list[str]:  # noqa: ANN401
    """Normalize the errors of a response to a list of strings."""
    if not errors:
        return []
    if isinstance(errors, str):
        return [errors]
    if isinstance(errors, list):
        return [str(e) for e in errors]
    return [str(errors)]
