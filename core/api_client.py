"""
Megaport REST API client.

Owns the base URL, session-token authentication, raw HTTP calls and the
classification of HTTP responses into success or RemoteAPIError. Higher
layers (core.product, core.mcr) never talk to requests directly.

Usage:
    from core.api_client import MegaportClient

    with MegaportClient() as client:  # Uses MEGAPORT_* env vars
        with client.make_api_call("GET", "/v2/product/abc") as response:
            error = client.is_error_response(response, 200)

Environment Variables:
    MEGAPORT_ENVIRONMENT: production | staging | development (default: staging)
    MEGAPORT_BASE_URL: Explicit base URL, overrides MEGAPORT_ENVIRONMENT
    MEGAPORT_USERNAME / MEGAPORT_PASSWORD: Login credentials
    MEGAPORT_API_TOKEN: Pre-issued session token (skips login)
"""

import logging
from typing import Any, Optional

import requests
from requests.exceptions import ConnectionError, RequestException, Timeout
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from config.settings import MegaportSettings, get_settings
from core.errors import AuthenticationError, RemoteAPIError, TransportError

logger = logging.getLogger(__name__)

AUTH_HEADER = "X-Auth-Token"
LOGIN_PATH = "/v2/login"


class MegaportClient:
    """
    Megaport REST API client.

    Attributes:
        base_url: API root, e.g. https://api-staging.megaport.com
        timeout: Per-request timeout in seconds
        authenticated: Whether a session token is held
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout: Optional[int] = None,
        login_attempts: Optional[int] = None,
        login_backoff: Optional[float] = None,
        settings: Optional[MegaportSettings] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client. Explicit arguments win over settings.

        Args:
            base_url: API root (env: MEGAPORT_BASE_URL / MEGAPORT_ENVIRONMENT)
            username: Login username (env: MEGAPORT_USERNAME)
            password: Login password (env: MEGAPORT_PASSWORD)
            api_token: Pre-issued session token (env: MEGAPORT_API_TOKEN)
            timeout: Request timeout in seconds
            login_attempts: Login tries on connection failures
            login_backoff: Exponential backoff multiplier between login tries
            settings: MegaportSettings to read defaults from
            session: requests.Session to reuse
        """
        cfg = settings or get_settings().megaport

        self.base_url = (base_url or cfg.resolved_base_url).rstrip("/")
        self.username = username if username is not None else cfg.username
        self.password = password if password is not None else cfg.password.get_secret_value()
        self.timeout = timeout if timeout is not None else cfg.request_timeout
        self.login_attempts = login_attempts if login_attempts is not None else cfg.login_attempts
        self.login_backoff = login_backoff if login_backoff is not None else cfg.login_backoff

        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "Content-Type": "application/json",
        })

        self._token = api_token if api_token is not None else cfg.api_token.get_secret_value()
        if self._token:
            self.session.headers[AUTH_HEADER] = self._token

    @property
    def authenticated(self) -> bool:
        return bool(self._token)

    # =========================================================================
    # Authentication
    # =========================================================================

    def login(self, correlation_id: str = "") -> str:
        """
        Obtain a session token.

        Connection failures are retried with exponential backoff; rejected
        credentials are not.

        Returns:
            The session token

        Raises:
            AuthenticationError: Missing or invalid credentials
            TransportError: API unreachable after all attempts
        """
        log_prefix = f"[{correlation_id}] " if correlation_id else ""

        if not self.username or not self.password:
            raise AuthenticationError(
                f"{log_prefix}No credentials configured - set MEGAPORT_USERNAME "
                "and MEGAPORT_PASSWORD or MEGAPORT_API_TOKEN"
            )

        logger.info(f"{log_prefix}Logging into Megaport API at {self.base_url}")

        retrying = Retrying(
            stop=stop_after_attempt(max(1, self.login_attempts)),
            wait=wait_exponential(multiplier=self.login_backoff, max=10),
            retry=retry_if_exception_type(TransportError),
            reraise=True,
        )
        token = retrying(self._login_once, log_prefix)

        self._token = token
        self.session.headers[AUTH_HEADER] = token
        logger.info(f"{log_prefix}Megaport login successful")
        return token

    def _login_once(self, log_prefix: str) -> str:
        try:
            response = self.session.post(
                f"{self.base_url}{LOGIN_PATH}",
                data={"username": self.username, "password": self.password},
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self.timeout,
            )
        except (ConnectionError, Timeout) as e:
            logger.warning(f"{log_prefix}Login attempt failed: {e}")
            raise TransportError(
                f"{log_prefix}Cannot connect to Megaport API at {self.base_url}: {e}"
            ) from e

        with response:
            if response.status_code in (400, 401, 403):
                raise AuthenticationError(
                    f"{log_prefix}Invalid credentials for user '{self.username}'"
                )
            error = self.is_error_response(response, 200)
            if error is not None:
                raise error

            token = response.headers.get(AUTH_HEADER)
            if not token:
                try:
                    token = (response.json().get("data") or {}).get("session")
                except (ValueError, AttributeError):
                    token = None

        if not token:
            raise AuthenticationError(f"{log_prefix}Login response did not include a session token")
        return token

    def logout(self) -> None:
        """Drop the session token."""
        self._token = ""
        self.session.headers.pop(AUTH_HEADER, None)

    # =========================================================================
    # Requests
    # =========================================================================

    def make_api_call(
        self,
        method: str,
        path: str,
        body: Any = None,
        correlation_id: str = "",
    ) -> requests.Response:
        """
        Send an authenticated request.

        The caller owns the returned response and must close it, typically
        with ``with client.make_api_call(...) as response:``.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: API path, e.g. "/v2/product/<uid>"
            body: Pre-encoded bytes/str, or a JSON-serializable object
            correlation_id: For log tracing

        Raises:
            TransportError: Cannot connect or request timed out
            AuthenticationError: No credentials to log in with
        """
        log_prefix = f"[{correlation_id}] " if correlation_id else ""
        if not self.authenticated:
            self.login(correlation_id=correlation_id)

        url = f"{self.base_url}{path}"
        kwargs: dict = {"timeout": self.timeout}
        if isinstance(body, (bytes, str)):
            kwargs["data"] = body
        elif body is not None:
            kwargs["json"] = body

        logger.debug(f"{log_prefix}Megaport {method} {path}")

        try:
            return self.session.request(method=method, url=url, **kwargs)
        except ConnectionError as e:
            raise TransportError(
                f"{log_prefix}Cannot connect to Megaport API at {self.base_url}: {e}"
            ) from e
        except Timeout as e:
            raise TransportError(
                f"{log_prefix}Request to Megaport API timed out after {self.timeout}s"
            ) from e
        except RequestException as e:
            raise TransportError(f"{log_prefix}Request failed: {e}") from e

    def is_error_response(
        self,
        response: requests.Response,
        expected_code: int = 200,
    ) -> Optional[RemoteAPIError]:
        """
        Classify a response.

        Returns:
            None when the status code matches expected_code, otherwise a
            RemoteAPIError built from the body's message/data/trace fields.
        """
        if response.status_code == expected_code:
            return None

        message = f"API error {response.status_code}"
        data = None
        trace = None
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict):
            message = payload.get("message") or message
            data = payload.get("data")
            trace = payload.get("trace")
        elif response.text:
            message = response.text

        if response.status_code == 401:
            self.logout()

        return RemoteAPIError(message, status_code=response.status_code, data=data, trace=trace)

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        """Context manager entry - login unless a token is already held."""
        if not self.authenticated:
            self.login()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
