"""HTTP transport for the speedrun.com API."""

import logging
from typing import Any, Dict, Optional

import requests

from speedrun_client.config import ClientConfig
from speedrun_client.errors import DecodeError, HttpStatusError, TransportError
from speedrun_client.request import Request

log = logging.getLogger(__name__)


class HttpClient:
    """Performs requests and decodes JSON bodies.

    No retries are attempted; every failure surfaces as a SpeedrunError.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the transport with a configuration and optional session."""
        self.config = config or ClientConfig()
        self.session = session or requests.Session()
        self.session.headers.update(
            {"User-Agent": self.config.user_agent, "Accept": "application/json"}
        )

    @property
    def base_url(self) -> str:
        """API root that request paths are resolved against."""
        return self.config.base_url

    def do(self, request: Request) -> Dict[str, Any]:
        """Perform ``request`` and return the decoded JSON document.

        Raises:
            TransportError: the request could not be sent or answered
            HttpStatusError: the API answered with a non-2xx status
            DecodeError: the body is not a JSON object

        """
        url = request.url(self.base_url)
        log.debug("%s %s", request.method, url)

        try:
            response = self.session.request(
                request.method, url, timeout=self.config.timeout
            )
        except requests.RequestException as exc:
            raise TransportError(f"Network error: {exc}", url) from exc

        if not 200 <= response.status_code < 300:
            raise HttpStatusError(
                response.status_code, _error_message(response), url
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise DecodeError(f"Response is not valid JSON: {exc}", url) from exc

        if not isinstance(body, dict):
            raise DecodeError("Response is not a JSON object", url)

        return body

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()


def _error_message(response: requests.Response) -> str:
    """Extract the API's error message, falling back to the reason phrase."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason or "request failed"
