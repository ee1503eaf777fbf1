"""
Transport layer for the JSON-RPC client.

This module provides an abstraction over how a request body reaches the
RPC node: the HTTP transport used in practice, and a stub transport
(see ``stub_transport``) for offline use and tests.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import validate_rpc_url
from ..exceptions import ResponseShapeError, TransportError
from ._rate_limited_log import rate_limited_log

# Configure logger
logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class RpcTransport(ABC):
    """
    Abstract base class for RPC transport implementations.

    A transport takes a fully built JSON-RPC request body and returns the
    decoded JSON response body. It knows nothing about JSON-RPC semantics.
    """

    @abstractmethod
    def initialize(self, rpc_url: str) -> None:
        """
        Initialize the transport with the given endpoint.

        Args:
            rpc_url: URL of the RPC node

        Raises:
            ValueError: If the URL is rejected
        """
        pass

    @abstractmethod
    def send(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        Send one request body and return the decoded response body.

        Args:
            body: JSON-RPC request object

        Returns:
            Decoded JSON response object

        Raises:
            TransportError: If the node cannot be reached or answers garbage
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Close any open connections or resources."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class HttpTransport(RpcTransport):
    """
    POSTs request bodies to an HTTPS endpoint with ``requests``.

    Retries are off by default; pass ``retry_count`` to let urllib3 retry
    connection errors and 5xx responses with exponential backoff.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, retry_count: int = 0):
        self.rpc_url: Optional[str] = None
        self.timeout = timeout
        self.retry_count = retry_count
        self.session: Optional[requests.Session] = None

    def initialize(self, rpc_url: str) -> None:
        self.rpc_url = validate_rpc_url(rpc_url)

        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if self.retry_count > 0:
            retries = Retry(
                total=self.retry_count,
                backoff_factor=0.5,
                status_forcelist=[500, 502, 503, 504],
                allowed_methods=["POST"],
                raise_on_status=False,
                connect=self.retry_count,
                read=self.retry_count,
            )
            adapter = HTTPAdapter(max_retries=retries)
        else:
            adapter = HTTPAdapter(max_retries=0)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)
        logger.debug(f"Initialized HTTP transport for {rpc_url}")

    def send(self, body: Dict[str, Any]) -> Dict[str, Any]:
        if self.session is None:
            raise TransportError("HTTP transport not initialized")

        try:
            response = self.session.post(self.rpc_url, json=body, timeout=self.timeout)
        except requests.Timeout as e:
            rate_limited_log(f"RPC request to {self.rpc_url} timed out", logger_instance=logger)
            raise TransportError(f"Request timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            rate_limited_log(f"RPC request to {self.rpc_url} failed: {e}", logger_instance=logger)
            raise TransportError(str(e) or "RPC request failed") from e

        # JSON-RPC nodes put error objects in 4xx/5xx bodies too, so parse first
        try:
            decoded = response.json()
        except ValueError as e:
            content_type = response.headers.get("Content-Type", "")
            rate_limited_log(
                f"Non-JSON response from {self.rpc_url} "
                f"(HTTP {response.status_code}, Content-Type: {content_type})",
                logger_instance=logger
            )
            raise TransportError(
                f"Invalid JSON response from RPC node (HTTP {response.status_code})"
            ) from e

        if not isinstance(decoded, dict):
            raise ResponseShapeError(
                f"Expected a JSON object from RPC node, got {type(decoded).__name__}"
            )
        return decoded

    def close(self) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None


def get_transport(
    rpc_url: str,
    timeout: float = DEFAULT_TIMEOUT,
    retry_count: int = 0
) -> RpcTransport:
    """
    Get an initialized HTTP transport for the given endpoint.

    Args:
        rpc_url: URL of the RPC node
        timeout: Per-request timeout in seconds
        retry_count: Number of urllib3 retries (0 disables retrying)

    Returns:
        Initialized transport
    """
    transport = HttpTransport(timeout=timeout, retry_count=retry_count)
    transport.initialize(rpc_url)
    return transport
