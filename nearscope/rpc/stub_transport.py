"""
Stub-based transport implementation.

This module provides an in-memory transport that answers from canned
responses instead of the network. It is used for offline demos and by the
test suite, where it also records every request body it was given.
"""
import copy
import logging
from typing import Any, Callable, Dict, List, Optional, Union

# Local imports
from ..exceptions import TransportError
from .transport import RpcTransport

# Configure logger
logger = logging.getLogger(__name__)

StubResponse = Union[Dict[str, Any], Callable[[Dict[str, Any]], Dict[str, Any]]]


def response_key(body: Dict[str, Any]) -> str:
    """
    Compute the lookup key for a request body.

    ``query`` requests are keyed by request type ("query/view_account"),
    everything else by method name ("tx").
    """
    method = body.get("method", "")
    params = body.get("params")
    if method == "query" and isinstance(params, dict) and params.get("request_type"):
        return f"query/{params['request_type']}"
    return method


class StubTransport(RpcTransport):
    """
    A transport that replays canned JSON-RPC responses.

    Responses are registered per key (see ``response_key``) either as a
    ready response body or as a callable receiving the request body.
    """

    def __init__(self, responses: Optional[Dict[str, StubResponse]] = None):
        """Initialize the stub transport."""
        self.rpc_url: Optional[str] = None
        self.initialized = False
        self.responses: Dict[str, StubResponse] = dict(responses or {})
        self.requests: List[Dict[str, Any]] = []

    def initialize(self, rpc_url: str) -> None:
        """
        Initialize the stub transport.

        Args:
            rpc_url: URL of the RPC node (recorded, never contacted)
        """
        self.rpc_url = rpc_url
        self.initialized = True
        logger.debug(f"Initialized stub transport for {rpc_url}")

    def add_response(self, key: str, response: StubResponse) -> None:
        """Register the response returned for ``key``."""
        self.responses[key] = response

    def add_result(self, key: str, result: Any) -> None:
        """Register a successful ``result`` for ``key``."""
        self.responses[key] = lambda body: {"jsonrpc": "2.0", "id": body.get("id"), "result": result}

    def add_error(self, key: str, message: str, **fields: Any) -> None:
        """Register an ``error`` object for ``key``."""
        error = {"message": message, **fields}
        self.responses[key] = lambda body: {"jsonrpc": "2.0", "id": body.get("id"), "error": error}

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def send(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        Answer a request from the registered responses.

        Raises:
            TransportError: If not initialized or no response is registered
        """
        if not self.initialized:
            raise TransportError("Stub transport not initialized")

        self.requests.append(copy.deepcopy(body))
        key = response_key(body)
        logger.debug(f"StubTransport.send called with key={key}")

        if key not in self.responses:
            raise TransportError(f"No stub response registered for {key}")

        response = self.responses[key]
        if callable(response):
            return response(body)
        return copy.deepcopy(response)

    def close(self) -> None:
        """Close the stub transport (no-op)."""
        pass
