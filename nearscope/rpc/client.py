"""
JSON-RPC client for NEAR RPC nodes.

This module wraps the transport with JSON-RPC 2.0 framing and error
handling, and exposes the handful of read-only methods nearscope needs.
"""
import itertools
import logging
import threading
from typing import Any, Dict, List, Optional, Union

from ..config import DEFAULT_FINALITY, DEFAULT_NETWORK, NetworkConfig
from ..exceptions import ResponseShapeError, RpcError
from .transport import DEFAULT_TIMEOUT, RpcTransport, get_transport

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"


class NearRpcClient:
    """
    Client for a NEAR JSON-RPC endpoint.

    Each call builds a ``{jsonrpc, id, method, params}`` body, sends it
    through the transport and returns the ``result`` member. An ``error``
    member is raised as ``RpcError`` with the node's message verbatim.
    """

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        network: str = DEFAULT_NETWORK,
        transport: Optional[RpcTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
        retry_count: int = 0,
        archival: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the client.

        Args:
            rpc_url: Endpoint URL; resolved from ``network`` when omitted
            network: Network name used to look up the endpoint
            transport: Pre-built transport (an HTTP transport is created otherwise)
            timeout: Per-request timeout in seconds for the HTTP transport
            retry_count: Number of HTTP retries (0 disables retrying)
            archival: Use the network's archival endpoint
            logger: Optional logger instance to use for debug/info logging

        Raises:
            ValueError: If the network is unknown or the URL is not https
        """
        self.rpc_url = NetworkConfig.get_rpc_url(network, override=rpc_url, archival=archival)
        self.network = network
        self.logger = logger or logging.getLogger(__name__)

        if transport is None:
            transport = get_transport(self.rpc_url, timeout=timeout, retry_count=retry_count)
        self.transport = transport

        self._ids = itertools.count(1)
        self._id_lock = threading.Lock()

    def _next_id(self) -> int:
        with self._id_lock:
            return next(self._ids)

    def call(
        self,
        method: str,
        params: Union[Dict[str, Any], List[Any]],
        fallback_error: str = "RPC request failed"
    ) -> Any:
        """
        Perform one JSON-RPC call.

        Args:
            method: JSON-RPC method name
            params: Method parameters (object or positional list)
            fallback_error: Message used when the node's error has none

        Returns:
            The ``result`` member of the response

        Raises:
            RpcError: If the response carries an ``error`` object
            TransportError: If the request could not be completed
            ResponseShapeError: If the response has neither result nor error
        """
        body = {
            "jsonrpc": JSONRPC_VERSION,
            "id": self._next_id(),
            "method": method,
            "params": params,
        }
        self.logger.debug(f"RPC request {body['id']}: {method}")

        response = self.transport.send(body)

        error = response.get("error")
        if error:
            rpc_error = RpcError.from_payload(error, fallback_error)
            self.logger.warning(f"RPC {method} failed: {rpc_error.message}")
            raise rpc_error

        if "result" not in response:
            raise ResponseShapeError(f"RPC response for {method} has no result")
        return response["result"]

    def query(
        self,
        request_type: str,
        finality: str = DEFAULT_FINALITY,
        fallback_error: str = "Query failed",
        **params: Any
    ) -> Dict[str, Any]:
        """
        Perform a ``query`` call of the given request type.

        Some nodes report failed queries inside the result as
        ``{"error": "...", "logs": [...]}``; these are raised as ``RpcError``.
        """
        payload = {"request_type": request_type, **params, "finality": finality}
        result = self.call("query", payload, fallback_error=fallback_error)

        if not isinstance(result, dict):
            raise ResponseShapeError(
                f"Expected an object from query/{request_type}, got {type(result).__name__}"
            )
        if result.get("error"):
            self.logger.warning(f"Query {request_type} failed: {result['error']}")
            raise RpcError(str(result["error"]), data=result.get("logs"))
        return result

    def view_account(self, account_id: str, finality: str = DEFAULT_FINALITY) -> Dict[str, Any]:
        """Fetch the account view (balances, storage, code hash)."""
        return self.query(
            "view_account",
            finality=finality,
            fallback_error="Failed to fetch contract data",
            account_id=account_id,
        )

    def view_code(self, account_id: str, finality: str = DEFAULT_FINALITY) -> Dict[str, Any]:
        """Fetch the deployed contract code view."""
        return self.query(
            "view_code",
            finality=finality,
            fallback_error="Failed to fetch contract code",
            account_id=account_id,
        )

    def call_function(
        self,
        account_id: str,
        method_name: str,
        args_base64: str,
        finality: str = DEFAULT_FINALITY
    ) -> Dict[str, Any]:
        """Invoke a view method."""
        return self.query(
            "call_function",
            finality=finality,
            fallback_error="Method call failed",
            account_id=account_id,
            method_name=method_name,
            args_base64=args_base64,
        )

    def tx_status(self, tx_hash: str, sender_account_id: str) -> Dict[str, Any]:
        """Fetch a transaction and its receipts."""
        result = self.call("tx", [tx_hash, sender_account_id], fallback_error="Failed to fetch transaction")
        if not isinstance(result, dict):
            raise ResponseShapeError(f"Expected an object from tx, got {type(result).__name__}")
        return result

    def close(self) -> None:
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
