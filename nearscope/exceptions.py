"""
Exceptions for the nearscope SDK.
"""
from typing import Any, Optional


GENERIC_ERROR_MESSAGE = "An error occurred"


class NearScopeError(Exception):
    """Base exception for all nearscope errors."""
    pass


class ValidationError(NearScopeError):
    """
    Raised when caller-supplied input is rejected locally.

    No network call is made when this is raised.
    """
    pass


class RpcError(NearScopeError):
    """
    Raised when the RPC node answers with an ``error`` object.

    The node's message is kept verbatim so it can be shown to the user as-is.
    """

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        name: Optional[str] = None,
        cause_name: Optional[str] = None,
        data: Any = None
    ):
        self.message = message
        self.code = code
        self.name = name
        self.cause_name = cause_name
        self.data = data
        super().__init__(message)

    @classmethod
    def from_payload(cls, error: Any, fallback: str) -> "RpcError":
        """
        Build an RpcError from the ``error`` member of a JSON-RPC response.

        Args:
            error: The raw ``error`` value (normally a dict)
            fallback: Message to use when the node sent none

        Returns:
            RpcError instance
        """
        if not isinstance(error, dict):
            return cls(str(error) if error else fallback)

        cause = error.get("cause")
        cause_name = cause.get("name") if isinstance(cause, dict) else None
        return cls(
            error.get("message") or fallback,
            code=error.get("code"),
            name=error.get("name"),
            cause_name=cause_name,
            data=error.get("data"),
        )


class TransportError(NearScopeError):
    """Raised when the RPC endpoint cannot be reached or answers garbage."""
    pass


class ResponseShapeError(TransportError):
    """Raised when a response parses but lacks the fields we need."""
    pass


class RequestInFlightError(NearScopeError):
    """Raised when a panel is asked to submit while a request is outstanding."""
    pass
