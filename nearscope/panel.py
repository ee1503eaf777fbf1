"""
Shared state handling for the request/response panels.

Every panel owns a ``PanelState`` (last data, last error, loading flag) and
allows one outstanding request at a time.
"""
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from pydantic import ValidationError as PydanticValidationError

from .exceptions import (
    GENERIC_ERROR_MESSAGE, NearScopeError, RequestInFlightError, ResponseShapeError
)
from .rpc.client import NearRpcClient

T = TypeVar('T')


@dataclass
class PanelState(Generic[T]):
    """What a panel currently shows"""
    data: Optional[T] = None
    error: Optional[str] = None
    loading: bool = False


def parse_response(build: Callable[[], T], what: str) -> T:
    """
    Run a model-building callable, mapping pydantic failures to ResponseShapeError.

    Args:
        build: Callable constructing models from a decoded response
        what: Short description used in the error message

    Returns:
        Whatever ``build`` returns
    """
    try:
        return build()
    except PydanticValidationError as e:
        raise ResponseShapeError(f"Unexpected {what} response shape: {e.error_count()} invalid field(s)") from e


class Panel(Generic[T]):
    """
    Base class for the panels.

    Subclasses implement a raising operation (``inspect``, ``call``, ...) and
    a ``submit`` wrapper that runs it through ``_run`` so its outcome lands
    in ``state``.
    """

    def __init__(self, client: NearRpcClient, logger: Optional[logging.Logger] = None):
        self.client = client
        self.logger = logger or logging.getLogger(self.__class__.__module__)
        self.state: PanelState[T] = PanelState()
        self._in_flight = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._in_flight.locked()

    def _run(self, operation: Callable[[], T]) -> Optional[T]:
        """
        Execute one submission.

        Prior data and error are cleared first. A ``NearScopeError`` is
        recorded in ``state.error`` and ``None`` is returned.

        Raises:
            RequestInFlightError: If another submission is still running
        """
        if not self._in_flight.acquire(blocking=False):
            raise RequestInFlightError(f"{self.__class__.__name__} already has a request in flight")

        try:
            self.state = PanelState(loading=True)
            try:
                data = operation()
            except NearScopeError as e:
                self.logger.debug(f"{self.__class__.__name__} request failed: {e!r}")
                self.state.error = str(e) or GENERIC_ERROR_MESSAGE
                return None
            self.state.data = data
            return data
        finally:
            self.state.loading = False
            self._in_flight.release()
