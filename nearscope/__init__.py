"""
nearscope - developer tooling for NEAR JSON-RPC endpoints.

Inspect accounts and contracts, call view methods and explore the receipt
tree of a transaction.
"""
from .version import __version__
from .config import NetworkConfig
from .exceptions import (
    NearScopeError, ValidationError, RpcError, TransportError,
    ResponseShapeError, RequestInFlightError
)
from .models import (
    ContractRecord, ExecutionStatus, StatusKind, Receipt, ReceiptOutcome,
    ActionReceipt, DataReceipt, ViewCallResult, NO_CODE_SENTINEL
)
from .rpc import NearRpcClient, HttpTransport, StubTransport
from .panel import PanelState
from .inspector import ContractInspector
from .view_caller import ViewMethodCaller, COMMON_METHODS, TEMPLATES, encode_args, decode_args
from .debugger import TransactionDebugger, ExpansionState, build_receipt_tree, render_receipt_tree

__all__ = [
    "__version__",
    "NetworkConfig",
    "NearScopeError",
    "ValidationError",
    "RpcError",
    "TransportError",
    "ResponseShapeError",
    "RequestInFlightError",
    "ContractRecord",
    "ExecutionStatus",
    "StatusKind",
    "Receipt",
    "ReceiptOutcome",
    "ActionReceipt",
    "DataReceipt",
    "ViewCallResult",
    "NO_CODE_SENTINEL",
    "NearRpcClient",
    "HttpTransport",
    "StubTransport",
    "PanelState",
    "ContractInspector",
    "ViewMethodCaller",
    "COMMON_METHODS",
    "TEMPLATES",
    "encode_args",
    "decode_args",
    "TransactionDebugger",
    "ExpansionState",
    "build_receipt_tree",
    "render_receipt_tree",
]
