"""
Builders for RPC payloads used throughout the tests.
"""
from typing import Any, Dict, List, Optional

# Test constants used throughout tests
TEST_RPC_URL = "https://rpc.example.com"
TEST_ACCOUNT = "example.near"
TEST_CONTRACT = "wrap.near"
TEST_CODE_HASH = "E8jZ1giWcVrps8PcV75ATauu6gFRkcwjNtKp7NKmipZG"
# base58 of 32 bytes
TEST_TX_HASH = "9FtHUFBQsZ2MG77K3x3MJ9wjX3UT8zE1TczCrhZEcG8U"
TEST_SIGNER = "alice.near"


def account_view(**overrides: Any) -> Dict[str, Any]:
    """A view_account result as returned by the node."""
    view = {
        "amount": "100000000000000000000000000",
        "locked": "0",
        "code_hash": TEST_CODE_HASH,
        "storage_usage": 182,
        "storage_paid_at": 0,
        "block_height": 108375294,
        "block_hash": "3mbhA5a4zV9M6fPSKvHGhk3PcPPchAm3SrkGCi2GWvTJ",
        "block_timestamp": 1700000000123456789,
    }
    view.update(overrides)
    return view


def code_view(code_hash: str = TEST_CODE_HASH) -> Dict[str, Any]:
    return {
        "code_base64": "AGFzbQEAAAA=",
        "hash": code_hash,
        "block_height": 108375294,
        "block_hash": "3mbhA5a4zV9M6fPSKvHGhk3PcPPchAm3SrkGCi2GWvTJ",
    }


def no_code_error() -> Dict[str, Any]:
    """Fields of the node error for an account without a contract."""
    return {
        "code": -32000,
        "name": "HANDLER_ERROR",
        "cause": {"name": "NO_CONTRACT_CODE", "info": {"contract_account_id": TEST_ACCOUNT}},
        "data": f"Contract code for contract ID #{TEST_ACCOUNT} has never been observed on the node",
    }


def call_result(text: str, logs: Optional[List[str]] = None) -> Dict[str, Any]:
    """A call_function result carrying ``text`` as its byte array."""
    return {
        "result": list(text.encode("utf-8")),
        "logs": logs or [],
        "block_height": 108375294,
        "block_hash": "3mbhA5a4zV9M6fPSKvHGhk3PcPPchAm3SrkGCi2GWvTJ",
    }


def receipt_entry(
    receipt_id: str,
    parent_id: Optional[str] = None,
    logs: Optional[List[str]] = None,
    status: Any = None,
    gas_burnt: int = 2428000000000,
    actions: Optional[List[Any]] = None,
) -> Dict[str, Any]:
    """One entry of ``tx`` result ``receipts``."""
    entry = {
        "receipt_id": receipt_id,
        "predecessor_id": TEST_SIGNER,
        "receiver_id": TEST_CONTRACT,
        "receipt": {
            "Action": {
                "signer_id": TEST_SIGNER,
                "actions": actions if actions is not None else [{"FunctionCall": {"method_name": "ft_transfer"}}],
            }
        },
        "outcome": {
            "status": status if status is not None else {"SuccessValue": ""},
            "logs": logs or [],
            "gas_burnt": gas_burnt,
        },
    }
    if parent_id is not None:
        entry["parent_id"] = parent_id
    return entry


def outcome_entry(receipt_id: str, receipt_ids: Optional[List[str]] = None, logs: Optional[List[str]] = None) -> Dict[str, Any]:
    """One entry of the standard ``receipts_outcome`` list."""
    return {
        "id": receipt_id,
        "block_hash": "3mbhA5a4zV9M6fPSKvHGhk3PcPPchAm3SrkGCi2GWvTJ",
        "outcome": {
            "executor_id": TEST_CONTRACT,
            "gas_burnt": 1000000000000,
            "logs": logs or [],
            "receipt_ids": receipt_ids or [],
            "status": {"SuccessValue": ""},
            "tokens_burnt": "100000000000000000000",
        },
    }
