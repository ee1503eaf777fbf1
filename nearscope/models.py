"""
Data models for nearscope.
"""
import base64
import binascii
import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

NO_CODE_SENTINEL = "No code deployed"
GAS_PER_TGAS = 10**12


class ContractRecord(BaseModel):
    """Merged account and code view of one account"""
    account_id: str
    code_hash: str = NO_CODE_SENTINEL
    block_height: int = 0
    block_timestamp: int = 0  # nanoseconds
    storage_paid_at: str = "0"
    storage_usage: str = "0"
    amount: Optional[str] = None
    locked: Optional[str] = None

    @field_validator("storage_paid_at", "storage_usage", mode="before")
    @classmethod
    def _stringify_counter(cls, value: Any) -> str:
        return "0" if value is None else str(value)

    @property
    def has_code(self) -> bool:
        return self.code_hash != NO_CODE_SENTINEL

    @property
    def block_datetime(self) -> datetime:
        """Block timestamp as an aware UTC datetime"""
        return datetime.fromtimestamp(self.block_timestamp / 1e9, tz=timezone.utc)


class StatusKind(str, Enum):
    """Execution status variants reported by the node"""
    SUCCESS_VALUE = "SuccessValue"
    SUCCESS_RECEIPT_ID = "SuccessReceiptId"
    FAILURE = "Failure"
    UNKNOWN = "Unknown"


class ExecutionStatus(BaseModel):
    """
    Tagged execution status.

    On the wire a status is either a single-key object (``{"SuccessValue": ""}``,
    ``{"Failure": {...}}``) or a bare string (``"Unknown"``). Anything else
    decodes to ``Unknown`` with the raw value kept.
    """
    model_config = ConfigDict(frozen=True)

    kind: StatusKind
    value: Any = None

    @classmethod
    def from_wire(cls, status: Any) -> "ExecutionStatus":
        if isinstance(status, dict) and len(status) == 1:
            key, value = next(iter(status.items()))
            try:
                return cls(kind=StatusKind(key), value=value)
            except ValueError:
                return cls(kind=StatusKind.UNKNOWN, value=status)
        if isinstance(status, str):
            try:
                return cls(kind=StatusKind(status))
            except ValueError:
                pass
        return cls(kind=StatusKind.UNKNOWN, value=status)

    @property
    def label(self) -> str:
        return self.kind.value

    @property
    def is_success(self) -> bool:
        return self.kind in (StatusKind.SUCCESS_VALUE, StatusKind.SUCCESS_RECEIPT_ID)

    def decoded_value(self) -> Optional[str]:
        """Decode a SuccessValue payload from base64 to text"""
        if self.kind != StatusKind.SUCCESS_VALUE or not isinstance(self.value, str):
            return None
        try:
            return base64.b64decode(self.value, validate=True).decode("utf-8", errors="replace")
        except (binascii.Error, ValueError):
            return None


class ReceiptOutcome(BaseModel):
    """Execution outcome of one receipt"""
    status: ExecutionStatus = Field(default_factory=lambda: ExecutionStatus(kind=StatusKind.UNKNOWN))
    logs: List[str] = Field(default_factory=list)
    gas_burnt: int = 0
    receipt_ids: List[str] = Field(default_factory=list)
    tokens_burnt: Optional[str] = None
    executor_id: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def _decode_status(cls, value: Any) -> ExecutionStatus:
        if isinstance(value, ExecutionStatus):
            return value
        return ExecutionStatus.from_wire(value)

    @property
    def tgas_burnt(self) -> float:
        return self.gas_burnt / GAS_PER_TGAS


class ActionReceipt(BaseModel):
    """Receipt carrying an ordered list of actions"""
    kind: Literal["Action"] = "Action"
    actions: List[Any] = Field(default_factory=list)
    signer_id: Optional[str] = None
    gas_price: Optional[str] = None

    @property
    def action_names(self) -> List[str]:
        names = []
        for action in self.actions:
            if isinstance(action, dict) and action:
                names.append(next(iter(action)))
            else:
                names.append(str(action))
        return names


class DataReceipt(BaseModel):
    """Receipt carrying data for a pending promise"""
    kind: Literal["Data"] = "Data"
    data_id: Optional[str] = None
    data: Any = None


ReceiptPayload = Union[ActionReceipt, DataReceipt]


def parse_receipt_payload(raw: Any) -> Optional[ReceiptPayload]:
    """
    Decode the ``receipt`` member of a receipt view.

    Accepts the inner ``{"Action": {...}}`` / ``{"Data": {...}}`` variant or
    a full receipt view that wraps it in another ``receipt`` key.
    """
    if not isinstance(raw, dict):
        return None
    if "receipt" in raw and isinstance(raw["receipt"], dict):
        raw = raw["receipt"]
    if isinstance(raw.get("Action"), dict):
        return ActionReceipt.model_validate(raw["Action"])
    if isinstance(raw.get("Data"), dict):
        return DataReceipt.model_validate(raw["Data"])
    return None


class Receipt(BaseModel):
    """
    One receipt of a transaction.

    ``children`` is filled by tree reconstruction and is never on the wire.
    """
    receipt_id: str
    parent_id: Optional[str] = None
    predecessor_id: Optional[str] = None
    receiver_id: Optional[str] = None
    payload: Optional[ReceiptPayload] = None
    outcome: ReceiptOutcome
    children: List["Receipt"] = Field(default_factory=list)

    @classmethod
    def from_wire(cls, raw: Dict[str, Any]) -> "Receipt":
        """
        Build a receipt from one entry of a ``tx`` response.

        Both ``receipts[]`` entries (``receipt_id``) and ``receipts_outcome[]``
        entries (``id``) are accepted.
        """
        receipt_view = raw.get("receipt")
        predecessor_id = raw.get("predecessor_id")
        receiver_id = raw.get("receiver_id")
        if isinstance(receipt_view, dict):
            predecessor_id = predecessor_id or receipt_view.get("predecessor_id")
            receiver_id = receiver_id or receipt_view.get("receiver_id")

        outcome = raw.get("outcome") or {}

        return cls(
            receipt_id=raw.get("receipt_id") or raw.get("id"),
            parent_id=raw.get("parent_id"),
            predecessor_id=predecessor_id,
            receiver_id=receiver_id,
            payload=parse_receipt_payload(receipt_view),
            outcome=ReceiptOutcome.model_validate(outcome),
        )

    @property
    def has_children(self) -> bool:
        return len(self.children) > 0

    @property
    def short_id(self) -> str:
        return f"{self.receipt_id[:16]}..."


class ViewCallResult(BaseModel):
    """Decoded result of a view method call"""
    contract_id: str
    method_name: str
    args_base64: str
    raw_text: str
    value: Any = None
    is_json: bool = False
    logs: List[str] = Field(default_factory=list)
    block_height: Optional[int] = None

    def pretty(self) -> str:
        """Text shown to the user: indented JSON, or the raw text as-is"""
        if self.is_json:
            return json.dumps(self.value, indent=2, ensure_ascii=False)
        return self.raw_text


Receipt.model_rebuild()
