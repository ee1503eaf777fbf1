"""
Transaction/receipt debugger.

Fetches a transaction, rebuilds its receipt tree from the flat receipt list
and renders the tree as indented text with expand/collapse state.
"""
import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Set, Tuple

import base58

from .exceptions import ResponseShapeError, ValidationError
from .models import ExecutionStatus, Receipt
from .panel import Panel, parse_response
from .rpc.client import NearRpcClient

CRYPTO_HASH_LENGTH = 32

EXPANDED_MARK = "▾"
COLLAPSED_MARK = "▸"
LEAF_MARK = " "
INDENT = "  "

LabelStyle = Callable[[ExecutionStatus, str], str]


def validate_tx_hash(tx_hash: str) -> str:
    """
    Check that a transaction hash is base58 of 32 bytes.

    Raises:
        ValidationError: If it is not
    """
    try:
        decoded = base58.b58decode(tx_hash)
    except ValueError as e:
        raise ValidationError("Invalid transaction hash") from e
    if len(decoded) != CRYPTO_HASH_LENGTH:
        raise ValidationError("Invalid transaction hash")
    return tx_hash


def build_receipt_tree(receipts: Iterable[Receipt]) -> List[Receipt]:
    """
    Attach every receipt to its parent and return the roots.

    A receipt is a root when it has no parent id or its parent is not among
    ``receipts``. Roots, and children under each parent, keep input order.
    A parent link that would close a cycle is dropped, making that receipt
    a root. The input receipts are not modified; the tree is built from
    copies. Only the first receipt with a given id is kept; a later receipt
    with an already-seen id is ignored entirely, position and data alike.
    """
    nodes: Dict[str, Receipt] = {}
    for receipt in receipts:
        if receipt.receipt_id not in nodes:
            nodes[receipt.receipt_id] = receipt.model_copy(update={"children": []})

    attached_to: Dict[str, str] = {}
    roots: List[Receipt] = []
    for receipt_id, node in nodes.items():
        parent_id = node.parent_id
        if parent_id in nodes and not _reaches(attached_to, parent_id, receipt_id):
            attached_to[receipt_id] = parent_id
            nodes[parent_id].children.append(node)
        else:
            roots.append(node)
    return roots


def _reaches(attached_to: Dict[str, str], start: str, target: str) -> bool:
    current: Optional[str] = start
    while current is not None:
        if current == target:
            return True
        current = attached_to.get(current)
    return False


def receipts_from_outcomes(
    receipts_outcome: List[Dict[str, Any]],
    receipt_views: Optional[Dict[str, Dict[str, Any]]] = None
) -> List[Receipt]:
    """
    Build receipts from the standard ``receipts_outcome`` list.

    That list has no parent pointers; each outcome instead names the receipts
    it spawned in ``receipt_ids``, so parents are derived from those.
    ``receipt_views`` (receipt id -> receipt view) supplies the payloads when
    the node returned them.
    """
    receipt_views = receipt_views or {}
    receipts = []
    for entry in receipts_outcome:
        view = receipt_views.get(entry.get("id"))
        if view is not None:
            entry = {**entry, "receipt": view}
        receipts.append(Receipt.from_wire(entry))

    parents: Dict[str, str] = {}
    for receipt in receipts:
        for child_id in receipt.outcome.receipt_ids:
            parents.setdefault(child_id, receipt.receipt_id)
    return [
        receipt if receipt.parent_id else receipt.model_copy(update={"parent_id": parents.get(receipt.receipt_id)})
        for receipt in receipts
    ]


def _entries(result: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    entries = result.get(key) or []
    if not isinstance(entries, list) or not all(isinstance(entry, dict) for entry in entries):
        raise ResponseShapeError(f"Unexpected {key} in tx response")
    return entries


def parse_tx_receipts(result: Dict[str, Any]) -> List[Receipt]:
    """
    Extract the flat receipt list from a ``tx`` result.

    Uses ``receipts`` when its entries carry outcomes; otherwise falls back
    to ``receipts_outcome``, taking payloads from ``receipts`` by id.
    """
    receipts = _entries(result, "receipts")
    outcomes = _entries(result, "receipts_outcome")

    if receipts and all("outcome" in entry for entry in receipts):
        return [Receipt.from_wire(entry) for entry in receipts]
    if outcomes:
        views = {entry.get("receipt_id"): entry for entry in receipts}
        return receipts_from_outcomes(outcomes, views)
    return [Receipt.from_wire(entry) for entry in receipts]


def iter_tree(roots: Iterable[Receipt], depth: int = 0) -> Iterator[Tuple[int, Receipt]]:
    """Yield ``(depth, receipt)`` for every node, depth first."""
    for receipt in roots:
        yield depth, receipt
        yield from iter_tree(receipt.children, depth + 1)


def count_receipts(roots: Iterable[Receipt]) -> int:
    return sum(1 for _ in iter_tree(roots))


class ExpansionState:
    """
    Set of expanded receipt ids.

    Kept apart from the receipts: it is presentation state and is thrown away
    whenever a new transaction is fetched.
    """

    def __init__(self, expanded: Optional[Iterable[str]] = None):
        self._expanded: Set[str] = set(expanded or ())

    def is_expanded(self, receipt: Receipt) -> bool:
        return receipt.receipt_id in self._expanded

    def toggle(self, receipt: Receipt) -> bool:
        """
        Flip a receipt between expanded and collapsed.

        Receipts without children cannot be expanded; toggling them does
        nothing.

        Returns:
            True if the state changed
        """
        if not receipt.has_children:
            return False
        if receipt.receipt_id in self._expanded:
            self._expanded.remove(receipt.receipt_id)
        else:
            self._expanded.add(receipt.receipt_id)
        return True

    def expand_all(self, roots: Iterable[Receipt]) -> None:
        for _, receipt in iter_tree(roots):
            if receipt.has_children:
                self._expanded.add(receipt.receipt_id)

    def collapse_all(self) -> None:
        self._expanded.clear()

    def __contains__(self, receipt_id: str) -> bool:
        return receipt_id in self._expanded

    def __len__(self) -> int:
        return len(self._expanded)


def render_receipt(
    receipt: Receipt,
    expansion: ExpansionState,
    depth: int = 0,
    label_style: Optional[LabelStyle] = None
) -> List[str]:
    """Render one receipt and, when expanded, its logs, actions and children."""
    indent = INDENT * depth
    expanded = receipt.has_children and expansion.is_expanded(receipt)
    if receipt.has_children:
        mark = EXPANDED_MARK if expanded else COLLAPSED_MARK
    else:
        mark = LEAF_MARK

    outcome = receipt.outcome
    label = f"[{outcome.status.label}]"
    if label_style is not None:
        label = label_style(outcome.status, label)
    lines = [
        f"{indent}{mark} {receipt.short_id} {label} "
        f"Gas burnt: {outcome.tgas_burnt:.3f} Tgas"
    ]
    if not expanded:
        return lines

    detail = indent + INDENT * 2
    action_names = getattr(receipt.payload, "action_names", None)
    if action_names:
        lines.append(f"{detail}Actions: {', '.join(action_names)}")
    if outcome.logs:
        lines.append(f"{detail}Logs:")
        lines.extend(f"{detail}{INDENT}{log}" for log in outcome.logs)
    for child in receipt.children:
        lines.extend(render_receipt(child, expansion, depth + 1, label_style))
    return lines


def render_receipt_tree(
    roots: Iterable[Receipt],
    expansion: Optional[ExpansionState] = None,
    label_style: Optional[LabelStyle] = None
) -> List[str]:
    """
    Render the receipt tree as text lines, depth first.

    ``label_style`` may decorate the "[Status]" label, e.g. with colour.
    """
    if expansion is None:
        expansion = ExpansionState()
    lines: List[str] = []
    for receipt in roots:
        lines.extend(render_receipt(receipt, expansion, label_style=label_style))
    return lines


class TransactionDebugger(Panel[List[Receipt]]):
    """Fetch a transaction and show its receipt execution tree."""

    def __init__(self, client: NearRpcClient, logger: Optional[logging.Logger] = None):
        super().__init__(client, logger=logger)
        self.expansion = ExpansionState()

    def debug(self, tx_hash: str, signer_account_id: str) -> List[Receipt]:
        """
        Fetch a transaction and rebuild its receipt tree.

        Args:
            tx_hash: Transaction hash (base58)
            signer_account_id: Account that signed the transaction

        Returns:
            Root receipts with their children attached

        Raises:
            ValidationError: On missing or malformed inputs (no request is made)
            RpcError: If the node rejects the lookup
        """
        tx_hash = (tx_hash or "").strip()
        signer_account_id = (signer_account_id or "").strip()
        if not tx_hash or not signer_account_id:
            raise ValidationError("Transaction hash and signer account are required")
        validate_tx_hash(tx_hash)

        result = self.client.tx_status(tx_hash, signer_account_id)
        receipts = parse_response(lambda: parse_tx_receipts(result), "tx")
        if not all(receipt.receipt_id for receipt in receipts):
            raise ResponseShapeError("Receipt without an id in tx response")

        roots = build_receipt_tree(receipts)
        self.logger.debug(f"Transaction {tx_hash}: {len(receipts)} receipts, {len(roots)} roots")
        return roots

    def submit(self, tx_hash: str, signer_account_id: str) -> Optional[List[Receipt]]:
        """Run ``debug``, record the outcome in ``state`` and reset expansion."""
        return self._run(lambda: self._fetch(tx_hash, signer_account_id))

    def _fetch(self, tx_hash: str, signer_account_id: str) -> List[Receipt]:
        # Called under the in-flight guard
        self.expansion = ExpansionState()
        return self.debug(tx_hash, signer_account_id)

    def toggle(self, receipt_id: str) -> bool:
        """Toggle a receipt of the current tree by id."""
        for _, receipt in iter_tree(self.state.data or []):
            if receipt.receipt_id == receipt_id:
                return self.expansion.toggle(receipt)
        return False

    def render(self, label_style: Optional[LabelStyle] = None) -> List[str]:
        return render_receipt_tree(self.state.data or [], self.expansion, label_style)
