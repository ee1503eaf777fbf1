"""
Account/contract inspector.

Combines the account view and the code view of one account into a single
``ContractRecord``.
"""
from typing import Optional

from .config import DEFAULT_FINALITY
from .exceptions import RpcError, ValidationError
from .models import NO_CODE_SENTINEL, ContractRecord
from .panel import Panel, parse_response

# Node error cause for an account without deployed code
NO_CODE_CAUSES = {"NO_CONTRACT_CODE"}
# Older nodes only say it in free text
NO_CODE_MARKERS = ("CodeDoesNotExist", "has never been observed on the node")


def is_no_code_error(error: RpcError) -> bool:
    """Tell whether a view_code error just means nothing is deployed."""
    if error.cause_name in NO_CODE_CAUSES:
        return True
    text = f"{error.message} {error.data or ''}"
    return any(marker in text for marker in NO_CODE_MARKERS)


class ContractInspector(Panel[ContractRecord]):
    """Inspect an account and the contract deployed on it."""

    def inspect(self, account_id: str, finality: str = DEFAULT_FINALITY) -> ContractRecord:
        """
        Fetch the account view and code view of an account.

        Args:
            account_id: Account to inspect
            finality: Finality of both queries

        Returns:
            Merged record; ``code_hash`` is "No code deployed" when the account
            has no contract

        Raises:
            ValidationError: If the account id is empty
            RpcError: If either query fails for any reason other than missing code
        """
        account_id = (account_id or "").strip()
        if not account_id:
            raise ValidationError("Please enter an account ID")

        account = self.client.view_account(account_id, finality=finality)

        code_hash: Optional[str] = None
        try:
            code = self.client.view_code(account_id, finality=finality)
            code_hash = code.get("hash")
        except RpcError as e:
            if not is_no_code_error(e):
                raise
            self.logger.debug(f"No contract code on {account_id}: {e.message}")

        return parse_response(
            lambda: ContractRecord(
                account_id=account_id,
                code_hash=code_hash or NO_CODE_SENTINEL,
                block_height=account.get("block_height") or 0,
                block_timestamp=account.get("block_timestamp") or 0,
                storage_paid_at=account.get("storage_paid_at") or "0",
                storage_usage=account.get("storage_usage") or "0",
                amount=account.get("amount"),
                locked=account.get("locked"),
            ),
            "view_account",
        )

    def submit(self, account_id: str) -> Optional[ContractRecord]:
        """Run ``inspect`` and record the outcome in ``state``."""
        return self._run(lambda: self.inspect(account_id))
