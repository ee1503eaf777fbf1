"""
View method caller.

Calls read-only contract methods. Arguments travel as base64 of compact UTF-8
JSON; the returned byte array is decoded as UTF-8 and parsed as JSON when
possible, otherwise kept as plain text.
"""
import base64
import json
from typing import Any, Dict, List, Optional, Tuple, Union

from .config import DEFAULT_FINALITY
from .exceptions import ResponseShapeError, ValidationError
from .models import ViewCallResult
from .panel import Panel, parse_response

# Common NEP-141 / NEP-171 and contract getters with example arguments.
# Only used to prefill the method and arguments inputs.
COMMON_METHODS: List[Dict[str, Any]] = [
    {"name": "ft_balance_of", "args": {"account_id": "account.near"}},
    {"name": "ft_total_supply", "args": {}},
    {"name": "ft_metadata", "args": {}},
    {"name": "nft_token", "args": {"token_id": "1"}},
    {"name": "nft_supply_for_owner", "args": {"account_id": "account.near"}},
    {"name": "nft_tokens_for_owner", "args": {"account_id": "account.near", "from_index": "0", "limit": "100"}},
    {"name": "nft_total_supply", "args": {}},
    {"name": "get_balance", "args": {"account_id": "account.near"}},
    {"name": "get_owner", "args": {}},
    {"name": "get_config", "args": {}},
    {"name": "get_state", "args": {}},
]

TEMPLATES: Dict[str, Dict[str, Any]] = {
    "ft_balance_of": {
        "name": "FT Balance Of",
        "method": "ft_balance_of",
        "args": {"account_id": "account.near"},
    },
    "nft_token": {
        "name": "NFT Token",
        "method": "nft_token",
        "args": {"token_id": "1"},
    },
    "custom": {
        "name": "Custom",
        "method": "",
        "args": {},
    },
}


def encode_args(args: Dict[str, Any]) -> str:
    """Serialize arguments to compact UTF-8 JSON and base64-encode the bytes."""
    try:
        raw = json.dumps(args, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    except UnicodeEncodeError as e:
        # lone surrogates from \ud800-style escapes
        raise ValidationError("Invalid JSON arguments") from e
    return base64.b64encode(raw).decode("ascii")


def decode_args(args_base64: str) -> Dict[str, Any]:
    """Inverse of ``encode_args``."""
    return json.loads(base64.b64decode(args_base64).decode("utf-8"))


def parse_args(args: Union[str, Dict[str, Any], None]) -> Dict[str, Any]:
    """
    Validate caller-supplied arguments.

    Args:
        args: JSON text, an already-parsed dict, or None/blank for ``{}``

    Returns:
        Arguments object

    Raises:
        ValidationError: If the input is not JSON text or not a JSON object
    """
    if args is None:
        return {}
    if isinstance(args, dict):
        return args
    if not isinstance(args, str):
        raise ValidationError("Invalid JSON arguments")
    if not args.strip():
        return {}
    try:
        parsed = json.loads(args)
    except json.JSONDecodeError as e:
        raise ValidationError("Invalid JSON arguments") from e
    if not isinstance(parsed, dict):
        raise ValidationError("Invalid JSON arguments")
    return parsed


def decode_result(raw: Any) -> Tuple[str, Any, bool]:
    """
    Decode the byte array returned by ``call_function``.

    Returns:
        (text, value, is_json) where value is the parsed JSON, or the text
        itself when it is not JSON
    """
    if not isinstance(raw, list):
        raise ResponseShapeError("call_function result is not a byte array")
    try:
        text = bytes(raw).decode("utf-8", errors="replace")
    except (TypeError, ValueError) as e:
        raise ResponseShapeError("call_function result is not a byte array") from e

    try:
        return text, json.loads(text), True
    except json.JSONDecodeError:
        return text, text, False


def format_args(args: Dict[str, Any]) -> str:
    return json.dumps(args, indent=2)


def describe_args(entry: Dict[str, Any]) -> str:
    """One-line summary of a common method's arguments."""
    keys = list(entry["args"])
    return ", ".join(keys) if keys else "no args"


def select_method(name: str) -> Tuple[str, str]:
    """
    Prefill values for an entry of ``COMMON_METHODS``.

    Returns:
        (method_name, pretty_args_json)

    Raises:
        KeyError: If the method is not in the table
    """
    for entry in COMMON_METHODS:
        if entry["name"] == name:
            return entry["name"], format_args(entry["args"])
    raise KeyError(name)


def apply_template(key: str) -> Tuple[str, str]:
    """Prefill values for an entry of ``TEMPLATES``."""
    template = TEMPLATES[key]
    return template["method"], format_args(template["args"])


class ViewMethodCaller(Panel[ViewCallResult]):
    """Call view methods without signing anything."""

    def call(
        self,
        contract_id: str,
        method_name: str,
        args: Union[str, Dict[str, Any], None] = "{}",
        finality: str = DEFAULT_FINALITY
    ) -> ViewCallResult:
        """
        Invoke a view method and decode its result.

        Raises:
            ValidationError: On missing ids or malformed arguments (no request is made)
            RpcError: If the node rejects the call
        """
        contract_id = (contract_id or "").strip()
        method_name = (method_name or "").strip()
        if not contract_id or not method_name:
            raise ValidationError("Contract ID and method name are required")

        args_base64 = encode_args(parse_args(args))
        self.logger.debug(f"Calling {contract_id}.{method_name} with args {args_base64}")

        result = self.client.call_function(contract_id, method_name, args_base64, finality=finality)
        text, value, is_json = decode_result(result.get("result"))

        return parse_response(
            lambda: ViewCallResult(
                contract_id=contract_id,
                method_name=method_name,
                args_base64=args_base64,
                raw_text=text,
                value=value,
                is_json=is_json,
                logs=result.get("logs") or [],
                block_height=result.get("block_height"),
            ),
            "call_function",
        )

    def submit(
        self,
        contract_id: str,
        method_name: str,
        args: Union[str, Dict[str, Any], None] = "{}"
    ) -> Optional[ViewCallResult]:
        """Run ``call`` and record the outcome in ``state``."""
        return self._run(lambda: self.call(contract_id, method_name, args))
