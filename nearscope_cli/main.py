"""
Command line front end for nearscope.

    nearscope inspect example.near
    nearscope call wrap.near ft_balance_of --args '{"account_id": "example.near"}'
    nearscope tx <hash> example.near --expand-all
"""
import logging
import sys
from dataclasses import dataclass
from typing import List, NoReturn, Optional

import typer

from nearscope import __version__
from nearscope.config import DEFAULT_NETWORK
from nearscope.debugger import TransactionDebugger, iter_tree
from nearscope.inspector import ContractInspector
from nearscope.models import ExecutionStatus
from nearscope.rpc.client import NearRpcClient
from nearscope.rpc.transport import DEFAULT_TIMEOUT
from nearscope.view_caller import COMMON_METHODS, TEMPLATES, ViewMethodCaller, describe_args, format_args

app = typer.Typer(
    help="Inspect NEAR accounts, call view methods and debug transactions.",
    no_args_is_help=True,
    add_completion=False,
)

logger = logging.getLogger("nearscope")


@dataclass
class CliOptions:
    network: str = DEFAULT_NETWORK
    rpc_url: Optional[str] = None
    archival: bool = False
    timeout: float = DEFAULT_TIMEOUT
    color: bool = False


def should_use_color() -> bool:
    """Colour only when writing to a terminal"""
    return sys.stdout.isatty()


def build_client(options: CliOptions) -> NearRpcClient:
    return NearRpcClient(
        rpc_url=options.rpc_url,
        network=options.network,
        timeout=options.timeout,
        archival=options.archival,
    )


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


def _client(ctx: typer.Context) -> NearRpcClient:
    try:
        return build_client(ctx.obj)
    except ValueError as e:
        _fail(str(e))


def _heading(options: CliOptions, text: str) -> str:
    return typer.style(text, bold=True) if options.color else text


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"nearscope {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    network: str = typer.Option(DEFAULT_NETWORK, "--network", "-n", help="Network to query."),
    rpc_url: Optional[str] = typer.Option(None, "--rpc-url", help="RPC endpoint, overrides --network."),
    archival: bool = typer.Option(False, "--archival", help="Use the archival RPC node."),
    timeout: float = typer.Option(DEFAULT_TIMEOUT, "--timeout", help="Request timeout in seconds."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable coloured output."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = CliOptions(
        network=network,
        rpc_url=rpc_url,
        archival=archival,
        timeout=timeout,
        color=should_use_color() and not no_color,
    )


@app.command()
def inspect(
    ctx: typer.Context,
    account_id: str = typer.Argument(..., help="Account to inspect, e.g. example.near"),
) -> None:
    """Show the code hash, block height and storage of an account."""
    options: CliOptions = ctx.obj
    with _client(ctx) as client:
        inspector = ContractInspector(client)
        record = inspector.submit(account_id)

    if record is None:
        _fail(inspector.state.error)

    typer.echo(_heading(options, f"Account {record.account_id}"))
    typer.echo(f"Code Hash:       {record.code_hash}")
    typer.echo(f"Block Height:    {record.block_height}")
    typer.echo(f"Block Time:      {record.block_datetime.isoformat()}")
    typer.echo(f"Storage Usage:   {record.storage_usage} bytes")
    typer.echo(f"Storage Paid At: {record.storage_paid_at}")
    if record.amount is not None:
        typer.echo(f"Balance:         {record.amount} yoctoNEAR")
    if record.locked is not None:
        typer.echo(f"Locked:          {record.locked} yoctoNEAR")


@app.command()
def call(
    ctx: typer.Context,
    contract_id: str = typer.Argument(..., help="Contract account, e.g. wrap.near"),
    method_name: Optional[str] = typer.Argument(None, help="View method name."),
    args: Optional[str] = typer.Option(None, "--args", "-a", help="Arguments as a JSON object."),
    template: Optional[str] = typer.Option(
        None, "--template", "-t", help=f"Prefill method and args from a template ({', '.join(TEMPLATES)})."
    ),
) -> None:
    """Call a view method and print its result."""
    options: CliOptions = ctx.obj
    if template is not None:
        if template not in TEMPLATES:
            _fail(f"Unknown template '{template}'. Available templates: {', '.join(TEMPLATES)}")
        method_name = method_name or TEMPLATES[template]["method"]
        if args is None:
            args = format_args(TEMPLATES[template]["args"])

    with _client(ctx) as client:
        caller = ViewMethodCaller(client)
        result = caller.submit(contract_id, method_name or "", args if args is not None else "{}")

    if result is None:
        _fail(caller.state.error)

    typer.echo(_heading(options, f"Result of {result.contract_id}.{result.method_name}"))
    typer.echo(result.pretty())
    if result.logs:
        typer.echo(_heading(options, "Logs:"))
        for line in result.logs:
            typer.echo(f"  {line}")


@app.command()
def methods(ctx: typer.Context) -> None:
    """List common view methods and templates with example arguments."""
    options: CliOptions = ctx.obj
    typer.echo(_heading(options, "Common methods"))
    for entry in COMMON_METHODS:
        typer.echo(f"  {entry['name']:<24} {describe_args(entry)}")
    typer.echo(_heading(options, "Templates"))
    for key, entry in TEMPLATES.items():
        typer.echo(f"  {key:<24} {entry['name']}")


def _status_style(color: bool):
    def style(status: ExecutionStatus, label: str) -> str:
        if not color:
            return label
        return typer.style(label, fg=typer.colors.GREEN if status.is_success else typer.colors.RED)
    return style


@app.command()
def tx(
    ctx: typer.Context,
    tx_hash: str = typer.Argument(..., help="Transaction hash (base58)."),
    signer_account_id: str = typer.Argument(..., help="Account that signed the transaction."),
    expand: Optional[List[str]] = typer.Option(
        None, "--expand", "-e", help="Expand receipts whose id starts with this value (repeatable)."
    ),
    expand_all: bool = typer.Option(False, "--expand-all", help="Expand every receipt."),
) -> None:
    """Show the receipt execution tree of a transaction."""
    options: CliOptions = ctx.obj
    with _client(ctx) as client:
        debugger = TransactionDebugger(client)
        roots = debugger.submit(tx_hash, signer_account_id)

    if roots is None:
        _fail(debugger.state.error)
    if not roots:
        typer.echo("No receipts found")
        return

    if expand_all:
        debugger.expansion.expand_all(roots)
    for prefix in expand or []:
        matches = [receipt for _, receipt in iter_tree(roots) if receipt.receipt_id.startswith(prefix)]
        if not matches:
            logger.warning(f"No receipt id starts with {prefix}")
        for receipt in matches:
            if receipt.receipt_id not in debugger.expansion:
                debugger.expansion.toggle(receipt)

    typer.echo(_heading(options, "Receipt Execution Tree"))
    for line in debugger.render(label_style=_status_style(options.color)):
        typer.echo(line)

