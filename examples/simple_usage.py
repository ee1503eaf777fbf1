#!/usr/bin/env python3
"""
Example of using the three nearscope panels against a live RPC node.
"""
import os
import logging

from nearscope import (
    NearRpcClient,
    ContractInspector,
    ViewMethodCaller,
    TransactionDebugger,
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    """
    Demonstrate the inspector, the view method caller and the debugger.

    This example shows how to:
    1. Create a client for a network (or an explicit RPC URL)
    2. Inspect an account and its deployed contract
    3. Call a view method with JSON arguments
    4. Fetch a transaction and print its receipt tree
    """
    # Read configuration from environment
    NETWORK = os.environ.get("NETWORK", "mainnet")
    RPC_URL = os.environ.get("RPC_URL")
    ACCOUNT = os.environ.get("ACCOUNT", "wrap.near")
    TX_HASH = os.environ.get("TX_HASH")
    TX_SIGNER = os.environ.get("TX_SIGNER")

    print("\n=== nearscope Example ===\n")

    with NearRpcClient(rpc_url=RPC_URL, network=NETWORK) as client:
        print(f"Using RPC endpoint: {client.rpc_url}")

        # 1. Account/contract inspector
        inspector = ContractInspector(client)
        record = inspector.submit(ACCOUNT)
        if record is None:
            print(f"Inspect failed: {inspector.state.error}")
        else:
            print(f"\n{record.account_id}")
            print(f"  Code hash:     {record.code_hash}")
            print(f"  Block height:  {record.block_height}")
            print(f"  Storage usage: {record.storage_usage} bytes")

        # 2. View method caller
        caller = ViewMethodCaller(client)
        result = caller.submit(ACCOUNT, "ft_metadata")
        if result is None:
            print(f"\nft_metadata failed: {caller.state.error}")
        else:
            print(f"\n{ACCOUNT}.ft_metadata():")
            print(result.pretty())

        # 3. Transaction debugger (needs a transaction to look at)
        if TX_HASH and TX_SIGNER:
            debugger = TransactionDebugger(client)
            roots = debugger.submit(TX_HASH, TX_SIGNER)
            if roots is None:
                print(f"\nTransaction lookup failed: {debugger.state.error}")
            else:
                debugger.expansion.expand_all(roots)
                print("\nReceipt Execution Tree:")
                for line in debugger.render():
                    print(line)
        else:
            print("\nSet TX_HASH and TX_SIGNER to see a receipt tree.")


if __name__ == "__main__":
    main()
