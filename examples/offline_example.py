#!/usr/bin/env python3
"""
Example of driving nearscope from canned responses, without a network.

The stub transport answers each JSON-RPC method (and each ``query`` request
type) from whatever was registered for it.
"""
from nearscope import NearRpcClient, StubTransport, TransactionDebugger, ViewMethodCaller


def main():
    transport = StubTransport()
    transport.initialize("https://rpc.example.com")

    transport.add_result("query/call_function", {
        "result": list(b'{"spec":"ft-1.0.0","name":"Wrapped NEAR","decimals":24}'),
        "logs": [],
        "block_height": 1,
    })
    transport.add_result("tx", {
        "receipts": [
            {
                "receipt_id": "FhVg8p6zyyM1Y8SZyKj7kiyLkM7RD4eSMBcYuR4vWNGt",
                "receipt": {"Action": {"actions": [{"FunctionCall": {"method_name": "ft_transfer_call"}}]}},
                "outcome": {"status": {"SuccessReceiptId": "x"}, "logs": ["Transfer 5 from alice.near"], "gas_burnt": 4174947687500},
            },
            {
                "receipt_id": "4P5VpAFWKp2xKb5VqDVuEdvNCYTqjKTr1Rqcw3cq7qbw",
                "parent_id": "FhVg8p6zyyM1Y8SZyKj7kiyLkM7RD4eSMBcYuR4vWNGt",
                "outcome": {"status": {"Failure": {"ActionError": {"index": 0}}}, "logs": [], "gas_burnt": 2428000000000},
            },
        ],
    })

    client = NearRpcClient(rpc_url="https://rpc.example.com", transport=transport)

    caller = ViewMethodCaller(client)
    result = caller.submit("wrap.near", "ft_metadata")
    print(result.pretty())

    debugger = TransactionDebugger(client)
    debugger.submit("9FtHUFBQsZ2MG77K3x3MJ9wjX3UT8zE1TczCrhZEcG8U", "alice.near")
    debugger.toggle("FhVg8p6zyyM1Y8SZyKj7kiyLkM7RD4eSMBcYuR4vWNGt")
    for line in debugger.render():
        print(line)

    print(f"\n{transport.call_count} requests answered offline")


if __name__ == "__main__":
    main()
