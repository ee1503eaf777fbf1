"""
JSON-RPC access for nearscope.

The client frames requests and maps node errors; the transports move the
bytes (over HTTPS, or from canned responses in tests).
"""
from .client import NearRpcClient
from .stub_transport import StubTransport
from .transport import HttpTransport, RpcTransport, get_transport

__all__ = ['NearRpcClient', 'RpcTransport', 'HttpTransport', 'StubTransport', 'get_transport']
