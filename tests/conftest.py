"""
Pytest fixtures for the nearscope tests.
"""
import pytest

from nearscope.config import NetworkConfig
from nearscope.rpc._rate_limited_log import reset_rate_limits
from nearscope.rpc.client import NearRpcClient
from nearscope.rpc.stub_transport import StubTransport

from tests.test_helpers import TEST_RPC_URL


@pytest.fixture(autouse=True)
def _reset_module_caches():
    """Network table cache and log suppression must not leak between tests."""
    NetworkConfig._networks_cache = None
    reset_rate_limits()
    yield
    NetworkConfig._networks_cache = None
    reset_rate_limits()


@pytest.fixture
def stub_transport():
    """An initialized stub transport with no responses registered."""
    transport = StubTransport()
    transport.initialize(TEST_RPC_URL)
    return transport


@pytest.fixture
def client(stub_transport):
    """RPC client answering from ``stub_transport``."""
    return NearRpcClient(rpc_url=TEST_RPC_URL, transport=stub_transport)


@pytest.fixture
def http_client():
    """RPC client using the real HTTP transport; pair with requests_mock."""
    client = NearRpcClient(rpc_url=TEST_RPC_URL, timeout=5)
    yield client
    client.close()
