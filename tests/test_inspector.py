"""
Tests for the account/contract inspector.
"""
import pytest

from nearscope.exceptions import ResponseShapeError, RpcError, TransportError, ValidationError
from nearscope.inspector import ContractInspector, is_no_code_error
from nearscope.models import NO_CODE_SENTINEL

from tests.test_helpers import TEST_ACCOUNT, TEST_CODE_HASH, account_view, code_view, no_code_error


@pytest.fixture
def inspector(client):
    return ContractInspector(client)


class TestInspect:

    def test_account_with_contract(self, inspector, stub_transport):
        stub_transport.add_result("query/view_account", account_view())
        stub_transport.add_result("query/view_code", code_view())

        record = inspector.inspect(TEST_ACCOUNT)

        assert record.account_id == TEST_ACCOUNT
        assert record.code_hash == TEST_CODE_HASH
        assert record.block_height == 108375294
        assert record.block_timestamp == 1700000000123456789
        assert record.storage_usage == "182"
        assert record.storage_paid_at == "0"
        assert record.amount == "100000000000000000000000000"
        assert [r["params"]["request_type"] for r in stub_transport.requests] == ["view_account", "view_code"]

    def test_account_id_is_trimmed(self, inspector, stub_transport):
        stub_transport.add_result("query/view_account", account_view())
        stub_transport.add_result("query/view_code", code_view())

        record = inspector.inspect(f"  {TEST_ACCOUNT}\n")

        assert record.account_id == TEST_ACCOUNT
        assert stub_transport.requests[0]["params"]["account_id"] == TEST_ACCOUNT

    @pytest.mark.parametrize("account_id", ["", "   ", None])
    def test_empty_account_id(self, inspector, stub_transport, account_id):
        with pytest.raises(ValidationError, match="Please enter an account ID"):
            inspector.inspect(account_id)

        assert stub_transport.call_count == 0

    def test_no_code_error_gives_sentinel(self, inspector, stub_transport):
        stub_transport.add_result("query/view_account", account_view())
        stub_transport.add_error("query/view_code", "Server error", **no_code_error())

        record = inspector.inspect(TEST_ACCOUNT)

        assert record.code_hash == NO_CODE_SENTINEL
        assert not record.has_code

    def test_code_without_hash_gives_sentinel(self, inspector, stub_transport):
        stub_transport.add_result("query/view_account", account_view())
        stub_transport.add_result("query/view_code", {"code_base64": ""})

        assert inspector.inspect(TEST_ACCOUNT).code_hash == NO_CODE_SENTINEL

    def test_other_view_code_error_aborts(self, inspector, stub_transport):
        stub_transport.add_result("query/view_account", account_view())
        stub_transport.add_error("query/view_code", "Server error", data="database is locked")

        with pytest.raises(RpcError, match="Server error"):
            inspector.inspect(TEST_ACCOUNT)

    def test_view_account_error_skips_view_code(self, inspector, stub_transport):
        stub_transport.add_error("query/view_account", "account nobody.near does not exist while viewing")
        stub_transport.add_result("query/view_code", code_view())

        with pytest.raises(RpcError, match="does not exist"):
            inspector.inspect("nobody.near")

        assert stub_transport.call_count == 1

    def test_missing_fields_default(self, inspector, stub_transport):
        stub_transport.add_result("query/view_account", {"block_height": None, "storage_usage": 0})
        stub_transport.add_result("query/view_code", code_view())

        record = inspector.inspect(TEST_ACCOUNT)

        assert record.block_height == 0
        assert record.block_timestamp == 0
        assert record.storage_usage == "0"
        assert record.storage_paid_at == "0"
        assert record.amount is None

    def test_bad_shape(self, inspector, stub_transport):
        stub_transport.add_result("query/view_account", account_view(block_height="tall"))
        stub_transport.add_result("query/view_code", code_view())

        with pytest.raises(ResponseShapeError, match="Unexpected view_account response shape"):
            inspector.inspect(TEST_ACCOUNT)

    def test_finality(self, inspector, stub_transport):
        stub_transport.add_result("query/view_account", account_view())
        stub_transport.add_result("query/view_code", code_view())

        inspector.inspect(TEST_ACCOUNT, finality="final")

        assert {r["params"]["finality"] for r in stub_transport.requests} == {"final"}


class TestIsNoCodeError:

    def test_cause_name(self):
        assert is_no_code_error(RpcError("Server error", cause_name="NO_CONTRACT_CODE"))

    def test_free_text_in_data(self):
        error = RpcError("Server error", data="Contract code for contract ID #x.near has never been observed on the node")
        assert is_no_code_error(error)

    def test_free_text_in_message(self):
        assert is_no_code_error(RpcError("wasm execution failed with error: CodeDoesNotExist"))

    def test_other_errors(self):
        assert not is_no_code_error(RpcError("Server error", cause_name="UNKNOWN_ACCOUNT", data="no such account"))


class TestSubmit:

    def test_success_populates_state(self, inspector, stub_transport):
        stub_transport.add_result("query/view_account", account_view())
        stub_transport.add_result("query/view_code", code_view())

        record = inspector.submit(TEST_ACCOUNT)

        assert record is inspector.state.data
        assert inspector.state.error is None
        assert not inspector.state.loading

    def test_validation_error_in_state(self, inspector):
        assert inspector.submit("") is None
        assert inspector.state.error == "Please enter an account ID"
        assert inspector.state.data is None

    def test_rpc_error_verbatim_in_state(self, inspector, stub_transport):
        stub_transport.add_error("query/view_account", "account nobody.near does not exist while viewing")

        inspector.submit("nobody.near")

        assert inspector.state.error == "account nobody.near does not exist while viewing"

    def test_failure_clears_previous_data(self, inspector, stub_transport):
        stub_transport.add_result("query/view_account", account_view())
        stub_transport.add_result("query/view_code", code_view())
        inspector.submit(TEST_ACCOUNT)

        def unreachable(body):
            raise TransportError("")

        stub_transport.add_response("query/view_account", unreachable)
        inspector.submit(TEST_ACCOUNT)

        assert inspector.state.data is None
        assert inspector.state.error == "An error occurred"
