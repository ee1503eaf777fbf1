"""
Property-based tests for nearscope.

These tests verify that properties hold true across many random inputs.
"""
from hypothesis import given, settings, strategies as st

from nearscope.debugger import ExpansionState, build_receipt_tree, iter_tree, render_receipt_tree
from nearscope.models import ExecutionStatus, Receipt, ReceiptOutcome, StatusKind
from nearscope.view_caller import decode_args, decode_result, encode_args

receipt_id_strategy = st.sampled_from([f"r{i}" for i in range(12)])

# (receipt_id, parent_id) pairs; parents may be missing, self-referencing or cyclic
edges_strategy = st.lists(
    st.tuples(receipt_id_strategy, st.one_of(st.none(), receipt_id_strategy, st.just("orphan"))),
    max_size=20,
)

json_value = st.recursive(
    st.one_of(st.none(), st.booleans(), st.integers(-10**6, 10**6), st.text(max_size=20)),
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(st.text(max_size=8), children, max_size=4),
    ),
    max_leaves=10,
)


def _receipts(edges):
    return [
        Receipt(receipt_id=receipt_id, parent_id=parent_id, outcome=ReceiptOutcome())
        for receipt_id, parent_id in edges
    ]


@settings(max_examples=200)
@given(edges=edges_strategy)
def test_every_receipt_appears_exactly_once(edges):
    roots = build_receipt_tree(_receipts(edges))

    seen = [receipt.receipt_id for _, receipt in iter_tree(roots)]
    first_occurrence = list(dict.fromkeys(receipt_id for receipt_id, _ in edges))

    assert sorted(seen) == sorted(first_occurrence)
    assert len(seen) == len(set(seen))


@settings(max_examples=200)
@given(edges=edges_strategy)
def test_children_point_at_their_parent(edges):
    roots = build_receipt_tree(_receipts(edges))

    for _, receipt in iter_tree(roots):
        for child in receipt.children:
            assert child.parent_id == receipt.receipt_id


@settings(max_examples=200)
@given(edges=edges_strategy)
def test_roots_keep_input_order(edges):
    roots = [receipt.receipt_id for receipt in build_receipt_tree(_receipts(edges))]
    order = list(dict.fromkeys(receipt_id for receipt_id, _ in edges))

    assert roots == sorted(roots, key=order.index)


@settings(max_examples=100)
@given(edges=edges_strategy)
def test_fully_expanded_render_has_one_line_per_receipt(edges):
    roots = build_receipt_tree(_receipts(edges))
    expansion = ExpansionState()
    expansion.expand_all(roots)

    lines = render_receipt_tree(roots, expansion)

    assert len(lines) == len(list(iter_tree(roots)))


@settings(max_examples=100)
@given(args=st.dictionaries(st.text(max_size=12), json_value, max_size=6))
def test_args_survive_encoding(args):
    assert decode_args(encode_args(args)) == args


@settings(max_examples=100)
@given(raw=st.lists(st.integers(0, 255), max_size=64))
def test_decode_result_never_fails_on_bytes(raw):
    text, value, is_json = decode_result(raw)

    assert isinstance(text, str)
    if not is_json:
        assert value == text


@given(status=st.one_of(
    json_value,
    st.dictionaries(st.sampled_from([kind.value for kind in StatusKind] + ["Other"]), json_value, max_size=2),
))
def test_status_always_decodes(status):
    decoded = ExecutionStatus.from_wire(status)

    assert decoded.kind in StatusKind
    assert decoded.is_success == (decoded.kind in (StatusKind.SUCCESS_VALUE, StatusKind.SUCCESS_RECEIPT_ID))
