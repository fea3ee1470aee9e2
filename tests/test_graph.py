import re

from minic.ast import (
    AstNode,
    AstOperatorType,
    ValueType,
    create_contain_node,
    create_func_def,
    create_type_node,
    create_uint_leaf,
    create_var_id,
)
from minic.graph import ast_to_dot, node_label, output_ast


def _sample_tree():
    expr = create_contain_node(
        AstOperatorType.ADD, create_uint_leaf(1, 1), create_var_id("a", 1)
    )
    ret = create_contain_node(AstOperatorType.RETURN, expr)
    block = create_contain_node(AstOperatorType.BLOCK, ret)
    func = create_func_def(create_type_node(ValueType.INT), create_var_id("main", 1), block)
    return create_contain_node(AstOperatorType.COMPILE_UNIT, func)


def _count(node):
    return 1 + sum(_count(son) for son in node.sons)


def test_leaf_labels():
    assert node_label(create_uint_leaf(42)) == "42"
    assert node_label(create_var_id("counter")) == "counter"
    assert node_label(create_type_node(ValueType.INT)) == "i32"


def test_uint_label_is_signed_32_bit():
    assert node_label(create_uint_leaf(0xFFFFFFFF)) == "-1"


def test_float_label_has_six_decimals():
    node = AstNode(AstOperatorType.LEAF_LITERAL_FLOAT, float_val=1.5)
    assert node_label(node) == "1.500000"


def test_internal_labels():
    assert node_label(AstNode(AstOperatorType.ADD)) == "+"
    assert node_label(AstNode(AstOperatorType.SUB)) == "-"
    assert node_label(AstNode(AstOperatorType.COMPILE_UNIT)) == "compile-unit"
    assert node_label(AstNode(AstOperatorType.FUNC_CALL)) == "func-call"


def test_unlabelled_kind_is_unknown():
    assert node_label(AstNode(AstOperatorType.FUNC_FORMAL_PARAM)) == "unknown"


def test_dot_has_one_node_per_ast_node_and_tree_edges():
    root = _sample_tree()
    dot = ast_to_dot(root)
    node_lines = re.findall(r"^\tn\d+ \[", dot, re.MULTILINE)
    edge_lines = re.findall(r"^\tn\d+ -> n\d+;", dot, re.MULTILINE)
    assert len(node_lines) == _count(root)
    assert len(edge_lines) == _count(root) - 1
    assert dot.startswith("digraph ast {")
    assert dot.rstrip().endswith("}")


def test_dot_leaves_are_records_and_internals_ellipses():
    dot = ast_to_dot(_sample_tree())
    assert 'label="main", fontcolor="black", fontname="SimSun", shape="record"' in dot
    assert 'label="compile-unit", shape="ellipse"' in dot


def test_root_is_last_node_declared():
    dot = ast_to_dot(_sample_tree())
    declared = re.findall(r"^\t(n\d+) \[", dot, re.MULTILINE)
    assert 'label="compile-unit"' in [l for l in dot.splitlines() if declared[-1] + " [" in l][0]


def test_empty_tree_has_no_nodes():
    dot = ast_to_dot(None)
    assert re.findall(r"^\tn\d+", dot, re.MULTILINE) == []


def test_output_ast_writes_dot(tmp_path):
    root = _sample_tree()
    path = tmp_path / "ast.dot"
    output_ast(root, str(path))
    assert path.read_text(encoding="utf-8") == ast_to_dot(root)