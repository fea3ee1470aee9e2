import pytest

from minic.ast import (
    AstNode,
    AstOperatorType,
    ValueType,
    add_var_decl_node,
    create_contain_node,
    create_func_call,
    create_func_def,
    create_type_node,
    create_uint_leaf,
    create_var_decl_node,
    create_var_decl_stmt_node,
    create_var_id,
)


@pytest.mark.parametrize(
    "kind, leaf",
    [
        (AstOperatorType.LEAF_LITERAL_UINT, True),
        (AstOperatorType.LEAF_LITERAL_FLOAT, True),
        (AstOperatorType.LEAF_VAR_ID, True),
        (AstOperatorType.LEAF_TYPE, True),
        (AstOperatorType.BLOCK, False),
        (AstOperatorType.ADD, False),
        (AstOperatorType.FUNC_DEF, False),
    ],
)
def test_is_leaf(kind, leaf):
    assert AstNode(kind).is_leaf() is leaf


def test_compound_stmt_is_block():
    node = create_contain_node(AstOperatorType.COMPOUNDSTMT)
    assert node.node_type is AstOperatorType.BLOCK
    assert node.is_leaf() is False


def test_insert_son_node_sets_parent_and_ignores_none():
    parent = AstNode(AstOperatorType.BLOCK)
    child = create_var_id("a", 1)
    assert parent.insert_son_node(child) is parent
    assert parent.insert_son_node(None) is parent
    assert parent.sons == [child]
    assert child.parent is parent


def test_new_keeps_order_of_children():
    left = create_uint_leaf(1, 1)
    right = create_var_id("x", 1)
    node = AstNode.new(AstOperatorType.ADD, left, right)
    assert node.node_type == AstOperatorType.ADD
    assert node.sons == [left, right]
    assert all(son.parent is node for son in node.sons)


def test_uint_leaf():
    leaf = create_uint_leaf(42, 7)
    assert leaf.node_type == AstOperatorType.LEAF_LITERAL_UINT
    assert leaf.type is ValueType.INT
    assert leaf.integer_val == 42
    assert leaf.line_no == 7


def test_uint_leaf_wraps_to_32_bits():
    assert create_uint_leaf(2**32 + 5).integer_val == 5


def test_var_id_leaf():
    leaf = create_var_id("counter", 3)
    assert leaf.node_type == AstOperatorType.LEAF_VAR_ID
    assert leaf.name == "counter"
    assert leaf.type is ValueType.VOID


def test_type_node():
    node = create_type_node(ValueType.INT)
    assert node.node_type == AstOperatorType.LEAF_TYPE
    assert node.type is ValueType.INT


def test_contain_node_skips_missing_children():
    a = create_var_id("a")
    c = create_var_id("c")
    node = create_contain_node(AstOperatorType.ASSIGN, a, None, c)
    assert node.sons == [a, c]


def test_func_def_defaults_params_and_block():
    type_node = create_type_node(ValueType.INT)
    name_node = create_var_id("main", 2)
    func = create_func_def(type_node, name_node)
    assert func.node_type == AstOperatorType.FUNC_DEF
    assert func.name == "main"
    assert func.type is ValueType.INT
    kinds = [son.node_type for son in func.sons]
    assert kinds == [
        AstOperatorType.LEAF_TYPE,
        AstOperatorType.LEAF_VAR_ID,
        AstOperatorType.FUNC_FORMAL_PARAMS,
        AstOperatorType.BLOCK,
    ]


def test_func_def_uses_given_block():
    block = create_contain_node(AstOperatorType.BLOCK)
    func = create_func_def(create_type_node(ValueType.INT), create_var_id("f"), block)
    assert func.sons[3] is block


def test_func_call():
    name = create_var_id("putint", 4)
    args = create_contain_node(AstOperatorType.FUNC_REAL_PARAMS, create_uint_leaf(1))
    call = create_func_call(name, args)
    assert call.name == "putint"
    assert call.sons == [name, args]


def test_func_call_without_params():
    call = create_func_call(create_var_id("getint"))
    assert call.sons[1].node_type == AstOperatorType.FUNC_REAL_PARAMS
    assert call.sons[1].sons == []


def test_var_decl_node():
    decl = create_var_decl_node(ValueType.INT, "a", 5)
    assert decl.node_type == AstOperatorType.VAR_DECL
    assert decl.type is ValueType.INT
    assert decl.sons[0].type is ValueType.INT
    assert decl.sons[1].name == "a"


def test_decl_stmt_and_add():
    stmt = create_var_decl_stmt_node(create_var_decl_node(ValueType.INT, "a"))
    assert stmt.type is ValueType.INT
    add_var_decl_node(stmt, "b", 1)
    assert [decl.sons[1].name for decl in stmt.sons] == ["a", "b"]
    assert all(decl.type is ValueType.INT for decl in stmt.sons)


def test_empty_decl_stmt():
    stmt = create_var_decl_stmt_node()
    assert stmt.node_type == AstOperatorType.DECL_STMT
    assert stmt.sons == []