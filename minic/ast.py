"""Abstract syntax tree nodes and the helpers that build them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional


class ValueType(Enum):
    """Type of the value a node stands for."""

    INT = "i32"
    VOID = "void"

    @property
    def size(self) -> int:
        """Size of a value of this type in bytes."""
        return 4 if self is ValueType.INT else 0

    def __str__(self) -> str:
        return self.value


class AstOperatorType(IntEnum):
    """Kind of an AST node."""

    # Leaf nodes
    LEAF_LITERAL_UINT = 0
    LEAF_LITERAL_FLOAT = 1
    LEAF_VAR_ID = 2
    LEAF_TYPE = 3

    # Internal nodes
    COMPILE_UNIT = 4
    FUNC_DEF = 5
    FUNC_FORMAL_PARAMS = 6
    FUNC_FORMAL_PARAM = 7
    FUNC_CALL = 8
    FUNC_REAL_PARAMS = 9
    BLOCK = 10
    COMPOUNDSTMT = 10
    RETURN = 11
    ASSIGN = 12
    DECL_STMT = 13
    VAR_DECL = 14
    ADD = 15
    SUB = 16

    MAX = 17


_LEAF_TYPES = frozenset(
    {
        AstOperatorType.LEAF_LITERAL_UINT,
        AstOperatorType.LEAF_LITERAL_FLOAT,
        AstOperatorType.LEAF_VAR_ID,
        AstOperatorType.LEAF_TYPE,
    }
)


@dataclass(eq=False)
class AstNode:
    """A node of the abstract syntax tree."""

    node_type: AstOperatorType
    type: ValueType = ValueType.VOID
    line_no: int = -1
    integer_val: int = 0
    float_val: float = 0.0
    name: str = ""
    parent: Optional["AstNode"] = field(default=None, repr=False)
    sons: list["AstNode"] = field(default_factory=list)
    need_scope: bool = True

    def is_leaf(self) -> bool:
        """Whether the node is a leaf of the tree."""
        return self.node_type in _LEAF_TYPES

    def insert_son_node(self, node: Optional["AstNode"]) -> "AstNode":
        """Append a child; a missing child is ignored. Returns this node."""
        if node is not None:
            node.parent = self
            self.sons.append(node)
        return self

    @classmethod
    def new(cls, node_type: AstOperatorType, *args: Optional["AstNode"]) -> "AstNode":
        """Create an internal node with the given children, left to right."""
        parent = cls(node_type)
        for child in args:
            parent.insert_son_node(child)
        return parent


def create_uint_leaf(value: int, line_no: int = -1) -> AstNode:
    """Create a leaf for an unsigned 32-bit integer literal."""
    return AstNode(
        AstOperatorType.LEAF_LITERAL_UINT,
        ValueType.INT,
        line_no,
        integer_val=value & 0xFFFFFFFF,
    )


def create_var_id(name: str, line_no: int = -1) -> AstNode:
    """Create a leaf for an identifier."""
    return AstNode(AstOperatorType.LEAF_VAR_ID, ValueType.VOID, line_no, name=name)


def create_type_node(value_type: ValueType) -> AstNode:
    """Create a leaf that carries a type."""
    return AstNode(AstOperatorType.LEAF_TYPE, value_type)


def create_contain_node(
    node_type: AstOperatorType,
    first_child: Optional[AstNode] = None,
    second_child: Optional[AstNode] = None,
    third_child: Optional[AstNode] = None,
) -> AstNode:
    """Create an internal node with up to three children."""
    return AstNode.new(node_type, first_child, second_child, third_child)


def create_func_def(
    type_node: AstNode,
    name_node: AstNode,
    block_node: Optional[AstNode] = None,
    params_node: Optional[AstNode] = None,
) -> AstNode:
    """Create a function definition: return type, name, parameters, body."""
    node = AstNode(
        AstOperatorType.FUNC_DEF, type_node.type, name_node.line_no, name=name_node.name
    )
    if params_node is None:
        params_node = AstNode(AstOperatorType.FUNC_FORMAL_PARAMS)
    if block_node is None:
        block_node = AstNode(AstOperatorType.BLOCK)
    for child in (type_node, name_node, params_node, block_node):
        node.insert_son_node(child)
    return node


def create_func_call(funcname_node: AstNode, params_node: Optional[AstNode] = None) -> AstNode:
    """Create a function call: callee name and actual parameters."""
    node = AstNode(AstOperatorType.FUNC_CALL, name=funcname_node.name)
    if params_node is None:
        params_node = AstNode(AstOperatorType.FUNC_REAL_PARAMS)
    node.insert_son_node(funcname_node)
    node.insert_son_node(params_node)
    return node


def create_var_decl_node(value_type: ValueType, name: str, line_no: int = -1) -> AstNode:
    """Create a single variable declaration: a type leaf and a name leaf."""
    decl = create_contain_node(
        AstOperatorType.VAR_DECL, create_type_node(value_type), create_var_id(name, line_no)
    )
    decl.type = value_type
    return decl


def create_var_decl_stmt_node(first_child: Optional[AstNode] = None) -> AstNode:
    """Create a declaration statement, optionally holding a first declaration."""
    stmt = create_contain_node(AstOperatorType.DECL_STMT)
    if first_child is not None:
        stmt.type = first_child.type
        stmt.insert_son_node(first_child)
    return stmt


def add_var_decl_node(stmt_node: AstNode, name: str, line_no: int = -1) -> AstNode:
    """Append a declaration of the statement's type to a declaration statement."""
    stmt_node.insert_son_node(create_var_decl_node(stmt_node.type, name, line_no))
    return stmt_node