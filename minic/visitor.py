"""Build the abstract syntax tree from a MiniC parse tree."""

from __future__ import annotations

from typing import Callable, Optional, Union

from minic.ast import (
    AstNode,
    AstOperatorType,
    ValueType,
    create_contain_node,
    create_func_call,
    create_func_def,
    create_type_node,
    create_uint_leaf,
    create_var_id,
)
from minic.lexer import TokenKind
from minic.parser import ParseTree, Terminal

_Result = Union[Optional[AstNode], AstOperatorType, ValueType]


class CSTVisitor:
    """Walks a concrete parse tree and produces the matching AST."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[ParseTree], _Result]] = {
            "compileUnit": self._visit_compile_unit,
            "funcDef": self._visit_func_def,
            "block": self._visit_block,
            "blockItemList": self._visit_block_item_list,
            "blockItem": self._visit_block_item,
            "statement": self._visit_statement,
            "expr": self._visit_expr,
            "addExp": self._visit_add_exp,
            "addOp": self._visit_add_op,
            "unaryExp": self._visit_unary_exp,
            "primaryExp": self._visit_primary_exp,
            "lVal": self._visit_l_val,
            "varDecl": self._visit_var_decl,
            "varDef": self._visit_var_def,
            "basicType": self._visit_basic_type,
            "realParamList": self._visit_real_param_list,
        }

    def run(self, root: ParseTree) -> AstNode:
        """Build the AST of a whole compile unit."""
        if root.rule != "compileUnit":
            raise ValueError(f"expected a compileUnit tree, got {root.rule!r}")
        return self._visit_compile_unit(root)

    def visit(self, tree: ParseTree) -> _Result:
        """Visit any parse subtree and return what its rule produces."""
        handler = self._handlers.get(tree.rule)
        if handler is None:
            raise ValueError(f"unknown grammar rule {tree.rule!r}")
        return handler(tree)

    # -- helpers ---------------------------------------------------------

    @staticmethod
    def _terminal(tree: ParseTree, kind: TokenKind) -> Terminal:
        term = tree.terminal(kind)
        if term is None:
            raise ValueError(f"rule {tree.rule!r} has no {kind.name} token")
        return term

    def _node(self, tree: ParseTree) -> Optional[AstNode]:
        result = self.visit(tree)
        if result is not None and not isinstance(result, AstNode):
            raise ValueError(f"rule {tree.rule!r} does not produce a node")
        return result

    # -- rules -----------------------------------------------------------

    def _visit_compile_unit(self, tree: ParseTree) -> AstNode:
        # Global variables go first, then the functions.
        unit = create_contain_node(AstOperatorType.COMPILE_UNIT)
        for var_tree in tree.rule_children("varDecl"):
            unit.insert_son_node(self._node(var_tree))
        for func_tree in tree.rule_children("funcDef"):
            unit.insert_son_node(self._node(func_tree))
        return unit

    def _visit_func_def(self, tree: ParseTree) -> AstNode:
        id_term = self._terminal(tree, TokenKind.T_ID)
        type_node = create_type_node(ValueType.INT)
        name_node = create_var_id(id_term.text, id_term.line)
        block_node = self._node(tree.rule_children("block")[0])
        return create_func_def(type_node, name_node, block_node, None)

    def _visit_block(self, tree: ParseTree) -> AstNode:
        item_lists = tree.rule_children("blockItemList")
        if not item_lists:
            return create_contain_node(AstOperatorType.BLOCK)
        return self._visit_block_item_list(item_lists[0])

    def _visit_block_item_list(self, tree: ParseTree) -> AstNode:
        block = create_contain_node(AstOperatorType.BLOCK)
        for item in tree.rule_children("blockItem"):
            block.insert_son_node(self._node(item))
        return block

    def _visit_block_item(self, tree: ParseTree) -> Optional[AstNode]:
        statements = tree.rule_children("statement")
        if statements:
            return self._node(statements[0])
        decls = tree.rule_children("varDecl")
        if decls:
            return self._node(decls[0])
        return None

    def _visit_statement(self, tree: ParseTree) -> Optional[AstNode]:
        # Only assignment and return statements produce nodes.
        if tree.label == "assignStatement":
            return self._visit_assign_statement(tree)
        if tree.label == "returnStatement":
            return self._visit_return_statement(tree)
        return None

    def _visit_return_statement(self, tree: ParseTree) -> AstNode:
        expr_node = self._node(tree.rule_children("expr")[0])
        return create_contain_node(AstOperatorType.RETURN, expr_node)

    def _visit_assign_statement(self, tree: ParseTree) -> AstNode:
        lval_node = self._node(tree.rule_children("lVal")[0])
        expr_node = self._node(tree.rule_children("expr")[0])
        return AstNode.new(AstOperatorType.ASSIGN, lval_node, expr_node)

    def _visit_block_statement(self, tree: ParseTree) -> AstNode:
        return self._visit_block(tree.rule_children("block")[0])

    def _visit_expression_statement(self, tree: ParseTree) -> Optional[AstNode]:
        exprs = tree.rule_children("expr")
        return self._node(exprs[0]) if exprs else None

    def _visit_expr(self, tree: ParseTree) -> Optional[AstNode]:
        return self._node(tree.rule_children("addExp")[0])

    def _visit_add_exp(self, tree: ParseTree) -> Optional[AstNode]:
        operands = tree.rule_children("unaryExp")
        ops = tree.rule_children("addOp")
        left = self._node(operands[0])
        for op_tree, operand in zip(ops, operands[1:]):
            op = self._visit_add_op(op_tree)
            right = self._node(operand)
            left = AstNode.new(op, left, right)
        return left

    def _visit_add_op(self, tree: ParseTree) -> AstOperatorType:
        if tree.terminal(TokenKind.T_ADD) is not None:
            return AstOperatorType.ADD
        return AstOperatorType.SUB

    def _visit_unary_exp(self, tree: ParseTree) -> Optional[AstNode]:
        primaries = tree.rule_children("primaryExp")
        if primaries:
            return self._node(primaries[0])
        id_term = tree.terminal(TokenKind.T_ID)
        if id_term is None:
            return None
        funcname_node = create_var_id(id_term.text, id_term.line)
        param_lists = tree.rule_children("realParamList")
        params_node = self._node(param_lists[0]) if param_lists else None
        return create_func_call(funcname_node, params_node)

    def _visit_primary_exp(self, tree: ParseTree) -> Optional[AstNode]:
        digit = tree.terminal(TokenKind.T_DIGIT)
        if digit is not None:
            return create_uint_leaf(int(digit.text) & 0xFFFFFFFF, digit.line)
        lvals = tree.rule_children("lVal")
        if lvals:
            return self._node(lvals[0])
        exprs = tree.rule_children("expr")
        if exprs:
            return self._node(exprs[0])
        return None

    def _visit_l_val(self, tree: ParseTree) -> AstNode:
        id_term = self._terminal(tree, TokenKind.T_ID)
        return create_var_id(id_term.text, id_term.line)

    def _visit_var_decl(self, tree: ParseTree) -> AstNode:
        stmt = create_contain_node(AstOperatorType.DECL_STMT)
        value_type = self._visit_basic_type(tree.rule_children("basicType")[0])
        for var_tree in tree.rule_children("varDef"):
            id_node = self._visit_var_def(var_tree)
            type_node = create_type_node(value_type)
            stmt.insert_son_node(AstNode.new(AstOperatorType.VAR_DECL, type_node, id_node))
        return stmt

    def _visit_var_def(self, tree: ParseTree) -> AstNode:
        id_term = self._terminal(tree, TokenKind.T_ID)
        return create_var_id(id_term.text, id_term.line)

    def _visit_basic_type(self, tree: ParseTree) -> ValueType:
        if tree.terminal(TokenKind.T_INT) is not None:
            return ValueType.INT
        return ValueType.VOID

    def _visit_real_param_list(self, tree: ParseTree) -> AstNode:
        params = create_contain_node(AstOperatorType.FUNC_REAL_PARAMS)
        for expr_tree in tree.rule_children("expr"):
            params.insert_son_node(self._node(expr_tree))
        return params