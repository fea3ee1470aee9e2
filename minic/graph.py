"""Render an abstract syntax tree as a Graphviz DOT graph."""

from __future__ import annotations

from typing import Optional

from minic.ast import AstNode, AstOperatorType

_INTERNAL_LABELS = {
    AstOperatorType.BLOCK: "block",
    AstOperatorType.RETURN: "return",
    AstOperatorType.FUNC_DEF: "func-def",
    AstOperatorType.COMPILE_UNIT: "compile-unit",
    AstOperatorType.FUNC_FORMAL_PARAMS: "formal-params",
    AstOperatorType.VAR_DECL: "var-decl",
    AstOperatorType.DECL_STMT: "decl-stmt",
    AstOperatorType.ADD: "+",
    AstOperatorType.SUB: "-",
    AstOperatorType.ASSIGN: "=",
    AstOperatorType.FUNC_CALL: "func-call",
    AstOperatorType.FUNC_REAL_PARAMS: "real-params",
}

_LEAF_ATTRS = (
    ("fontcolor", "black"),
    ("fontname", "SimSun"),
    ("shape", "record"),
    ("style", "filled"),
    ("fillcolor", "yellow"),
)

_INTERNAL_ATTRS = (("shape", "ellipse"),)


def node_label(node: AstNode) -> str:
    """Text shown for a node in the graph."""
    kind = node.node_type
    if kind == AstOperatorType.LEAF_LITERAL_UINT:
        value = node.integer_val & 0xFFFFFFFF
        if value >= 0x80000000:
            value -= 0x100000000
        return str(value)
    if kind == AstOperatorType.LEAF_LITERAL_FLOAT:
        return f"{node.float_val:.6f}"
    if kind == AstOperatorType.LEAF_VAR_ID:
        return node.name
    if kind == AstOperatorType.LEAF_TYPE:
        return str(node.type)
    return _INTERNAL_LABELS.get(kind, "unknown")


def _quote(text: str, record: bool) -> str:
    special = '\\"{}|<>' if record else '\\"'
    escaped = "".join("\\" + ch if ch in special else ch for ch in text)
    return '"' + escaped + '"'


def _format_attrs(label: str, attrs: tuple[tuple[str, str], ...], record: bool) -> str:
    parts = [f"label={_quote(label, record)}"]
    parts.extend(f'{key}="{value}"' for key, value in attrs)
    return ", ".join(parts)


class _DotBuilder:
    def __init__(self) -> None:
        self.lines: list[str] = []
        self._count = 0

    def _new_id(self) -> str:
        node_id = f"n{self._count}"
        self._count += 1
        return node_id

    def visit(self, node: Optional[AstNode]) -> Optional[str]:
        if node is None:
            return None
        if node.is_leaf():
            node_id = self._new_id()
            attrs = _format_attrs(node_label(node), _LEAF_ATTRS, record=True)
            self.lines.append(f"\t{node_id} [{attrs}];")
            return node_id

        son_ids = [son_id for son_id in map(self.visit, node.sons) if son_id is not None]
        node_id = self._new_id()
        attrs = _format_attrs(node_label(node), _INTERNAL_ATTRS, record=False)
        self.lines.append(f"\t{node_id} [{attrs}];")
        self.lines.extend(f"\t{node_id} -> {son_id};" for son_id in son_ids)
        return node_id


def ast_to_dot(root: Optional[AstNode]) -> str:
    """DOT text of a directed graph of the tree; children come before parents."""
    builder = _DotBuilder()
    builder.visit(root)
    return "\n".join(["digraph ast {", '\tdpi="600";', *builder.lines, "}"]) + "\n"


def output_ast(root: Optional[AstNode], file_path: str) -> None:
    """Write the tree in Graphviz DOT form to file_path."""
    with open(file_path, "w", encoding="utf-8") as out:
        out.write(ast_to_dot(root))