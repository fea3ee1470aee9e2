"""Recursive-descent parser for MiniC that builds a concrete parse tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from minic.lexer import Token, TokenKind, tokenize


class ParseError(ValueError):
    """Raised when the token stream does not match the grammar."""

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"line {line}:{column} {message}")
        self.line = line
        self.column = column


@dataclass(frozen=True)
class Terminal:
    """A leaf of the parse tree holding one matched token."""

    kind: TokenKind
    text: str
    line: int
    column: int

    @classmethod
    def from_token(cls, token: Token) -> "Terminal":
        return cls(token.kind, token.text, token.line, token.column)


@dataclass
class ParseTree:
    """An interior node of the parse tree for one grammar rule.

    ``label`` names the chosen alternative of a labelled rule, such as
    ``returnStatement`` for a ``statement``; it is empty otherwise.
    """

    rule: str
    children: list[Union["ParseTree", Terminal]] = field(default_factory=list)
    label: str = ""

    def rule_children(self, rule: str) -> list["ParseTree"]:
        """Children that are subtrees of the given rule, in order."""
        return [
            child for child in self.children if isinstance(child, ParseTree) and child.rule == rule
        ]

    def terminal(self, kind: TokenKind) -> Optional[Terminal]:
        """The first direct terminal child of the given kind, if any."""
        return next(
            (
                child
                for child in self.children
                if isinstance(child, Terminal) and child.kind == kind
            ),
            None,
        )


_EXPR_START = frozenset({TokenKind.T_L_PAREN, TokenKind.T_ID, TokenKind.T_DIGIT})

_STATEMENT_START = _EXPR_START | {
    TokenKind.T_SEMICOLON,
    TokenKind.T_L_BRACE,
    TokenKind.T_RETURN,
}

_BLOCK_ITEM_START = _STATEMENT_START | {TokenKind.T_INT}

_LITERALS = {
    TokenKind.T_L_PAREN: "'('",
    TokenKind.T_R_PAREN: "')'",
    TokenKind.T_SEMICOLON: "';'",
    TokenKind.T_L_BRACE: "'{'",
    TokenKind.T_R_BRACE: "'}'",
    TokenKind.T_ASSIGN: "'='",
    TokenKind.T_COMMA: "','",
    TokenKind.T_ADD: "'+'",
    TokenKind.T_SUB: "'-'",
    TokenKind.T_RETURN: "'return'",
    TokenKind.T_INT: "'int'",
    TokenKind.T_VOID: "'void'",
    TokenKind.EOF: "<EOF>",
}


def _display(kind: TokenKind) -> str:
    return _LITERALS.get(kind, kind.name)


class Parser:
    """Parses MiniC source text; each rule method returns its subtree."""

    def __init__(self, text: str) -> None:
        self._tokens = tokenize(text)
        self._pos = 0

    # -- token helpers -------------------------------------------------

    def _token(self, k: int = 1) -> Token:
        index = min(self._pos + k - 1, len(self._tokens) - 1)
        return self._tokens[index]

    def _la(self, k: int = 1) -> TokenKind:
        return self._token(k).kind

    def _match(self, kind: TokenKind) -> Terminal:
        token = self._token()
        if token.kind != kind:
            raise ParseError(
                f"mismatched input '{token.text}' expecting {_display(kind)}",
                token.line,
                token.column,
            )
        if kind != TokenKind.EOF:
            self._pos += 1
        return Terminal.from_token(token)

    def _no_viable(self) -> ParseError:
        token = self._token()
        return ParseError(
            f"no viable alternative at input '{token.text}'", token.line, token.column
        )

    # -- grammar rules -------------------------------------------------

    def compile_unit(self) -> ParseTree:
        """compileUnit: (funcDef | varDecl)* EOF"""
        node = ParseTree("compileUnit")
        while self._la() == TokenKind.T_INT:
            if self._la(2) == TokenKind.T_ID and self._la(3) == TokenKind.T_L_PAREN:
                node.children.append(self.func_def())
            else:
                node.children.append(self.var_decl())
        node.children.append(self._match(TokenKind.EOF))
        return node

    def func_def(self) -> ParseTree:
        """funcDef: T_INT T_ID T_L_PAREN T_R_PAREN block"""
        node = ParseTree("funcDef")
        for kind in (TokenKind.T_INT, TokenKind.T_ID, TokenKind.T_L_PAREN, TokenKind.T_R_PAREN):
            node.children.append(self._match(kind))
        node.children.append(self.block())
        return node

    def block(self) -> ParseTree:
        """block: T_L_BRACE blockItemList? T_R_BRACE"""
        node = ParseTree("block")
        node.children.append(self._match(TokenKind.T_L_BRACE))
        if self._la() in _BLOCK_ITEM_START:
            node.children.append(self.block_item_list())
        node.children.append(self._match(TokenKind.T_R_BRACE))
        return node

    def block_item_list(self) -> ParseTree:
        """blockItemList: blockItem+"""
        node = ParseTree("blockItemList")
        node.children.append(self.block_item())
        while self._la() in _BLOCK_ITEM_START:
            node.children.append(self.block_item())
        return node

    def block_item(self) -> ParseTree:
        """blockItem: statement | varDecl"""
        node = ParseTree("blockItem")
        la = self._la()
        if la in _STATEMENT_START:
            node.children.append(self.statement())
        elif la == TokenKind.T_INT:
            node.children.append(self.var_decl())
        else:
            raise self._no_viable()
        return node

    def var_decl(self) -> ParseTree:
        """varDecl: basicType varDef (T_COMMA varDef)* T_SEMICOLON"""
        node = ParseTree("varDecl")
        node.children.append(self.basic_type())
        node.children.append(self.var_def())
        while self._la() == TokenKind.T_COMMA:
            node.children.append(self._match(TokenKind.T_COMMA))
            node.children.append(self.var_def())
        node.children.append(self._match(TokenKind.T_SEMICOLON))
        return node

    def basic_type(self) -> ParseTree:
        """basicType: T_INT"""
        return ParseTree("basicType", [self._match(TokenKind.T_INT)])

    def var_def(self) -> ParseTree:
        """varDef: T_ID"""
        return ParseTree("varDef", [self._match(TokenKind.T_ID)])

    def statement(self) -> ParseTree:
        """statement: return, assignment, block or expression statement."""
        la = self._la()
        if la == TokenKind.T_RETURN:
            node = ParseTree("statement", label="returnStatement")
            node.children.append(self._match(TokenKind.T_RETURN))
            node.children.append(self.expr())
            node.children.append(self._match(TokenKind.T_SEMICOLON))
        elif la == TokenKind.T_ID and self._la(2) == TokenKind.T_ASSIGN:
            node = ParseTree("statement", label="assignStatement")
            node.children.append(self.l_val())
            node.children.append(self._match(TokenKind.T_ASSIGN))
            node.children.append(self.expr())
            node.children.append(self._match(TokenKind.T_SEMICOLON))
        elif la == TokenKind.T_L_BRACE:
            node = ParseTree("statement", [self.block()], label="blockStatement")
        elif la == TokenKind.T_SEMICOLON or la in _EXPR_START:
            node = ParseTree("statement", label="expressionStatement")
            if la in _EXPR_START:
                node.children.append(self.expr())
            node.children.append(self._match(TokenKind.T_SEMICOLON))
        else:
            raise self._no_viable()
        return node

    def expr(self) -> ParseTree:
        """expr: addExp"""
        return ParseTree("expr", [self.add_exp()])

    def add_exp(self) -> ParseTree:
        """addExp: unaryExp (addOp unaryExp)*"""
        node = ParseTree("addExp")
        node.children.append(self.unary_exp())
        while self._la() in (TokenKind.T_ADD, TokenKind.T_SUB):
            node.children.append(self.add_op())
            node.children.append(self.unary_exp())
        return node

    def add_op(self) -> ParseTree:
        """addOp: T_ADD | T_SUB"""
        if self._la() == TokenKind.T_ADD:
            return ParseTree("addOp", [self._match(TokenKind.T_ADD)])
        return ParseTree("addOp", [self._match(TokenKind.T_SUB)])

    def unary_exp(self) -> ParseTree:
        """unaryExp: primaryExp | T_ID T_L_PAREN realParamList? T_R_PAREN"""
        node = ParseTree("unaryExp")
        la = self._la()
        if la == TokenKind.T_ID and self._la(2) == TokenKind.T_L_PAREN:
            node.children.append(self._match(TokenKind.T_ID))
            node.children.append(self._match(TokenKind.T_L_PAREN))
            if self._la() in _EXPR_START:
                node.children.append(self.real_param_list())
            node.children.append(self._match(TokenKind.T_R_PAREN))
        elif la in _EXPR_START:
            node.children.append(self.primary_exp())
        else:
            raise self._no_viable()
        return node

    def primary_exp(self) -> ParseTree:
        """primaryExp: T_L_PAREN expr T_R_PAREN | T_DIGIT | lVal"""
        node = ParseTree("primaryExp")
        la = self._la()
        if la == TokenKind.T_L_PAREN:
            node.children.append(self._match(TokenKind.T_L_PAREN))
            node.children.append(self.expr())
            node.children.append(self._match(TokenKind.T_R_PAREN))
        elif la == TokenKind.T_DIGIT:
            node.children.append(self._match(TokenKind.T_DIGIT))
        elif la == TokenKind.T_ID:
            node.children.append(self.l_val())
        else:
            raise self._no_viable()
        return node

    def real_param_list(self) -> ParseTree:
        """realParamList: expr (T_COMMA expr)*"""
        node = ParseTree("realParamList")
        node.children.append(self.expr())
        while self._la() == TokenKind.T_COMMA:
            node.children.append(self._match(TokenKind.T_COMMA))
            node.children.append(self.expr())
        return node

    def l_val(self) -> ParseTree:
        """lVal: T_ID"""
        return ParseTree("lVal", [self._match(TokenKind.T_ID)])


def parse(text: str) -> ParseTree:
    """Parse a whole compile unit from source text."""
    return Parser(text).compile_unit()