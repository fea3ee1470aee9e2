"""Tokenizer for the MiniC language."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum


class TokenKind(IntEnum):
    """Kinds of tokens produced by the tokenizer."""

    EOF = -1
    T_L_PAREN = 1
    T_R_PAREN = 2
    T_SEMICOLON = 3
    T_L_BRACE = 4
    T_R_BRACE = 5
    T_ASSIGN = 6
    T_COMMA = 7
    T_ADD = 8
    T_SUB = 9
    T_RETURN = 10
    T_INT = 11
    T_VOID = 12
    T_ID = 13
    T_DIGIT = 14
    WS = 15


@dataclass(frozen=True)
class Token:
    """A token with its text and position (1-based line, 0-based column)."""

    kind: TokenKind
    text: str
    line: int
    column: int


class LexerError(ValueError):
    """Raised on a character that starts no token."""

    def __init__(self, text: str, line: int, column: int) -> None:
        super().__init__(f"line {line}:{column} token recognition error at: '{text}'")
        self.text = text
        self.line = line
        self.column = column


_KEYWORDS = {
    "return": TokenKind.T_RETURN,
    "int": TokenKind.T_INT,
    "void": TokenKind.T_VOID,
}

_PUNCTUATION = {
    "(": TokenKind.T_L_PAREN,
    ")": TokenKind.T_R_PAREN,
    ";": TokenKind.T_SEMICOLON,
    "{": TokenKind.T_L_BRACE,
    "}": TokenKind.T_R_BRACE,
    "=": TokenKind.T_ASSIGN,
    ",": TokenKind.T_COMMA,
    "+": TokenKind.T_ADD,
    "-": TokenKind.T_SUB,
}

_TOKEN_RE = re.compile(
    r"(?P<ws>[ \t\r\n]+)"
    r"|(?P<id>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<digit>0|[1-9][0-9]*)"
    r"|(?P<punct>[(){};=,+\-])"
)


def tokenize(text: str) -> list[Token]:
    """Split text into tokens, dropping whitespace and ending with an EOF token."""
    tokens: list[Token] = []
    pos = 0
    line = 1
    line_start = 0

    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        column = pos - line_start
        if match is None:
            raise LexerError(text[pos], line, column)

        lexeme = match.group()
        group = match.lastgroup
        if group == "ws":
            newlines = lexeme.count("\n")
            if newlines:
                line += newlines
                line_start = pos + lexeme.rindex("\n") + 1
        elif group == "id":
            kind = _KEYWORDS.get(lexeme, TokenKind.T_ID)
            tokens.append(Token(kind, lexeme, line, column))
        elif group == "digit":
            tokens.append(Token(TokenKind.T_DIGIT, lexeme, line, column))
        else:
            tokens.append(Token(_PUNCTUATION[lexeme], lexeme, line, column))
        pos = match.end()

    tokens.append(Token(TokenKind.EOF, "<EOF>", line, pos - line_start))
    return tokens