"""Lexer, parser and syntax trees for an expression-level subset of C, with ARM32 assembly building blocks."""

__version__ = "1.0.1"