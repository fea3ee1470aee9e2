"""Front end: source text to abstract syntax tree, and a command to run it."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from minic.ast import AstNode
from minic.graph import output_ast
from minic.lexer import LexerError
from minic.parser import ParseError, parse
from minic.visitor import CSTVisitor


class FrontEndError(Exception):
    """Raised when source cannot be read or does not parse."""


def parse_source(text: str) -> AstNode:
    """Tokenize and parse source text and build its AST."""
    try:
        tree = parse(text)
    except (LexerError, ParseError) as exc:
        raise FrontEndError(f"lexical or syntax error: {exc}") from exc
    return CSTVisitor().run(tree)


def parse_file(filename: str) -> AstNode:
    """Read a source file and build its AST."""
    try:
        with open(filename, encoding="utf-8") as src:
            text = src.read()
    except OSError as exc:
        raise FrontEndError(f"file ({filename}) cannot be opened, it may not exist") from exc
    return parse_source(text)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse a MiniC file; optionally write its AST as a DOT graph."""
    arg_parser = argparse.ArgumentParser(prog="minic")
    arg_parser.add_argument("source", help="MiniC source file")
    arg_parser.add_argument("-o", "--output", help="write the AST graph to this file")
    args = arg_parser.parse_args(argv)

    try:
        root = parse_file(args.source)
    except FrontEndError as exc:
        print(exc, file=sys.stderr)
        return 1

    if args.output:
        try:
            output_ast(root, args.output)
        except OSError as exc:
            print(f"open file({args.output}) failed: {exc}", file=sys.stderr)
            return 1
    return 0