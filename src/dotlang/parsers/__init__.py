"""Parsers producing the dotlang AST."""

from dotlang.parsers.dot import DotParser, parse, parse_statement

__all__ = ["DotParser", "parse", "parse_statement"]
