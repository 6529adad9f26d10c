"""Motoko syntax trees, traversal and pretty-printing."""

__version__ = "0.1.0"
__all__ = ["ast", "ast_traversal", "doc", "format"]