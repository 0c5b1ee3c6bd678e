"""Syntax tree and source-level analysis passes for a small statically typed language."""

__version__ = "0.1.0"