"""Structural layer: symbol table, syntax tree, primitive and recursive parsers.

Kept import-free so `isoebnf.lex` can use the symbol table without pulling
in the parser.
"""
