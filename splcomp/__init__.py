"""Machine types, instruction encoding, literal tables and symbol tables for an SPL compiler."""

__version__ = "0.1.0"

__all__ = [
    "errors",
    "instruction",
    "lexical_address",
    "literal_table",
    "machine_types",
    "regname",
    "scope",
    "symtab",
]