"""Spinpool: a 3x3 weighted slot machine with an in-memory wallet ledger."""

__version__ = "0.1.0"
