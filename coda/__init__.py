"""Decoder for CODA (Coded Statement of Account) bank statement files."""

__version__ = "1.0.0"
