"""Signature verification backend for EIP-191 personal message signatures."""

__version__ = "0.1.0"
