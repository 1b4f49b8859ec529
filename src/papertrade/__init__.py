"""Paper trading ledger service: virtual orders against synthetic market quotes."""

__version__ = "0.1.0"
