"""realty-escrow: in-process real-estate escrow ledger."""

__version__ = "0.1.0"
