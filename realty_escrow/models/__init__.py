"""Domain models for the escrow ledger."""

from realty_escrow.models.base import Event, Receipt

__all__ = ["Event", "Receipt"]
