"""In-memory record stores for ledger contracts."""

from realty_escrow.store.ledger import ListingStore, TokenStore

__all__ = ["ListingStore", "TokenStore"]
