"""Property token model for the registry."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class PropertyToken:
    """Uniquely identified record of ownership of a property."""

    token_id: int
    owner: str
    token_uri: str  # Metadata reference, e.g. an IPFS document URI
    approved: str | None = None  # Single operator slot, cleared on transfer
    minted_at: datetime | None = None
