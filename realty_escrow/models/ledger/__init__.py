"""Escrow ledger domain models."""

from realty_escrow.models.ledger.account import Signer
from realty_escrow.models.ledger.enums import EventType, Operation, Role
from realty_escrow.models.ledger.listing import Listing
from realty_escrow.models.ledger.property_token import PropertyToken

__all__ = [
    "EventType",
    "Listing",
    "Operation",
    "PropertyToken",
    "Role",
    "Signer",
]
