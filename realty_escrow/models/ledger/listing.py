"""Listing model for the escrow ledger."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Listing:
    """Sale terms and status of one property token held in escrow."""

    token_id: int
    buyer: str
    purchase_price: int  # Base units
    escrow_amount: int  # Required earnest deposit, base units
    is_listed: bool = True
    inspection_passed: bool = False
    listed_at: datetime | None = None
    updated_at: datetime | None = None
