"""Base models shared across contracts."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Event:
    """Standard event envelope emitted by ledger contracts."""

    event_id: str
    event_type: str  # entity.action (e.g., escrow.listed)
    event_time: datetime
    source: str  # Address of the emitting contract
    subject: str  # Entity ID affected (token id)
    data: dict
    metadata: dict = field(default_factory=dict)


@dataclass
class Receipt:
    """Record of a committed transaction."""

    block_number: int
    operation: str
    contract: str  # Address of the called contract
    sender: str
    value: int = 0
    result: object = None
    events: list[Event] = field(default_factory=list)
