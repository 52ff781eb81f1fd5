"""Ledger contracts: property registry and escrow."""

from realty_escrow.contracts.access import ACCESS_POLICY, AccessPolicy
from realty_escrow.contracts.base import CallContext, Contract, transaction
from realty_escrow.contracts.escrow import EscrowLedger
from realty_escrow.contracts.registry import PropertyRegistry

__all__ = [
    "ACCESS_POLICY",
    "AccessPolicy",
    "CallContext",
    "Contract",
    "EscrowLedger",
    "PropertyRegistry",
    "transaction",
]
