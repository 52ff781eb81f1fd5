"""Enumeration types for escrow ledger entities."""

from enum import Enum


class Role(str, Enum):
    ANYONE = "ANYONE"
    TOKEN_OWNER = "TOKEN_OWNER"
    OWNER_OR_APPROVED = "OWNER_OR_APPROVED"
    SELLER = "SELLER"
    BUYER = "BUYER"
    INSPECTOR = "INSPECTOR"
    LENDER = "LENDER"


class Operation(str, Enum):
    DEPLOY = "deploy"
    MINT = "mint"
    APPROVE = "approve"
    TRANSFER = "transferFrom"
    LIST = "list"
    DEPOSIT_EARNEST = "depositEarnest"
    UPDATE_INSPECTION_STATUS = "updateInspectionStatus"


class EventType(str, Enum):
    PROPERTY_TRANSFERRED = "property.transferred"
    PROPERTY_APPROVED = "property.approved"
    ESCROW_LISTED = "escrow.listed"
    EARNEST_DEPOSITED = "escrow.earnest_deposited"
    INSPECTION_UPDATED = "escrow.inspection_updated"
