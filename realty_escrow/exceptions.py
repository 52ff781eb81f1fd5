"""Custom exception hierarchy for realty-escrow."""


class EscrowError(Exception):
    """Base exception for all realty-escrow errors."""


class AuthorizationError(EscrowError):
    """Raised when the caller does not hold the role an operation requires."""


class PrecursorError(EscrowError):
    """Raised when state required by an operation is missing."""


class EntityNotFoundError(PrecursorError):
    """Raised when a referenced entity does not exist."""


class TokenNotFoundError(EntityNotFoundError):
    """Raised when a property token id was never minted."""


class ListingNotFoundError(EntityNotFoundError):
    """Raised when a property token has no listing."""


class InvalidEntityStateError(PrecursorError):
    """Raised when an entity is in an invalid state for the operation."""


class ApprovalRequiredError(InvalidEntityStateError):
    """Raised when the escrow has not been approved to move a token."""


class InsufficientFundsError(PrecursorError):
    """Raised when an account cannot cover the value attached to a call."""


class InvalidValueError(EscrowError, ValueError):
    """Raised when an input value is malformed or out of range."""


class InvalidAddressError(InvalidValueError):
    """Raised when an account address is malformed."""


class ConfigurationError(EscrowError):
    """Raised when configuration is invalid or missing."""


class SinkError(EscrowError):
    """Raised when a sink operation fails."""
