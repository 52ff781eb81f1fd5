"""Property registry: mints and transfers tokenized property records."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from realty_escrow.addresses import ZERO_ADDRESS, to_address
from realty_escrow.contracts.base import CallContext, Contract, transaction
from realty_escrow.exceptions import (
    InvalidAddressError,
    InvalidEntityStateError,
    InvalidValueError,
)
from realty_escrow.models.ledger import EventType, Operation, PropertyToken, Role
from realty_escrow.store.ledger import TokenStore

if TYPE_CHECKING:
    from realty_escrow.network import Network

logger = logging.getLogger(__name__)


class PropertyRegistry(Contract):
    """Registry of unique property tokens.

    Each token has a single owner and a single approved-operator slot.
    The approval lets one other account move that token once; it is
    cleared on every transfer.
    """

    STORAGE = ("tokens",)

    def __init__(
        self,
        network: Network,
        address: str,
        name: str = "Real Estate",
        symbol: str = "REAL",
    ) -> None:
        super().__init__(network, address)
        self.name = name
        self.symbol = symbol
        self.tokens = TokenStore()

    # Transactions
    @transaction(Operation.MINT)
    def mint(self, ctx: CallContext, token_uri: str) -> int:
        """Mint a new token owned by the caller and return its id."""
        if not isinstance(token_uri, str) or not token_uri:
            raise InvalidValueError("token_uri must be a non-empty string")

        token_id = self.tokens.next_token_id()
        self.tokens.add_token(
            PropertyToken(token_id=token_id, owner=ctx.sender, token_uri=token_uri)
        )
        self.emit(
            EventType.PROPERTY_TRANSFERRED,
            token_id,
            {"from": ZERO_ADDRESS, "to": ctx.sender, "token_uri": token_uri},
        )
        logger.debug("Minted token %d to %s", token_id, ctx.sender)
        return token_id

    @transaction(Operation.APPROVE)
    def approve(self, ctx: CallContext, operator: str, token_id: int) -> None:
        """Let operator transfer token_id on the owner's behalf.

        Approving the zero address clears the approval.
        """
        operator = to_address(operator)
        token = self.tokens.get_token(token_id)
        if operator == token.owner:
            raise InvalidValueError(f"Approval of token {token_id} to its current owner")

        self.tokens.set_approved(token_id, None if operator == ZERO_ADDRESS else operator)
        self.emit(
            EventType.PROPERTY_APPROVED,
            token_id,
            {"owner": token.owner, "approved": operator},
        )

    @transaction(Operation.TRANSFER)
    def transfer_from(
        self, ctx: CallContext, from_address: str, recipient: str, token_id: int
    ) -> None:
        """Move token_id from its owner to recipient."""
        from_address = to_address(from_address)
        recipient = to_address(recipient)
        token = self.tokens.get_token(token_id)

        if token.owner != from_address:
            raise InvalidEntityStateError(
                f"Token {token_id} is not owned by {from_address}"
            )
        if recipient == ZERO_ADDRESS:
            raise InvalidAddressError("Transfer to the zero address")

        self.tokens.set_owner(token_id, recipient)
        self.emit(
            EventType.PROPERTY_TRANSFERRED,
            token_id,
            {"from": from_address, "to": recipient},
        )

    # Access control
    def role_holders(self, role: Role, token_id: int | None = None) -> frozenset[str]:
        """Resolve the owner, or owner and operator, of a token."""
        if role is Role.TOKEN_OWNER:
            return frozenset({self.owner_of(token_id)})
        if role is Role.OWNER_OR_APPROVED:
            token = self.tokens.get_token(token_id)
            return frozenset(a for a in (token.owner, token.approved) if a)
        return super().role_holders(role, token_id)

    # Read-only accessors
    def owner_of(self, token_id: int) -> str:
        """Return the owner of a minted token."""
        return self.tokens.get_token(token_id).owner

    def get_approved(self, token_id: int) -> str:
        """Return the approved operator, or the zero address if none."""
        return self.tokens.get_token(token_id).approved or ZERO_ADDRESS

    def is_approved_or_owner(self, spender: str, token_id: int) -> bool:
        """Return True if spender may transfer token_id."""
        spender = to_address(spender)
        return spender in self.role_holders(Role.OWNER_OR_APPROVED, token_id)

    def token_uri(self, token_id: int) -> str:
        """Return the metadata reference of a token."""
        return self.tokens.get_token(token_id).token_uri

    def balance_of(self, owner: str) -> int:
        """Return the number of tokens held by owner."""
        return self.tokens.count_owned(to_address(owner))

    def total_supply(self) -> int:
        """Return the number of tokens minted so far."""
        return self.tokens.last_token_id

    def tokens_of(self, owner: str) -> list[int]:
        """Return the ids of the tokens held by owner, ascending."""
        return [token.token_id for token in self.tokens.get_owner_tokens(to_address(owner))]
