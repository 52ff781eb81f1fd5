"""Escrow ledger holding listed properties and earnest deposits."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from realty_escrow.addresses import ZERO_ADDRESS, to_address
from realty_escrow.contracts.base import CallContext, Contract, transaction
from realty_escrow.contracts.registry import PropertyRegistry
from realty_escrow.exceptions import (
    ApprovalRequiredError,
    ConfigurationError,
    InvalidValueError,
)
from realty_escrow.models.ledger import EventType, Listing, Operation, Role
from realty_escrow.store.ledger import ListingStore
from realty_escrow.units import require_uint

if TYPE_CHECKING:
    from realty_escrow.network import Network

logger = logging.getLogger(__name__)


class EscrowLedger(Contract):
    """Two-party escrow for tokenized properties.

    One instance governs every property the seller lists.  The seller,
    inspector, lender and registry are fixed at deployment.

    Per token: Unlisted -> Listed (one way).  Earnest deposits may arrive
    any number of times once listed, and the inspection verdict can be
    overwritten by the inspector.  Deposits accumulate in the contract's
    own balance; they are not tracked per listing.
    """

    STORAGE = ("listings",)

    def __init__(
        self,
        network: Network,
        address: str,
        nft_address: str,
        seller: str,
        inspector: str,
        lender: str,
    ) -> None:
        super().__init__(network, address)
        self._nft_address = to_address(nft_address)
        self._seller = to_address(seller)
        self._inspector = to_address(inspector)
        self._lender = to_address(lender)
        self.listings = ListingStore()

        if not isinstance(network.get_contract(self._nft_address), PropertyRegistry):
            raise ConfigurationError(f"No property registry at {self._nft_address}")

    @property
    def nft_address(self) -> str:
        return self._nft_address

    @property
    def seller(self) -> str:
        return self._seller

    @property
    def inspector(self) -> str:
        return self._inspector

    @property
    def lender(self) -> str:
        return self._lender

    @property
    def registry(self) -> PropertyRegistry:
        return self.network.get_contract(self._nft_address)

    # Transactions
    @transaction(Operation.LIST)
    def list(
        self,
        ctx: CallContext,
        token_id: int,
        buyer: str,
        purchase_price: int,
        escrow_amount: int,
    ) -> None:
        """List a property for sale and take the token into custody.

        The escrow must already be approved on the registry to move the
        token; the transfer then runs with the escrow as caller.
        """
        buyer = to_address(buyer)
        require_uint(purchase_price, "purchase_price")
        require_uint(escrow_amount, "escrow_amount")

        registry = self.registry
        if not registry.is_approved_or_owner(self.address, token_id):
            raise ApprovalRequiredError(f"Escrow is not approved to transfer token {token_id}")

        registry.transfer_from(ctx.sender, self.address, token_id, sender=self.address)

        self.listings.add_listing(
            Listing(
                token_id=token_id,
                buyer=buyer,
                purchase_price=purchase_price,
                escrow_amount=escrow_amount,
            )
        )
        self.emit(
            EventType.ESCROW_LISTED,
            token_id,
            {
                "seller": ctx.sender,
                "buyer": buyer,
                "purchase_price": purchase_price,
                "escrow_amount": escrow_amount,
            },
        )

    @transaction(Operation.DEPOSIT_EARNEST, payable=True)
    def deposit_earnest(self, ctx: CallContext, token_id: int) -> None:
        """Accept the buyer's earnest money for a listed token."""
        listing = self.listings.get_listing(token_id)
        if ctx.value < listing.escrow_amount:
            logger.debug(
                "Deposit of %d on token %d is below escrow amount %d",
                ctx.value,
                token_id,
                listing.escrow_amount,
            )
        self.emit(
            EventType.EARNEST_DEPOSITED,
            token_id,
            {"buyer": ctx.sender, "amount": ctx.value, "balance": self.get_balance()},
        )

    @transaction(Operation.UPDATE_INSPECTION_STATUS)
    def update_inspection_status(self, ctx: CallContext, token_id: int, passed: bool) -> None:
        """Record the inspector's verdict for a listed token."""
        if not isinstance(passed, bool):
            raise InvalidValueError(f"passed must be a bool, got {passed!r}")

        self.listings.set_inspection(token_id, passed)
        self.emit(
            EventType.INSPECTION_UPDATED,
            token_id,
            {"inspector": ctx.sender, "passed": passed},
        )

    # Access control
    def role_holders(self, role: Role, token_id: int | None = None) -> frozenset[str]:
        """Resolve the fixed roles and the per-listing buyer."""
        if role is Role.SELLER:
            return frozenset({self._seller})
        if role is Role.INSPECTOR:
            return frozenset({self._inspector})
        if role is Role.LENDER:
            return frozenset({self._lender})
        if role is Role.BUYER:
            return frozenset({self.listings.get_listing(token_id).buyer})
        return super().role_holders(role, token_id)

    # Read-only accessors; unknown ids read as defaults
    def is_listed(self, token_id: int) -> bool:
        listing = self.listings.get(token_id)
        return listing.is_listed if listing else False

    def purchase_price(self, token_id: int) -> int:
        listing = self.listings.get(token_id)
        return listing.purchase_price if listing else 0

    def buyer(self, token_id: int) -> str:
        listing = self.listings.get(token_id)
        return listing.buyer if listing else ZERO_ADDRESS

    def escrow_amount(self, token_id: int) -> int:
        listing = self.listings.get(token_id)
        return listing.escrow_amount if listing else 0

    def inspection_passed(self, token_id: int) -> bool:
        listing = self.listings.get(token_id)
        return listing.inspection_passed if listing else False

    def get_balance(self) -> int:
        """Return the aggregate balance held by the escrow."""
        return self.network.balance_of(self.address)

    def listings_for(self, buyer: str) -> list[int]:
        """Return the ids of the listings naming buyer."""
        return [listing.token_id for listing in self.listings.get_buyer_listings(to_address(buyer))]
