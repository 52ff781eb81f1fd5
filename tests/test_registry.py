"""Tests for the property registry."""

import pytest

from realty_escrow.addresses import ZERO_ADDRESS
from realty_escrow.contracts import PropertyRegistry
from realty_escrow.exceptions import (
    AuthorizationError,
    InvalidAddressError,
    InvalidEntityStateError,
    InvalidValueError,
    PrecursorError,
    TokenNotFoundError,
)
from realty_escrow.models.ledger import EventType, Role, Signer
from realty_escrow.network import Network

from conftest import METADATA_URI


class TestMint:
    """Tests for mint()."""

    def test_mint_assigns_sequential_ids(self, registry: PropertyRegistry, seller: Signer) -> None:
        assert registry.mint(METADATA_URI, sender=seller) == 1
        assert registry.mint(METADATA_URI, sender=seller) == 2
        assert registry.total_supply() == 2

    def test_minter_becomes_owner(self, registry: PropertyRegistry, buyer: Signer) -> None:
        token_id = registry.mint(METADATA_URI, sender=buyer)

        assert registry.owner_of(token_id) == buyer.address
        assert registry.balance_of(buyer) == 1
        assert registry.token_uri(token_id) == METADATA_URI
        assert registry.get_approved(token_id) == ZERO_ADDRESS

    def test_mint_emits_transfer_from_zero(
        self, network: Network, registry: PropertyRegistry, seller: Signer
    ) -> None:
        registry.mint(METADATA_URI, sender=seller)

        (event,) = network.get_events(EventType.PROPERTY_TRANSFERRED)
        assert event.data["from"] == ZERO_ADDRESS
        assert event.data["to"] == seller.address
        assert event.subject == "1"

    @pytest.mark.parametrize("uri", ["", None, 42])
    def test_mint_rejects_bad_uri(self, registry: PropertyRegistry, seller: Signer, uri: object) -> None:
        with pytest.raises(InvalidValueError):
            registry.mint(uri, sender=seller)

        assert registry.total_supply() == 0


class TestLookups:
    """Tests for read-only accessors."""

    def test_owner_of_unknown_token(self, registry: PropertyRegistry) -> None:
        with pytest.raises(TokenNotFoundError, match="Token 5 not found"):
            registry.owner_of(5)

    def test_unknown_token_is_precursor_error(self, registry: PropertyRegistry) -> None:
        with pytest.raises(PrecursorError):
            registry.token_uri(1)

    def test_balance_of_empty_owner(self, registry: PropertyRegistry, lender: Signer) -> None:
        assert registry.balance_of(lender.address) == 0

    def test_name_and_symbol(self, registry: PropertyRegistry) -> None:
        assert registry.name == "Real Estate"
        assert registry.symbol == "REAL"


class TestApprove:
    """Tests for approve()."""

    def test_owner_can_approve(
        self, registry: PropertyRegistry, seller: Signer, buyer: Signer
    ) -> None:
        token_id = registry.mint(METADATA_URI, sender=seller)
        registry.approve(buyer.address, token_id, sender=seller)

        assert registry.get_approved(token_id) == buyer.address
        assert registry.is_approved_or_owner(buyer, token_id) is True

    def test_approval_is_overwritten(
        self, registry: PropertyRegistry, seller: Signer, buyer: Signer, lender: Signer
    ) -> None:
        token_id = registry.mint(METADATA_URI, sender=seller)
        registry.approve(buyer.address, token_id, sender=seller)
        registry.approve(lender.address, token_id, sender=seller)

        assert registry.get_approved(token_id) == lender.address
        assert registry.is_approved_or_owner(buyer, token_id) is False

    def test_approving_zero_address_clears_approval(
        self, registry: PropertyRegistry, seller: Signer, buyer: Signer
    ) -> None:
        token_id = registry.mint(METADATA_URI, sender=seller)
        registry.approve(buyer.address, token_id, sender=seller)

        registry.approve(ZERO_ADDRESS, token_id, sender=seller)

        assert registry.tokens.get_token(token_id).approved is None
        assert registry.get_approved(token_id) == ZERO_ADDRESS
        assert registry.is_approved_or_owner(ZERO_ADDRESS, token_id) is False
        assert registry.is_approved_or_owner(buyer, token_id) is False
        assert registry.role_holders(Role.OWNER_OR_APPROVED, token_id) == frozenset({seller.address})

    def test_non_owner_cannot_approve(
        self, registry: PropertyRegistry, seller: Signer, buyer: Signer
    ) -> None:
        token_id = registry.mint(METADATA_URI, sender=seller)

        with pytest.raises(AuthorizationError, match="requires TOKEN_OWNER"):
            registry.approve(buyer.address, token_id, sender=buyer)

        assert registry.get_approved(token_id) == ZERO_ADDRESS

    def test_approve_to_owner_rejected(self, registry: PropertyRegistry, seller: Signer) -> None:
        token_id = registry.mint(METADATA_URI, sender=seller)

        with pytest.raises(InvalidValueError, match="current owner"):
            registry.approve(seller.address, token_id, sender=seller)

    def test_approve_unknown_token(self, registry: PropertyRegistry, seller: Signer, buyer: Signer) -> None:
        with pytest.raises(TokenNotFoundError):
            registry.approve(buyer.address, 3, sender=seller)

    def test_approve_emits_event(
        self, network: Network, registry: PropertyRegistry, seller: Signer, buyer: Signer
    ) -> None:
        token_id = registry.mint(METADATA_URI, sender=seller)
        registry.approve(buyer.address, token_id, sender=seller)

        (event,) = network.get_events(EventType.PROPERTY_APPROVED)
        assert event.data == {"owner": seller.address, "approved": buyer.address}


class TestTransfer:
    """Tests for transfer_from()."""

    def test_operator_transfer_clears_approval(
        self, registry: PropertyRegistry, seller: Signer, buyer: Signer, lender: Signer
    ) -> None:
        token_id = registry.mint(METADATA_URI, sender=seller)
        registry.approve(lender.address, token_id, sender=seller)

        registry.transfer_from(seller.address, buyer.address, token_id, sender=lender)

        assert registry.owner_of(token_id) == buyer.address
        assert registry.get_approved(token_id) == ZERO_ADDRESS
        assert registry.balance_of(seller) == 0
        assert registry.balance_of(buyer) == 1

    def test_approval_is_single_use(
        self, registry: PropertyRegistry, seller: Signer, buyer: Signer, lender: Signer
    ) -> None:
        token_id = registry.mint(METADATA_URI, sender=seller)
        registry.approve(lender.address, token_id, sender=seller)
        registry.transfer_from(seller.address, buyer.address, token_id, sender=lender)

        with pytest.raises(AuthorizationError):
            registry.transfer_from(buyer.address, lender.address, token_id, sender=lender)

    def test_owner_can_transfer(self, registry: PropertyRegistry, seller: Signer, buyer: Signer) -> None:
        token_id = registry.mint(METADATA_URI, sender=seller)
        registry.transfer_from(seller.address, buyer.address, token_id, sender=seller)

        assert registry.owner_of(token_id) == buyer.address

    def test_unrelated_caller_cannot_transfer(
        self, registry: PropertyRegistry, seller: Signer, buyer: Signer, outsider: Signer
    ) -> None:
        token_id = registry.mint(METADATA_URI, sender=seller)

        with pytest.raises(AuthorizationError, match="requires OWNER_OR_APPROVED"):
            registry.transfer_from(seller.address, outsider.address, token_id, sender=outsider)

        assert registry.owner_of(token_id) == seller.address

    def test_transfer_from_wrong_owner(
        self, registry: PropertyRegistry, seller: Signer, buyer: Signer
    ) -> None:
        token_id = registry.mint(METADATA_URI, sender=seller)

        with pytest.raises(InvalidEntityStateError):
            registry.transfer_from(buyer.address, seller.address, token_id, sender=seller)

    def test_transfer_to_zero_address(self, registry: PropertyRegistry, seller: Signer) -> None:
        token_id = registry.mint(METADATA_URI, sender=seller)

        with pytest.raises(InvalidAddressError):
            registry.transfer_from(seller.address, ZERO_ADDRESS, token_id, sender=seller)

        assert registry.owner_of(token_id) == seller.address


class TestRoleResolution:
    """Tests for PropertyRegistry.role_holders()."""

    def test_owner_or_approved_holders(
        self, registry: PropertyRegistry, seller: Signer, buyer: Signer
    ) -> None:
        token_id = registry.mint(METADATA_URI, sender=seller)
        assert registry.role_holders(Role.OWNER_OR_APPROVED, token_id) == frozenset({seller.address})

        registry.approve(buyer.address, token_id, sender=seller)
        assert registry.role_holders(Role.OWNER_OR_APPROVED, token_id) == frozenset(
            {seller.address, buyer.address}
        )

    def test_token_owner_holder(self, registry: PropertyRegistry, seller: Signer) -> None:
        token_id = registry.mint(METADATA_URI, sender=seller)

        assert registry.role_holders(Role.TOKEN_OWNER, token_id) == frozenset({seller.address})


class TestOwnerIndex:
    """Tests for tokens_of()."""

    def test_tokens_of_follows_transfers(
        self, registry: PropertyRegistry, seller: Signer, buyer: Signer
    ) -> None:
        for _ in range(3):
            registry.mint(METADATA_URI, sender=seller)
        registry.transfer_from(seller.address, buyer.address, 2, sender=seller)

        assert registry.tokens_of(seller) == [1, 3]
        assert registry.tokens_of(buyer.address) == [2]

    def test_tokens_of_empty_owner(self, registry: PropertyRegistry, lender: Signer) -> None:
        assert registry.tokens_of(lender) == []
