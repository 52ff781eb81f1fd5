"""Indexed record stores keyed by property token id.

Both stores keep an undo journal while a transaction is open: the first
time a record is changed after ``begin()`` its prior value (or ``None``
for a record that did not exist) is saved, and ``rollback()`` puts those
values back.  Only touched records are copied, so the cost of a
transaction does not grow with the size of the store.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from realty_escrow.exceptions import (
    InvalidEntityStateError,
    ListingNotFoundError,
    TokenNotFoundError,
)
from realty_escrow.models.ledger import Listing, PropertyToken


class JournaledStore:
    """Undo journal shared by the record stores.

    Subclasses declare a ``_undo`` field defaulting to ``None`` and
    implement ``_records`` and ``_put_back``.
    """

    _undo: dict[int, Any] | None

    def _records(self) -> dict[int, Any]:
        raise NotImplementedError

    def _put_back(self, key: int, prior: Any) -> None:
        raise NotImplementedError

    def begin(self) -> None:
        """Start recording prior values."""
        self._undo = {}

    def _touch(self, key: int) -> None:
        if self._undo is None or key in self._undo:
            return
        current = self._records().get(key)
        self._undo[key] = replace(current) if current is not None else None

    def commit(self) -> None:
        """Keep all changes and stop recording."""
        self._undo = None

    def rollback(self) -> None:
        """Undo every change made since ``begin()``."""
        if self._undo is None:
            return
        for key, prior in self._undo.items():
            self._put_back(key, prior)
        self._undo = None

    @property
    def pending_changes(self) -> int:
        """Number of records changed in the open transaction."""
        return len(self._undo) if self._undo else 0


@dataclass
class TokenStore(JournaledStore):
    """In-memory store for property tokens with owner tracking."""

    tokens: dict[int, PropertyToken] = field(default_factory=dict)
    last_token_id: int = 0

    # Relationship index
    _owner_tokens: dict[str, set[int]] = field(default_factory=dict)

    _undo: dict[int, Any] | None = field(default=None, repr=False)
    _undo_last_id: int = field(default=0, repr=False)

    def _records(self) -> dict[int, PropertyToken]:
        return self.tokens

    def _put_back(self, token_id: int, prior: PropertyToken | None) -> None:
        current = self.tokens.pop(token_id, None)
        if current is not None:
            self._owner_tokens[current.owner].discard(token_id)
        if prior is not None:
            self.tokens[token_id] = prior
            self._owner_tokens.setdefault(prior.owner, set()).add(token_id)

    def begin(self) -> None:
        super().begin()
        self._undo_last_id = self.last_token_id

    def rollback(self) -> None:
        if self._undo is not None:
            self.last_token_id = self._undo_last_id
        super().rollback()

    def next_token_id(self) -> int:
        """Reserve and return the next token id."""
        self.last_token_id += 1
        return self.last_token_id

    def add_token(self, token: PropertyToken) -> None:
        """Add a freshly minted token to the store."""
        if token.token_id in self.tokens:
            raise InvalidEntityStateError(f"Token {token.token_id} already exists")

        self._touch(token.token_id)
        if token.minted_at is None:
            token.minted_at = datetime.now()
        self.tokens[token.token_id] = token
        self._owner_tokens.setdefault(token.owner, set()).add(token.token_id)

    def get_token(self, token_id: int) -> PropertyToken:
        """Get a token, raising if it was never minted."""
        token = self.tokens.get(token_id)
        if token is None:
            raise TokenNotFoundError(f"Token {token_id} not found")
        return token

    def set_owner(self, token_id: int, owner: str) -> None:
        """Move a token to a new owner and clear its approval."""
        token = self.get_token(token_id)
        self._touch(token_id)
        self._owner_tokens[token.owner].discard(token_id)
        token.owner = owner
        token.approved = None
        self._owner_tokens.setdefault(owner, set()).add(token_id)

    def set_approved(self, token_id: int, operator: str | None) -> None:
        """Fill or clear (``None``) the approved-operator slot."""
        token = self.get_token(token_id)
        self._touch(token_id)
        token.approved = operator

    def get_owner_tokens(self, owner: str) -> list[PropertyToken]:
        """Get all tokens held by an owner, in id order."""
        token_ids = sorted(self._owner_tokens.get(owner, ()))
        return [self.tokens[tid] for tid in token_ids]

    def count_owned(self, owner: str) -> int:
        """Count the tokens held by an owner."""
        return len(self._owner_tokens.get(owner, ()))

    def summary(self) -> dict[str, int]:
        """Return summary counts."""
        return {
            "tokens": len(self.tokens),
            "owners": sum(1 for ids in self._owner_tokens.values() if ids),
        }


@dataclass
class ListingStore(JournaledStore):
    """In-memory store for escrow listings, one entry per token id."""

    listings: dict[int, Listing] = field(default_factory=dict)

    _undo: dict[int, Any] | None = field(default=None, repr=False)

    def _records(self) -> dict[int, Listing]:
        return self.listings

    def _put_back(self, token_id: int, prior: Listing | None) -> None:
        if prior is None:
            self.listings.pop(token_id, None)
        else:
            self.listings[token_id] = prior

    def add_listing(self, listing: Listing) -> None:
        """Record a listing for a token."""
        if listing.token_id in self.listings:
            raise InvalidEntityStateError(f"Token {listing.token_id} is already listed")

        self._touch(listing.token_id)
        if listing.listed_at is None:
            listing.listed_at = datetime.now()
        self.listings[listing.token_id] = listing

    def get(self, token_id: int) -> Listing | None:
        """Get a listing, or None if the token was never listed."""
        return self.listings.get(token_id)

    def get_listing(self, token_id: int) -> Listing:
        """Get a listing, raising if the token was never listed."""
        listing = self.listings.get(token_id)
        if listing is None:
            raise ListingNotFoundError(f"Token {token_id} is not listed")
        return listing

    def set_inspection(self, token_id: int, passed: bool) -> Listing:
        """Record an inspection verdict on a listing."""
        listing = self.get_listing(token_id)
        self._touch(token_id)
        listing.inspection_passed = passed
        listing.updated_at = datetime.now()
        return listing

    def get_buyer_listings(self, buyer: str) -> list[Listing]:
        """Get all listings naming a buyer."""
        return [listing for listing in self.listings.values() if listing.buyer == buyer]

    def summary(self) -> dict[str, int]:
        """Return summary counts."""
        return {
            "listings": len(self.listings),
            "inspections_passed": sum(
                1 for listing in self.listings.values() if listing.inspection_passed
            ),
        }
