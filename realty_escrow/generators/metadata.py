"""Property metadata generator."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from realty_escrow.generators.base import BaseGenerator

# IPFS CIDv0: "Qm" followed by 44 base58 characters
BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
CID_TEMPLATE = "Qm" + "?" * 44


class MetadataGenerator(BaseGenerator):
    """Generate property metadata documents and their URIs."""

    PROPERTY_TYPES = ["Single family residence", "Condo", "Townhouse"]

    def __init__(
        self,
        seed: int | None = None,
        base_uri: str = "https://gateway.pinata.cloud/ipfs",
    ) -> None:
        super().__init__(seed)
        self.base_uri = base_uri.rstrip("/")
        self.cid = self.fake.lexify(text=CID_TEMPLATE, letters=BASE58_ALPHABET)

    def uri_for(self, token_number: int) -> str:
        """Return the metadata URI of the n-th property in the collection."""
        return f"{self.base_uri}/{self.cid}/{token_number}.json"

    def generate_document(self, token_number: int, purchase_price_ether: Decimal) -> dict[str, Any]:
        """Generate the metadata document a URI points to."""
        address = self.fake.address().replace("\n", ", ")
        return {
            "name": self.fake.street_name(),
            "address": address,
            "description": self.fake.sentence(nb_words=10),
            "image": f"{self.base_uri}/{self.cid}/{token_number}.png",
            "id": str(token_number),
            "attributes": [
                {"trait_type": "Purchase Price", "value": str(purchase_price_ether)},
                {"trait_type": "Type of Residence", "value": self.fake.random_element(self.PROPERTY_TYPES)},
                {"trait_type": "Bed Rooms", "value": self.fake.random_int(min=1, max=6)},
                {"trait_type": "Bathrooms", "value": self.fake.random_int(min=1, max=4)},
                {"trait_type": "Square Feet", "value": self.fake.random_int(min=600, max=5000)},
                {"trait_type": "Year Built", "value": self.fake.random_int(min=1950, max=2024)},
            ],
        }
