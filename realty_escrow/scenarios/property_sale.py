"""Property sale scenario driving the registry and escrow end to end."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from realty_escrow.config import NetworkConfig, ScenarioConfig
from realty_escrow.contracts import EscrowLedger, PropertyRegistry
from realty_escrow.exceptions import ConfigurationError
from realty_escrow.generators import MetadataGenerator
from realty_escrow.models.ledger import Signer
from realty_escrow.network import Network
from realty_escrow.units import parse_ether

logger = logging.getLogger(__name__)

ROLE_NAMES = ("buyer", "seller", "inspector", "lender")


class PropertySaleScenario:
    """Run the escrow flow for a batch of properties.

    For each property the scenario:
    - mints a token to the seller with a generated metadata URI
    - approves the escrow to move it
    - lists it with the buyer, purchase price and escrow amount
    - optionally deposits the earnest money from the buyer
    - records the inspection verdict

    The first four signers take the buyer, seller, inspector and lender
    roles, in that order.
    """

    def __init__(
        self,
        num_properties: int = 1,
        purchase_price_ether: str = "0.02",
        escrow_amount_ether: str = "0.001",
        inspection_passed: bool = True,
        deposit_earnest: bool = True,
        seed: int | None = None,
        *,
        config: ScenarioConfig | None = None,
        network_config: NetworkConfig | None = None,
    ) -> None:
        """Initialize property sale scenario.

        Parameters
        ----------
        num_properties : int
            Number of properties to mint and list.
        purchase_price_ether : str
            Purchase price of each property, in ether.
        escrow_amount_ether : str
            Required earnest deposit, in ether.
        inspection_passed : bool
            Verdict the inspector records.
        deposit_earnest : bool
            Whether the buyer deposits the escrow amount.
        seed : int | None
            Random seed for reproducibility.
        config : ScenarioConfig | None
            When given, overrides the keyword arguments above.
        network_config : NetworkConfig | None
            Network settings (default ``NetworkConfig()``).
        """
        if config is not None:
            num_properties = config.num_properties
            purchase_price_ether = config.purchase_price_ether
            escrow_amount_ether = config.escrow_amount_ether
            inspection_passed = config.inspection_passed
            deposit_earnest = config.deposit_earnest

        network_config = network_config or NetworkConfig()
        if network_config.num_signers < len(ROLE_NAMES):
            raise ConfigurationError(
                f"Scenario needs {len(ROLE_NAMES)} signers, got {network_config.num_signers}"
            )
        if num_properties < 1:
            raise ConfigurationError(f"num_properties must be positive, got {num_properties}")

        self.num_properties = num_properties
        self.purchase_price_ether = Decimal(str(purchase_price_ether))
        self.purchase_price = parse_ether(purchase_price_ether)
        self.escrow_amount = parse_ether(escrow_amount_ether)
        self.inspection_passed = inspection_passed
        self.deposit_earnest = deposit_earnest
        self.seed = seed

        self.network = Network(network_config, seed=seed)
        self._metadata_gen = MetadataGenerator(
            seed=seed,
            base_uri=config.metadata_base_uri if config else "https://gateway.pinata.cloud/ipfs",
        )

        self.roles: dict[str, Signer] = dict(zip(ROLE_NAMES, self.network.get_signers()))
        self.registry: PropertyRegistry | None = None
        self.escrow: EscrowLedger | None = None
        self.token_ids: list[int] = []
        self.documents: dict[int, dict[str, Any]] = {}

    def run(self) -> Network:
        """Deploy the contracts and run the sale flow for every property.

        Returns
        -------
        Network
            Network holding the resulting state and event log.
        """
        buyer, seller = self.roles["buyer"], self.roles["seller"]
        inspector, lender = self.roles["inspector"], self.roles["lender"]

        logger.info(
            "Starting property sale scenario: %d properties at %s ether",
            self.num_properties,
            self.purchase_price_ether,
        )

        self.registry = self.network.deploy(PropertyRegistry, sender=seller)
        self.escrow = self.network.deploy(
            EscrowLedger,
            self.registry.address,
            seller.address,
            inspector.address,
            lender.address,
            sender=seller,
        )

        for n in range(1, self.num_properties + 1):
            uri = self._metadata_gen.uri_for(n)
            token_id = self.registry.mint(uri, sender=seller)
            self.documents[token_id] = self._metadata_gen.generate_document(
                n, self.purchase_price_ether
            )

            self.registry.approve(self.escrow.address, token_id, sender=seller)
            self.escrow.list(
                token_id,
                buyer.address,
                self.purchase_price,
                self.escrow_amount,
                sender=seller,
            )

            if self.deposit_earnest:
                self.escrow.deposit_earnest(token_id, sender=buyer, value=self.escrow_amount)

            self.escrow.update_inspection_status(
                token_id, self.inspection_passed, sender=inspector
            )
            self.token_ids.append(token_id)

        logger.info(
            "Listed %d properties, escrow balance %d",
            len(self.token_ids),
            self.escrow.get_balance(),
        )
        return self.network

    def export(self, sinks: list[Any]) -> None:
        """Export events and metadata documents to sinks.

        Parameters
        ----------
        sinks : list[Any]
            List of sink instances (ConsoleSink, JsonFileSink, KafkaSink).
        """
        by_type: dict[str, list[Any]] = {}
        for event in self.network.get_events():
            by_type.setdefault(event.event_type, []).append(event)

        for sink in sinks:
            for event_type, events in by_type.items():
                if hasattr(sink, "write_events"):
                    sink.write_events(events)
                else:
                    sink.write_batch(event_type, events)
            sink.write_batch("metadata", list(self.documents.values()))

        logger.info("Exported %d event types to %d sinks", len(by_type), len(sinks))

    def get_summary(self) -> dict[str, Any]:
        """Get summary statistics for the scenario run.

        Returns
        -------
        dict[str, Any]
            Token and listing counts, tokens held in escrow custody, the
            buyer's listings, escrow balance and network counts.
        """
        if self.escrow is None:
            return {}

        return {
            "properties": len(self.token_ids),
            **self.registry.tokens.summary(),
            **self.escrow.listings.summary(),
            "listed": sum(1 for t in self.token_ids if self.escrow.is_listed(t)),
            "in_custody": len(self.registry.tokens_of(self.escrow.address)),
            "buyer_listings": len(self.escrow.listings_for(self.roles["buyer"])),
            "escrow_balance": self.escrow.get_balance(),
            **self.network.summary(),
        }
