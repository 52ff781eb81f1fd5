"""Pytest configuration and fixtures."""

import pytest

from realty_escrow.config import NetworkConfig
from realty_escrow.contracts import EscrowLedger, PropertyRegistry
from realty_escrow.models.ledger import Signer
from realty_escrow.network import Network
from realty_escrow.units import parse_ether

METADATA_URI = (
    "https://gateway.pinata.cloud/ipfs/QmWAamZPKNo9VNhBzfE1udsaPASQES25i3wsrpov62zR3g/1.json"
)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def network(seed: int) -> Network:
    """Fresh network with six funded signers."""
    return Network(NetworkConfig(num_signers=6), seed=seed)


@pytest.fixture
def buyer(network: Network) -> Signer:
    return network.get_signers()[0]


@pytest.fixture
def seller(network: Network) -> Signer:
    return network.get_signers()[1]


@pytest.fixture
def inspector(network: Network) -> Signer:
    return network.get_signers()[2]


@pytest.fixture
def lender(network: Network) -> Signer:
    return network.get_signers()[3]


@pytest.fixture
def outsider(network: Network) -> Signer:
    """Signer holding no role."""
    return network.get_signers()[4]


@pytest.fixture
def registry(network: Network, seller: Signer) -> PropertyRegistry:
    """Deployed registry with no tokens."""
    return network.deploy(PropertyRegistry, sender=seller)


@pytest.fixture
def escrow(
    network: Network,
    registry: PropertyRegistry,
    buyer: Signer,
    seller: Signer,
    inspector: Signer,
    lender: Signer,
) -> EscrowLedger:
    """Escrow with token 1 minted, approved and listed by the seller."""
    registry.mint(METADATA_URI, sender=seller)

    escrow = network.deploy(
        EscrowLedger,
        registry.address,
        seller.address,
        inspector.address,
        lender.address,
        sender=seller,
    )

    registry.approve(escrow.address, 1, sender=seller)
    escrow.list(1, buyer.address, parse_ether(0.02), parse_ether(0.001), sender=seller)
    return escrow
