"""Configuration management for realty-escrow."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from realty_escrow.exceptions import ConfigurationError


@dataclass
class NetworkConfig:
    """Local ledger network configuration."""

    num_signers: int = 20
    initial_balance_ether: str = "10000"
    chain_id: int = 31337


@dataclass
class KafkaConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3
    topic_prefix: str = "dev.escrow"

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class ScenarioConfig:
    """Configuration for a property sale scenario."""

    name: str = "property_sale"
    num_properties: int = 1
    purchase_price_ether: str = "0.02"
    escrow_amount_ether: str = "0.001"
    metadata_base_uri: str = "https://gateway.pinata.cloud/ipfs"
    inspection_passed: bool = True
    deposit_earnest: bool = True


@dataclass
class EscrowConfig:
    """Main configuration for realty-escrow."""

    network: NetworkConfig = field(default_factory=NetworkConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    scenario: ScenarioConfig = field(default_factory=ScenarioConfig)
    seed: int | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "EscrowConfig":
        """Create config from environment variables."""
        import os

        try:
            network = NetworkConfig(
                num_signers=int(os.getenv("NUM_SIGNERS", "20")),
                initial_balance_ether=os.getenv("INITIAL_BALANCE_ETHER", "10000"),
                chain_id=int(os.getenv("CHAIN_ID", "31337")),
            )

            kafka = KafkaConfig(
                bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
                acks=os.getenv("KAFKA_ACKS", "all"),
                topic_prefix=os.getenv("TOPIC_PREFIX", "dev.escrow"),
            )

            output = OutputConfig(
                json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
                pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
            )

            scenario = ScenarioConfig(
                num_properties=int(os.getenv("NUM_PROPERTIES", "1")),
                purchase_price_ether=os.getenv("PURCHASE_PRICE_ETHER", "0.02"),
                escrow_amount_ether=os.getenv("ESCROW_AMOUNT_ETHER", "0.001"),
                inspection_passed=os.getenv("INSPECTION_PASSED", "true").lower() == "true",
            )

            seed = int(os.getenv("SEED")) if os.getenv("SEED") else None
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment configuration: {e}") from e

        return cls(
            network=network,
            kafka=kafka,
            output=output,
            scenario=scenario,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
