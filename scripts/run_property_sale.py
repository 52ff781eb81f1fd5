#!/usr/bin/env python3
"""Run the property sale scenario and export ledger events.

Deploys the registry and escrow on a local network, lists the requested
number of properties, and writes every committed event to the chosen sink.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from realty_escrow.config import EscrowConfig, NetworkConfig, ScenarioConfig
from realty_escrow.exceptions import EscrowError
from realty_escrow.logging import get_logger, setup_logging
from realty_escrow.scenarios import PropertySaleScenario
from realty_escrow.sinks import ConsoleSink, JsonFileSink
from realty_escrow.units import format_ether

logger = get_logger(__name__)


def build_sink(args: argparse.Namespace, config: EscrowConfig):
    """Create the sink selected on the command line."""
    if args.sink == "json":
        return JsonFileSink(args.output_dir or config.output.json_output_dir, pretty=args.pretty)
    if args.sink == "kafka":
        from realty_escrow.sinks.kafka import KafkaSink

        config.kafka.bootstrap_servers = args.kafka_bootstrap or config.kafka.bootstrap_servers
        return KafkaSink(config.kafka)
    return ConsoleSink(pretty=args.pretty, max_records=args.max_records)


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Run a real-estate escrow sale on a local ledger"
    )
    parser.add_argument(
        "--properties",
        type=int,
        default=None,
        help="Number of properties to list (default: NUM_PROPERTIES or 1)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible addresses (default: SEED)",
    )
    parser.add_argument(
        "--price",
        type=str,
        default=None,
        help="Purchase price in ether (default: 0.02)",
    )
    parser.add_argument(
        "--escrow-amount",
        type=str,
        default=None,
        help="Earnest deposit in ether (default: 0.001)",
    )
    parser.add_argument(
        "--fail-inspection",
        action="store_true",
        help="Record a failed inspection instead of a pass",
    )
    parser.add_argument(
        "--skip-deposit",
        action="store_true",
        help="Do not deposit earnest money",
    )
    parser.add_argument(
        "--sink",
        type=str,
        choices=["console", "json", "kafka"],
        default="console",
        help="Where to export events (default: console)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the json sink (default: OUTPUT_DIR or output)",
    )
    parser.add_argument(
        "--kafka-bootstrap",
        type=str,
        default=None,
        help="Kafka bootstrap servers for the kafka sink",
    )
    parser.add_argument(
        "--max-records",
        type=int,
        default=None,
        help="Maximum records printed per batch by the console sink",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print JSON output",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines",
    )

    args = parser.parse_args()

    try:
        config = EscrowConfig.from_env()
    except EscrowError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    setup_logging(
        level=args.log_level or config.log_level,
        format_type="json" if args.json_logs else "standard",
    )

    scenario_config = ScenarioConfig(
        num_properties=(
            args.properties if args.properties is not None else config.scenario.num_properties
        ),
        purchase_price_ether=args.price or config.scenario.purchase_price_ether,
        escrow_amount_ether=args.escrow_amount or config.scenario.escrow_amount_ether,
        metadata_base_uri=config.scenario.metadata_base_uri,
        inspection_passed=False if args.fail_inspection else config.scenario.inspection_passed,
        deposit_earnest=not args.skip_deposit,
    )
    network_config: NetworkConfig = config.network
    seed = args.seed if args.seed is not None else config.seed

    try:
        scenario = PropertySaleScenario(
            seed=seed,
            config=scenario_config,
            network_config=network_config,
        )
        scenario.run()

        sink = build_sink(args, config)
        scenario.export([sink])
        sink.close()
    except EscrowError as e:
        logger.error("Scenario failed: %s", e)
        sys.exit(1)

    summary = scenario.get_summary()
    logger.info("=" * 60)
    for key, value in summary.items():
        if key == "escrow_balance":
            logger.info("  %-20s %s ether", key, format_ether(value))
        else:
            logger.info("  %-20s %s", key, value)
    logger.info("=" * 60)


if __name__ == "__main__":
    main()
