"""Tests for the property sale scenario."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from realty_escrow.config import NetworkConfig, ScenarioConfig
from realty_escrow.exceptions import ConfigurationError
from realty_escrow.scenarios import PropertySaleScenario
from realty_escrow.sinks import JsonFileSink
from realty_escrow.units import parse_ether


class TestPropertySaleScenario:
    """Tests for PropertySaleScenario."""

    def test_default_run(self) -> None:
        """One property is listed, funded and inspected."""
        scenario = PropertySaleScenario(seed=42)
        scenario.run()

        summary = scenario.get_summary()
        assert summary["properties"] == 1
        assert summary["listed"] == 1
        assert summary["tokens"] == 1
        assert summary["listings"] == 1
        assert summary["inspections_passed"] == 1
        assert summary["escrow_balance"] == parse_ether("0.001")
        assert summary["signers"] == 20
        assert summary["contracts"] == 2
        # 2 deploys, then mint, approve, list, deposit, inspect
        assert summary["blocks"] == 7
        assert summary["events"] == 6

    def test_roles_follow_signer_order(self) -> None:
        scenario = PropertySaleScenario(seed=42)
        scenario.run()
        signers = scenario.network.get_signers()

        assert scenario.escrow.seller == signers[1].address
        assert scenario.escrow.inspector == signers[2].address
        assert scenario.escrow.lender == signers[3].address
        assert scenario.escrow.buyer(1) == signers[0].address

    def test_escrow_holds_tokens(self) -> None:
        scenario = PropertySaleScenario(num_properties=3, seed=42)
        scenario.run()

        assert scenario.token_ids == [1, 2, 3]
        for token_id in scenario.token_ids:
            assert scenario.registry.owner_of(token_id) == scenario.escrow.address
            assert scenario.escrow.purchase_price(token_id) == parse_ether("0.02")
        assert scenario.get_summary()["escrow_balance"] == 3 * parse_ether("0.001")

    def test_summary_reports_custody_and_buyer_listings(self) -> None:
        scenario = PropertySaleScenario(num_properties=3, seed=42)
        scenario.run()

        summary = scenario.get_summary()
        assert summary["tokens"] == 3
        assert summary["owners"] == 1
        assert summary["in_custody"] == 3
        assert summary["buyer_listings"] == 3
        assert summary["listings"] == 3

    def test_token_uris_point_at_metadata(self) -> None:
        scenario = PropertySaleScenario(num_properties=2, seed=42)
        scenario.run()

        assert scenario.registry.token_uri(2).endswith("/2.json")
        assert scenario.documents[2]["id"] == "2"

    def test_skip_deposit(self) -> None:
        scenario = PropertySaleScenario(deposit_earnest=False, seed=42)
        scenario.run()

        summary = scenario.get_summary()
        assert summary["escrow_balance"] == 0
        assert summary["events"] == 5

    def test_failed_inspection(self) -> None:
        scenario = PropertySaleScenario(inspection_passed=False, seed=42)
        scenario.run()

        assert scenario.get_summary()["inspections_passed"] == 0
        assert scenario.escrow.inspection_passed(1) is False

    def test_config_overrides_arguments(self) -> None:
        config = ScenarioConfig(
            num_properties=2,
            purchase_price_ether="1.5",
            escrow_amount_ether="0.25",
            metadata_base_uri="ipfs://example",
        )
        scenario = PropertySaleScenario(num_properties=9, seed=1, config=config)
        scenario.run()

        assert scenario.token_ids == [1, 2]
        assert scenario.escrow.purchase_price(1) == parse_ether("1.5")
        assert scenario.escrow.get_balance() == 2 * parse_ether("0.25")
        assert scenario.registry.token_uri(1).startswith("ipfs://example/")

    def test_seeded_runs_match(self) -> None:
        first = PropertySaleScenario(seed=5)
        second = PropertySaleScenario(seed=5)
        first.run()
        second.run()

        assert first.escrow.address == second.escrow.address
        assert first.registry.token_uri(1) == second.registry.token_uri(1)

    def test_too_few_signers(self) -> None:
        with pytest.raises(ConfigurationError, match="needs 4 signers"):
            PropertySaleScenario(network_config=NetworkConfig(num_signers=3))

    def test_no_properties(self) -> None:
        with pytest.raises(ConfigurationError):
            PropertySaleScenario(num_properties=0)

    def test_summary_before_run(self) -> None:
        assert PropertySaleScenario(seed=42).get_summary() == {}


class TestExport:
    """Tests for PropertySaleScenario.export()."""

    @pytest.fixture
    def scenario(self) -> PropertySaleScenario:
        scenario = PropertySaleScenario(num_properties=2, seed=42)
        scenario.run()
        return scenario

    def test_batch_sink_gets_one_batch_per_type(self, scenario: PropertySaleScenario) -> None:
        sink = MagicMock(spec=["write_batch", "close"])

        scenario.export([sink])

        written = {c.args[0]: c.args[1] for c in sink.write_batch.call_args_list}
        assert set(written) == {
            "property.transferred",
            "property.approved",
            "escrow.listed",
            "escrow.earnest_deposited",
            "escrow.inspection_updated",
            "metadata",
        }
        assert len(written["escrow.listed"]) == 2
        assert written["escrow.listed"][0].subject == "1"
        assert len(written["metadata"]) == 2

    def test_event_sink_gets_events(self, scenario: PropertySaleScenario) -> None:
        sink = MagicMock()

        scenario.export([sink])

        assert sink.write_events.call_count == 5
        sink.write_batch.assert_called_once()
        assert sink.write_batch.call_args.args[0] == "metadata"

    def test_json_export(self, scenario: PropertySaleScenario, tmp_path: Path) -> None:
        scenario.export([JsonFileSink(tmp_path)])

        listed = json.loads((tmp_path / "escrow_listed.json").read_text(encoding="utf-8"))
        assert [r["subject"] for r in listed] == ["1", "2"]
        assert listed[0]["purchase_price"] == parse_ether("0.02")
        assert (tmp_path / "metadata.json").exists()
        assert (tmp_path / "property_transferred.json").exists()
