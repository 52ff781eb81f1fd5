"""Scenarios exercising the escrow ledger end to end."""

from realty_escrow.scenarios.property_sale import PropertySaleScenario

__all__ = ["PropertySaleScenario"]
