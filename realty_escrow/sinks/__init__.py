"""Output sinks for exporting ledger events."""

from realty_escrow.sinks.console import ConsoleSink
from realty_escrow.sinks.json_file import JsonFileSink
from realty_escrow.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "JsonFileSink", "KafkaSink"]
