"""Console sink for following a ledger run in the terminal."""

import json
from typing import Any

from realty_escrow.models.base import Event
from realty_escrow.sinks.serialization import serialize_value, to_dict

RULE = "-" * 72


class ConsoleSink:
    """Print ledger records to stdout.

    Events print one per line as ``#block type token=<id> {payload}``;
    any other record prints as JSON, indented when ``pretty`` is set.

    Parameters
    ----------
    pretty : bool
        Indent non-event records.
    max_records : int | None
        Maximum records printed per batch (None for all).
    """

    def __init__(self, pretty: bool = True, max_records: int | None = None) -> None:
        self.pretty = pretty
        self.max_records = max_records
        self._counts: dict[str, int] = {}

    def _render(self, record: Any) -> str:
        if isinstance(record, Event):
            block = record.metadata.get("block_number", "?")
            payload = json.dumps(serialize_value(record.data), ensure_ascii=False)
            return f"#{block:<4} {record.event_type:<28} token={record.subject} {payload}"
        indent = 2 if self.pretty else None
        return json.dumps(to_dict(record), indent=indent, ensure_ascii=False, default=str)

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Print a header and the records of one entity type."""
        shown = records if self.max_records is None else records[: self.max_records]

        print(f"\n{RULE}\n{entity_type}: {len(records)} records\n{RULE}")
        for record in shown:
            print(self._render(record))

        hidden = len(records) - len(shown)
        if hidden:
            print(f"... {hidden} more")

        self._counts[entity_type] = self._counts.get(entity_type, 0) + len(records)

    def close(self) -> None:
        """Print per-type totals."""
        print(f"\n{RULE}\nConsole sink: {sum(self._counts.values())} records")
        for entity_type, count in sorted(self._counts.items()):
            print(f"  {entity_type:<28} {count}")
