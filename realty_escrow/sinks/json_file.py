"""JSON file sink writing one array file per event type."""

import json
from pathlib import Path
from typing import Any

from realty_escrow.exceptions import SinkError
from realty_escrow.sinks.serialization import to_dict


class JsonFileSink:
    """Write each batch to ``<output_dir>/<entity_type>.json``.

    Dots in event types become underscores, so ``escrow.listed`` lands in
    ``escrow_listed.json``.  A batch replaces the file's previous contents.
    """

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        self.output_dir = Path(output_dir)
        self.pretty = pretty
        self.written: dict[str, int] = {}

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SinkError(f"Cannot create output directory {self.output_dir}: {e}") from e

    def path_for(self, entity_type: str) -> Path:
        """Return the file an entity type is written to."""
        return self.output_dir / f"{entity_type.replace('.', '_')}.json"

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Serialize records and write them as one JSON array."""
        path = self.path_for(entity_type)
        text = json.dumps(
            [to_dict(record) for record in records],
            indent=2 if self.pretty else None,
            ensure_ascii=False,
            default=str,
        )

        try:
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise SinkError(f"Cannot write {path}: {e}") from e

        self.written[entity_type] = len(records)

    def close(self) -> None:
        """Print the files written."""
        print(f"JSON files written to: {self.output_dir}")
        for entity_type, count in self.written.items():
            print(f"  {self.path_for(entity_type).name}: {count} records")
