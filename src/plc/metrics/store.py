"""Append-only JSONL storage for run records."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from plc.config import RunLogConfig
from plc.metrics.records import RunRecord

logger = logging.getLogger(__name__)


class RunLogStore:
    """File-backed run log handle.

    Writes one JSON object per line and never rewrites existing lines. The
    reader tolerates partially corrupt files: rows that are not valid UTF-8
    JSON objects are skipped rather than failing the whole read. There is no locking; a
    single writer is assumed.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path or RunLogConfig().path)

    def append(self, record: RunRecord) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record.to_dict(), ensure_ascii=False) + "\n")
        logger.debug("Appended run %s to %s", record.run_id, self.path)

    def read(self) -> list[RunRecord]:
        if not self.path.exists():
            return []

        records: list[RunRecord] = []
        skipped = 0
        # Rows are split on "\n" only; JSON strings may carry other line separators.
        for lineno, raw in enumerate(self.path.read_bytes().split(b"\n"), start=1):
            if not raw.strip():
                continue
            try:
                records.append(RunRecord.from_dict(json.loads(raw.decode("utf-8"))))
            except (ValueError, TypeError) as exc:
                skipped += 1
                logger.debug("Skipping malformed run log line %d: %s", lineno, exc)

        if skipped:
            logger.warning("Skipped %d malformed line(s) in %s", skipped, self.path)
        return records

    def list_recent(self, limit: int = 20) -> list[RunRecord]:
        if limit <= 0:
            return []
        return self.read()[-limit:]
