"""Load daily records from JSON or JSONL files into snapshots.

Accepted layouts:

* ``.json``  -- a single array of day records
* ``.jsonl`` -- one day record per line (blank lines ignored)

A day record looks like::

    {"date": "2026-10-01", "sleep_hours": 7.4, "resting_hr": 56,
     "hrv_ms": 62, "activity_load": 410}

``activity_load`` may be replaced by ``active_energy_kcal`` and ``steps``.
Missing metrics are read as 0.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from zenscore.analytics.snapshot import DailySnapshot
from zenscore.errors import SnapshotOrderError, SnapshotValidationError

logger = logging.getLogger(__name__)


def _read_records(path: Path) -> list[tuple[int, dict]]:
    """Return ``(line_or_index, record)`` pairs from the file."""
    if path.suffix == ".jsonl":
        records = []
        with open(path) as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    records.append((line_num, json.loads(line)))
                except json.JSONDecodeError:
                    logger.warning("%s:%d: invalid JSON, skipping", path.name, line_num)
        return records

    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotValidationError(f"{path.name}: invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise SnapshotValidationError(f"{path.name}: expected a JSON array of day records")
    return list(enumerate(data, 1))


def load_snapshots(path: str | Path) -> list[DailySnapshot]:
    """Read a file of day records and return snapshots sorted by date.

    Raises:
        SnapshotValidationError: A record is malformed or has a bad metric.
        SnapshotOrderError: Two records share a date.
    """
    path = Path(path)
    snapshots: list[DailySnapshot] = []

    for where, record in _read_records(path):
        if not isinstance(record, dict):
            raise SnapshotValidationError(f"{path.name}:{where}: expected an object")
        try:
            snapshots.append(DailySnapshot.from_dict(record))
        except SnapshotValidationError as e:
            raise SnapshotValidationError(f"{path.name}:{where}: {e}") from e

    snapshots.sort(key=lambda s: s.date)
    for prev, cur in zip(snapshots, snapshots[1:]):
        if cur.date == prev.date:
            raise SnapshotOrderError(f"{path.name}: duplicate record for {cur.date.isoformat()}")

    logger.info("Loaded %d day(s) from %s", len(snapshots), path.name)
    return snapshots
