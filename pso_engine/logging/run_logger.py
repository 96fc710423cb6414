"""CSV logger for per-iteration PSO metrics."""

from __future__ import annotations

import csv
import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, MutableMapping, Optional

# Column order for the metrics the engine logs; metadata columns follow.
ITERATION_FIELDS = (
    'timestamp',
    'iteration',
    'best_fitness',
    'iteration_best',
    'mean_fitness',
    'inertia',
    'stagnation',
    'evaluations',
    'runtime_ms',
)


def _utc_stamp() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@dataclass
class RunLogger:
    """Buffer one row per iteration (plus shared run metadata) and write a CSV on flush."""

    base_dir: Path
    filename: Optional[str] = None
    metadata: Optional[Dict[str, object]] = None
    field_order: Optional[Iterable[str]] = None

    _records: List[MutableMapping[str, object]] = field(default_factory=list, init=False)
    _resolved_path: Optional[Path] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.base_dir = Path(self.base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.metadata = dict(self.metadata) if self.metadata else {}

    @property
    def records(self) -> List[MutableMapping[str, object]]:
        return list(self._records)

    def log_iteration(self, **metrics: object) -> None:
        record: MutableMapping[str, object] = {'timestamp': _utc_stamp()}
        record.update(metrics)
        for key, value in self.metadata.items():
            record.setdefault(key, value)
        self._records.append(record)

    def update_metadata(self, **extra: object) -> None:
        """Merge metadata shared by all rows logged from now on."""
        self.metadata.update(extra)

    def flush(self) -> Path:
        """Write buffered rows to disk and return the file path."""
        if not self._records:
            raise RuntimeError("No records to write; did the run log any iterations?")

        path = self._resolve_path()
        with path.open('w', newline='') as handle:
            writer = csv.DictWriter(handle, fieldnames=self._determine_fieldnames(), extrasaction='ignore')
            writer.writeheader()
            writer.writerows(self._records)
        return path

    def _resolve_path(self) -> Path:
        if self._resolved_path is None:
            filename = self.filename or f"pso_run_{dt.datetime.now(dt.timezone.utc).strftime('%Y%m%dT%H%M%S')}.csv"
            self._resolved_path = self.base_dir / filename
        return self._resolved_path

    def _determine_fieldnames(self) -> List[str]:
        if self.field_order:
            return list(self.field_order)

        seen = {key for record in self._records for key in record}
        keys = [k for k in ITERATION_FIELDS if k in seen]
        for record in self._records:
            for key in record:
                if key not in keys:
                    keys.append(key)
        return keys
