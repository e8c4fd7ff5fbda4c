"""
Structured JSON planning log: append-only, one object per line (.jsonl).

Opt-in sink for TripLegPlanner; the engine writes nothing unless a
StructuredLogger is passed in.

Usage:
    from itinerary_engine.modules.observability.logger import StructuredLogger

    with StructuredLogger("var/planning-logs") as plog:
        TripLegPlanner(perf_logger=plog).plan(stops, {2}, trip_id="trip_42")

Records land in  <logs_dir>/<trip_id>.jsonl.
"""

from __future__ import annotations

import json
import os
import re
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import IO

_DEFAULT_LOGS_DIR: Path = Path("logs")
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class StructuredLogger:
    """Thread-safe, append-only JSONL logger keyed by trip id."""

    def __init__(self, logs_dir: Path | str | None = None) -> None:
        self._logs_dir = Path(logs_dir) if logs_dir else _DEFAULT_LOGS_DIR
        self._lock = threading.Lock()
        self._handles: dict[str, IO[str]] = {}  # trip_id -> file handle

    @property
    def logs_dir(self) -> Path:
        return self._logs_dir

    # ── public API ────────────────────────────────────────────────────────

    def log(self, trip_id: str, event_type: str, payload: dict) -> None:
        """Append one structured JSON record to ``<trip_id>.jsonl``."""
        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "trip_id": trip_id,
            "event_type": event_type,
            "payload": payload,
        }
        line = json.dumps(record, default=str, ensure_ascii=False) + "\n"

        with self._lock:
            fh = self._handles.get(trip_id)
            if fh is None:
                fh = self._open(trip_id)
            fh.write(line)
            fh.flush()

    def path_for(self, trip_id: str) -> Path:
        return self.logs_dir / f"{_UNSAFE_CHARS.sub('_', str(trip_id))}.jsonl"

    def close(self, trip_id: str | None = None) -> None:
        """Close one or all open file handles."""
        with self._lock:
            if trip_id:
                fh = self._handles.pop(trip_id, None)
                if fh:
                    fh.close()
            else:
                for fh in self._handles.values():
                    fh.close()
                self._handles.clear()

    def __enter__(self) -> "StructuredLogger":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ── internals ─────────────────────────────────────────────────────────

    def _open(self, trip_id: str) -> IO[str]:
        os.makedirs(self.logs_dir, exist_ok=True)
        fh = open(self.path_for(trip_id), "a", encoding="utf-8")  # noqa: SIM115
        self._handles[trip_id] = fh
        return fh
