"""Structured JSONL run logs for CLI runs.

The layout engine is pure and never logs; only the CLI records events.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List


def log_event(log_path: Path, event_type: str, payload: Dict[str, Any]) -> None:
    """Append one ``{timestamp, event_type, payload}`` record to a run log."""
    record = {
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "event_type": event_type,
        "payload": payload,
    }
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with log_path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(record, ensure_ascii=True, sort_keys=True) + "\n")


def read_events(log_path: Path) -> List[Dict[str, Any]]:
    """Load every record of a run log, oldest first."""
    with log_path.open("r", encoding="utf-8") as handle:
        return [json.loads(line) for line in handle if line.strip()]
