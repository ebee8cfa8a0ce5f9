"""
JSON Exporter - Save API Payloads to Disk
=========================================

Writes a response payload as pretty-printed UTF-8 JSON under the export
directory and reports where it went. Filenames carry a timestamp so
repeated exports never overwrite each other.
"""

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportInfo:
    filename: str
    path: Path

    def to_dict(self) -> Dict[str, str]:
        return {"filename": self.filename, "path": str(self.path)}


def export_timestamp(now: Optional[datetime] = None) -> str:
    """UTC timestamp with milliseconds, safe for filenames: 2025-01-03T14-19-28-120Z."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H-%M-%S-") + f"{now.microsecond // 1000:03d}Z"


def sanitize_label(value: str) -> str:
    return re.sub(r"[^a-zA-Z0-9]", "_", value)


class JsonExporter:
    """
    Usage:
        exporter = JsonExporter(Path("exports"))
        info = exporter.export(payload, "chat-history", group_uuid)
        print(info.path)
    """

    def __init__(self, export_dir: Path):
        self.export_dir = Path(export_dir)

    def export(self, payload: Dict[str, Any], prefix: str, label: str = "") -> ExportInfo:
        parts = [prefix]
        if label:
            parts.append(label)
        parts.append(export_timestamp())
        filename = "-".join(parts) + ".json"
        path = self.export_dir / filename

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")

        logger.info(f"Exported {prefix} to {path}")
        return ExportInfo(filename=filename, path=path)
