"""
genetics/export.py - Report and Ledger Export

File output for diagnostics. The engine never writes files itself; hosts call
these when they want a persisted view.
CLAUDEME v3.1 Compliant: Pure functions.
"""

import json
from pathlib import Path
from typing import Union

from receipts import write_receipt_jsonl

from .events import EventBus
from .types_result import QuantumReport


def report_to_json(report: QuantumReport, pretty: bool = False) -> str:
    """Serialize a report deterministically (sorted keys)."""
    if pretty:
        return json.dumps(report.to_dict(), sort_keys=True, indent=2)
    return json.dumps(report.to_dict(), sort_keys=True, separators=(",", ":"))


def export_report(report: QuantumReport, path: Union[str, Path]) -> Path:
    """Write report JSON to path, creating parent directories."""
    path_obj = Path(path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)
    path_obj.write_text(report_to_json(report, pretty=True))
    return path_obj


def export_ledger(bus: EventBus, path: Union[str, Path], event_type: str = None) -> int:
    """
    Append the bus ledger to a JSONL file.

    Returns:
        int: Number of receipts written
    """
    path_obj = Path(path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)
    receipts = bus.receipts(event_type)
    with path_obj.open("a") as fh:
        for receipt in receipts:
            write_receipt_jsonl(receipt, fh)
    return len(receipts)
