"""
receipts.py - Foundation Module

Every breeding, measurement and entanglement event in the genetics engine is
recorded as a receipt. Receipts published through one EventBus form a hash
chain: each carries the hash of its predecessor, so a ledger export can be
checked for edits or gaps after the fact.

Never single hash. Always dual_hash (SHA256:BLAKE3).
"""

import hashlib
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import blake3

__all__ = [
    "dual_hash",
    "canonical_json",
    "emit_receipt",
    "verify_chain",
    "write_receipt_jsonl",
    "read_receipts_jsonl",
    "StopRule",
    "ENVELOPE_FIELDS",
]

# =============================================================================
# CONSTANTS
# =============================================================================

# Fields added around the event payload; everything else is payload
ENVELOPE_FIELDS = frozenset({
    "receipt_type",
    "ts",
    "tenant_id",
    "payload_hash",
    "upstream_hash",
    "receipt_hash",
})

DEFAULT_TENANT = "genetics"


# =============================================================================
# HASHING
# =============================================================================

def dual_hash(data: Union[bytes, str]) -> str:
    """
    SHA256:BLAKE3 - ALWAYS use this, never single hash.

    Args:
        data: Bytes or string to hash

    Returns:
        str: "sha256_hex:blake3_hex" format
    """
    if isinstance(data, str):
        data = data.encode()
    return f"{hashlib.sha256(data).hexdigest()}:{blake3.blake3(data).hexdigest()}"


def _json_default(obj: Any) -> Any:
    # Trait back-reference sets show up in payloads now and then
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def canonical_json(data: Any) -> str:
    """Sorted-key compact JSON; the byte form every hash is taken over."""
    return json.dumps(data, sort_keys=True, separators=(",", ":"), default=_json_default)


def _link_hash(payload_hash: str, upstream_hash: Optional[str]) -> str:
    return dual_hash(payload_hash + (upstream_hash or ""))


# =============================================================================
# EMISSION
# =============================================================================

def emit_receipt(receipt_type: str, data: Dict[str, Any],
                 upstream_hash: Optional[str] = None) -> Dict[str, Any]:
    """
    Wrap an event payload into a chained receipt.

    payload_hash covers the payload only, so two runs with the same seed
    produce the same hashes even though ts differs. receipt_hash links the
    payload to upstream_hash (the previous receipt on the same bus).

    Args:
        receipt_type: Event type, e.g. "measurement_performed"
        data: Event payload; a tenant_id entry overrides the 'genetics' default
        upstream_hash: receipt_hash of the previous receipt, None for the first

    Returns:
        dict: Envelope fields plus the payload fields
    """
    payload = {k: v for k, v in data.items() if k not in ENVELOPE_FIELDS}
    payload_hash = dual_hash(canonical_json(payload))
    return {
        "receipt_type": receipt_type,
        "ts": datetime.now(timezone.utc).isoformat(),
        "tenant_id": data.get("tenant_id", DEFAULT_TENANT),
        "payload_hash": payload_hash,
        "upstream_hash": upstream_hash,
        "receipt_hash": _link_hash(payload_hash, upstream_hash),
        **payload,
    }


def verify_chain(receipts: List[Dict[str, Any]]) -> Tuple[bool, Optional[str]]:
    """
    Check payload hashes and linkage across consecutive receipts.

    The first receipt's upstream_hash is not checked: a bounded ledger may
    have evicted its predecessor.

    Returns:
        (True, None) if every link holds
        (False, reason) at the first broken receipt
    """
    for i, receipt in enumerate(receipts):
        payload = {k: v for k, v in receipt.items() if k not in ENVELOPE_FIELDS}
        if dual_hash(canonical_json(payload)) != receipt.get("payload_hash"):
            return (False, f"Payload hash mismatch at receipt {i} ({receipt.get('receipt_type')})")
        if _link_hash(receipt["payload_hash"], receipt.get("upstream_hash")) != receipt.get("receipt_hash"):
            return (False, f"Receipt hash mismatch at receipt {i}")
        if i > 0 and receipt.get("upstream_hash") != receipts[i - 1].get("receipt_hash"):
            return (False, f"Chain break at receipt {i}: upstream_hash doesn't match previous")
    return (True, None)


# =============================================================================
# JSONL I/O
# =============================================================================

def write_receipt_jsonl(receipt: Dict[str, Any], fh) -> None:
    """Append receipt as a single JSON line to an open file handle."""
    fh.write(canonical_json(receipt) + "\n")


def read_receipts_jsonl(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Load every receipt from a JSONL file, skipping blank lines."""
    with Path(path).open() as fh:
        return [json.loads(line) for line in fh if line.strip()]


# =============================================================================
# STOPRULE EXCEPTION
# =============================================================================

class StopRule(Exception):
    """Raised when an engine invariant is broken. Never catch silently."""
    pass
