"""
genetics/events.py - Event Bus

Registered-callback delivery of engine events. Every published event becomes a
receipt (receipts.emit_receipt) kept in a bounded ledger, then subscribers are
called synchronously in registration order. Receipts are hash-chained in
publish order; head_hash is the newest link.
"""

from collections import defaultdict, deque
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple

from receipts import emit_receipt, verify_chain

Callback = Callable[[Dict[str, Any]], None]

WILDCARD = "*"


class EventBus:
    """Synchronous publish/subscribe over receipt dicts."""

    def __init__(self, ledger_size: int = 10000):
        self._subscribers: Dict[str, List[Callback]] = defaultdict(list)
        self.ledger: Deque[Dict[str, Any]] = deque(maxlen=ledger_size)
        self.head_hash: Optional[str] = None

    def subscribe(self, event_type: str, callback: Callback) -> None:
        """Register callback for event_type ('*' receives every event)."""
        self._subscribers[event_type].append(callback)

    def unsubscribe(self, event_type: str, callback: Callback) -> None:
        callbacks = self._subscribers.get(event_type, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def publish(self, event_type: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Emit a receipt for the event and deliver it.

        Callback exceptions propagate to the caller of the engine operation.
        """
        receipt = emit_receipt(event_type, payload, upstream_hash=self.head_hash)
        self.head_hash = receipt["receipt_hash"]
        self.ledger.append(receipt)
        for callback in list(self._subscribers.get(event_type, [])):
            callback(receipt)
        for callback in list(self._subscribers.get(WILDCARD, [])):
            callback(receipt)
        return receipt

    def receipts(self, event_type: str = None) -> List[Dict[str, Any]]:
        """Ledger contents, optionally filtered by receipt_type."""
        if event_type is None:
            return list(self.ledger)
        return [r for r in self.ledger if r["receipt_type"] == event_type]

    def verify(self) -> Tuple[bool, Optional[str]]:
        """Check the hash chain over the receipts still held in the ledger."""
        return verify_chain(list(self.ledger))
