"""
Distribution Tracker Module
===========================

Stateful, bounded log of recent zone selections.

Design:
- FIFO ring (collections.deque with maxlen): oldest entry evicted first
- Entries are immutable and keep the zone kind, so they stay meaningful
  after the zone's generation is replaced
- Not authoritative state: used for short-term pattern bias and statistics
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List

from lode_zone.zone import ZoneKind


@dataclass(frozen=True)
class DistributionHistoryEntry:
    """One recorded placement."""

    zone_id: str
    timestamp: float
    kind: ZoneKind

    def to_dict(self) -> Dict[str, object]:
        return {"zone": self.zone_id, "timestamp": self.timestamp, "type": self.kind.value}


class DistributionTracker:
    """
    Bounded FIFO history of zone placements.

    Usage:
        tracker = DistributionTracker(max_history_size=50)
        tracker.record("center", ZoneKind.CENTER, now)
        tracker.recent_kinds(5)
    """

    def __init__(self, max_history_size: int = 50):
        if max_history_size < 1:
            raise ValueError(f"max_history_size must be >= 1, got {max_history_size}")

        self.max_history_size = max_history_size
        self._entries: Deque[DistributionHistoryEntry] = deque(maxlen=max_history_size)

    def record(self, zone_id: str, kind: ZoneKind, timestamp: float) -> DistributionHistoryEntry:
        """Append an entry, evicting the oldest one when full."""
        entry = DistributionHistoryEntry(zone_id=zone_id, timestamp=timestamp, kind=kind)
        self._entries.append(entry)
        return entry

    def recent(self, count: int) -> List[DistributionHistoryEntry]:
        """Last `count` entries, oldest first."""
        if count <= 0:
            return []
        return list(self._entries)[-count:]

    def recent_kinds(self, count: int) -> List[ZoneKind]:
        return [entry.kind for entry in self.recent(count)]

    @property
    def entries(self) -> List[DistributionHistoryEntry]:
        """Copy of the full history, oldest first."""
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"DistributionTracker(entries={len(self._entries)}/{self.max_history_size})"
